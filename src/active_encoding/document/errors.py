"""Exceptions raised by document states."""


class DocumentError(Exception):
    """Base exception for document state errors."""


class DocumentConfigurationError(DocumentError, ValueError):
    """Document state was wired with missing or incapable collaborators."""


class ContentAccessError(DocumentError, RuntimeError):
    """Reading or writing document content failed."""


class UnsupportedDocumentOperation(DocumentError, NotImplementedError):
    """The document variant lacks the capability for an operation."""


class PreferenceSyncError(DocumentError):
    """The preference store could not accept a write while synchronizing."""
