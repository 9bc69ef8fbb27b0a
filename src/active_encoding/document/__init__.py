"""Document layer: per-editor encoding state and its variants.

Variants are chosen once per editor by :func:`attach_document`:

- ``FileDocument`` for editors backed by a file (all capabilities)
- ``ActiveDocument`` for editors exposing only an encoding attribute
- ``WorkspaceDocument`` when no editor is open (read-only workspace values)
"""

from .active import ActiveDocument
from .editor import (
    Editor,
    EncodingInfoListener,
    EncodingSupport,
    FileStorage,
    StatusLine,
    WorkspaceDefaults,
)
from .errors import (
    ContentAccessError,
    DocumentConfigurationError,
    DocumentError,
    PreferenceSyncError,
    UnsupportedDocumentOperation,
)
from .factory import attach_document
from .file import FileDocument
from .file_editor import FileEditor, LoggingStatusLine
from .preferences import EncodingPreferences
from .state import DocumentState, EncodingSnapshot
from .workspace import WorkspaceDocument

__all__ = [
    "ActiveDocument",
    "DocumentState",
    "EncodingSnapshot",
    "FileDocument",
    "WorkspaceDocument",
    "attach_document",
    "Editor",
    "EncodingInfoListener",
    "EncodingSupport",
    "FileStorage",
    "StatusLine",
    "WorkspaceDefaults",
    "FileEditor",
    "LoggingStatusLine",
    "EncodingPreferences",
    "ContentAccessError",
    "DocumentConfigurationError",
    "DocumentError",
    "PreferenceSyncError",
    "UnsupportedDocumentOperation",
]
