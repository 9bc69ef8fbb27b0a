"""Active document encoding tracker.

Tracks the resolved character encoding and line separator convention of the
active editor's document, reconciles the competing encoding sources
(explicit, inherited, content type, detected, workspace) and lets users
override the encoding or normalize line endings.
"""

__version__ = "0.1.0"
__author__ = "Active Encoding Team"

from .agent import ActiveDocumentAgent
from .character.equality import charsets_equal, normalize_charset
from .character.line_separator import LineSeparator, classify
from .document import (
    ActiveDocument,
    DocumentState,
    FileDocument,
    FileEditor,
    WorkspaceDocument,
    attach_document,
)
from .resolution import EncodingResolver, EncodingSource, choose_stored_encoding
from .shared.config import AgentConfig

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Agent and document states
    "ActiveDocumentAgent",
    "ActiveDocument",
    "DocumentState",
    "FileDocument",
    "WorkspaceDocument",
    "attach_document",
    "FileEditor",

    # Resolution primitives
    "EncodingResolver",
    "EncodingSource",
    "choose_stored_encoding",
    "charsets_equal",
    "normalize_charset",
    "LineSeparator",
    "classify",

    # Configuration
    "AgentConfig",
]
