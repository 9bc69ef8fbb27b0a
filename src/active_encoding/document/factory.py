"""Selection of the document variant for an editor."""

from typing import Any, Optional

from ..character.detection import EncodingDetector
from ..shared.logging import get_logger
from .active import ActiveDocument
from .editor import (
    EncodingInfoListener,
    EncodingSupport,
    FileStorage,
    WorkspaceDefaults,
    capability_of,
)
from .errors import DocumentConfigurationError
from .file import FileDocument
from .state import DocumentState
from .workspace import WorkspaceDocument

logger = get_logger(__name__, None, "document_factory")


def attach_document(
    editor: Any,
    callback: EncodingInfoListener,
    defaults: Optional[WorkspaceDefaults] = None,
    detector: Optional[EncodingDetector] = None,
) -> DocumentState:
    """Check an editor's capabilities once and build the matching document.

    Args:
        editor: Active editor, or None when no editor is open
        callback: Listener notified when encoding info changes
        defaults: Workspace defaults for the no-editor case
        detector: Byte-level detector for file-backed documents

    Returns:
        WorkspaceDocument without editor, FileDocument for editors with file
        storage, ActiveDocument for editors with encoding support only

    Raises:
        DocumentConfigurationError: If the editor has no encoding support or
            the callback is missing
    """
    if editor is None:
        return WorkspaceDocument(callback, defaults)

    if capability_of(editor, EncodingSupport) is None:
        raise DocumentConfigurationError(
            f"editor {getattr(editor, 'name', editor)!r} must provide EncodingSupport."
        )

    if capability_of(editor, FileStorage) is not None:
        document: DocumentState = FileDocument(editor, callback, detector)
    else:
        document = ActiveDocument(editor, callback)

    logger.debug(
        "Document attached",
        extra={"editor": editor.name, "variant": type(document).__name__}
    )
    return document
