"""Agent tracking the document of the active editor.

The agent owns at most one document state. When focus moves to another
editor the old state is dropped before the new one is built, and host events
are only ever forwarded to the current state.
"""

from typing import Any, Optional

from .character.detection import EncodingDetector
from .document.editor import EncodingInfoListener, WorkspaceDefaults
from .document.errors import DocumentConfigurationError
from .document.factory import attach_document
from .document.state import DocumentState
from .shared.config import AgentConfig
from .shared.logging import get_logger


class ActiveDocumentAgent(EncodingInfoListener):
    """Keep the document state in sync with the active editor."""

    def __init__(
        self,
        callback: EncodingInfoListener,
        config: Optional[AgentConfig] = None,
        defaults: Optional[WorkspaceDefaults] = None,
    ) -> None:
        if callback is None:
            raise DocumentConfigurationError("callback must not be None.")
        self.callback = callback
        self.config = config or AgentConfig()
        self.defaults = defaults or WorkspaceDefaults.from_config(self.config.workspace)
        self.detector = EncodingDetector(self.config.detection)
        self._document: Optional[DocumentState] = None
        self._logger = get_logger(__name__, None, "active_document_agent")

    @property
    def document(self) -> Optional[DocumentState]:
        """State of the active document, None before start and after stop."""
        return self._document

    @property
    def active_editor(self) -> Any:
        return self._document.editor if self._document is not None else None

    def start(self, editor: Any = None) -> DocumentState:
        """Begin tracking the initially active editor (None for no editor)."""
        return self._attach(editor)

    def stop(self) -> None:
        """Stop tracking; the current state is dropped."""
        self._document = None

    def editor_activated(self, editor: Any) -> DocumentState:
        """Focus moved; swap the document state if the editor differs."""
        if self._document is not None and editor is self._document.editor:
            return self._document
        document = self._attach(editor)
        self.encoding_info_changed()
        return document

    def _attach(self, editor: Any) -> DocumentState:
        self._document = None
        self._document = attach_document(editor, self, self.defaults, self.detector)
        document_name = self._document.get_file_name()
        logger = self._logger
        if self.config.global_.enable_correlation_tracking:
            logger = logger.bind(document_name or "workspace")
        logger.debug(
            "Active document changed",
            extra={"variant": type(self._document).__name__, "document": document_name}
        )
        return self._document

    def property_changed(self, source: Any, prop_id: int) -> None:
        if self._document is not None:
            self._document.property_changed(source, prop_id)

    def resource_changed(self, event: Any) -> None:
        if self._document is not None:
            self._document.resource_changed(event)

    def selection_changed(self, part: Any, selection: Any) -> None:
        if self._document is not None:
            self._document.selection_changed(part, selection)

    def encoding_info_changed(self) -> None:
        self.callback.encoding_info_changed()
