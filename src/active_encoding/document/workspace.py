"""Document state used when no editor is open."""

from typing import Any, Optional

from ..character.line_separator import of_workspace
from .editor import EncodingInfoListener, WorkspaceDefaults
from .state import DocumentState, EncodingSnapshot


class WorkspaceDocument(DocumentState):
    """Workspace-level encoding display without a document.

    Current encoding and line separator come from the workspace defaults.
    There is no file and no editor, so every mutation is unsupported.
    """

    def __init__(
        self,
        callback: EncodingInfoListener,
        defaults: Optional[WorkspaceDefaults] = None,
    ) -> None:
        super().__init__(callback, correlation_id="workspace")
        self.defaults = defaults or WorkspaceDefaults()
        self._refresh()

    def _refresh(self) -> bool:
        # Workspace preferences only, project preferences do not apply here
        result = self._resolver.resolve(None, self.defaults.encoding)
        snapshot = EncodingSnapshot(
            current_encoding=result.effective,
            default_encoding=self.defaults.encoding,
            line_separator=of_workspace(self.defaults.line_separator),
        )
        changed = result.changed or snapshot.line_separator != self._snapshot.line_separator
        self._snapshot = snapshot
        return changed

    def property_changed(self, source: Any, prop_id: int) -> None:
        if self._refresh():
            self._notify()
