"""Common state and behavior of every document variant.

A document state keeps one immutable :class:`EncodingSnapshot`. Every
resolution pass builds a complete new snapshot and swaps it in, so getters
never observe a half-updated set of values.
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from ..character.equality import charsets_equal
from ..character.line_separator import LineSeparator
from ..resolution.resolver import EncodingResolver, EncodingSource
from ..shared.logging import CorrelationLogger, get_logger
from ..shared.result import MessageKind, PersistOutcome
from .editor import EncodingInfoListener, StatusLine
from .errors import ContentAccessError, DocumentConfigurationError, UnsupportedDocumentOperation

_UNSET: Any = object()


@dataclass(frozen=True)
class EncodingSnapshot:
    """Encoding information of a document at the end of a resolution pass.

    Attributes:
        current_encoding: Effective encoding; None means inherit
        explicit_encoding: Encoding set on the document itself
        default_encoding: Host fallback used when explicit is absent
        inherited_encoding: Encoding from folder, project or workspace scope
        content_type_encoding: Encoding implied by the content type
        detected_encoding: Encoding detected in the raw bytes
        line_separator: Line separator classification of the content
    """
    current_encoding: Optional[str] = None
    explicit_encoding: Optional[str] = None
    default_encoding: Optional[str] = None
    inherited_encoding: Optional[str] = None
    content_type_encoding: Optional[str] = None
    detected_encoding: Optional[str] = None
    line_separator: LineSeparator = LineSeparator.UNKNOWN


class DocumentState:
    """Base class of the document variants tracked by the agent.

    Subclasses implement :meth:`_refresh`, which runs one resolution pass,
    swaps in the new snapshot and reports whether the encoding info changed.
    Mutating operations are unsupported unless a variant enables them through
    its capability flags.
    """

    def __init__(
        self,
        callback: EncodingInfoListener,
        correlation_id: Optional[str] = None,
    ) -> None:
        if callback is None:
            raise DocumentConfigurationError("callback must not be None.")
        self.callback = callback
        self._resolver = EncodingResolver()
        self._snapshot = EncodingSnapshot()
        self._logger: CorrelationLogger = get_logger(
            __name__, correlation_id, type(self).__name__
        )

    # Snapshot accessors

    @property
    def editor(self) -> Any:
        """Host editor backing this document, None for the workspace variant."""
        return None

    @property
    def snapshot(self) -> EncodingSnapshot:
        return self._snapshot

    @property
    def current_encoding(self) -> Optional[str]:
        return self._snapshot.current_encoding

    @property
    def inherited_encoding(self) -> Optional[str]:
        return self._snapshot.inherited_encoding

    @property
    def content_type_encoding(self) -> Optional[str]:
        return self._snapshot.content_type_encoding

    @property
    def detected_encoding(self) -> Optional[str]:
        return self._snapshot.detected_encoding

    @property
    def line_separator(self) -> LineSeparator:
        return self._snapshot.line_separator

    def get_file_name(self) -> Optional[str]:
        """Name of the active document, or None when there is none."""
        return None

    def encoding_sources(self) -> Dict[EncodingSource, Optional[str]]:
        """Every candidate encoding keyed by source, in precedence order."""
        snapshot = self._snapshot
        return {
            EncodingSource.EXPLICIT: snapshot.explicit_encoding,
            EncodingSource.INHERITED: snapshot.inherited_encoding,
            EncodingSource.CONTENT_TYPE: snapshot.content_type_encoding,
            EncodingSource.DETECTED: snapshot.detected_encoding,
            EncodingSource.WORKSPACE: snapshot.default_encoding,
        }

    def matches_encoding(self) -> bool:
        """Detected encoding is known and agrees with the current one."""
        detected = self._snapshot.detected_encoding
        return detected is not None and charsets_equal(detected, self.current_encoding)

    def mismatches_encoding(self) -> bool:
        """Detected encoding is known and disagrees with the current one."""
        detected = self._snapshot.detected_encoding
        return detected is not None and not charsets_equal(detected, self.current_encoding)

    def update_candidates(
        self,
        inherited: Optional[str] = _UNSET,
        content_type: Optional[str] = _UNSET,
        detected: Optional[str] = _UNSET,
        line_separator: LineSeparator = _UNSET,
    ) -> None:
        """Push candidate values reported by host collaborators.

        Arguments left out keep their current value; None clears a value.
        """
        changes: Dict[str, Any] = {}
        if inherited is not _UNSET:
            changes["inherited_encoding"] = inherited
        if content_type is not _UNSET:
            changes["content_type_encoding"] = content_type
        if detected is not _UNSET:
            changes["detected_encoding"] = detected
        if line_separator is not _UNSET:
            changes["line_separator"] = LineSeparator(line_separator)
        self._snapshot = replace(self._snapshot, **changes)

    # Resolution

    def _refresh(self) -> bool:
        """Run one resolution pass; return True if the encoding info changed."""
        raise NotImplementedError

    def _refresh_quietly(self) -> bool:
        """Refresh, keeping the previous snapshot if content cannot be read."""
        try:
            return self._refresh()
        except ContentAccessError:
            self._logger.warning(
                "Encoding info not refreshed, keeping previous values", exc_info=True
            )
            self._resolver.reset(self._snapshot.current_encoding)
            return False

    def _notify(self) -> None:
        self._logger.debug(
            "Encoding info changed",
            extra={
                "current_encoding": self.current_encoding,
                "line_separator": self.line_separator.value,
            }
        )
        self.callback.encoding_info_changed()

    # Host events

    def property_changed(self, source: Any, prop_id: int) -> None:
        """Editor property changed; re-resolve and notify on change."""
        raise NotImplementedError

    def resource_changed(self, event: Any) -> None:
        """Workspace resource changed.

        Intentionally does nothing: property change events already report
        every encoding change. Kept as an extension point.
        """

    def selection_changed(self, part: Any, selection: Any) -> None:
        """Selection changed in a workbench part.

        Intentionally does nothing: encoding setting changes arrive as
        property change events. Kept as an extension point.
        """

    # Capabilities

    def can_change_file_encoding(self) -> bool:
        return False

    def can_convert_line_separator(self) -> bool:
        return False

    def enabled_content_type(self) -> bool:
        return False

    # Mutations

    def set_encoding(self, encoding: Optional[str]) -> PersistOutcome:
        raise UnsupportedDocumentOperation(
            f"{type(self).__name__} does not support setting the encoding."
        )

    def set_line_separator(self, line_separator: str) -> None:
        raise UnsupportedDocumentOperation(
            f"{type(self).__name__} does not support converting line separators."
        )

    def convert_charset(self, encoding: str) -> None:
        raise UnsupportedDocumentOperation(
            f"{type(self).__name__} does not support converting the charset."
        )

    # Status line messages

    def _status_line(self) -> Optional[StatusLine]:
        editor = self.editor
        if editor is None:
            return None
        return getattr(editor, "status_line", None)

    def _set_message(self, kind: Optional[MessageKind], message: Optional[str], args: tuple) -> None:
        status_line = self._status_line()
        if status_line is None:
            return
        if message is None:
            status_line.set_message(None, None)
        else:
            status_line.set_message(kind, message % args if args else message)

    def info_message(self, message: Optional[str], *args: Any) -> None:
        """Show an informational message, formatted with ``%`` and args."""
        self._set_message(MessageKind.INFO, message, args)

    def warn_message(self, message: Optional[str], *args: Any) -> None:
        """Show a warning message, formatted with ``%`` and args."""
        self._set_message(MessageKind.WARN, message, args)

    def clear_message(self) -> None:
        self._set_message(None, None, ())

    def report_mismatch(self) -> bool:
        """Warn on the status line if detection disagrees with the current encoding.

        Returns:
            True if a mismatch was reported
        """
        if self.mismatches_encoding():
            self.warn_message(
                "Detected encoding %s does not match current encoding %s",
                self.detected_encoding,
                self.current_encoding,
            )
            return True
        self.clear_message()
        return False
