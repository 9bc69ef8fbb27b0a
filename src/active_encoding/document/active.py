"""Document state for editors that expose an encoding attribute."""

from dataclasses import replace
from typing import Any, Dict, Optional, Tuple

from ..character.equality import normalize_charset
from ..character.line_separator import convert
from ..resolution.resolver import ResolutionResult, choose_stored_encoding
from ..shared.result import PersistOutcome
from .editor import Editor, EncodingInfoListener, EncodingSupport, capability_of
from .errors import ContentAccessError, DocumentConfigurationError, UnsupportedDocumentOperation
from .state import DocumentState


class ActiveDocument(DocumentState):
    """Document of an editor providing :class:`EncodingSupport`.

    The effective encoding is the editor's explicit encoding, falling back to
    the editor's default. Inherited, content-type and detected encodings are
    pushed in by collaborators through :meth:`update_candidates`.

    Content operations are implemented here on top of :meth:`_read_bytes` and
    :meth:`_write_bytes`, which only file-backed variants provide.
    """

    def __init__(self, editor: Editor, callback: EncodingInfoListener) -> None:
        if editor is None:
            raise DocumentConfigurationError("editor must not be None.")
        super().__init__(callback, correlation_id=editor.name)

        encoding_support = capability_of(editor, EncodingSupport)
        if encoding_support is None:
            raise DocumentConfigurationError("editor must provide EncodingSupport.")

        self._editor = editor
        self.encoding_support: EncodingSupport = encoding_support
        self._init_capabilities()
        self._refresh_quietly()

    def _init_capabilities(self) -> None:
        """Look up additional capabilities before the first resolution pass."""

    @property
    def editor(self) -> Editor:
        return self._editor

    def get_file_name(self) -> Optional[str]:
        return self._editor.name

    def _resolve(self) -> Tuple[ResolutionResult, Dict[str, Any]]:
        """Resolve the effective encoding; return it with the snapshot fields to set."""
        explicit = self.encoding_support.get_encoding()
        default = self.encoding_support.get_default_encoding()
        result = self._resolver.resolve(explicit, default)
        return result, {
            "current_encoding": result.effective,
            "explicit_encoding": explicit,
            "default_encoding": default,
        }

    def _refresh(self) -> bool:
        result, fields = self._resolve()
        self._snapshot = replace(self._snapshot, **fields)
        return result.changed

    def property_changed(self, source: Any, prop_id: int) -> None:
        # Editors do not report a settled encoding while dirty
        if self._editor.is_dirty():
            self._logger.debug("Property change ignored, editor is dirty", extra={"prop_id": prop_id})
            return
        # The document may have just been saved
        if self._refresh_quietly():
            self._notify()

    def set_encoding(self, encoding: Optional[str]) -> PersistOutcome:
        """Set the encoding, writing an explicit override only when needed.

        Failures while storing the setting are swallowed and recorded in the
        returned outcome; the document is re-resolved either way.
        """
        stored = choose_stored_encoding(
            encoding, self.inherited_encoding, self.content_type_encoding
        )
        try:
            self.encoding_support.set_encoding(stored)
            outcome = PersistOutcome(requested=encoding, stored=stored)
        except Exception as e:  # noqa: BLE001 - preference store may be out of sync
            self._logger.warning(
                "Encoding setting not stored",
                extra={"requested": encoding, "stored": stored, "error": str(e)}
            )
            outcome = PersistOutcome(requested=encoding, stored=stored, error=e)

        if self._refresh_quietly():
            self._notify()
        return outcome

    # Content

    def _read_bytes(self) -> bytes:
        raise UnsupportedDocumentOperation(f"{type(self).__name__} has no readable content.")

    def _write_bytes(self, data: bytes) -> None:
        raise UnsupportedDocumentOperation(f"{type(self).__name__} has no writable content.")

    def get_content_string(self) -> str:
        """Read the whole content, decoded with the current encoding.

        Content is processed as one string; very large files are not supported.
        """
        try:
            data = self._read_bytes()
        except OSError as e:
            raise ContentAccessError(f"Could not read {self.get_file_name()}: {e}") from e

        encoding = self.current_encoding
        if encoding is None:
            raise ContentAccessError(f"No encoding resolved for {self.get_file_name()}")
        try:
            return data.decode(normalize_charset(encoding))
        except (UnicodeDecodeError, LookupError) as e:
            raise ContentAccessError(
                f"Could not decode {self.get_file_name()} as {encoding}: {e}"
            ) from e

    def set_content_string(self, content: str, store_encoding: Optional[str]) -> None:
        """Replace the whole content, encoded with store_encoding."""
        if store_encoding is None:
            raise ContentAccessError(f"No encoding to store {self.get_file_name()} with")
        try:
            data = content.encode(normalize_charset(store_encoding))
        except (UnicodeEncodeError, LookupError) as e:
            raise ContentAccessError(
                f"Could not encode {self.get_file_name()} as {store_encoding}: {e}"
            ) from e
        try:
            self._write_bytes(data)
        except OSError as e:
            raise ContentAccessError(f"Could not write {self.get_file_name()}: {e}") from e

    def set_line_separator(self, line_separator: str) -> None:
        """Rewrite every line break with the named separator.

        Names other than CR and LF select CRLF. Does nothing if the content
        already uses the requested separator.
        """
        if line_separator == self.line_separator:
            return
        if not self.can_convert_line_separator():
            super().set_line_separator(line_separator)

        content = convert(self.get_content_string(), line_separator)
        self.set_content_string(content, self.current_encoding)
        self._logger.info(
            "Line separators converted", extra={"line_separator": line_separator}
        )
        if self._refresh():
            self._notify()

    def convert_charset(self, encoding: str) -> None:
        """Re-encode the content with a new charset, then adopt that charset.

        Content is rewritten before the encoding setting changes, so the
        next read decodes the new bytes with the new charset.
        """
        if not self.can_change_file_encoding():
            super().convert_charset(encoding)

        content = self.get_content_string()
        self.set_content_string(content, encoding)
        self._logger.info(
            "Charset converted",
            extra={"from_encoding": self.current_encoding, "to_encoding": encoding}
        )
        self.set_encoding(encoding)
