"""Document state for file-backed editors."""

from dataclasses import replace
from typing import Optional

from ..character.detection import EncodingDetector
from ..character.equality import normalize_charset
from ..character.line_separator import LineSeparator, classify
from .active import ActiveDocument
from .editor import Editor, EncodingInfoListener, FileStorage, capability_of
from .errors import ContentAccessError, DocumentConfigurationError


class FileDocument(ActiveDocument):
    """Document of an editor whose content lives in a file.

    Each resolution pass reads the raw bytes once and derives from them the
    detected encoding and the line separator, and asks the storage for the
    inherited and content-type encodings. All values are committed together.
    """

    def __init__(
        self,
        editor: Editor,
        callback: EncodingInfoListener,
        detector: Optional[EncodingDetector] = None,
    ) -> None:
        self.detector = detector or EncodingDetector()
        super().__init__(editor, callback)

    def _init_capabilities(self) -> None:
        storage = capability_of(self._editor, FileStorage)
        if storage is None:
            raise DocumentConfigurationError("editor must provide FileStorage.")
        self.storage: FileStorage = storage

    def get_file_name(self) -> Optional[str]:
        return self.storage.file_name

    def can_change_file_encoding(self) -> bool:
        return True

    def can_convert_line_separator(self) -> bool:
        return True

    def enabled_content_type(self) -> bool:
        return True

    def _read_bytes(self) -> bytes:
        return self.storage.read_bytes()

    def _write_bytes(self, data: bytes) -> None:
        self.storage.write_bytes(data)

    @staticmethod
    def _classify_bytes(data: bytes, encoding: Optional[str]) -> LineSeparator:
        if encoding is None:
            return LineSeparator.UNKNOWN
        try:
            return classify(data.decode(normalize_charset(encoding), errors="replace"))
        except LookupError:
            return LineSeparator.UNKNOWN

    def _refresh(self) -> bool:
        # Read first: a failed read must leave the resolver untouched
        try:
            data = self._read_bytes()
        except OSError as e:
            raise ContentAccessError(f"Could not read {self.get_file_name()}: {e}") from e

        result, fields = self._resolve()
        snapshot = replace(
            self._snapshot,
            inherited_encoding=self.storage.get_inherited_encoding(),
            content_type_encoding=self.storage.get_content_type_encoding(),
            detected_encoding=self.detector.detect(data),
            line_separator=self._classify_bytes(data, result.effective),
            **fields,
        )
        changed = result.changed or snapshot.line_separator != self._snapshot.line_separator
        self._snapshot = snapshot
        return changed
