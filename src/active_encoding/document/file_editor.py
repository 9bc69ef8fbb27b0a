"""A file-backed editor for hosts without an editor of their own.

Used by the command line interface and by tests: it exposes a file on disk
through the :class:`Editor` interface, with encoding settings kept in an
:class:`EncodingPreferences` store.
"""

from pathlib import Path
from typing import Any, Optional, Tuple, Type, TypeVar

from ..character.content_type import ContentDescription, ContentTypeDescriber
from ..shared.logging import get_logger
from ..shared.result import MessageKind
from .editor import Editor, EncodingSupport, FileStorage, StatusLine
from .preferences import EncodingPreferences

T = TypeVar("T")


class LoggingStatusLine(StatusLine):
    """Status line that logs messages and remembers the last one."""

    def __init__(self, name: Optional[str] = None) -> None:
        self.message: Optional[Tuple[MessageKind, str]] = None
        self._logger = get_logger(__name__, name, "status_line")

    def set_message(self, kind: Optional[MessageKind], message: Optional[str]) -> None:
        if message is None:
            self.message = None
            return
        kind = kind or MessageKind.INFO
        self.message = (kind, message)
        if kind is MessageKind.WARN:
            self._logger.warning(message)
        else:
            self._logger.info(message)


class FileEncodingSupport(EncodingSupport):
    """Encoding attribute of a file, stored in the preferences."""

    def __init__(self, editor: "FileEditor") -> None:
        self._editor = editor

    def get_encoding(self) -> Optional[str]:
        return self._editor.preferences.get_file_encoding(self._editor.path)

    def set_encoding(self, encoding: Optional[str]) -> None:
        self._editor.preferences.set_file_encoding(self._editor.path, encoding)

    def get_default_encoding(self) -> Optional[str]:
        # Content type wins over scope inheritance
        content_type_encoding = self._editor.describe().charset
        if content_type_encoding is not None:
            return content_type_encoding
        return self._editor.preferences.inherited_encoding(self._editor.path)


class LocalFileStorage(FileStorage):
    """Byte access to the file on disk."""

    def __init__(self, editor: "FileEditor") -> None:
        self._editor = editor

    @property
    def file_name(self) -> str:
        return self._editor.path.name

    def read_bytes(self) -> bytes:
        data = self._editor.path.read_bytes()
        self._editor.remember_content(data)
        return data

    def write_bytes(self, data: bytes) -> None:
        self._editor.path.write_bytes(data)
        self._editor.remember_content(data)

    def get_inherited_encoding(self) -> Optional[str]:
        return self._editor.preferences.inherited_encoding(self._editor.path)

    def get_content_type_encoding(self) -> Optional[str]:
        return self._editor.describe().charset


class FileEditor(Editor):
    """Editor over a local file."""

    def __init__(
        self,
        path: Path,
        preferences: Optional[EncodingPreferences] = None,
        describer: Optional[ContentTypeDescriber] = None,
        status_line: Optional[StatusLine] = None,
    ) -> None:
        self.path = Path(path)
        self.preferences = preferences or EncodingPreferences()
        self.describer = describer or ContentTypeDescriber()
        self.dirty = False
        self._description: Optional[ContentDescription] = None
        self._status_line = status_line or LoggingStatusLine(self.path.name)
        self._adapters = {
            EncodingSupport: FileEncodingSupport(self),
            FileStorage: LocalFileStorage(self),
        }

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def status_line(self) -> Optional[StatusLine]:
        return self._status_line

    def is_dirty(self) -> bool:
        return self.dirty

    def get_adapter(self, capability: Type[T]) -> Optional[T]:
        adapter: Any = self._adapters.get(capability)
        return adapter

    def remember_content(self, data: bytes) -> None:
        """Describe the content just read or written."""
        self._description = self.describer.describe(self.path.name, data)

    def describe(self) -> ContentDescription:
        """Content type of the file, as of its last read or write."""
        if self._description is None:
            try:
                data = self.path.read_bytes()
            except OSError:
                # Unreadable file is described by its name only
                return self.describer.describe(self.path.name)
            self.remember_content(data)
        return self._description
