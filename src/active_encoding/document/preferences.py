"""In-memory scoped encoding preferences.

Encodings can be set on a file, on any folder above it, or on the workspace.
A file without an explicit setting inherits from the nearest folder that has
one, and finally from the workspace.
"""

from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, Optional

from ..shared.logging import get_logger
from .errors import PreferenceSyncError


class EncodingPreferences:
    """Scoped store of encoding settings."""

    def __init__(self, workspace_encoding: Optional[str] = "UTF-8") -> None:
        self.workspace_encoding = workspace_encoding
        self._file_encodings: Dict[Path, str] = {}
        self._folder_encodings: Dict[Path, str] = {}
        self._syncing = False
        self._logger = get_logger(__name__, None, "preferences")

    @staticmethod
    def _key(path: Path) -> Path:
        return Path(path).resolve()

    @contextmanager
    def syncing(self) -> Iterator["EncodingPreferences"]:
        """Mark the store as synchronizing; writes fail until the block exits."""
        self._syncing = True
        try:
            yield self
        finally:
            self._syncing = False

    def _check_writable(self, path: Path) -> None:
        if self._syncing:
            raise PreferenceSyncError(f"Preference store is synchronizing, cannot write {path}")

    def get_file_encoding(self, path: Path) -> Optional[str]:
        return self._file_encodings.get(self._key(path))

    def set_file_encoding(self, path: Path, encoding: Optional[str]) -> None:
        """Set or clear (None) the explicit encoding of a file."""
        self._check_writable(path)
        key = self._key(path)
        if encoding is None:
            self._file_encodings.pop(key, None)
        else:
            self._file_encodings[key] = encoding
        self._logger.debug(
            "File encoding preference updated",
            extra={"path": str(key), "encoding": encoding}
        )

    def get_folder_encoding(self, folder: Path) -> Optional[str]:
        return self._folder_encodings.get(self._key(folder))

    def set_folder_encoding(self, folder: Path, encoding: Optional[str]) -> None:
        """Set or clear (None) the default encoding of a folder."""
        self._check_writable(folder)
        key = self._key(folder)
        if encoding is None:
            self._folder_encodings.pop(key, None)
        else:
            self._folder_encodings[key] = encoding

    def inherited_encoding(self, path: Path) -> Optional[str]:
        """Encoding a file gets when it has no explicit setting."""
        for folder in self._key(path).parents:
            encoding = self._folder_encodings.get(folder)
            if encoding is not None:
                return encoding
        return self.workspace_encoding
