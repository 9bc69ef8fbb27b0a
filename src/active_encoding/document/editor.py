"""Interfaces of the host collaborators a document state talks to.

The host editor is modeled through capability adapters: a document asks the
editor for :class:`EncodingSupport` and :class:`FileStorage` and commits to a
variant based on which of them the editor provides.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional, Type, TypeVar

from ..shared.config import WorkspaceConfig
from ..shared.result import MessageKind

T = TypeVar("T")


class EncodingSupport(ABC):
    """Encoding attribute of an editor."""

    @abstractmethod
    def get_encoding(self) -> Optional[str]:
        """Explicit encoding of the document, None when inherited."""

    @abstractmethod
    def set_encoding(self, encoding: Optional[str]) -> None:
        """Store an explicit encoding; None removes the override.

        May raise when the backing preference store is out of sync.
        """

    @abstractmethod
    def get_default_encoding(self) -> Optional[str]:
        """Encoding the document uses when it has no explicit setting."""


class FileStorage(ABC):
    """Raw byte access to the file behind an editor."""

    @property
    @abstractmethod
    def file_name(self) -> str:
        """Name of the file."""

    @abstractmethod
    def read_bytes(self) -> bytes:
        """Read the whole file."""

    @abstractmethod
    def write_bytes(self, data: bytes) -> None:
        """Replace the whole file."""

    @abstractmethod
    def get_inherited_encoding(self) -> Optional[str]:
        """Encoding inherited from the enclosing folder, project or workspace."""

    @abstractmethod
    def get_content_type_encoding(self) -> Optional[str]:
        """Encoding implied by the file's content type."""


class StatusLine(ABC):
    """Status line of the host window."""

    @abstractmethod
    def set_message(self, kind: Optional[MessageKind], message: Optional[str]) -> None:
        """Show a message; None clears the status line."""


class Editor(ABC):
    """Host editor as seen by a document state."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Display name of the editor input."""

    @abstractmethod
    def is_dirty(self) -> bool:
        """Whether the editor holds unsaved changes."""

    @abstractmethod
    def get_adapter(self, capability: Type[T]) -> Optional[T]:
        """Return the editor's implementation of a capability, if any."""

    @property
    def status_line(self) -> Optional[StatusLine]:
        """Status line of the window hosting the editor."""
        return None


class EncodingInfoListener(ABC):
    """Receives notifications when a document's encoding info changes."""

    @abstractmethod
    def encoding_info_changed(self) -> None:
        """Called at most once per resolution pass, only on change."""


@dataclass
class WorkspaceDefaults:
    """Workspace-wide fallback encoding and line separator, polled on demand."""

    encoding: Optional[str] = "UTF-8"
    line_separator: Optional[str] = None

    @classmethod
    def from_config(cls, config: WorkspaceConfig) -> "WorkspaceDefaults":
        return cls(encoding=config.default_encoding, line_separator=config.line_separator)


def capability_of(editor: Any, capability: Type[T]) -> Optional[T]:
    """Ask an editor for a capability, tolerating editors without adapters."""
    get_adapter = getattr(editor, "get_adapter", None)
    if get_adapter is None:
        return None
    return get_adapter(capability)
