"""Result objects shared by the resolution and document layers."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class MessageKind(Enum):
    """Icon kind attached to a status-line message."""

    INFO = "info"
    WARN = "warn"


@dataclass(frozen=True)
class PersistOutcome:
    """Best-effort result of pushing an encoding into the editor.

    Writing an encoding preference may fail when the backing store is out of
    sync. Such failures are not fatal: the document still re-resolves, and the
    swallowed error is kept here so that callers and tests can see it.

    Attributes:
        requested: Encoding the caller asked for
        stored: Value handed to the editor (None means inherit)
        error: Exception raised by the editor, if any
    """

    requested: Optional[str]
    stored: Optional[str]
    error: Optional[Exception] = None

    @property
    def ignored(self) -> bool:
        """True when the push failed and the failure was swallowed."""
        return self.error is not None

    @property
    def inherits(self) -> bool:
        """True when no explicit override was written."""
        return self.stored is None
