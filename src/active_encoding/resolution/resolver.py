"""Resolution of the effective encoding of a document.

The effective encoding follows a two-level precedence: the document's
explicit setting wins, otherwise the host's default applies. Inherited,
content-type and detected encodings are informational. They drive display and
the decision whether a requested encoding needs an explicit override at all,
but never feed the effective value directly.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..character.equality import charsets_equal


class EncodingSource(Enum):
    """Where an encoding value comes from, in order of precedence."""

    EXPLICIT = 1
    INHERITED = 2
    CONTENT_TYPE = 3
    DETECTED = 4
    WORKSPACE = 5


@dataclass(frozen=True)
class ResolutionResult:
    """Outcome of one resolution pass.

    Attributes:
        effective: Resolved encoding, None when neither source has one
        changed: Whether effective differs from the previous pass
        source: Source the effective value was taken from
    """
    effective: Optional[str]
    changed: bool
    source: EncodingSource


class EncodingResolver:
    """Compute the effective encoding and remember the last result."""

    def __init__(self, initial: Optional[str] = None) -> None:
        self._current = initial

    @property
    def current(self) -> Optional[str]:
        """Effective encoding of the most recent pass."""
        return self._current

    def reset(self, value: Optional[str]) -> None:
        """Seed the previous value without reporting a change."""
        self._current = value

    def resolve(
        self, explicit: Optional[str], workspace_default: Optional[str]
    ) -> ResolutionResult:
        """Resolve the effective encoding.

        Args:
            explicit: Encoding set on the document itself
            workspace_default: Host fallback, used when explicit is absent

        Returns:
            ResolutionResult; changed compares against the previous pass by
            charset equality, so a respelled name is not a change
        """
        if explicit is not None:
            effective, source = explicit, EncodingSource.EXPLICIT
        else:
            effective, source = workspace_default, EncodingSource.WORKSPACE

        changed = not charsets_equal(effective, self._current)
        self._current = effective
        return ResolutionResult(effective=effective, changed=changed, source=source)


def choose_stored_encoding(
    requested: Optional[str],
    inherited: Optional[str],
    content_type: Optional[str],
) -> Optional[str]:
    """Pick the value to store for a requested encoding.

    Storing None lets inheritance apply. An explicit override is only written
    when inheritance would not already produce the requested charset.

    Args:
        requested: Encoding the user asked for
        inherited: Encoding inherited from folder, project or workspace
        content_type: Encoding implied by the document's content type

    Returns:
        None to inherit, otherwise requested unchanged
    """
    if charsets_equal(requested, content_type):
        return None
    if content_type is None and charsets_equal(requested, inherited):
        return None
    return requested
