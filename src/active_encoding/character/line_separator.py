"""Line separator classification and conversion."""

import os
import re
from enum import Enum
from typing import Optional

CR = "\r"
LF = "\n"
CRLF = "\r\n"

LINE_BREAK_PATTERN = re.compile(r"\r\n|\r|\n")


class LineSeparator(str, Enum):
    """Line separator convention of a document.

    Members compare equal to their names, so ``LineSeparator.LF == "LF"``.
    """

    CRLF = "CRLF"
    CR = "CR"
    LF = "LF"
    MIXED = "Mixed"
    UNKNOWN = "Unknown"

    def __str__(self) -> str:
        return self.value


def classify(content: str) -> LineSeparator:
    """Classify the line separators used in a text.

    A ``\\r`` immediately followed by ``\\n`` counts as one CRLF, never as a
    lone CR.

    Args:
        content: Decoded document text

    Returns:
        The single separator kind found, MIXED when several kinds occur, or
        UNKNOWN when the text has no line breaks
    """
    found = set()
    for match in LINE_BREAK_PATTERN.finditer(content):
        found.add(match.group())
        if len(found) > 1:
            return LineSeparator.MIXED

    if not found:
        return LineSeparator.UNKNOWN
    return {
        CRLF: LineSeparator.CRLF,
        CR: LineSeparator.CR,
        LF: LineSeparator.LF,
    }[found.pop()]


def separator_for(name: str) -> str:
    """Map a separator name to its literal; anything but CR or LF is CRLF."""
    if name == LineSeparator.CR:
        return CR
    if name == LineSeparator.LF:
        return LF
    return CRLF


def convert(content: str, name: str) -> str:
    """Replace every line break in a text with the named separator."""
    return LINE_BREAK_PATTERN.sub(separator_for(name), content)


def of_workspace(name: Optional[str] = None) -> LineSeparator:
    """Line separator of the workspace preference, or of the platform.

    The preference may hold a name ("LF") or the separator itself ("\\n").
    """
    if name is None:
        return classify(os.linesep)
    if name in (CRLF, CR, LF):
        return classify(name)
    try:
        return LineSeparator(name)
    except ValueError:
        return LineSeparator.UNKNOWN
