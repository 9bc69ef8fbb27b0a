"""Charset name normalization and comparison.

Charset names reach the tracker from many places (editor settings, XML
declarations, detectors, user input) and rarely agree on spelling. All
comparisons go through :func:`charsets_equal` so that ``"utf8"``,
``"UTF-8"`` and ``" Utf-8 "`` are treated as the same charset.
"""

import codecs
from typing import Dict, Optional

# Names that Python's codec registry does not know, mapped to ones it does
CHARSET_ALIASES: Dict[str, str] = {
    "utf8": "utf-8",
    "utf16": "utf-16",
    "utf32": "utf-32",
    "unicode-1-1-utf-8": "utf-8",
    "x-utf-16le-bom": "utf-16-le",
    "x-sjis": "shift_jis",
    "windows-31j": "cp932",
    "ms932": "cp932",
    "x-euc-jp": "euc_jp",
    "x-windows-949": "cp949",
}


def normalize_charset(name: Optional[str]) -> Optional[str]:
    """Return the canonical form of a charset name.

    Args:
        name: Charset name as reported by any source, or None

    Returns:
        Canonical lower-case name, the case-folded input when the name is
        unknown to Python, or None when no name was given
    """
    if name is None:
        return None

    folded = name.strip().casefold()
    if not folded:
        return ""

    folded = CHARSET_ALIASES.get(folded, folded)
    try:
        return codecs.lookup(folded).name
    except LookupError:
        return folded


def charsets_equal(first: Optional[str], second: Optional[str]) -> bool:
    """Compare two charset names, ignoring case and known aliases.

    None is a distinct value equal only to itself.
    """
    if first is None or second is None:
        return first is None and second is None
    return normalize_charset(first) == normalize_charset(second)


def is_supported_charset(name: Optional[str]) -> bool:
    """Check whether Python can encode and decode text with a charset."""
    normalized = normalize_charset(name)
    if not normalized:
        return False
    try:
        codec = codecs.lookup(normalized)
    except LookupError:
        return False
    # Registry also holds bytes-to-bytes codecs such as "hex"
    return getattr(codec, "_is_text_encoding", True)
