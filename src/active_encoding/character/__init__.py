"""Character layer: charset names, line separators and byte-level detection."""

from .content_type import ContentDescription, ContentTypeDescriber, XMLDeclarationParser
from .detection import EncodingDetector
from .equality import charsets_equal, is_supported_charset, normalize_charset
from .line_separator import LineSeparator, classify, convert, separator_for

__all__ = [
    "ContentDescription",
    "ContentTypeDescriber",
    "XMLDeclarationParser",
    "EncodingDetector",
    "charsets_equal",
    "is_supported_charset",
    "normalize_charset",
    "LineSeparator",
    "classify",
    "convert",
    "separator_for",
]
