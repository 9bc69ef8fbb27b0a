"""Content types and the charsets they declare.

Some kinds of documents imply an encoding regardless of where they live: an
XML file declares it in its prolog, Java properties files are ISO-8859-1 by
definition, JSON is UTF-8. The describer maps a file name and its bytes to a
content type and that implied charset.
"""

import re
from dataclasses import dataclass
from pathlib import PurePath
from typing import ClassVar, Dict, Optional, Tuple

from .equality import is_supported_charset

# Look for the XML declaration in the first bytes only
XML_HEADER_SIZE = 1024


@dataclass(frozen=True)
class ContentDescription:
    """Content type of a document and the charset it implies.

    Attributes:
        content_type: Content type identifier, e.g. "text/xml"
        charset: Charset implied by the content type, or None
    """
    content_type: str
    charset: Optional[str] = None


class XMLDeclarationParser:
    """Parser for XML encoding declarations."""

    XML_DECLARATION_PATTERN = re.compile(
        rb'<\?xml\s+.*?encoding\s*=\s*["\']([^"\']+)["\'].*?\?>',
        re.IGNORECASE | re.DOTALL
    )

    def parse_declaration(self, data: bytes) -> Optional[str]:
        """Parse the charset from an XML declaration.

        Args:
            data: Byte data to analyze

        Returns:
            Declared charset if present and known to Python, None otherwise
        """
        if not data:
            return None

        match = self.XML_DECLARATION_PATTERN.search(data[:XML_HEADER_SIZE])
        if not match:
            return None

        declared = match.group(1).decode("ascii", errors="ignore").strip()
        if not is_supported_charset(declared):
            return None
        return declared


class ContentTypeDescriber:
    """Map file names and content to content types."""

    # suffix -> (content type, fixed charset)
    CONTENT_TYPES: ClassVar[Dict[str, Tuple[str, Optional[str]]]] = {
        ".xml": ("text/xml", None),
        ".xsd": ("text/xml", None),
        ".xsl": ("text/xml", None),
        ".svg": ("text/xml", None),
        ".pom": ("text/xml", None),
        ".properties": ("text/x-java-properties", "ISO-8859-1"),
        ".json": ("application/json", "UTF-8"),
        ".txt": ("text/plain", None),
    }

    XML_CONTENT_TYPE = "text/xml"
    DEFAULT_CONTENT_TYPE = "text/plain"

    def __init__(self) -> None:
        self.xml_parser = XMLDeclarationParser()

    def describe(self, file_name: Optional[str], data: bytes = b"") -> ContentDescription:
        """Describe a document.

        Args:
            file_name: Name of the document, used to pick the content type
            data: Raw content, used for declarations inside the document

        Returns:
            ContentDescription; charset is None when the type implies nothing
        """
        suffix = PurePath(file_name).suffix.lower() if file_name else ""
        content_type, charset = self.CONTENT_TYPES.get(
            suffix, (self.DEFAULT_CONTENT_TYPE, None)
        )

        if content_type == self.XML_CONTENT_TYPE:
            charset = self.xml_parser.parse_declaration(data)

        return ContentDescription(content_type=content_type, charset=charset)
