"""Byte-level encoding detection.

The tracker treats detection as a black box: given the raw bytes of a
document it wants a charset name, or nothing when the bytes carry no evidence.
Detection runs in stages: byte order marks first, then UTF-8 validation, then
statistical analysis of legacy charsets. The result is only used to warn
about mismatches, never to decode content.
"""

import codecs
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Dict, List, Optional

import chardet

from ..shared.config import DetectionConfig
from ..shared.logging import get_logger

ASCII_MAX = 0x80


class DetectionMethod(Enum):
    """Enumeration of encoding detection methods."""
    BOM = "bom"
    UTF8_VALIDATION = "utf8_validation"
    STATISTICAL = "statistical"


@dataclass
class DetectionResult:
    """Charset found in raw bytes.

    Attributes:
        encoding: Detected charset name
        method: Detection stage that produced the result
        confidence: Confidence between 0.0 and 1.0
        issues: Problems noticed while detecting
    """
    encoding: str
    method: DetectionMethod
    confidence: float = 1.0
    issues: List[str] = field(default_factory=list)


def has_non_ascii(data: bytes) -> bool:
    return any(byte >= ASCII_MAX for byte in data)


class BOMDetector:
    """Byte Order Mark (BOM) detection for all major encodings."""

    BOM_PATTERNS: ClassVar[Dict[bytes, str]] = {
        b"\xef\xbb\xbf": "UTF-8",
        b"\xff\xfe": "UTF-16LE",
        b"\xfe\xff": "UTF-16BE",
        b"\xff\xfe\x00\x00": "UTF-32LE",
        b"\x00\x00\xfe\xff": "UTF-32BE",
    }

    def detect(self, data: bytes) -> Optional[DetectionResult]:
        """Detect encoding based on BOM.

        Args:
            data: Byte data to analyze

        Returns:
            DetectionResult if BOM detected, None otherwise
        """
        if not data:
            return None

        # Check for UTF-32 BOMs first (longer patterns)
        for bom_bytes, encoding in sorted(
            self.BOM_PATTERNS.items(), key=lambda x: len(x[0]), reverse=True
        ):
            if data.startswith(bom_bytes):
                return DetectionResult(
                    encoding=encoding,
                    method=DetectionMethod.BOM,
                    issues=[]
                )

        return None


class UTF8Validator:
    """UTF-8 validation that only reports UTF-8 when multibyte evidence exists."""

    def validate(self, data: bytes) -> Optional[DetectionResult]:
        """Validate UTF-8 encoding.

        Pure ASCII is valid in almost every charset, so it is not evidence for
        UTF-8 and yields None. A sequence cut off at the end of the data is
        tolerated, since the data is usually a sample.

        Args:
            data: Byte data to validate

        Returns:
            DetectionResult for UTF-8, or None
        """
        if not has_non_ascii(data):
            return None

        decoder = codecs.getincrementaldecoder("utf-8")()
        try:
            decoder.decode(data, final=False)
        except UnicodeDecodeError:
            return None

        # Only a truncated tail was non-ASCII
        pending, _ = decoder.getstate()
        if not has_non_ascii(data[:len(data) - len(pending)]):
            return None

        return DetectionResult(encoding="UTF-8", method=DetectionMethod.UTF8_VALIDATION)


class StatisticalAnalyzer:
    """Statistical detection of legacy charsets, backed by chardet."""

    def __init__(self, confidence_threshold: float = 0.7) -> None:
        self.confidence_threshold = confidence_threshold

    def analyze(self, data: bytes) -> Optional[DetectionResult]:
        """Guess the charset of non-ASCII data.

        Args:
            data: Byte data to analyze

        Returns:
            DetectionResult if chardet is confident enough, None otherwise
        """
        if not has_non_ascii(data):
            return None

        guess = chardet.detect(data)
        encoding = guess.get("encoding")
        confidence = guess.get("confidence") or 0.0
        if not encoding or confidence < self.confidence_threshold:
            return None

        return DetectionResult(
            encoding=encoding,
            method=DetectionMethod.STATISTICAL,
            confidence=confidence,
        )


class EncodingDetector:
    """Cascading byte-level charset detector.

    Implements the following stages:
    1. BOM detection
    2. UTF-8 validation
    3. Statistical analysis
    4. Nothing detected (None)
    """

    def __init__(self, config: Optional[DetectionConfig] = None) -> None:
        """Initialize detection components."""
        self.config = config or DetectionConfig()
        self.bom_detector = BOMDetector()
        self.utf8_validator = UTF8Validator()
        self.statistical_analyzer = StatisticalAnalyzer(self.config.confidence_threshold)
        self._logger = get_logger(__name__, None, "encoding_detector")

    def detect_result(self, data: bytes) -> Optional[DetectionResult]:
        """Run the detection stages and keep the method that matched."""
        if not self.config.enable_detection or not data:
            return None

        sample = data[:self.config.sample_size]

        if self.config.detect_bom:
            bom_result = self.bom_detector.detect(sample)
            if bom_result:
                return bom_result

        utf8_result = self.utf8_validator.validate(sample)
        if utf8_result or not self.config.enable_statistical:
            return utf8_result

        return self.statistical_analyzer.analyze(sample)

    def detect(self, data: bytes) -> Optional[str]:
        """Detect the charset of raw bytes.

        Args:
            data: Raw document bytes

        Returns:
            Detected charset name, or None when nothing was detected
        """
        result = self.detect_result(data)
        if result is None:
            self._logger.debug("No encoding detected", extra={"size": len(data)})
            return None

        self._logger.debug(
            "Encoding detected",
            extra={"encoding": result.encoding, "method": result.method.value}
        )
        return result.encoding
