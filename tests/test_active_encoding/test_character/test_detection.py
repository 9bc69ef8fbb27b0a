"""Tests for byte-level encoding detection."""

from unittest.mock import patch

import pytest

from active_encoding.character.detection import (
    BOMDetector,
    DetectionMethod,
    EncodingDetector,
    StatisticalAnalyzer,
    UTF8Validator,
)
from active_encoding.character.equality import normalize_charset
from active_encoding.shared.config import DetectionConfig


class TestBOMDetector:
    """Test BOM detection functionality."""

    def test_utf8_bom(self):
        result = BOMDetector().detect(b"\xef\xbb\xbfhello")

        assert result is not None
        assert result.encoding == "UTF-8"
        assert result.method == DetectionMethod.BOM

    def test_utf32_le_checked_before_utf16_le(self):
        """UTF-32 LE BOM starts with the UTF-16 LE BOM."""
        result = BOMDetector().detect(b"\xff\xfe\x00\x00h\x00\x00\x00")

        assert result is not None
        assert result.encoding == "UTF-32LE"

    def test_utf16_le(self):
        result = BOMDetector().detect(b"\xff\xfeh\x00")

        assert result is not None
        assert result.encoding == "UTF-16LE"

    def test_no_bom(self):
        assert BOMDetector().detect(b"hello") is None

    def test_empty(self):
        assert BOMDetector().detect(b"") is None


class TestUTF8Validator:
    """Test UTF-8 validation."""

    def test_multibyte_utf8(self):
        result = UTF8Validator().validate("héllo wörld".encode("utf-8"))

        assert result is not None
        assert result.encoding == "UTF-8"
        assert result.method == DetectionMethod.UTF8_VALIDATION

    def test_four_byte_sequence(self):
        result = UTF8Validator().validate("emoji \U0001F600".encode("utf-8"))
        assert result is not None

    def test_ascii_is_not_evidence(self):
        assert UTF8Validator().validate(b"plain ascii") is None

    def test_latin1_bytes(self):
        assert UTF8Validator().validate("héllo".encode("latin-1")) is None

    def test_stray_continuation_byte(self):
        assert UTF8Validator().validate(b"abc\x80def") is None

    def test_overlong_form(self):
        assert UTF8Validator().validate(b"a\xc0\xafb") is None

    def test_surrogate(self):
        assert UTF8Validator().validate(b"a\xed\xa0\x80") is None

    def test_lead_byte_beyond_unicode_range(self):
        assert UTF8Validator().validate(b"a\xf5\x80\x80\x80") is None

    def test_rejects_what_the_codec_rejects(self):
        data = b"a\xc0\xafb\xed\xa0\x80"

        with pytest.raises(UnicodeDecodeError):
            data.decode("utf-8")
        assert UTF8Validator().validate(data) is None
        assert normalize_charset(EncodingDetector().detect(data)) != "utf-8"

    def test_truncated_tail_only(self):
        """A cut-off sequence alone is not evidence."""
        assert UTF8Validator().validate(b"abc" + "é".encode("utf-8")[:1]) is None


class TestEncodingDetector:
    """Test the cascading detector."""

    def test_detects_utf8(self):
        detector = EncodingDetector()
        assert detector.detect("日本語".encode("utf-8")) == "UTF-8"

    def test_bom_wins(self):
        detector = EncodingDetector()
        data = "hi".encode("utf-16")
        assert detector.detect(data) in ("UTF-16LE", "UTF-16BE")

    def test_nothing_detected(self):
        detector = EncodingDetector()
        assert detector.detect(b"") is None
        assert detector.detect(b"ascii only") is None

    def test_legacy_bytes_without_statistics(self):
        detector = EncodingDetector(DetectionConfig(enable_statistical=False))
        assert detector.detect("café".encode("cp1252")) is None

    def test_detection_disabled(self):
        detector = EncodingDetector(DetectionConfig(enable_detection=False))
        assert detector.detect("héllo".encode("utf-8")) is None

    def test_bom_detection_disabled(self):
        detector = EncodingDetector(DetectionConfig(detect_bom=False, enable_statistical=False))

        assert detector.detect(b"\xff\xfeh\x00") is None
        result = detector.detect_result(b"\xef\xbb\xbfabc")
        assert result is not None
        assert result.method == DetectionMethod.UTF8_VALIDATION

    def test_sample_may_cut_a_sequence(self):
        """A sequence truncated by the sample size is not an error."""
        detector = EncodingDetector(DetectionConfig(sample_size=10))
        data = "é".encode("utf-8") + b"a" * 7 + "é".encode("utf-8")

        assert detector.detect(data) == "UTF-8"

    def test_sample_without_evidence(self):
        detector = EncodingDetector(DetectionConfig(sample_size=8))
        data = b"a" * 8 + "é".encode("utf-8")

        assert detector.detect(data) is None


SHIFT_JIS_TEXT = (
    "吾輩は猫である。名前はまだ無い。どこで生れたかとんと見当がつかぬ。"
    "何でも薄暗いじめじめした所でニャーニャー泣いていた事だけは記憶している。\r\n"
) * 10


class TestStatisticalAnalyzer:
    """Test statistical detection of legacy charsets."""

    def test_shift_jis(self):
        result = StatisticalAnalyzer().analyze(SHIFT_JIS_TEXT.encode("shift_jis"))

        assert result is not None
        assert result.method == DetectionMethod.STATISTICAL
        assert normalize_charset(result.encoding) in ("shift_jis", "cp932")

    def test_ascii_is_not_analyzed(self):
        with patch("active_encoding.character.detection.chardet.detect") as detect:
            assert StatisticalAnalyzer().analyze(b"plain ascii") is None

        detect.assert_not_called()

    def test_below_threshold(self):
        guess = {"encoding": "Windows-1252", "confidence": 0.4, "language": ""}
        with patch("active_encoding.character.detection.chardet.detect", return_value=guess):
            assert StatisticalAnalyzer(0.7).analyze(b"caf\xe9") is None

    def test_above_threshold(self):
        guess = {"encoding": "Windows-1252", "confidence": 0.9, "language": ""}
        with patch("active_encoding.character.detection.chardet.detect", return_value=guess):
            result = StatisticalAnalyzer(0.7).analyze(b"caf\xe9")

        assert result.encoding == "Windows-1252"
        assert result.confidence == 0.9

    def test_no_guess(self):
        guess = {"encoding": None, "confidence": 0.0, "language": None}
        with patch("active_encoding.character.detection.chardet.detect", return_value=guess):
            assert StatisticalAnalyzer().analyze(b"\x81\x82") is None


class TestDetectorStages:
    """Test where the statistical stage sits in the cascade."""

    def test_legacy_charset_detected(self):
        detector = EncodingDetector()

        detected = detector.detect(SHIFT_JIS_TEXT.encode("shift_jis"))

        assert normalize_charset(detected) in ("shift_jis", "cp932")

    def test_valid_utf8_skips_statistics(self):
        with patch("active_encoding.character.detection.chardet.detect") as detect:
            assert EncodingDetector().detect("日本語".encode("utf-8")) == "UTF-8"

        detect.assert_not_called()

    def test_threshold_from_config(self):
        detector = EncodingDetector(DetectionConfig(confidence_threshold=0.95))

        assert detector.statistical_analyzer.confidence_threshold == 0.95
