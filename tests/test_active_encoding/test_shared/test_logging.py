"""Tests for correlation-aware logging."""

import logging

from active_encoding.shared.logging import CorrelationLogger, get_logger


class TestCorrelationLogger:
    """Test structured log records."""

    def test_record_fields(self, caplog):
        logger = get_logger("active_encoding.test", "notes.txt", "document")

        with caplog.at_level(logging.INFO, logger="active_encoding.test"):
            logger.info("Resolved", extra={"encoding": "UTF-8"})

        record = caplog.records[-1]
        assert record.getMessage() == "Resolved"
        assert record.component == "document"
        assert record.correlation_id == "notes.txt"
        assert record.encoding == "UTF-8"

    def test_default_component(self):
        logger = CorrelationLogger("active_encoding.document.state")

        assert logger.component == "state"
        assert logger.correlation_id is None

    def test_bind(self, caplog):
        logger = get_logger("active_encoding.test", None, "agent")
        bound = logger.bind("other.txt")

        with caplog.at_level(logging.DEBUG, logger="active_encoding.test"):
            bound.debug("Swapped")

        assert bound.component == "agent"
        assert logger.correlation_id is None
        assert caplog.records[-1].correlation_id == "other.txt"

    def test_levels(self, caplog):
        logger = get_logger("active_encoding.test", None, "levels")

        with caplog.at_level(logging.DEBUG, logger="active_encoding.test"):
            logger.debug("d")
            logger.warning("w")
            logger.error("e", exc_info=False)

        assert [r.levelno for r in caplog.records] == [
            logging.DEBUG, logging.WARNING, logging.ERROR
        ]

    def test_error_includes_exception(self, caplog):
        logger = get_logger("active_encoding.test", None, "errors")

        with caplog.at_level(logging.ERROR, logger="active_encoding.test"):
            try:
                raise ValueError("boom")
            except ValueError:
                logger.error("Failed")

        assert caplog.records[-1].exc_info[0] is ValueError

    def test_records_point_at_caller(self, caplog):
        logger = get_logger("active_encoding.test", None, "caller")

        with caplog.at_level(logging.INFO, logger="active_encoding.test"):
            logger.info("Located")

        record = caplog.records[-1]
        assert record.funcName == "test_records_point_at_caller"
        assert record.filename == "test_logging.py"
