"""Tests for correlation-aware logging."""

import io
import logging

import pytest

from xml_tree_query.shared import (
    CorrelationFilter,
    CorrelationLogger,
    attach_query_handler,
    detach_query_handler,
    get_logger,
)


class TestCorrelationLogger:
    """Test suite for CorrelationLogger."""

    def test_component_defaults_to_last_name_part(self) -> None:
        """Test default component naming."""
        logger = get_logger("xml_tree_query.query.traversal")

        assert isinstance(logger, CorrelationLogger)
        assert logger.component == "traversal"
        assert logger.correlation_id is None

    def test_records_carry_correlation_extras(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that component, correlation ID and extras reach the record."""
        logger = get_logger("xml_tree_query.test_logging", "req-42", "decoder")

        with caplog.at_level(logging.INFO, logger="xml_tree_query.test_logging"):
            logger.info("decoded", extra={"records": 2})

        record = caplog.records[-1]
        assert record.getMessage() == "decoded"
        assert record.component == "decoder"
        assert record.correlation_id == "req-42"
        assert record.records == 2

    def test_is_enabled_for_follows_logger_level(self) -> None:
        """Test level checks."""
        logger = get_logger("xml_tree_query.test_logging.levels")
        logger.logger.setLevel(logging.WARNING)

        assert logger.is_enabled_for(logging.ERROR)
        assert not logger.is_enabled_for(logging.DEBUG)


class TestQueryHandler:
    """Test handler installation helpers."""

    def test_attached_handler_formats_correlation_fields(self) -> None:
        """Test that library records render component and correlation ID."""
        stream = io.StringIO()
        library_logger = logging.getLogger("xml_tree_query")
        previous_level = library_logger.level
        handler = attach_query_handler(logging.StreamHandler(stream))
        try:
            get_logger("xml_tree_query.test_handler", "req-7", "casting").debug("read leaf")
            logging.getLogger("xml_tree_query.plain").debug("plain record")
        finally:
            detach_query_handler(handler)
            library_logger.setLevel(previous_level)

        lines = stream.getvalue().splitlines()
        assert "[casting req-7] read leaf" in lines[0]
        assert "[plain -] plain record" in lines[1]

    def test_detach_removes_handler(self) -> None:
        """Test handler removal."""
        library_logger = logging.getLogger("xml_tree_query")
        previous_level = library_logger.level
        handler = attach_query_handler(logging.NullHandler())
        detach_query_handler(handler)
        library_logger.setLevel(previous_level)

        assert handler not in logging.getLogger("xml_tree_query").handlers

    def test_filter_keeps_existing_fields(self) -> None:
        """Test that CorrelationFilter does not overwrite populated fields."""
        record = logging.LogRecord("x.y", logging.INFO, __file__, 1, "m", None, None)
        record.component = "custom"
        record.correlation_id = "abc"

        assert CorrelationFilter().filter(record)
        assert record.component == "custom"
        assert record.correlation_id == "abc"
