"""Tests for the correlation logger."""

import logging

import pytest

from purexml.shared.logging import CorrelationLogger, get_logger


class TestCorrelationLogger:
    """Test structured log records."""

    def test_component_defaults_to_module_name(self) -> None:
        """Test the default component name."""
        logger = CorrelationLogger("purexml.tree.builder")

        assert logger.component == "builder"

    def test_records_carry_context(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that component, correlation ID and extras reach the record."""
        logger = get_logger("purexml.test", "abc", "unit")

        with caplog.at_level(logging.DEBUG, logger="purexml.test"):
            logger.debug("hello", extra={"size": 3})

        record = caplog.records[-1]
        assert record.getMessage() == "hello"
        assert record.component == "unit"
        assert record.correlation_id == "abc"
        assert record.size == 3

    def test_is_enabled_for(self) -> None:
        """Test level checks against the wrapped logger."""
        logger = get_logger("purexml.test.level")
        logger.logger.setLevel(logging.ERROR)

        assert logger.is_enabled_for(logging.ERROR)
        assert not logger.is_enabled_for(logging.INFO)
