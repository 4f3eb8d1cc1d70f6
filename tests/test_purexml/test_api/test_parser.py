"""Tests for the public parsing API."""

import logging
from pathlib import Path

import pytest

from purexml.api import PureXMLParser, parse, parse_file, parse_string
from purexml.shared.config import ParserConfig
from purexml.shared.errors import (
    EndTagMismatchError,
    TrailingContentError,
    XMLParseError,
)
from purexml.tree.model import XMLDocument


class TestParseFunctions:
    """Test the module-level functions."""

    def test_parse_returns_document(self) -> None:
        """Test a successful parse."""
        document = parse('<root a="1"><item>value</item></root>')

        assert isinstance(document, XMLDocument)
        assert document.root.find_child("item").content == "value"

    def test_parse_string_matches_parse(self) -> None:
        """Test that parse_string is equivalent to parse."""
        text = "<r><a/>x</r>"

        assert parse_string(text) == parse(text)

    def test_parse_raises_on_error(self) -> None:
        """Test that errors propagate with message and position."""
        with pytest.raises(XMLParseError) as exc_info:
            parse("<root></notroot>")

        assert isinstance(exc_info.value, EndTagMismatchError)
        assert exc_info.value.position == 6
        assert str(exc_info.value) == "Expecting end tag </root> at position 6"

    def test_parse_with_config(self) -> None:
        """Test that configuration is honored."""
        with pytest.raises(TrailingContentError):
            parse("<r/>x", config=ParserConfig.strict())

    def test_parse_logs_failure(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that failures are logged with component and correlation ID."""
        with caplog.at_level(logging.WARNING, logger="purexml"):
            with pytest.raises(XMLParseError):
                parse("<root>", correlation_id="req-1")

        records = [r for r in caplog.records if r.getMessage() == "Parse operation failed"]
        assert len(records) == 1
        assert records[0].component == "parse"
        assert records[0].correlation_id == "req-1"
        assert records[0].position == 6

    def test_parse_logs_success(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that successful parses are logged at info level."""
        with caplog.at_level(logging.INFO, logger="purexml"):
            parse("<r><a/></r>")

        completed = [r for r in caplog.records if r.getMessage() == "Parse operation completed"]
        assert completed[0].element_count == 2

    def test_parse_file(self, tmp_path: Path) -> None:
        """Test parsing from a file."""
        path = tmp_path / "doc.xml"
        path.write_text('<?xml version="1.0"?><doc>héllo</doc>', encoding="utf-8")

        document = parse_file(path)

        assert document.root.content == "héllo"

    def test_parse_file_missing(self, tmp_path: Path) -> None:
        """Test that a missing file raises OSError."""
        with pytest.raises(OSError):
            parse_file(tmp_path / "missing.xml")


class TestPureXMLParser:
    """Test the reusable parser class."""

    def test_default_configuration(self) -> None:
        """Test that a default configuration is created."""
        parser = PureXMLParser()

        assert parser.config == ParserConfig()

    def test_correlation_id_from_config(self) -> None:
        """Test that the configured correlation ID is used."""
        parser = PureXMLParser(ParserConfig(correlation_id="cfg"))

        assert parser.correlation_id == "cfg"
        assert PureXMLParser(ParserConfig(correlation_id="cfg"), "arg").correlation_id == "arg"

    def test_statistics(self) -> None:
        """Test that successes and failures are counted."""
        parser = PureXMLParser()
        parser.parse("<a/>")
        parser.parse("<b></b>")
        with pytest.raises(XMLParseError):
            parser.parse("<c>")

        stats = parser.statistics
        assert stats["total_parses"] == 3
        assert stats["successful_parses"] == 2
        assert stats["success_rate"] == pytest.approx(2 / 3)
        assert stats["total_processing_time_ms"] >= 0.0

    def test_statistics_when_unused(self) -> None:
        """Test statistics before any parse."""
        stats = PureXMLParser().statistics

        assert stats["total_parses"] == 0
        assert stats["success_rate"] == 0.0
        assert stats["average_processing_time_ms"] == 0.0

    def test_reset_statistics(self) -> None:
        """Test clearing statistics."""
        parser = PureXMLParser()
        parser.parse("<a/>")
        parser.reset_statistics()

        assert parser.statistics["total_parses"] == 0

    def test_reconfigure(self) -> None:
        """Test that a new configuration applies to later parses."""
        parser = PureXMLParser()
        parser.parse("<a/>tail")

        parser.reconfigure(ParserConfig.strict())

        with pytest.raises(TrailingContentError):
            parser.parse("<a/>tail")

    def test_parse_file(self, tmp_path: Path) -> None:
        """Test parsing a file with the configured parser."""
        path = tmp_path / "doc.xml"
        path.write_text("<doc><x/></doc>")

        document = PureXMLParser().parse_file(path)

        assert document.element_count == 2
