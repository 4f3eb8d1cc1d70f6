"""Tests for parse error types."""

import pytest

from purexml.shared.errors import (
    EndTagMismatchError,
    MalformedContentError,
    MalformedTagHeaderError,
    NestingDepthError,
    TrailingContentError,
    UnterminatedCDATAError,
    UnterminatedCommentError,
    XMLParseError,
)


class TestXMLParseError:
    """Test the error base class."""

    def test_message_and_position(self) -> None:
        """Test the stored fields and string form."""
        error = XMLParseError("Error parsing tag header", 12)

        assert error.message == "Error parsing tag header"
        assert error.position == 12
        assert str(error) == "Error parsing tag header at position 12"

    def test_with_position_keeps_type(self) -> None:
        """Test that relocating an error keeps its class and message."""
        error = EndTagMismatchError("Expecting end tag </a>", 3)
        moved = error.with_position(30)

        assert type(moved) is EndTagMismatchError
        assert moved.message == error.message
        assert moved.position == 30
        assert error.position == 3

    @pytest.mark.parametrize("error_class", [
        UnterminatedCommentError,
        MalformedTagHeaderError,
        MalformedContentError,
        UnterminatedCDATAError,
        EndTagMismatchError,
        NestingDepthError,
        TrailingContentError,
    ])
    def test_subclasses(self, error_class: type) -> None:
        """Test that every failure can be caught as XMLParseError."""
        with pytest.raises(XMLParseError):
            raise error_class("failure", 0)
