"""Tests for the attribute-list state machine."""

import pytest

from purexml.tokenization.attributes import (
    AttrAction,
    AttrState,
    classify,
    next_state,
    parse_attribute,
    parse_attribute_list,
)


class TestClassify:
    """Test character classification."""

    @pytest.mark.parametrize("char,action", [
        (" ", AttrAction.SPACE),
        ("\t", AttrAction.SPACE),
        ("\n", AttrAction.SPACE),
        ("=", AttrAction.SEPARATOR),
        ("'", AttrAction.SINGLE_QUOTE),
        ('"', AttrAction.DOUBLE_QUOTE),
        ("/", AttrAction.SLASH),
        ("<", AttrAction.INVALID),
        (">", AttrAction.INVALID),
        ("a", AttrAction.NAME_CHAR),
        (":", AttrAction.NAME_CHAR),
        ("&", AttrAction.NAME_CHAR),
    ])
    def test_classify(self, char: str, action: AttrAction) -> None:
        """Test each character class."""
        assert classify(char) is action


class TestTransitions:
    """Test the transition table."""

    def test_missing_pair_is_invalid(self) -> None:
        """Test that unlisted pairs lead to INVALID."""
        assert next_state(AttrState.INIT, AttrAction.SEPARATOR) is AttrState.INVALID
        assert next_state(AttrState.NAME, AttrAction.SLASH) is AttrState.INVALID

    def test_quoted_content_accepts_other_quote(self) -> None:
        """Test that the other quote kind is plain value text."""
        assert next_state(
            AttrState.SINGLE_QUOTED_CONTENT, AttrAction.DOUBLE_QUOTE
        ) is AttrState.SINGLE_QUOTED_CONTENT
        assert next_state(
            AttrState.DOUBLE_QUOTED_CONTENT, AttrAction.SINGLE_QUOTE
        ) is AttrState.DOUBLE_QUOTED_CONTENT

    def test_quoted_content_rejects_angle_brackets(self) -> None:
        """Test that < and > cannot appear in values."""
        assert next_state(
            AttrState.DOUBLE_QUOTED_CONTENT, AttrAction.INVALID
        ) is AttrState.INVALID

    def test_terminal_states_have_no_transitions(self) -> None:
        """Test that END and INVALID are absorbing for lookups."""
        for action in AttrAction:
            assert next_state(AttrState.END, action) is AttrState.INVALID


class TestParseAttribute:
    """Test reading a single attribute."""

    def test_double_quoted(self) -> None:
        """Test a double-quoted value."""
        assert parse_attribute(' a="1"', 0) == (("a", "1"), 6)

    def test_single_quoted(self) -> None:
        """Test a single-quoted value."""
        assert parse_attribute("b='2'", 0) == (("b", "2"), 5)

    def test_spaces_around_separator(self) -> None:
        """Test whitespace on both sides of =."""
        assert parse_attribute("b =   \"x\"", 0) == (("b", "x"), 9)

    def test_value_unescaped(self) -> None:
        """Test that entities in values are replaced."""
        attribute, _ = parse_attribute('a="&lt&amp&gt"', 0)

        assert attribute == ("a", "<&>")

    def test_value_may_hold_slash_and_other_quote(self) -> None:
        """Test that / and the other quote are literal inside a value."""
        attribute, _ = parse_attribute("b = \"j/j'j\"", 0)

        assert attribute == ("b", "j/j'j")

    def test_stops_on_slash(self) -> None:
        """Test that / before a name ends the attribute list."""
        assert parse_attribute("  />", 0) == (None, 2)

    def test_unterminated_value_runs_to_end(self) -> None:
        """Test that an unterminated value consumes the text."""
        assert parse_attribute(' a="x', 0) == (None, 5)


class TestParseAttributeList:
    """Test reading consecutive attributes."""

    def test_multiple_attributes(self) -> None:
        """Test two attributes followed by >."""
        attributes, offset = parse_attribute_list(" a=\"1\" b='2'>", 0)

        assert attributes == {"a": "1", "b": "2"}
        assert offset == 12

    def test_duplicate_name_last_wins(self) -> None:
        """Test that a repeated name keeps the later value."""
        attributes, _ = parse_attribute_list(' a="1" a="2"', 0)

        assert attributes == {"a": "2"}

    def test_name_without_value_stops(self) -> None:
        """Test that a second name after whitespace is not accepted."""
        attributes, offset = parse_attribute_list(' a b="1"', 0)

        assert attributes == {}
        assert offset == 3

    def test_fills_given_mapping(self) -> None:
        """Test that attributes are added to a supplied mapping."""
        existing = {"x": "0"}
        attributes, _ = parse_attribute_list(' y="1"', 0, existing)

        assert attributes is existing
        assert existing == {"x": "0", "y": "1"}

    def test_empty_list(self) -> None:
        """Test that whitespace only yields no attributes."""
        assert parse_attribute_list("   ", 0) == ({}, 3)

    def test_starts_at_offset(self) -> None:
        """Test parsing from the middle of a string."""
        text = "<root k='v'>"
        attributes, offset = parse_attribute_list(text, 5)

        assert attributes == {"k": "v"}
        assert text[offset] == ">"
