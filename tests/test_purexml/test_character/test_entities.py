"""Tests for the entity codec."""

import pytest

from purexml.character import ENTITIES, escape, strip_layout_characters, unescape


class TestUnescape:
    """Test entity reference replacement."""

    def test_all_predefined_entities(self) -> None:
        """Test that the five entities are replaced."""
        assert unescape("&lt&gt&amp&apos&quot") == "<>&'\""

    def test_every_occurrence_is_replaced(self) -> None:
        """Test that repeated entities are all replaced."""
        assert unescape("&lt&lt a &lt") == "<< a <"

    def test_semicolon_is_not_part_of_entity(self) -> None:
        """Test that the short entity form leaves a trailing semicolon alone."""
        assert unescape("&lt;") == "<;"

    def test_replacement_order(self) -> None:
        """Test that &amp is resolved after &lt so &amplt becomes &lt."""
        assert unescape("&amplt") == "&lt"

    def test_plain_text_unchanged(self) -> None:
        """Test that text without entities is returned as is."""
        assert unescape("hello world") == "hello world"

    def test_entity_table_order(self) -> None:
        """Test the documented replacement order."""
        assert [entity for entity, _ in ENTITIES] == [
            "&lt", "&gt", "&amp", "&apos", "&quot"
        ]


class TestEscape:
    """Test special character escaping."""

    def test_all_special_characters(self) -> None:
        """Test that every special character is escaped."""
        assert escape("<a & 'b' \"c\">") == (
            "&lta &amp &aposb&apos &quotc&quot&gt"
        )

    def test_ampersand_escaped_once(self) -> None:
        """Test that entities produced by escaping are not escaped again."""
        assert escape("<") == "&lt"
        assert escape("&lt") == "&amplt"

    def test_skip_characters(self) -> None:
        """Test that characters in the skip set stay literal."""
        assert escape("it's \"x\"", skip="'") == "it's &quotx&quot"
        assert escape("it's \"x\"", skip=['"', "'"]) == "it's \"x\""

    @pytest.mark.parametrize("text", ["<&>", "a&b<c>d", "'\"", "&amp;"])
    def test_unescape_inverts_escape(self, text: str) -> None:
        """Test that unescaping escaped text restores it."""
        assert unescape(escape(text)) == text


class TestStripLayoutCharacters:
    """Test tab and line break removal."""

    def test_removes_tabs_and_line_breaks(self) -> None:
        """Test that embedded tabs, newlines and carriage returns vanish."""
        assert strip_layout_characters("a\tb\r\nc") == "abc"

    def test_keeps_spaces(self) -> None:
        """Test that ordinary spaces are kept."""
        assert strip_layout_characters("a b") == "a b"
