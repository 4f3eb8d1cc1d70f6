"""Entity codec for the five predefined XML entities.

Entity references are recognised in their short form without the trailing
semicolon (``&lt``, ``&gt``, ``&amp``, ``&apos``, ``&quot``).
"""

from typing import Iterable, Tuple

# (entity, character) pairs in unescape order
ENTITIES: Tuple[Tuple[str, str], ...] = (
    ("&lt", "<"),
    ("&gt", ">"),
    ("&amp", "&"),
    ("&apos", "'"),
    ("&quot", '"'),
)

# "&" first, every later entity starts with "&"
_ESCAPE_ORDER: Tuple[Tuple[str, str], ...] = (
    ("&", "&amp"),
    ("<", "&lt"),
    (">", "&gt"),
    ("'", "&apos"),
    ('"', "&quot"),
)

LAYOUT_CHARACTERS = ("\t", "\n", "\r")


def unescape(text: str) -> str:
    """Replace every entity reference with the character it stands for.

    Args:
        text: Raw text possibly holding entity references

    Returns:
        Text with ``&lt``, ``&gt``, ``&amp``, ``&apos`` and ``&quot`` replaced
    """
    for entity, char in ENTITIES:
        text = text.replace(entity, char)
    return text


def escape(text: str, skip: Iterable[str] = ()) -> str:
    """Replace special characters with entity references.

    Args:
        text: Text to escape
        skip: Characters to leave literal

    Returns:
        Escaped text
    """
    skipped = set(skip)
    for char, entity in _ESCAPE_ORDER:
        if char not in skipped:
            text = text.replace(char, entity)
    return text


def strip_layout_characters(text: str) -> str:
    """Remove every tab, newline and carriage return from ``text``."""
    for char in LAYOUT_CHARACTERS:
        text = text.replace(char, "")
    return text
