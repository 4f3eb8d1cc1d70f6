"""Attribute-list state machine.

Tokenizes ``name='value'`` / ``name="value"`` pairs inside a tag header or the
XML prologue. The machine is driven one character at a time through an
enum-indexed transition table; positions are only recorded when the state
changes.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Optional, Tuple

from purexml.character.entities import unescape


class AttrState(Enum):
    """States of the attribute-list machine."""

    INIT = auto()                   # Before an attribute name
    NAME = auto()                   # Reading attribute name
    PRE_SEPARATOR = auto()          # Whitespace between name and =
    SEPARATOR = auto()              # Just read =
    POST_SEPARATOR = auto()         # Whitespace between = and the quote
    SINGLE_QUOTED_CONTENT = auto()  # Inside '...'
    DOUBLE_QUOTED_CONTENT = auto()  # Inside "..."
    END = auto()                    # Closing quote consumed
    INVALID = auto()                # Character cannot continue the attribute


class AttrAction(Enum):
    """Character classes fed to the attribute-list machine."""

    SPACE = auto()
    NAME_CHAR = auto()
    SEPARATOR = auto()
    SINGLE_QUOTE = auto()
    DOUBLE_QUOTE = auto()
    SLASH = auto()
    INVALID = auto()


def _quoted(state: AttrState, closing: AttrAction) -> Dict[AttrAction, AttrState]:
    row = {action: state for action in AttrAction}
    row[closing] = AttrState.END
    row[AttrAction.INVALID] = AttrState.INVALID
    return row


# Pairs missing from a row lead to INVALID
TRANSITIONS: Dict[AttrState, Dict[AttrAction, AttrState]] = {
    AttrState.INIT: {
        AttrAction.SPACE: AttrState.INIT,
        AttrAction.NAME_CHAR: AttrState.NAME,
    },
    AttrState.NAME: {
        AttrAction.SPACE: AttrState.PRE_SEPARATOR,
        AttrAction.NAME_CHAR: AttrState.NAME,
        AttrAction.SEPARATOR: AttrState.SEPARATOR,
    },
    AttrState.PRE_SEPARATOR: {
        AttrAction.SPACE: AttrState.PRE_SEPARATOR,
        AttrAction.SEPARATOR: AttrState.SEPARATOR,
    },
    AttrState.SEPARATOR: {
        AttrAction.SPACE: AttrState.POST_SEPARATOR,
        AttrAction.SINGLE_QUOTE: AttrState.SINGLE_QUOTED_CONTENT,
        AttrAction.DOUBLE_QUOTE: AttrState.DOUBLE_QUOTED_CONTENT,
    },
    AttrState.POST_SEPARATOR: {
        AttrAction.SPACE: AttrState.POST_SEPARATOR,
        AttrAction.SINGLE_QUOTE: AttrState.SINGLE_QUOTED_CONTENT,
        AttrAction.DOUBLE_QUOTE: AttrState.DOUBLE_QUOTED_CONTENT,
    },
    AttrState.SINGLE_QUOTED_CONTENT: _quoted(
        AttrState.SINGLE_QUOTED_CONTENT, AttrAction.SINGLE_QUOTE
    ),
    AttrState.DOUBLE_QUOTED_CONTENT: _quoted(
        AttrState.DOUBLE_QUOTED_CONTENT, AttrAction.DOUBLE_QUOTE
    ),
}

_QUOTED_STATES = (AttrState.SINGLE_QUOTED_CONTENT, AttrState.DOUBLE_QUOTED_CONTENT)

_CHAR_ACTIONS = {
    "<": AttrAction.INVALID,
    ">": AttrAction.INVALID,
    "=": AttrAction.SEPARATOR,
    "'": AttrAction.SINGLE_QUOTE,
    '"': AttrAction.DOUBLE_QUOTE,
    "/": AttrAction.SLASH,
}


def classify(char: str) -> AttrAction:
    """Map a character to its attribute-list action."""
    if char.isspace():
        return AttrAction.SPACE
    return _CHAR_ACTIONS.get(char, AttrAction.NAME_CHAR)


def next_state(state: AttrState, action: AttrAction) -> AttrState:
    """Look up the transition for ``(state, action)``."""
    return TRANSITIONS.get(state, {}).get(action, AttrState.INVALID)


@dataclass
class _AttrSpan:
    """Offsets of the attribute being read."""

    name_start: int = 0
    name_end: int = 0
    value_start: int = 0
    value_end: int = 0


def _on_transition(pos: int, old: AttrState, new: AttrState, span: _AttrSpan) -> int:
    """Record offsets for a state change and return where to continue."""
    if old is not AttrState.NAME and new is AttrState.NAME:
        span.name_start = pos
    elif old is AttrState.NAME and new is not AttrState.NAME:
        span.name_end = pos
    elif old not in _QUOTED_STATES and new in _QUOTED_STATES:
        span.value_start = pos + 1
    elif old in _QUOTED_STATES and new is AttrState.END:
        span.value_end = pos

    # The offending character belongs to whoever called us
    if new is AttrState.INVALID:
        return pos
    return pos + 1


def parse_attribute(text: str, pos: int) -> Tuple[Optional[Tuple[str, str]], int]:
    """Run the machine for a single attribute.

    Args:
        text: Text being parsed
        pos: Offset to start from

    Returns:
        ``((name, value), offset)`` when an attribute was read, otherwise
        ``(None, offset)`` where ``offset`` is the first unconsumed character
        or ``len(text)``
    """
    state = AttrState.INIT
    span = _AttrSpan()
    i = pos
    length = len(text)

    while i < length and state not in (AttrState.END, AttrState.INVALID):
        new_state = next_state(state, classify(text[i]))
        if new_state is not state:
            i = _on_transition(i, state, new_state, span)
        else:
            i += 1
        state = new_state

    if state is AttrState.END:
        name = text[span.name_start:span.name_end]
        value = unescape(text[span.value_start:span.value_end])
        return (name, value), i
    return None, i


def parse_attribute_list(
    text: str,
    pos: int,
    attributes: Optional[Dict[str, str]] = None
) -> Tuple[Dict[str, str], int]:
    """Parse consecutive attributes starting at ``pos``.

    Parsing stops at the first character that cannot start or continue an
    attribute. A repeated attribute name overwrites the earlier value. An
    unterminated value consumes the rest of the text; the caller decides
    whether that is an error.

    Args:
        text: Text being parsed
        pos: Offset to start from
        attributes: Mapping to fill, a new one is created when omitted

    Returns:
        Tuple of the attribute mapping and the offset where parsing stopped
    """
    if attributes is None:
        attributes = {}

    i = pos
    while i < len(text):
        attribute, i = parse_attribute(text, i)
        if attribute is None:
            break
        name, value = attribute
        attributes[name] = value

    return attributes, i
