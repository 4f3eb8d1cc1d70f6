"""Tag-header state machine.

Reads ``<name attr="v" ...>`` or ``<name attr="v" .../>``: the opening
``<``, the tag name, an optional attribute list (delegated to the
attribute-list machine) and the closing ``>`` or ``/>``.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict

from purexml.shared.errors import MalformedTagHeaderError
from purexml.tokenization.attributes import parse_attribute_list


class HeaderState(Enum):
    """States of the tag-header machine."""

    INIT = auto()           # Before the opening <
    TAG_START = auto()      # After <
    NAME = auto()           # Reading the tag name
    ATTR_LIST = auto()      # After the name, attributes possible
    EMPTY_TAG_END = auto()  # Read / and expecting >
    END = auto()            # Header complete
    INVALID = auto()        # Malformed header


class HeaderAction(Enum):
    """Character classes fed to the tag-header machine."""

    SPACE = auto()
    TAG_INIT = auto()
    NAME_CHAR = auto()
    SLASH = auto()
    TAG_END = auto()
    INVALID = auto()


# Pairs missing from a row lead to INVALID
TRANSITIONS: Dict[HeaderState, Dict[HeaderAction, HeaderState]] = {
    HeaderState.INIT: {
        HeaderAction.SPACE: HeaderState.INIT,
        HeaderAction.TAG_INIT: HeaderState.TAG_START,
    },
    HeaderState.TAG_START: {
        HeaderAction.SPACE: HeaderState.TAG_START,
        HeaderAction.NAME_CHAR: HeaderState.NAME,
    },
    HeaderState.NAME: {
        HeaderAction.SPACE: HeaderState.ATTR_LIST,
        HeaderAction.NAME_CHAR: HeaderState.NAME,
        HeaderAction.SLASH: HeaderState.EMPTY_TAG_END,
        HeaderAction.TAG_END: HeaderState.END,
    },
    HeaderState.ATTR_LIST: {
        HeaderAction.SPACE: HeaderState.ATTR_LIST,
        HeaderAction.SLASH: HeaderState.EMPTY_TAG_END,
        HeaderAction.TAG_END: HeaderState.END,
    },
    HeaderState.EMPTY_TAG_END: {
        HeaderAction.TAG_END: HeaderState.END,
    },
}

_CHAR_ACTIONS = {
    "<": HeaderAction.TAG_INIT,
    ">": HeaderAction.TAG_END,
    "/": HeaderAction.SLASH,
    "'": HeaderAction.INVALID,
    '"': HeaderAction.INVALID,
}


def classify(char: str) -> HeaderAction:
    """Map a character to its tag-header action."""
    if char.isspace():
        return HeaderAction.SPACE
    return _CHAR_ACTIONS.get(char, HeaderAction.NAME_CHAR)


def next_state(state: HeaderState, action: HeaderAction) -> HeaderState:
    """Look up the transition for ``(state, action)``."""
    return TRANSITIONS.get(state, {}).get(action, HeaderState.INVALID)


@dataclass
class TagHeader:
    """Result of reading one tag header.

    Attributes:
        name: Tag name
        attributes: Attributes in the header
        is_self_closing: Header ended with ``/>``
        end: Offset just past the closing ``>``
    """

    name: str
    attributes: Dict[str, str] = field(default_factory=dict)
    is_self_closing: bool = False
    end: int = 0


@dataclass
class _HeaderScan:
    name_start: int = 0
    name_end: int = 0
    attributes: Dict[str, str] = field(default_factory=dict)
    is_self_closing: bool = False


def _on_transition(
    text: str, pos: int, old: HeaderState, new: HeaderState, scan: _HeaderScan
) -> int:
    """Record data for a state change and return where to continue."""
    resume = pos + 1

    if old is not HeaderState.NAME and new is HeaderState.NAME:
        scan.name_start = pos
    elif old is HeaderState.NAME and new is not HeaderState.NAME:
        scan.name_end = pos

    if old is not HeaderState.ATTR_LIST and new is HeaderState.ATTR_LIST:
        _, resume = parse_attribute_list(text, pos, scan.attributes)

    if new is HeaderState.EMPTY_TAG_END:
        scan.is_self_closing = True

    return resume


def parse_tag_header(text: str, pos: int) -> TagHeader:
    """Parse the tag header starting at ``pos``.

    Leading whitespace before the ``<`` is skipped.

    Args:
        text: Text being parsed
        pos: Offset to start from

    Returns:
        TagHeader with the name, attributes and self-closing flag

    Raises:
        MalformedTagHeaderError: If the header cannot be tokenized, including
            when the text ends before the closing ``>``
    """
    state = HeaderState.INIT
    scan = _HeaderScan()
    i = pos
    length = len(text)
    error_at = length

    while i < length and state not in (HeaderState.END, HeaderState.INVALID):
        new_state = next_state(state, classify(text[i]))
        if new_state is HeaderState.INVALID:
            error_at = i
        if new_state is not state:
            i = _on_transition(text, i, state, new_state, scan)
        else:
            i += 1
        state = new_state

    if state is not HeaderState.END:
        raise MalformedTagHeaderError("Error parsing tag header", min(error_at, length))

    return TagHeader(
        name=text[scan.name_start:scan.name_end],
        attributes=scan.attributes,
        is_self_closing=scan.is_self_closing,
        end=i,
    )
