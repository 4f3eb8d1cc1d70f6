"""Tag-content state machine and CDATA reader.

Reads the text between a tag header (or the end of a child element) and the
next child or end tag. Plain text runs are trimmed, unescaped and stripped of
tabs and line breaks; CDATA blocks are kept verbatim.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, List, Tuple

from purexml.character.entities import strip_layout_characters, unescape
from purexml.shared.errors import (
    EndTagMismatchError,
    MalformedContentError,
    UnterminatedCDATAError,
)

CDATA_START = "<![CDATA["
CDATA_END = "]]>"


class ContentState(Enum):
    """States of the tag-content machine."""

    CONTENT = auto()  # Plain text
    GT = auto()       # Read <, deciding between a tag and CDATA
    CDATA = auto()    # Just finished a CDATA block
    END = auto()      # Found the start of a child or end tag
    INVALID = auto()  # Illegal character in content


class ContentAction(Enum):
    """Character classes fed to the tag-content machine."""

    CHAR = auto()
    TAG_INIT = auto()
    EXCLAMATION = auto()
    INVALID = auto()


# Pairs missing from a row lead to INVALID
TRANSITIONS: Dict[ContentState, Dict[ContentAction, ContentState]] = {
    ContentState.CONTENT: {
        ContentAction.CHAR: ContentState.CONTENT,
        ContentAction.TAG_INIT: ContentState.GT,
    },
    ContentState.GT: {
        ContentAction.CHAR: ContentState.END,
        ContentAction.EXCLAMATION: ContentState.CDATA,
    },
    ContentState.CDATA: {
        ContentAction.CHAR: ContentState.CONTENT,
        ContentAction.TAG_INIT: ContentState.GT,
    },
}

_CHAR_ACTIONS = {
    "<": ContentAction.TAG_INIT,
    "!": ContentAction.EXCLAMATION,
    ">": ContentAction.INVALID,
    "'": ContentAction.INVALID,
    '"': ContentAction.INVALID,
}


def classify(char: str) -> ContentAction:
    """Map a character to its tag-content action."""
    return _CHAR_ACTIONS.get(char, ContentAction.CHAR)


def next_state(state: ContentState, action: ContentAction) -> ContentState:
    """Look up the transition for ``(state, action)``."""
    return TRANSITIONS.get(state, {}).get(action, ContentState.INVALID)


def clean_text_run(run: str) -> str:
    """Normalize a plain text run: trim, unescape, drop tabs and line breaks."""
    return strip_layout_characters(unescape(run.strip()))


def parse_cdata(text: str, pos: int) -> Tuple[str, int]:
    """Read the CDATA block starting at ``pos``.

    Args:
        text: Text being parsed
        pos: Offset of the ``<![CDATA[`` prefix

    Returns:
        Tuple of the verbatim block content and the offset just past ``]]>``

    Raises:
        UnterminatedCDATAError: If the prefix or the closing ``]]>`` is missing
    """
    if text.startswith(CDATA_START, pos):
        body_start = pos + len(CDATA_START)
        body_end = text.find(CDATA_END, body_start)
        if body_end != -1:
            return text[body_start:body_end], body_end + len(CDATA_END)

    raise UnterminatedCDATAError("Error parsing CDATA block", pos)


@dataclass
class _ContentScan:
    run_start: int
    runs: List[str] = field(default_factory=list)


def _on_transition(
    text: str, pos: int, old: ContentState, new: ContentState, scan: _ContentScan
) -> int:
    """Collect content for a state change and return where to continue."""
    resume = pos + 1

    if old is not ContentState.CONTENT and new is ContentState.CONTENT:
        scan.run_start = pos

    if old is ContentState.CONTENT and new is not ContentState.CONTENT:
        if pos != scan.run_start:
            scan.runs.append(clean_text_run(text[scan.run_start:pos]))
    elif old is not ContentState.CDATA and new is ContentState.CDATA:
        # pos is on the "!" of "<![CDATA["
        block, resume = parse_cdata(text, pos - 1)
        scan.runs.append(block)

    return resume


def parse_tag_content(text: str, pos: int, tag_name: str) -> Tuple[List[str], int]:
    """Read content runs up to the next child or end tag.

    Args:
        text: Text being parsed
        pos: Offset just after a tag header or a child element
        tag_name: Name of the open element, used in error messages

    Returns:
        Tuple of the content runs in document order and the offset of the
        ``<`` that starts the next child or end tag

    Raises:
        MalformedContentError: On a bare ``!``, ``>``, ``'`` or ``"`` or a ``<<``
        UnterminatedCDATAError: On a malformed CDATA block
        EndTagMismatchError: If the text ends while the element is still open
    """
    state = ContentState.CONTENT
    scan = _ContentScan(run_start=pos)
    i = pos
    length = len(text)

    while i < length:
        new_state = next_state(state, classify(text[i]))
        if new_state is ContentState.INVALID:
            raise MalformedContentError("Error parsing tag content", i)
        if new_state is not state:
            i = _on_transition(text, i, state, new_state, scan)
        else:
            i += 1
        state = new_state
        if state is ContentState.END:
            # Step back over the "<" and the character after it
            return scan.runs, i - 2

    raise EndTagMismatchError(f"Expecting end tag </{tag_name}>", length)
