"""Reader for the optional ``<?xml ... ?>`` prologue."""

from typing import Tuple

from purexml.tokenization.attributes import parse_attribute_list
from purexml.tree.model import XMLPrologue

PROLOGUE_START = "<?xml"
PROLOGUE_END = "?>"


def read_prologue(text: str) -> Tuple[XMLPrologue, int]:
    """Extract version and encoding from the first ``<?xml ... ?>``.

    A missing prologue is not an error: defaults are returned and parsing
    resumes at the start of the text. Attributes other than ``version`` and
    ``encoding`` are ignored.

    Args:
        text: Comment-free document text

    Returns:
        Tuple of the prologue and the offset where the root tag search starts
    """
    prologue = XMLPrologue()

    start = text.find(PROLOGUE_START)
    if start == -1:
        return prologue, 0
    end = text.find(PROLOGUE_END, start)
    if end == -1:
        return prologue, 0

    attributes, _ = parse_attribute_list(text[start + len(PROLOGUE_START):end], 0)
    if "version" in attributes:
        prologue.version = attributes["version"]
    if "encoding" in attributes:
        prologue.encoding = attributes["encoding"]

    return prologue, end + len(PROLOGUE_END)
