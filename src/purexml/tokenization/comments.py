"""Comment removal for purexml.

Comments are deleted from the raw document before any other parsing happens,
so a comment may appear anywhere, even inside a tag header. The removals are
recorded so that offsets into the stripped text can be reported against the
original input.
"""

from dataclasses import dataclass, field
from typing import List, Tuple

from purexml.shared.errors import UnterminatedCommentError

COMMENT_START = "<!--"
COMMENT_END = "-->"


@dataclass
class StrippedText:
    """Document text with comments removed.

    Attributes:
        text: Text without comments
        removals: ``(offset, length)`` of each removal, in the order they
            were made; ``offset`` is relative to the text at that moment
    """

    text: str
    removals: List[Tuple[int, int]] = field(default_factory=list)

    @property
    def comment_count(self) -> int:
        """Number of comments removed."""
        return len(self.removals)

    def to_source_offset(self, offset: int) -> int:
        """Map an offset in ``text`` back to the original input."""
        for removed_at, length in reversed(self.removals):
            if offset >= removed_at:
                offset += length
        return offset


def strip_comments(text: str) -> StrippedText:
    """Remove every ``<!-- ... -->`` span from ``text``.

    Comments do not nest: the first ``-->`` after an opening delimiter ends
    it. Splicing can bring a new ``<!--`` together across the cut, which is
    removed as well.

    Args:
        text: Raw document text

    Returns:
        StrippedText holding the remaining text and the removal record

    Raises:
        UnterminatedCommentError: If a ``<!--`` has no following ``-->``
    """
    result = StrippedText(text)
    current = text

    start = current.find(COMMENT_START)
    while start != -1:
        end = current.find(COMMENT_END, start + len(COMMENT_START))
        if end == -1:
            raise UnterminatedCommentError(
                "Missing comment ending '-->'", result.to_source_offset(start)
            )

        end += len(COMMENT_END)
        current = current[:start] + current[end:]
        result.removals.append((start, end - start))

        # A new opener can only straddle the cut
        start = current.find(COMMENT_START, max(0, start - len(COMMENT_START) + 1))

    result.text = current
    return result
