"""Tree builder for purexml.

Drives the tokenizers over one document: comments are stripped first, the
prologue is read, and the root element is built by descending through the
elements. Each element is assembled from its header, its content runs and its
children, then closed by a matching end tag.
"""

import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from purexml.shared.config import ParserConfig
from purexml.shared.errors import (
    EndTagMismatchError,
    NestingDepthError,
    TrailingContentError,
    XMLParseError,
)
from purexml.shared.logging import get_logger
from purexml.tokenization.comments import strip_comments
from purexml.tokenization.content import parse_tag_content
from purexml.tokenization.header import parse_tag_header
from purexml.tokenization.prologue import read_prologue
from purexml.tree.model import XMLDocument, XMLTag

END_TAG_START = "</"


@dataclass
class _OpenTag:
    """An element whose end tag has not been read yet."""

    name: str
    attributes: Dict[str, str]
    children: List[XMLTag] = field(default_factory=list)
    content: List[str] = field(default_factory=list)

    def to_tag(self) -> XMLTag:
        return XMLTag(
            name=self.name,
            attributes=self.attributes,
            children=self.children,
            content="".join(self.content),
        )


def match_end_tag(text: str, pos: int, name: str) -> Optional[int]:
    """Check whether the tag at ``pos`` is the end tag for ``name``.

    The text between ``</`` and the next ``>`` is trimmed and compared
    case-sensitively with ``name``.

    Returns:
        Offset just past the end tag, or ``None`` if it is not ``name``'s
    """
    if not text.startswith(END_TAG_START, pos):
        return None
    close = text.find(">", pos)
    if close == -1:
        return None
    if text[pos + len(END_TAG_START):close].strip() != name:
        return None
    return close + 1


class XMLTreeBuilder:
    """Builds an ``XMLDocument`` from document text.

    Builders hold only configuration, so one instance can be reused for any
    number of documents.
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize tree builder.

        Args:
            config: Parser configuration (defaults to ``ParserConfig()``)
            correlation_id: Optional correlation ID for request tracking
        """
        self.config = config or ParserConfig()
        self.correlation_id = correlation_id or self.config.correlation_id
        self.logger = get_logger(__name__, self.correlation_id, "tree_builder")

    def build(self, text: str) -> XMLDocument:
        """Parse a complete document.

        Args:
            text: Whole document text

        Returns:
            XMLDocument with prologue and root element

        Raises:
            XMLParseError: On any structural violation; the position refers
                to ``text`` as given, comments included
        """
        start_time = time.time()
        stripped = strip_comments(text)

        self.logger.debug(
            "Starting tree build",
            extra={
                "content_length": len(text),
                "comments_removed": stripped.comment_count,
            }
        )

        try:
            prologue, resume = read_prologue(stripped.text)
            root, end = self.parse_tag(stripped.text, resume)
            if not self.config.allow_trailing_content:
                self._check_trailing_content(stripped.text, end)
        except XMLParseError as e:
            raise e.with_position(stripped.to_source_offset(e.position)) from None

        document = XMLDocument(prologue=prologue, root=root)

        self.logger.debug(
            "Tree build completed",
            extra={
                "root_tag": root.name,
                "element_count": document.element_count,
                "processing_time_ms": (time.time() - start_time) * 1000,
            }
        )
        return document

    def parse_tag(self, text: str, pos: int, depth: int = 0) -> Tuple[XMLTag, int]:
        """Parse one element, its content and its children.

        Open elements are kept on an explicit stack, so nesting depth is
        limited only by ``ParserConfig.max_depth``.

        Args:
            text: Comment-free document text
            pos: Offset where the element's header starts (leading
                whitespace allowed)
            depth: Nesting depth of this element, root = 0

        Returns:
            Tuple of the element and the offset just past its end tag

        Raises:
            XMLParseError: On any structural violation in the subtree
        """
        max_depth = self.config.max_depth
        stack: List[_OpenTag] = []
        closed: Optional[XMLTag]

        while True:
            if max_depth is not None and depth + len(stack) >= max_depth:
                raise NestingDepthError(
                    f"Maximum nesting depth of {max_depth} exceeded", pos
                )

            header = parse_tag_header(text, pos)
            pos = header.end
            if header.is_self_closing:
                closed = XMLTag(
                    name=header.name,
                    attributes=header.attributes,
                    is_self_closing=True,
                )
            else:
                stack.append(_OpenTag(header.name, header.attributes))
                closed = None

            # Close elements until one has another child to read
            while True:
                if closed is not None:
                    if not stack:
                        return closed, pos
                    stack[-1].children.append(closed)
                    closed = None

                current = stack[-1]
                runs, pos = parse_tag_content(text, pos, current.name)
                current.content.extend(runs)

                end = match_end_tag(text, pos, current.name)
                if end is None:
                    if text.startswith(END_TAG_START, pos):
                        raise EndTagMismatchError(
                            f"Expecting end tag </{current.name}>", pos
                        )
                    break

                stack.pop()
                closed = current.to_tag()
                pos = end

    def _check_trailing_content(self, text: str, pos: int) -> None:
        for offset in range(pos, len(text)):
            if not text[offset].isspace():
                raise TrailingContentError(
                    "Unexpected content after root element", offset
                )
