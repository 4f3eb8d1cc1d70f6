"""Tokenizers for purexml.

Each tokenizer is an explicit state machine over the document text that
returns its result together with the offset where the caller resumes:

    strip_comments: Removes ``<!-- ... -->`` spans before parsing
    read_prologue: Reads version and encoding from ``<?xml ... ?>``
    parse_attribute_list: ``name="value"`` pairs
    parse_tag_header: ``<name attrs>`` / ``<name attrs/>``
    parse_tag_content: Text and CDATA runs up to the next tag
"""

from .attributes import AttrAction, AttrState, parse_attribute, parse_attribute_list
from .comments import StrippedText, strip_comments
from .content import ContentAction, ContentState, parse_cdata, parse_tag_content
from .header import HeaderAction, HeaderState, TagHeader, parse_tag_header
from .prologue import read_prologue

__all__ = [
    "AttrAction",
    "AttrState",
    "parse_attribute",
    "parse_attribute_list",
    "StrippedText",
    "strip_comments",
    "ContentAction",
    "ContentState",
    "parse_cdata",
    "parse_tag_content",
    "HeaderAction",
    "HeaderState",
    "TagHeader",
    "parse_tag_header",
    "read_prologue",
]
