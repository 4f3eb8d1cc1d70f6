"""Public API for purexml."""

from .parser import PureXMLParser, parse, parse_file, parse_string

__all__ = [
    "PureXMLParser",
    "parse",
    "parse_file",
    "parse_string",
]
