"""PureXML.

A small XML parser built from explicit state machines. It reads a practical
subset of XML (prologue, nested elements, attributes, text and CDATA
content, comments) into a plain tree and renders that tree back to
canonical text.

API levels:
- Level 1: Simple functions - parse(), parse_string(), parse_file()
- Level 2: Configured parser - PureXMLParser class with ParserConfig
"""

__version__ = "0.1.0"
__author__ = "PureXML Team"

from .api import PureXMLParser, parse, parse_file, parse_string
from .shared.config import ParserConfig
from .shared.errors import XMLParseError
from .tree.model import XMLDocument, XMLPrologue, XMLTag

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple parsing functions
    "parse",
    "parse_string",
    "parse_file",

    # Level 2: Configured parser
    "PureXMLParser",
    "ParserConfig",

    # Result objects and errors
    "XMLDocument",
    "XMLPrologue",
    "XMLTag",
    "XMLParseError",
]
