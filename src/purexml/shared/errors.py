"""Parse error types for purexml.

Every structural violation found while parsing is reported as a single
exception carrying a human-readable message and the zero-based character
offset where the problem was detected. Parsing is all-or-nothing: no partial
tree accompanies an error.
"""


class XMLParseError(Exception):
    """Base class for all parse failures."""

    def __init__(self, message: str, position: int) -> None:
        """Initialize parse error.

        Args:
            message: Human-readable description of the failure
            position: Zero-based character offset of the failure
        """
        super().__init__(message, position)
        self.message = message
        self.position = position

    def __str__(self) -> str:
        return f"{self.message} at position {self.position}"

    def with_position(self, position: int) -> "XMLParseError":
        """Return a copy of this error reporting a different offset."""
        return type(self)(self.message, position)


class UnterminatedCommentError(XMLParseError):
    """A ``<!--`` has no matching ``-->``."""


class MalformedTagHeaderError(XMLParseError):
    """A tag header or its attribute list could not be tokenized."""


class MalformedContentError(XMLParseError):
    """Tag content holds a character that is not allowed outside CDATA."""


class UnterminatedCDATAError(XMLParseError):
    """A CDATA block is malformed or has no ``]]>``."""


class EndTagMismatchError(XMLParseError):
    """An end tag does not close the open element, or input ended early."""


class NestingDepthError(XMLParseError):
    """Element nesting exceeds the configured maximum depth."""


class TrailingContentError(XMLParseError):
    """Non-whitespace text follows the root element."""
