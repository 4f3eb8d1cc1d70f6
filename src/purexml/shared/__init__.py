"""Shared utilities for purexml.

Configuration, error types and logging helpers used by every layer.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    ParserConfig,
)
from .errors import (
    EndTagMismatchError,
    MalformedContentError,
    MalformedTagHeaderError,
    NestingDepthError,
    TrailingContentError,
    UnterminatedCDATAError,
    UnterminatedCommentError,
    XMLParseError,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "ParserConfig",
    "EndTagMismatchError",
    "MalformedContentError",
    "MalformedTagHeaderError",
    "NestingDepthError",
    "TrailingContentError",
    "UnterminatedCDATAError",
    "UnterminatedCommentError",
    "XMLParseError",
    "CorrelationLogger",
    "get_logger",
]
