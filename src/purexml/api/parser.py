"""Public parsing API for purexml.

Module-level functions cover the common case; ``PureXMLParser`` keeps a
configuration and usage statistics for repeated parsing. Unlike a recovering
parser, every function here raises ``XMLParseError`` on malformed input and
never returns a partial tree.
"""

import time
from pathlib import Path
from typing import Any, Dict, Optional, Union

from purexml.shared import (
    ParserConfig,
    XMLParseError,
    get_logger,
)
from purexml.tree.builder import XMLTreeBuilder
from purexml.tree.model import XMLDocument

# Constants for API operations
PREVIEW_LENGTH = 100  # Max length for content preview in logs
MS_PER_SECOND = 1000  # Milliseconds per second conversion

PathType = Union[str, Path]


def _preview(text: str) -> str:
    if len(text) > PREVIEW_LENGTH:
        return text[:PREVIEW_LENGTH] + "..."
    return text


def parse(
    text: str,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> XMLDocument:
    """Parse an XML document held in a string.

    Args:
        text: Complete document text
        config: Optional parser configuration
        correlation_id: Optional correlation ID for request tracking

    Returns:
        XMLDocument with prologue and root element

    Raises:
        XMLParseError: With message and offset on any structural violation

    Examples:
        >>> doc = parse('<root a="1"><item>value</item></root>')
        >>> doc.root.find_child('item').content
        'value'
        >>> doc.render()
        '<?xml version="1.0" encoding="UTF-8"?><root a="1" ><item >value</item></root>'
    """
    start_time = time.time()
    logger = get_logger(__name__, correlation_id, "parse")

    logger.info(
        "Starting parse operation",
        extra={"content_length": len(text), "preview": _preview(text)}
    )

    builder = XMLTreeBuilder(config=config, correlation_id=correlation_id)
    try:
        document = builder.build(text)
    except XMLParseError as e:
        logger.warning(
            "Parse operation failed",
            extra={
                "error": e.message,
                "position": e.position,
                "processing_time_ms": (time.time() - start_time) * MS_PER_SECOND,
            }
        )
        raise

    logger.info(
        "Parse operation completed",
        extra={
            "root_tag": document.root.name,
            "element_count": document.element_count,
            "processing_time_ms": (time.time() - start_time) * MS_PER_SECOND,
        }
    )
    return document


def parse_string(
    xml_string: str,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> XMLDocument:
    """Parse XML from a string; same as ``parse``."""
    return parse(xml_string, config=config, correlation_id=correlation_id)


def parse_file(
    file_path: PathType,
    encoding: str = "utf-8",
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> XMLDocument:
    """Read a file and parse its contents.

    Args:
        file_path: Path to the XML file
        encoding: Text encoding used to read the file
        config: Optional parser configuration
        correlation_id: Optional correlation ID for request tracking

    Returns:
        XMLDocument parsed from the file

    Raises:
        OSError: If the file cannot be read
        XMLParseError: If the contents are not a valid document
    """
    path_obj = Path(file_path)
    logger = get_logger(__name__, correlation_id, "parse_file")
    logger.info(
        "Starting file parse operation",
        extra={"file_path": str(path_obj), "file_encoding": encoding}
    )

    with path_obj.open(encoding=encoding) as file:
        content = file.read()

    return parse(content, config=config, correlation_id=correlation_id)


class PureXMLParser:
    """Reusable parser with fixed configuration and usage statistics.

    Examples:
        >>> parser = PureXMLParser(ParserConfig.strict())
        >>> parser.parse('<root/>').root.is_self_closing
        True
        >>> parser.statistics["total_parses"]
        1
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize parser.

        Args:
            config: Parser configuration (defaults to ``ParserConfig()``)
            correlation_id: Optional correlation ID for request tracking
        """
        self.config = config or ParserConfig()
        self.correlation_id = correlation_id or self.config.correlation_id
        self.logger = get_logger(__name__, self.correlation_id, "pure_xml_parser")
        self._builder = XMLTreeBuilder(self.config, self.correlation_id)

        self._parse_count = 0
        self._successful_parses = 0
        self._total_processing_time = 0.0

    def parse(self, text: str) -> XMLDocument:
        """Parse a document, recording timing and outcome.

        Raises:
            XMLParseError: On any structural violation
        """
        start_time = time.time()
        try:
            document = self._builder.build(text)
        except XMLParseError as e:
            self.logger.warning(
                "Configured parse failed",
                extra={"error": e.message, "position": e.position}
            )
            raise
        else:
            self._successful_parses += 1
            return document
        finally:
            self._parse_count += 1
            self._total_processing_time += (time.time() - start_time) * MS_PER_SECOND

    def parse_file(self, file_path: PathType, encoding: str = "utf-8") -> XMLDocument:
        """Read a file and parse its contents with this parser's configuration."""
        with Path(file_path).open(encoding=encoding) as file:
            return self.parse(file.read())

    def reconfigure(self, config: ParserConfig) -> None:
        """Replace the configuration used by later parses."""
        self.config = config
        self._builder = XMLTreeBuilder(self.config, self.correlation_id)
        self.logger.info("Parser reconfigured", extra={"config": config.to_dict()})

    @property
    def statistics(self) -> Dict[str, Any]:
        """Get parser usage statistics."""
        return {
            "total_parses": self._parse_count,
            "successful_parses": self._successful_parses,
            "success_rate": (
                self._successful_parses / self._parse_count
                if self._parse_count > 0 else 0.0
            ),
            "total_processing_time_ms": self._total_processing_time,
            "average_processing_time_ms": (
                self._total_processing_time / self._parse_count
                if self._parse_count > 0 else 0.0
            ),
            "correlation_id": self.correlation_id,
        }

    def reset_statistics(self) -> None:
        """Reset parser usage statistics."""
        self._parse_count = 0
        self._successful_parses = 0
        self._total_processing_time = 0.0
        self.logger.info("Parser statistics reset")
