"""Main CLI entry point for the purexml command-line tool.

Parses, validates and re-renders XML files from the command line.
"""

import argparse
import json
import logging
import sys
import time
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from purexml import __version__
from purexml.api.parser import PureXMLParser
from purexml.shared.config import ConfigError, ParserConfig
from purexml.shared.errors import XMLParseError
from purexml.shared.logging import get_logger
from purexml.tools.profiling import PerformanceProfiler

XML_SUFFIXES = {".xml", ".xhtml", ".svg"}


class CLIConfig:
    """Configuration management for CLI operations."""

    def __init__(self) -> None:
        self.parser_config = ParserConfig()
        self.output_format = "json"
        self.encoding = "utf-8"

    @classmethod
    def from_file(cls, config_path: Path) -> "CLIConfig":
        """Load CLI configuration from a JSON file.

        The optional ``parser`` section is passed to ``ParserConfig.from_dict``.

        Raises:
            ConfigError: If the file holds invalid JSON or parser settings
        """
        config = cls()
        if not config_path.exists():
            return config

        try:
            data = json.loads(config_path.read_text())
        except json.JSONDecodeError as e:
            raise ConfigError(f"Could not load config file {config_path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {config_path} must hold a JSON object")

        if "parser" in data:
            config.parser_config = ParserConfig.from_dict(data["parser"])
        config.output_format = data.get("output_format", config.output_format)
        config.encoding = data.get("encoding", config.encoding)
        return config


class XMLProcessor:
    """Core XML processing logic for CLI operations."""

    def __init__(self, config: CLIConfig, profiler: Optional[PerformanceProfiler] = None):
        self.config = config
        self.parser = PureXMLParser(config=config.parser_config)
        self.profiler = profiler
        self.logger = get_logger(__name__, None, "cli_processor")

    def process_single_file(self, file_path: Path) -> Dict[str, Any]:
        """Parse a single XML file and return a result record."""
        start_time = time.time()
        result: Dict[str, Any] = {"file": str(file_path), "success": False}

        try:
            text = file_path.read_text(encoding=self.config.encoding)
            if self.profiler is not None:
                document = self.profiler.profile_parse(text, session_id=str(file_path))
            else:
                document = self.parser.parse(text)
        except XMLParseError as e:
            result["error"] = e.message
            result["position"] = e.position
        except (OSError, UnicodeDecodeError) as e:
            self.logger.warning("Failed to read file", extra={"file_path": str(file_path)})
            result["error"] = str(e)
        else:
            result.update({
                "success": True,
                "root": document.root.name,
                "element_count": document.element_count,
                "max_depth": document.max_depth,
                "version": document.prologue.version,
                "encoding": document.prologue.encoding,
                "rendered": document.render(),
            })

        result["processing_time_ms"] = (time.time() - start_time) * 1000
        return result

    def find_xml_files(self, path: Path, recursive: bool = True) -> Iterator[Path]:
        """Find XML files in path."""
        if path.is_file():
            yield path
        elif path.is_dir():
            candidates = path.rglob("*") if recursive else path.glob("*")
            for candidate in sorted(candidates):
                if candidate.is_file() and candidate.suffix.lower() in XML_SUFFIXES:
                    yield candidate

    def batch_process(self, paths: List[Path], recursive: bool = True) -> List[Dict[str, Any]]:
        """Process every XML file found under ``paths``."""
        results = []
        for path in paths:
            if not path.exists():
                results.append({"file": str(path), "success": False, "error": "File not found"})
                continue
            for file_path in self.find_xml_files(path, recursive):
                results.append(self.process_single_file(file_path))
        return results


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="purexml",
        description="Parse XML files and render them in canonical form"
    )

    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Parse command
    parse_parser = subparsers.add_parser("parse", help="Parse XML files")
    parse_parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="XML files or directories to parse"
    )
    parse_parser.add_argument(
        "--recursive", "-r",
        action="store_true",
        help="Recursively process directories"
    )
    parse_parser.add_argument(
        "--format", "-f",
        choices=["json", "text", "xml"],
        default=None,
        help="Output format (default: json)"
    )
    parse_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )
    parse_parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file path"
    )
    parse_parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject content after the root element"
    )
    parse_parser.add_argument(
        "--profile",
        action="store_true",
        help="Include timing and memory measurements"
    )

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Validate XML files")
    validate_parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="XML files to validate"
    )
    validate_parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject content after the root element"
    )
    validate_parser.add_argument(
        "--format", "-f",
        choices=["json", "text"],
        default="text",
        help="Output format"
    )

    # Render command
    render_parser = subparsers.add_parser("render", help="Print canonical rendering")
    render_parser.add_argument(
        "path",
        type=Path,
        help="XML file to render"
    )

    return parser


def format_results(results: List[Dict[str, Any]], format_type: str) -> str:
    """Format processing results for output."""
    if format_type == "text":
        if not results:
            return "No results to display."

        successful = sum(1 for r in results if r.get("success", False))
        lines = [f"Processed {len(results)} files, {successful} successful", "-" * 60]

        for result in results:
            if result.get("success", False):
                lines.append(f"OK   {result['file']}")
                lines.append(
                    f"   Root: {result['root']}, Elements: {result['element_count']}, "
                    f"Time: {result.get('processing_time_ms', 0):.1f}ms"
                )
            else:
                lines.append(f"FAIL {result['file']}")
                error = result.get("error", "")
                if "position" in result:
                    error = f"{error} at position {result['position']}"
                lines.append(f"   Error: {error}")
        return "\n".join(lines)

    if format_type == "xml":
        # Failures become comments so the output still parses
        lines = []
        for result in results:
            if result.get("success", False):
                lines.append(result["rendered"])
            else:
                error = result.get("error", "")
                if "position" in result:
                    error = f"{error} at position {result['position']}"
                note = f"{result['file']}: {error}"
                # "--" may not appear inside a comment
                while "--" in note:
                    note = note.replace("--", "- -")
                lines.append(f"<!-- {note} -->")
        return "\n".join(lines)

    return json.dumps(results, indent=2)


def _load_config(args: argparse.Namespace) -> CLIConfig:
    config = CLIConfig()
    config_path = getattr(args, "config", None)
    if config_path:
        config = CLIConfig.from_file(config_path)
    if getattr(args, "strict", False):
        config.parser_config = config.parser_config.override(allow_trailing_content=False)
    return config


def cmd_parse(args: argparse.Namespace) -> int:
    """Handle parse command."""
    config = _load_config(args)
    output_format = args.format or config.output_format

    profiler = PerformanceProfiler(config.parser_config) if args.profile else None
    processor = XMLProcessor(config, profiler)
    results = processor.batch_process(args.paths, args.recursive)

    formatted_output = format_results(results, output_format)
    if profiler is not None:
        report = json.dumps(profiler.generate_report().to_dict(), indent=2)
        formatted_output = f"{formatted_output}\n{report}"

    if args.output:
        try:
            args.output.write_text(formatted_output)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
        print(f"Results written to {args.output}", file=sys.stderr)
    else:
        print(formatted_output)

    if not results:
        return 1
    return 0 if all(r.get("success", False) for r in results) else 1


def cmd_validate(args: argparse.Namespace) -> int:
    """Handle validate command."""
    processor = XMLProcessor(_load_config(args))
    results = []

    for path in args.paths:
        result = processor.batch_process([path], recursive=False)
        for entry in result:
            validation = {"file": entry["file"], "valid": entry["success"]}
            if not entry["success"]:
                validation["error"] = entry.get("error", "")
                if "position" in entry:
                    validation["position"] = entry["position"]
            results.append(validation)

    if args.format == "json":
        print(json.dumps(results, indent=2))
    else:
        valid_count = sum(1 for r in results if r["valid"])
        print(f"Validated {len(results)} files, {valid_count} valid")
        print("-" * 50)
        for result in results:
            status = "VALID  " if result["valid"] else "INVALID"
            print(f"{status} {result['file']}")
            if not result["valid"]:
                position = result.get("position")
                suffix = f" at position {position}" if position is not None else ""
                print(f"   Error: {result['error']}{suffix}")

    return 0 if results and all(r["valid"] for r in results) else 1


def cmd_render(args: argparse.Namespace) -> int:
    """Handle render command."""
    processor = XMLProcessor(_load_config(args))
    result = processor.process_single_file(args.path)
    if not result["success"]:
        error = result.get("error", "")
        if "position" in result:
            error = f"{error} at position {result['position']}"
        print(f"Error: {error}", file=sys.stderr)
        return 1
    print(result["rendered"])
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    # Set up logging verbosity
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    elif args.quiet:
        logging.basicConfig(level=logging.ERROR)

    try:
        if args.command == "parse":
            return cmd_parse(args)
        if args.command == "validate":
            return cmd_validate(args)
        if args.command == "render":
            return cmd_render(args)
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1

    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == "__main__":
    sys.exit(main())
