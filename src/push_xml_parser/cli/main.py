"""Main CLI entry point for the push-xml command-line tool.

Provides well-formedness checking of XML files and a dump of the event
stream the parser produces for a document.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from push_xml_parser import __version__
from push_xml_parser.api import EventRecorder, LoggingErrorHandler, XMLParser, parse_file
from push_xml_parser.shared.config import ConfigError, ParserConfig
from push_xml_parser.shared.logging import get_logger

XML_SUFFIXES = {".xml", ".xhtml", ".svg"}


class CLIConfig:
    """Configuration management for CLI operations."""

    def __init__(self) -> None:
        self.parser_config = ParserConfig.default()
        self.output_format = "text"
        self.verbose = False
        self.quiet = False

    @classmethod
    def from_file(cls, config_path: Path) -> "CLIConfig":
        """Load CLI configuration from a JSON file.

        The file holds an optional ``"parser"`` object in the format written by
        :meth:`ParserConfig.to_json` and an optional ``"output_format"``. An
        unreadable or invalid file leaves the defaults in place.
        """
        config = cls()
        if config_path.exists():
            try:
                data = json.loads(config_path.read_text())
                if not isinstance(data, dict):
                    raise ConfigError("Configuration file must hold a JSON object")
                if "parser" in data:
                    config.parser_config = ParserConfig.from_dict(data["parser"])
                config.output_format = data.get("output_format", config.output_format)
            except (OSError, ValueError, ConfigError) as e:
                print(f"Warning: Could not load config file: {e}", file=sys.stderr)

        return config

    def apply_arguments(self, args: argparse.Namespace) -> None:
        """Apply command-line overrides on top of file settings."""
        if getattr(args, "encoding", None):
            self.parser_config = self.parser_config.override(stream__encoding=args.encoding)
        if getattr(args, "format", None):
            self.output_format = args.format
        self.verbose = args.verbose
        self.quiet = args.quiet


def load_config(args: argparse.Namespace) -> CLIConfig:
    config = CLIConfig()
    if getattr(args, "config", None) and args.config.exists():
        config = CLIConfig.from_file(args.config)
    config.apply_arguments(args)
    return config


def configure_logging(config: CLIConfig) -> None:
    if config.verbose:
        level = logging.DEBUG
    elif config.quiet:
        level = logging.ERROR
    else:
        level = getattr(logging, config.parser_config.global_.logging_level)
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
    )


class XMLValidator:
    """Well-formedness checking of files for the ``validate`` command."""

    def __init__(self, config: CLIConfig) -> None:
        self.config = config
        self.logger = get_logger(__name__, None, "cli_validator")

    def validate_file(self, file_path: Path) -> Dict[str, Any]:
        """Check a single file and return a JSON-serializable summary."""
        try:
            result = parse_file(file_path, self.config.parser_config)
        except (OSError, UnicodeError) as e:
            self.logger.error("Failed to read file", extra={"file": str(file_path), "error": str(e)})
            return {"file": str(file_path), "valid": False, "error": str(e)}

        summary: Dict[str, Any] = {
            "file": str(file_path),
            "valid": result.success,
            "errors": result.error_count,
            "fatal_line": result.fatal_line,
            "elements": result.document.total_elements if result.document else 0,
        }
        if not result.success:
            summary["error_details"] = [
                f"line {diag.line}: {diag.message}" if diag.line else diag.message
                for diag in result.diagnostics
            ][:5]
        return summary

    def find_xml_files(self, path: Path, recursive: bool = False) -> Iterator[Path]:
        """Yield ``path`` itself, or the XML files in a directory.

        Explicitly named files are yielded whatever their suffix.
        """
        if path.is_dir():
            pattern = "**/*" if recursive else "*"
            for candidate in sorted(path.glob(pattern)):
                if candidate.is_file() and candidate.suffix.lower() in XML_SUFFIXES:
                    yield candidate
        else:
            yield path

    def validate_paths(self, paths: List[Path], recursive: bool = False) -> List[Dict[str, Any]]:
        results = []
        for path in paths:
            if not path.exists():
                results.append({"file": str(path), "valid": False, "error": "File not found"})
                continue
            for file_path in self.find_xml_files(path, recursive):
                results.append(self.validate_file(file_path))
        return results


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="push-xml",
        description="Streaming XML well-formedness checker and event dumper"
    )

    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Check XML files for well-formedness")
    validate_parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="XML files or directories to check"
    )
    validate_parser.add_argument(
        "--recursive", "-r",
        action="store_true",
        help="Recursively process directories"
    )

    # Events command
    events_parser = subparsers.add_parser("events", help="Print the parse events of a document")
    events_parser.add_argument(
        "path",
        type=Path,
        help="XML file to parse"
    )

    for sub in (validate_parser, events_parser):
        sub.add_argument(
            "--format", "-f",
            choices=["json", "text"],
            help="Output format (default: text)"
        )
        sub.add_argument(
            "--config", "-c",
            type=Path,
            help="Configuration file path"
        )
        sub.add_argument(
            "--encoding", "-e",
            help="Character encoding of the input (default: utf-8)"
        )

    # Global options
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

    return parser


def format_results(results: List[Dict[str, Any]], format_type: str) -> str:
    """Format validation results for output."""
    if format_type == "json":
        return json.dumps(results, indent=2)

    if not results:
        return "No files to validate."

    valid_count = sum(1 for r in results if r.get("valid", False))
    lines = [f"Validated {len(results)} files, {valid_count} well-formed", "-" * 50]

    for result in results:
        status = "OK  " if result.get("valid", False) else "FAIL"
        lines.append(f"{status} {result['file']}")
        if "error" in result:
            lines.append(f"   Error: {result['error']}")
        for detail in result.get("error_details", [])[:3]:
            lines.append(f"   Error: {detail}")

    return "\n".join(lines)


def format_events(recorder: EventRecorder, format_type: str) -> str:
    """Format a recorded event stream for output."""
    if format_type == "json":
        return json.dumps(recorder.to_dicts(), indent=2)

    lines = []
    for event in recorder.events:
        args = " ".join(repr(arg) for arg in event.args)
        lines.append(f"{event.name} {args}".rstrip())
    return "\n".join(lines)


def cmd_validate(args: argparse.Namespace) -> int:
    """Handle validate command."""
    config = load_config(args)
    configure_logging(config)

    validator = XMLValidator(config)
    results = validator.validate_paths(args.paths, args.recursive)
    print(format_results(results, config.output_format))

    if not results:
        return 1
    return 0 if all(r.get("valid", False) for r in results) else 1


def cmd_events(args: argparse.Namespace) -> int:
    """Handle events command."""
    config = load_config(args)
    configure_logging(config)

    recorder = EventRecorder()
    parser = XMLParser(config.parser_config)
    parser.add_document_handler(recorder)
    parser.add_error_handler(recorder)
    parser.add_error_handler(LoggingErrorHandler(str(args.path)))

    try:
        parser.parse(args.path)
    except (OSError, UnicodeError) as e:
        print(f"Error reading {args.path}: {e}", file=sys.stderr)
        return 1

    print(format_events(recorder, config.output_format))
    return 0 if recorder.count("fatal_error") == 0 else 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        if args.command == "validate":
            return cmd_validate(args)
        if args.command == "events":
            return cmd_events(args)
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
