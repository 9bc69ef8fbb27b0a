"""Main CLI entry point for the active-encoding command-line tool.

Inspects the resolved encoding and line separators of files, and converts
their line separators or charset, using the same document states an editor
host would use.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from active_encoding import __version__
from active_encoding.agent import ActiveDocumentAgent
from active_encoding.character.equality import is_supported_charset
from active_encoding.document.editor import EncodingInfoListener
from active_encoding.document.errors import DocumentError
from active_encoding.document.file_editor import FileEditor
from active_encoding.document.preferences import EncodingPreferences
from active_encoding.document.state import DocumentState
from active_encoding.shared.config import AgentConfig, ConfigError
from active_encoding.shared.logging import get_logger


class ChangeCounter(EncodingInfoListener):
    """Counts encoding info notifications."""

    def __init__(self) -> None:
        self.changes = 0

    def encoding_info_changed(self) -> None:
        self.changes += 1


class DocumentProcessor:
    """Core document processing logic for CLI operations."""

    def __init__(self, config: AgentConfig, encoding: Optional[str] = None):
        self.config = config
        self.encoding = encoding
        self.preferences = EncodingPreferences(config.workspace.default_encoding)
        self.listener = ChangeCounter()
        self.agent = ActiveDocumentAgent(self.listener, config)
        self.logger = get_logger(__name__, None, "cli_processor")

    def open(self, path: Path) -> DocumentState:
        """Make a file the active document."""
        if self.encoding is not None:
            self.preferences.set_file_encoding(path, self.encoding)
        editor = FileEditor(path, self.preferences)
        return self.agent.editor_activated(editor)

    def describe(self, path: Path, document: DocumentState) -> Dict[str, Any]:
        return {
            "file": str(path),
            "success": True,
            "current_encoding": document.current_encoding,
            "sources": {
                source.name.lower(): value
                for source, value in document.encoding_sources().items()
            },
            "line_separator": document.line_separator.value,
            "matches": document.matches_encoding(),
            "mismatches": document.mismatches_encoding(),
        }

    def inspect(self, path: Path) -> Dict[str, Any]:
        """Report the encoding info of a file."""
        if not path.is_file():
            return {"file": str(path), "success": False, "error": "File not found"}
        document = self.open(path)
        document.report_mismatch()
        return self.describe(path, document)

    def convert_line_separator(self, path: Path, line_separator: str) -> Dict[str, Any]:
        """Rewrite the line separators of a file."""
        if not path.is_file():
            return {"file": str(path), "success": False, "error": "File not found"}
        try:
            document = self.open(path)
            document.set_line_separator(line_separator)
        except DocumentError as e:
            self.logger.error("Line separator conversion failed", extra={"file": str(path)})
            return {"file": str(path), "success": False, "error": str(e)}
        return self.describe(path, document)

    def convert_charset(self, path: Path, encoding: str) -> Dict[str, Any]:
        """Re-encode a file with another charset."""
        if not path.is_file():
            return {"file": str(path), "success": False, "error": "File not found"}
        try:
            document = self.open(path)
            document.convert_charset(encoding)
        except DocumentError as e:
            self.logger.error("Charset conversion failed", extra={"file": str(path)})
            return {"file": str(path), "success": False, "error": str(e)}
        return self.describe(path, document)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="active-encoding",
        description="Inspect and convert the encoding and line separators of text files"
    )

    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Info command
    info_parser = subparsers.add_parser("info", help="Show resolved encoding info")
    info_parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="Files to inspect"
    )

    # Convert line separator command
    eol_parser = subparsers.add_parser("convert-eol", help="Convert line separators")
    eol_parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="Files to convert"
    )
    eol_parser.add_argument(
        "--to",
        choices=["LF", "CRLF", "CR"],
        required=True,
        help="Target line separator"
    )

    # Convert charset command
    charset_parser = subparsers.add_parser("convert-charset", help="Re-encode files")
    charset_parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="Files to convert"
    )
    charset_parser.add_argument(
        "--to",
        required=True,
        help="Target charset"
    )

    # Global options
    parser.add_argument(
        "--encoding", "-e",
        help="Explicit encoding to read files with"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file path"
    )
    parser.add_argument(
        "--format", "-f",
        choices=["json", "text"],
        default="text",
        help="Output format (default: text)"
    )
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
    """Format processing results for output."""
    if format_type == "json":
        return json.dumps(results, indent=2)

    lines = []
    for result in results:
        if not result.get("success", False):
            lines.append(f"{result['file']}: error: {result.get('error', 'unknown')}")
            continue
        status = ""
        if result["mismatches"]:
            status = f" (detected {result['sources']['detected']})"
        lines.append(
            f"{result['file']}: {result['current_encoding']}{status}, "
            f"{result['line_separator']}"
        )
    return "\n".join(lines)


def load_config(args: argparse.Namespace) -> AgentConfig:
    """Load configuration from --config, or defaults."""
    if args.config:
        return AgentConfig.from_file(args.config)
    return AgentConfig()


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        config = load_config(args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    # Set up logging verbosity
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    elif args.quiet:
        logging.basicConfig(level=logging.ERROR)
    else:
        logging.basicConfig(level=getattr(logging, config.global_.logging_level))

    if args.encoding is not None and not is_supported_charset(args.encoding):
        print(f"Unknown encoding: {args.encoding}", file=sys.stderr)
        return 2

    processor = DocumentProcessor(config, args.encoding)

    if args.command == "info":
        results = [processor.inspect(path) for path in args.paths]
    elif args.command == "convert-eol":
        results = [processor.convert_line_separator(path, args.to) for path in args.paths]
    elif args.command == "convert-charset":
        if not is_supported_charset(args.to):
            print(f"Unknown encoding: {args.to}", file=sys.stderr)
            return 2
        results = [processor.convert_charset(path, args.to) for path in args.paths]
    else:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1

    print(format_results(results, args.format))

    successful = sum(1 for r in results if r.get("success", False))
    return 0 if successful == len(results) else 1


if __name__ == "__main__":
    sys.exit(main())
