"""Main CLI entry point for the simple-xml-builder command-line tool.

Builds an XML document from a JSON tree description and writes it to a file
or standard output.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, BinaryIO, List, Optional

from simple_xml_builder import __version__
from simple_xml_builder.shared.config import CLIConfig
from simple_xml_builder.shared.errors import (
    ConfigError,
    TreeDescriptionError,
    XMLWriteError,
)
from simple_xml_builder.shared.logging import get_logger
from simple_xml_builder.tree import XMLElement, element_from_dict

EXIT_OK = 0
EXIT_IO_ERROR = 1
EXIT_INVALID_INPUT = 2


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="simple-xml-builder",
        description="Build indented UTF-8 XML documents from JSON tree descriptions",
    )
    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    build_parser = subparsers.add_parser("build", help="Build an XML document")
    build_parser.add_argument(
        "input",
        help="JSON tree description file, or '-' for standard input",
    )
    build_parser.add_argument(
        "-o", "--output",
        type=Path,
        help="Output XML file (default: standard output)",
    )
    build_parser.add_argument(
        "--config",
        type=Path,
        help="JSON configuration file",
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    verbosity.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Only log errors",
    )

    return parser


def load_description(source: str) -> Any:
    """Read and decode a JSON tree description from a path or ``-``."""
    if source == "-":
        return json.load(sys.stdin)
    with open(source, encoding="utf-8") as f:
        return json.load(f)


def write_output(root: XMLElement, output: Optional[Path], correlation_id: Optional[str]) -> None:
    """Write the document to ``output`` or to standard output."""
    if output is None:
        sink: BinaryIO = sys.stdout.buffer
        root.write(sink, correlation_id)
        sink.flush()
        return
    with output.open("wb") as f:
        root.write(f, correlation_id)


def cmd_build(args: argparse.Namespace, config: CLIConfig) -> int:
    """Handle the build command."""
    logger = get_logger(__name__, "cli_build", config.correlation_id)

    try:
        description = load_description(args.input)
    except ValueError as e:
        print(f"Error: {args.input} is not valid JSON: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    except OSError as e:
        print(f"Error: cannot read {args.input}: {e}", file=sys.stderr)
        return EXIT_IO_ERROR

    try:
        root = element_from_dict(description)
    except TreeDescriptionError as e:
        print(f"Error: invalid tree description: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    output = args.output
    if output is None and config.output:
        output = Path(config.output)

    try:
        write_output(root, output, config.correlation_id)
    except (XMLWriteError, OSError) as e:
        print(f"Error: cannot write output: {e}", file=sys.stderr)
        return EXIT_IO_ERROR

    logger.info(
        "Document written",
        extra={"root": root.name, "output": str(output) if output else "<stdout>"},
    )
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        config = CLIConfig.from_file(args.config) if args.config else CLIConfig()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    # Set up logging verbosity
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    else:
        level = config.logging_level
    logging.basicConfig(level=level, stream=sys.stderr)

    if args.command == "build":
        return cmd_build(args, config)

    print(f"Unknown command: {args.command}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
