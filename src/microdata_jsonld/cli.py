"""Command-line interface for the Microdata to JSON-LD converter."""

import json
import sys
from typing import List, Optional

from microdata_jsonld.config import Config
from microdata_jsonld.converter import MicrodataConverter
from microdata_jsonld.exceptions import MicrodataError
from microdata_jsonld.logging_config import get_logger, setup_logging
from microdata_jsonld.models import ConversionResult, Finding

logger = get_logger(__name__)


def _read_input(path: str) -> str:
    """Read a file, or stdin when the path is '-'."""
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def _write_output(output: str, output_file: Optional[str] = None) -> None:
    if output_file:
        with open(output_file, "w", encoding="utf-8") as f:
            f.write(output)
        print(f"Results written to {output_file}")
    else:
        print(output)


def print_findings(label: str, findings: List[Finding]):
    """Print validation findings in a formatted way.

    Args:
        label: File name the findings belong to
        findings: Findings from the validator
    """
    print(f"\n{'=' * 60}")
    print(f"Validation Results for: {label}")
    print(f"{'=' * 60}")

    if not findings:
        print("\n✅ No issues found based on built-in best practices!")
    else:
        for finding in findings:
            icon = "⚠️ " if finding.level.value == "warning" else "💡"
            print(f"  {icon} {finding.level.value.capitalize()}: {finding.message}")

    print(f"\n{'=' * 60}\n")


def print_conversion(result: ConversionResult, indent: int):
    """Print a conversion result in a formatted way."""
    print(f"\n{'=' * 60}")
    print(f"JSON-LD for: {result.source}")
    print(f"{'=' * 60}")
    if result.success:
        print(result.to_json(pretty=True, indent=indent))
    else:
        print(f"\n❌ {result.message}")


def extract_command(args, config: Config):
    """Convert Microdata in one or more HTML files to JSON-LD."""
    converter = MicrodataConverter(config)
    results = [converter.convert(_read_input(path), source=path) for path in args.files]

    if args.output == "text":
        for result in results:
            print_conversion(result, config.json_indent)
        return

    if len(results) == 1:
        result = results[0]
        if result.success:
            output = result.to_json(pretty=not args.compact, indent=config.json_indent)
        else:
            logger.warning(f"{result.source}: {result.message}")
            output = "{}"
    else:
        output = json.dumps(
            [result.to_dict() for result in results],
            ensure_ascii=False,
            indent=None if args.compact else config.json_indent,
        )
    _write_output(output, args.output_file)


def validate_command(args, config: Config):
    """Validate a JSON-LD file against schema.org best practices."""
    converter = MicrodataConverter(config)
    findings = converter.validate_json(_read_input(args.file))

    if args.output == "text":
        print_findings(args.file, findings)
    else:
        output = json.dumps([f.to_dict() for f in findings], ensure_ascii=False, indent=config.json_indent)
        _write_output(output, args.output_file)


def check_command(args, config: Config):
    """Extract JSON-LD from HTML files and validate each result."""
    converter = MicrodataConverter(config)
    results = [converter.check(_read_input(path), source=path) for path in args.files]

    if args.output == "text":
        for result in results:
            if result.success:
                print_findings(result.source, result.findings)
            else:
                print(f"\n❌ {result.source}: {result.message}")
    else:
        output = json.dumps(
            [result.to_dict() for result in results],
            ensure_ascii=False,
            indent=config.json_indent,
        )
        _write_output(output, args.output_file)


def build_parser():
    """Build the argument parser."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Microdata to JSON-LD - Convert schema.org Microdata and check it against best practices"
    )

    # Global flags (before subcommands)
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set logging verbosity (default: LOG_LEVEL or INFO)",
    )
    parser.add_argument(
        "--log-file",
        help="Write logs to file in addition to console",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    def add_output_options(sub, default="json"):
        sub.add_argument(
            "--output",
            "-o",
            choices=["text", "json"],
            default=default,
            help=f"Output format (default: {default})",
        )
        sub.add_argument(
            "--output-file",
            "-f",
            help="Write output to file (only for json format)",
        )

    extract_parser = subparsers.add_parser(
        "extract", help="Convert Microdata in HTML files to JSON-LD."
    )
    extract_parser.add_argument(
        "files", nargs="+", help="HTML files to convert ('-' reads stdin)"
    )
    extract_parser.add_argument(
        "--compact",
        action="store_true",
        help="Write JSON without indentation",
    )
    add_output_options(extract_parser)
    extract_parser.set_defaults(func=extract_command)

    validate_parser = subparsers.add_parser(
        "validate", help="Validate a JSON-LD file."
    )
    validate_parser.add_argument(
        "file", help="JSON-LD file to validate ('-' reads stdin)"
    )
    add_output_options(validate_parser, default="text")
    validate_parser.set_defaults(func=validate_command)

    check_parser = subparsers.add_parser(
        "check", help="Convert HTML files and validate the resulting JSON-LD."
    )
    check_parser.add_argument(
        "files", nargs="+", help="HTML files to check ('-' reads stdin)"
    )
    add_output_options(check_parser, default="text")
    check_parser.set_defaults(func=check_command)

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = Config.from_env()

    # Configure logging based on flags
    setup_logging(
        level=args.log_level or config.log_level,
        log_file=getattr(args, 'log_file', None),
    )

    if not hasattr(args, "func"):
        parser.print_help()
        return 0

    try:
        args.func(args, config)
    except (MicrodataError, OSError) as e:
        print(f"Error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
