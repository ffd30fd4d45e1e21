"""
CLI module for htmlpick.

Provides the command-line interface: option parsing, validation reporting,
and printing of extracted lines.
"""

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from .config import ExtractConfig, load_config
from .exceptions import ConfigurationError, HtmlPickError
from .extractor import run

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_RUNTIME = 3
EXIT_HELP = 10


def setup_logging(verbose: bool = False) -> None:
    """Set up logging configuration."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="htmlpick",
        description="Extract values from HTML elements matched by a CSS selector",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        epilog="""
Examples:
  htmlpick --url page.html --query 'a' --values text href
  curl -s https://example.com | htmlpick --query 'img' --values src alt --delim '|'
  htmlpick --url https://example.com --timeout 5 --query 'div.item' --values html
        """
    )
    parser.add_argument('-h', '--help', action='store_true',
                        help='Show this help and exit')
    parser.add_argument('--url', dest='location', default=None,
                        help='Input source: URL, file, or stdin (default)')
    parser.add_argument('--timeout', type=float, default=None,
                        help='Request timeout in seconds, 0 for no limit (default: 0)')
    parser.add_argument('--query', default=None,
                        help='CSS selector of the elements to extract')
    parser.add_argument('--values', action='extend', nargs='+', default=None,
                        help='Values of each element: text, html, or an attribute name')
    parser.add_argument('--delim', default=None,
                        help="Delimiter between values (default: ',')")
    parser.add_argument('--config', default=None,
                        help='JSON file with the same options; flags override it')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Enable verbose logging')
    return parser


def build_config(args: argparse.Namespace) -> ExtractConfig:
    """
    Merge a config file, if given, with explicitly passed flags.

    Raises:
        ConfigurationError: If the config file cannot be loaded
    """
    config = load_config(args.config) if args.config else ExtractConfig()
    overrides = {
        name: getattr(args, name)
        for name in ('location', 'timeout', 'query', 'values', 'delim')
        if getattr(args, name) is not None
    }
    return config.model_copy(update=overrides)


def report_invalid(errors: List[ConfigurationError]) -> None:
    """Print numbered validation errors to stderr."""
    print("Invalid parameter", file=sys.stderr)
    print("  errors:", file=sys.stderr)
    for i, error in enumerate(errors, start=1):
        print(f"    {i:2d} {error}", file=sys.stderr)


def report_runtime(error: Exception) -> None:
    """Print a runtime error to stderr."""
    print("Runtime errors", file=sys.stderr)
    print(str(error), file=sys.stderr)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.help:
        parser.print_help()
        sys.exit(EXIT_HELP)

    setup_logging(args.verbose)

    try:
        config = build_config(args)
    except ConfigurationError as e:
        report_invalid([e])
        sys.exit(EXIT_INVALID)

    errors = config.validation_errors()
    if errors:
        report_invalid(errors)
        sys.exit(EXIT_INVALID)

    try:
        result = run(config)
    except HtmlPickError as e:
        logger.debug(f"Run failed: {e!r}")
        report_runtime(e)
        sys.exit(EXIT_RUNTIME)

    if result.error is not None:
        report_runtime(result.error)
    for line in result.lines:
        print(line)
    sys.exit(EXIT_OK)


if __name__ == '__main__':
    main()
