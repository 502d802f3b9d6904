#!/usr/bin/env python3
"""
Command line front end for the BenSight article summarizer.

Parses arguments, picks the command endpoint and returns its exit code.
All user-facing error text comes from the command layer.
"""

import argparse
import logging
import sys
from typing import List, Optional

from commands import COMMANDS, get_command
from core.config import get_config_manager
from core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

USAGE_EXAMPLES = """
Examples:
  python run.py summary generate "https://mp.weixin.qq.com/s/abc123"
  python run.py summary generate "https://mp.weixin.qq.com/s/abc123" --async --no-open --output ./out
  python run.py summary generate "https://mp.weixin.qq.com/s/abc123" --with-metadata --json
  python run.py summary analyze --file article.txt
  python run.py summary analyze --file saved-page.html --html
"""


def _add_delivery_options(parser: argparse.ArgumentParser) -> None:
    group = parser.add_argument_group('delivery')
    group.add_argument('--output', default=None,
                       help='Directory for the saved summary page (default: current directory)')
    group.add_argument('--no-open', action='store_true',
                       help='Save the page instead of opening a browser')
    group.add_argument('--json', action='store_true',
                       help='Print the structured summary as JSON as well')
    group.add_argument('--verbose', action='store_true', help='Debug logging')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='bensight',
        description="格致 BenSight - one-page summaries of WeChat articles",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=USAGE_EXAMPLES
    )
    commands = parser.add_subparsers(dest='command', metavar='{command}', help='Available commands')

    summary = commands.add_parser('summary', help='Generate an article summary page')
    operations = summary.add_subparsers(dest='subcommand', metavar='{generate,analyze}',
                                        help='Summary operations')

    generate = operations.add_parser('generate', help='Summarize an article URL')
    generate.add_argument('url', help='Article link (https://mp.weixin.qq.com/...)')
    generate.add_argument('--async', dest='async_fetch', action='store_true',
                          help='Fetch with the asyncio HTTP client')
    generate.add_argument('--with-metadata', action='store_true',
                          help='Take title and author from the page instead of placeholders')
    _add_delivery_options(generate)

    analyze = operations.add_parser('analyze', help='Summarize article text saved in a local file')
    analyze.add_argument('--file', required=True, help='UTF-8 file holding the article')
    analyze.add_argument('--html', action='store_true', help='The file is page markup; extract the content first')
    _add_delivery_options(analyze)

    return parser


def enable_debug_logging() -> None:
    """Lower the root logger and every handler on it to DEBUG."""
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for handler in root.handlers:
        handler.setLevel(logging.DEBUG)


class CLIRouter:
    """Dispatches ``<command> <subcommand> [options]`` to command endpoints."""

    def __init__(self, container=None):
        self._container = container
        self.parser = build_parser()

    def route_command(self, args: Optional[List[str]] = None) -> int:
        """
        Parse ``args`` (``sys.argv[1:]`` when None) and run the command.

        Returns:
            Process exit code
        """
        try:
            parsed = self.parser.parse_args(sys.argv[1:] if args is None else args)
        except SystemExit as e:
            # argparse exits on --help and on usage errors
            return e.code if e.code is not None else 0

        if not parsed.command:
            self.parser.print_help()
            return 1

        if getattr(parsed, 'verbose', False):
            enable_debug_logging()

        return self._dispatch(parsed)

    def _dispatch(self, parsed: argparse.Namespace) -> int:
        if parsed.command not in COMMANDS:
            logger.error(f"Unknown command '{parsed.command}'. Available: {', '.join(COMMANDS)}")
            return 1

        subcommand = getattr(parsed, 'subcommand', None)
        if not subcommand:
            logger.error(f"'{parsed.command}' needs a subcommand")
            self.parser.print_usage()
            return 1

        logger.debug(f"Running {parsed.command} {subcommand}")
        return get_command(parsed.command, self._container).execute(subcommand, parsed)


def main(args: Optional[List[str]] = None) -> int:
    """Console entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        get_config_manager().update_logging()
    except ConfigurationError as e:
        logger.error(e.message)
        return 1

    return CLIRouter().route_command(args)


if __name__ == '__main__':
    sys.exit(main())
