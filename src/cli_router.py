#!/usr/bin/env python3
"""
CLI Router for MorningPost.

Modular command architecture for the news aggregator.
"""

import argparse
import logging
import sys
from typing import Optional, List

from commands import get_command, list_commands, COMMANDS
from core.config import get_config_manager
from core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class CLIRouter:
    """
    CLI router for MorningPost commands.

    Command structure:
    - python run.py serve start --port 8080
    - python run.py news fetch --sources hackernews techcrunch --random
    - python run.py feeds add https://go.dev/blog
    - python run.py sources list
    """

    def __init__(self, container=None):
        """Initialize CLI router."""
        self.container = container
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create the main argument parser."""
        parser = argparse.ArgumentParser(
            description="MorningPost - concurrent news aggregator",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=self._get_examples_text()
        )

        subparsers = parser.add_subparsers(
            dest='command',
            help='Available commands',
            metavar='{command}'
        )

        self._add_serve_parser(subparsers)
        self._add_news_parser(subparsers)
        self._add_feeds_parser(subparsers)
        self._add_sources_parser(subparsers)

        return parser

    def _add_serve_parser(self, subparsers):
        """Add serve command parser."""
        serve_parser = subparsers.add_parser('serve', help='Web UI')

        serve_subparsers = serve_parser.add_subparsers(
            dest='subcommand',
            help='Server operations',
            metavar='{start}'
        )

        start_parser = serve_subparsers.add_parser('start', help='Start the web UI')
        start_parser.add_argument('-p', '--port', type=int, default=None, help='Port to listen on (default: LISTEN_PORT or 33000)')

    def _add_news_parser(self, subparsers):
        """Add news command parser."""
        news_parser = subparsers.add_parser('news', help='Fetch news in the terminal')

        news_subparsers = news_parser.add_subparsers(
            dest='subcommand',
            help='News operations',
            metavar='{fetch}'
        )

        fetch_parser = news_subparsers.add_parser('fetch', help='Aggregate news once and print it')
        fetch_parser.add_argument('--feeds', action='store_true', help='Use the registered feeds instead of the built-in sources')
        fetch_parser.add_argument('--sources', nargs='+', metavar='NAME', default=None, help='Built-in sources to fetch (default: all)')
        fetch_parser.add_argument('--random', action='store_true', help='Print a random page instead of every item')
        fetch_parser.add_argument('--verbose', action='store_true', help='Verbose output')
        fetch_parser.add_argument('--json', action='store_true', help='Print the news as JSON')

    def _add_feeds_parser(self, subparsers):
        """Add feeds command parser."""
        feeds_parser = subparsers.add_parser('feeds', help='Registered feed management')

        feeds_subparsers = feeds_parser.add_subparsers(
            dest='subcommand',
            help='Feed operations',
            metavar='{list,add,delete}'
        )

        feeds_subparsers.add_parser('list', help='List registered feeds')

        add_parser = feeds_subparsers.add_parser('add', help='Find and register the feeds behind a URL')
        add_parser.add_argument('url', help='Feed or web page URL')

        delete_parser = feeds_subparsers.add_parser('delete', help='Delete a registered feed')
        delete_parser.add_argument('feed_id', help='Feed ID (or an unambiguous prefix)')

    def _add_sources_parser(self, subparsers):
        """Add sources command parser."""
        sources_parser = subparsers.add_parser('sources', help='Built-in news sources')

        sources_subparsers = sources_parser.add_subparsers(
            dest='subcommand',
            help='Source operations',
            metavar='{list}'
        )

        sources_subparsers.add_parser('list', help='List built-in sources')

    def _get_examples_text(self) -> str:
        """Get examples text for help."""
        lines = ["", "Commands:"]
        for name, doc in list_commands().items():
            lines.append(f"  {name:<10} {(doc or '').strip()}")
        lines.append("""
Examples:
  python run.py serve start                      # Web UI on port 33000
  python run.py news fetch --random              # Random page from built-in sources
  python run.py news fetch --sources hackernews  # A single source
  python run.py feeds add https://go.dev/blog    # Register the feeds of a page
  python run.py news fetch --feeds               # Fetch the registered feeds
""")
        return "\n".join(lines)

    def route_command(self, args: Optional[List[str]] = None) -> int:
        """
        Route command to appropriate handler.

        Args:
            args: Command line arguments (uses sys.argv if None)

        Returns:
            Exit code
        """
        try:
            if args is None:
                args = sys.argv[1:]

            parsed_args = self.parser.parse_args(args)

            if not parsed_args.command:
                self.parser.print_help()
                return 1

            return self._handle_command(parsed_args)

        except SystemExit as e:
            # argparse calls sys.exit() on error or help
            return e.code if e.code is not None else 0
        except Exception as e:
            logger.error(f"CLI routing error: {e}", exc_info=True)
            return 1

    def _handle_command(self, args: argparse.Namespace) -> int:
        """Handle command structure."""
        logger.debug(f"Handling command: {args.command}")

        if args.command not in COMMANDS:
            available = ', '.join(COMMANDS.keys())
            logger.error(f"Unknown command '{args.command}'. Available: {available}")
            return 1

        subcommand = getattr(args, 'subcommand', None)
        if not subcommand:
            logger.error(f"No subcommand specified for '{args.command}'")
            self.parser.parse_args([args.command, '--help'])  # Show help
            return 1

        try:
            command = get_command(args.command, self.container)
            return command.execute(subcommand, args)
        except Exception as e:
            logger.error(f"Error executing {args.command} {subcommand}: {e}", exc_info=True)
            return 1


def main(args: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Args:
        args: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code
    """
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        get_config_manager().update_logging()
    except ConfigurationError as e:
        logger.error(str(e))
        return 78

    router = CLIRouter()
    return router.route_command(args)


if __name__ == '__main__':
    exit_code = main()
    sys.exit(exit_code)
