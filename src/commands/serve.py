#!/usr/bin/env python3
"""
Web server command.
"""

from argparse import Namespace

from .base import BaseCommand


class ServeCommand(BaseCommand):
    """Run the MorningPost web UI."""

    SUBCOMMANDS = ['start']

    def execute(self, subcommand: str, args: Namespace) -> int:
        """Execute serve subcommand."""
        try:
            if subcommand == "start":
                return self.start(args)
            else:
                available = ", ".join(self.get_available_subcommands())
                self.logger.error(f"Unknown subcommand '{subcommand}'. Available: {available}")
                return 1

        except Exception as e:
            return self.handle_error(e, f"serve {subcommand}")

    def start(self, args: Namespace) -> int:
        """Serve until interrupted; the feed store is saved on shutdown."""
        from web import run

        port = getattr(args, 'port', None) or self.config.app.listen_port
        # Open the store up front so a broken store fails before listening
        self.feed_store
        run(self.container, port)
        return 0
