#!/usr/bin/env python3
"""
Built-in source commands.
"""

from argparse import Namespace

from .base import BaseCommand
from core.sources import list_available_sources, get_source_metadata


class SourcesCommand(BaseCommand):
    """Inspect the built-in news sources."""

    SUBCOMMANDS = ['list']

    def execute(self, subcommand: str, args: Namespace) -> int:
        """Execute sources subcommand."""
        try:
            if subcommand == "list":
                return self.list(args)
            else:
                available = ", ".join(self.get_available_subcommands())
                self.logger.error(f"Unknown subcommand '{subcommand}'. Available: {available}")
                return 1

        except Exception as e:
            return self.handle_error(e, f"sources {subcommand}")

    def list(self, args: Namespace) -> int:
        """Print the built-in sources and whether they can run."""
        status = {'theguardian': self.config.has_guardian()}

        names = list_available_sources()
        print(f"Built-in sources ({len(names)}):")
        for name in names:
            metadata = get_source_metadata(name)
            display = metadata.display_name if metadata else name
            homepage = metadata.homepage if metadata else ""
            note = ""
            if name in status and not status[name]:
                note = "  (not configured)"
            print(f"  {name:<12} {display:<16} {homepage}{note}")
        return 0
