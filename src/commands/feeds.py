#!/usr/bin/env python3
"""
Feed registry commands: list, add and delete registered feeds.
"""

from argparse import Namespace
from typing import Optional

from .base import BaseCommand
from core.formatters import format_feed, format_feed_list
from core.models.news import Feed


class FeedsCommand(BaseCommand):
    """Manage the registered feeds."""

    SUBCOMMANDS = ['list', 'add', 'delete']

    def execute(self, subcommand: str, args: Namespace) -> int:
        """Execute feeds subcommand."""
        try:
            if subcommand == "list":
                return self.list(args)
            elif subcommand == "add":
                return self.add(args)
            elif subcommand == "delete":
                return self.delete(args)
            else:
                available = ", ".join(self.get_available_subcommands())
                self.logger.error(f"Unknown subcommand '{subcommand}'. Available: {available}")
                return 1

        except Exception as e:
            return self.handle_error(e, f"feeds {subcommand}")

    def list(self, args: Namespace) -> int:
        """Print every registered feed."""
        print(format_feed_list(self.feed_store.get_all()))
        return 0

    def add(self, args: Namespace) -> int:
        """Find the feeds behind a URL and register them."""
        if not self.validate_args(args, ['url']):
            return 1

        url = args.url.strip()
        if not url:
            self.logger.error("Please inform the URL")
            return 1

        feeds = self.feed_finder.find_feeds(url)
        if not feeds:
            print(f"No feeds found at {url}")
            return 1

        store = self.feed_store
        for feed in feeds:
            stored = store.add(feed)
            print(f"Added {format_feed(stored)}")
        store.save()
        return 0

    def delete(self, args: Namespace) -> int:
        """Delete a feed by its identifier or an unambiguous prefix of it."""
        if not self.validate_args(args, ['feed_id']):
            return 1

        store = self.feed_store
        feed = self._resolve(args.feed_id.strip())
        if feed is None:
            return 1

        store.delete(feed.id)
        store.save()
        print(f"Deleted {feed.endpoint}")
        return 0

    def _resolve(self, feed_id: str) -> Optional[Feed]:
        if not feed_id:
            self.logger.error("Please inform the feed ID")
            return None

        feed = self.feed_store.get(feed_id)
        if feed is not None:
            return feed

        matches = [f for f in self.feed_store.get_all() if f.id.startswith(feed_id)]
        if len(matches) == 1:
            return matches[0]
        if not matches:
            self.logger.error(f"No feed with ID {feed_id}")
        else:
            self.logger.error(f"Feed ID {feed_id} is ambiguous ({len(matches)} matches)")
        return None
