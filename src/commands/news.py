#!/usr/bin/env python3
"""
News command endpoints for fetching news in the terminal.
"""

import json
import logging
from argparse import Namespace

from .base import BaseCommand
from core.aggregator import Aggregator
from core.container import build_source_aggregator
from core.exceptions import AggregationError, SamplingError
from core.formatters import format_news, news_to_dict

logger = logging.getLogger(__name__)


class NewsCommand(BaseCommand):
    """Fetch news from built-in sources or registered feeds."""

    SUBCOMMANDS = ['fetch']

    def execute(self, subcommand: str, args: Namespace) -> int:
        """Execute news subcommand."""
        try:
            if subcommand == "fetch":
                return self.fetch(args)
            else:
                available = ", ".join(self.get_available_subcommands())
                self.logger.error(f"Unknown subcommand '{subcommand}'. Available: {available}")
                return 1

        except Exception as e:
            return self.handle_error(e, f"news {subcommand}")

    def _aggregator(self, args: Namespace) -> Aggregator:
        if getattr(args, 'feeds', False):
            return self._container.get('feed_aggregator')
        return build_source_aggregator(self.config, getattr(args, 'sources', None))

    def fetch(self, args: Namespace) -> int:
        """
        Run one aggregation cycle and print the result.

        A failed cycle still prints whatever the other sources returned, then
        exits with status 1.
        """
        if getattr(args, 'verbose', False):
            root = logging.getLogger()
            root.setLevel(logging.DEBUG)
            for handler in root.handlers:
                handler.setLevel(logging.DEBUG)

        aggregator = self._aggregator(args)
        exit_code = 0
        try:
            aggregator.get_news()
        except AggregationError as e:
            self.logger.error(f"Aggregation finished with {e.failed_sources} failed source(s): {e}")
            exit_code = 1

        news = aggregator.pool.items()
        if getattr(args, 'random', False):
            try:
                news = self.sampler.random_news(news)
            except SamplingError as e:
                self.logger.warning(f"{e}; showing all {len(news)} items")

        if getattr(args, 'json', False):
            print(json.dumps(news_to_dict(news), indent=2, ensure_ascii=False))
            return exit_code

        if not news:
            print("No news found.")
            return exit_code

        for item in news:
            print(format_news(item))

        print(f"Total: {len(news)} news items")
        return exit_code
