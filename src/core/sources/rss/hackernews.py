#!/usr/bin/env python3
"""
Hacker News front page source.

Hacker News links to external articles, so items point to the story URL
rather than the discussion page.
"""

from ..base import RSSSource, SourceMetadata


class HackerNewsSource(RSSSource):
    """Hacker News front page RSS feed."""

    HTTP_HOST = 'https://news.ycombinator.com'
    URI = 'rss'
    METADATA = SourceMetadata(
        name='hackernews',
        display_name='Hacker News',
        homepage='https://news.ycombinator.com'
    )
