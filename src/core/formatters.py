#!/usr/bin/env python3
"""
Formatting utilities for news and feed display in the terminal.
"""

from typing import List

from core.models.news import NewsItem, Feed


def format_news(item: NewsItem) -> str:
    """Format a single news item for display."""
    label = f"[{item.feed.upper()}] " if item.feed else ""
    return f"{label}{item.title}\n    {item.url}\n"


def news_to_dict(news: List[NewsItem]) -> List[dict]:
    """Convert NewsItem objects to dictionaries for JSON output."""
    return [item.to_dict() for item in news]


def format_feed(feed: Feed) -> str:
    """Format a registered feed as one line."""
    return f"{feed.id[:12]}  {feed.type.value:<5} {feed.endpoint}"


def format_feed_list(feeds: List[Feed]) -> str:
    """Format all registered feeds, one per line."""
    if not feeds:
        return "No feeds registered."
    lines = [f"Registered feeds ({len(feeds)}):"]
    lines.extend(format_feed(feed) for feed in sorted(feeds, key=lambda f: f.endpoint))
    return "\n".join(lines)
