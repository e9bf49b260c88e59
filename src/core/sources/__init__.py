#!/usr/bin/env python3
"""
News sources: built-in sites, the Guardian API and registered feeds.
"""

from .registry import (
    SourceRegistry, register_source, get_all_sources, get_source,
    list_available_sources, get_source_metadata
)
from .base import NewsSource, HTTPSource, RSSSource, SourceMetadata
from .feed import FeedSource

# Import to trigger auto-registration
from . import auto_register

__all__ = [
    'SourceRegistry', 'register_source', 'get_all_sources', 'get_source',
    'list_available_sources', 'get_source_metadata', 'NewsSource', 'HTTPSource',
    'RSSSource', 'SourceMetadata', 'FeedSource'
]
