#!/usr/bin/env python3
"""
Auto-registration of all available news sources.

Import this module to automatically register all built-in sources.
"""

import logging
from .registry import register_source
from .rss.cnn import CNNSource
from .rss.hackernews import HackerNewsSource
from .rss.techcrunch import TechCrunchSource
from .rss.bitfield import BitfieldSource
from .api.theguardian import TheGuardianSource

logger = logging.getLogger(__name__)


def register_all_sources():
    """Register all built-in news sources."""
    sources_to_register = [
        (CNNSource, 'cnn'),
        (HackerNewsSource, 'hackernews'),
        (TechCrunchSource, 'techcrunch'),
        (BitfieldSource, 'bitfield'),
        (TheGuardianSource, 'theguardian'),
    ]

    for source_class, name in sources_to_register:
        register_source(source_class, name)


# Auto-register on import
register_all_sources()
