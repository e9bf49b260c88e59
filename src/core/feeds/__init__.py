#!/usr/bin/env python3
"""
Feed decoding, type detection and discovery.
"""

from .parser import parse_rss, parse_atom, parse_rdf, parse_feed
from .guardian import parse_guardian_response
from .detector import parse_content_type, classify_response, detect_feed_type
from .discovery import parse_link_tags

__all__ = [
    'parse_rss', 'parse_atom', 'parse_rdf', 'parse_feed', 'parse_guardian_response',
    'parse_content_type', 'classify_response', 'detect_feed_type', 'parse_link_tags'
]
