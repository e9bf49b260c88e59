#!/usr/bin/env python3
"""
Built-in RSS news sources.
"""

from .cnn import CNNSource
from .hackernews import HackerNewsSource
from .techcrunch import TechCrunchSource
from .bitfield import BitfieldSource

__all__ = ['CNNSource', 'HackerNewsSource', 'TechCrunchSource', 'BitfieldSource']
