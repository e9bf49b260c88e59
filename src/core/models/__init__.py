#!/usr/bin/env python3
"""
Core data models for news aggregation.

Contains all data structures used throughout the application.
"""

from .news import NewsItem, Feed, FeedType

__all__ = ['NewsItem', 'Feed', 'FeedType']
