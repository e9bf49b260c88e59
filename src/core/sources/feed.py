#!/usr/bin/env python3
"""
Registered feed source.

Wraps a Feed from the feed store and parses it with its stored format.
"""

import logging
from typing import List, Dict, Any, Optional

import requests

from ..feeds.parser import parse_feed
from ..models.news import Feed, NewsItem
from .base import HTTPSource, DEFAULT_USER_AGENT

logger = logging.getLogger(__name__)


class FeedSource(HTTPSource):
    """An arbitrary RSS, Atom or RDF endpoint registered by the user."""

    HEADERS = {
        'User-Agent': DEFAULT_USER_AGENT,
        'Accept': '*/*',
    }

    def __init__(self,
                 feed: Feed,
                 config: Optional[Dict[str, Any]] = None,
                 session: Optional[requests.Session] = None):
        super().__init__(feed.endpoint, config=config, session=session)
        self.feed = feed
        user_agent = self.config.get('user_agent')
        if user_agent:
            self.HEADERS = {**self.HEADERS, 'User-Agent': user_agent}

    @property
    def url(self) -> str:
        return self.feed.endpoint

    def parse(self, content: bytes) -> List[NewsItem]:
        return parse_feed(content, self.feed.type)
