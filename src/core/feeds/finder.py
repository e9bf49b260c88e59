#!/usr/bin/env python3
"""
Feed finder for ad hoc URLs.

Fetches a URL once and works out which feeds it offers: the URL itself when
it serves a feed document, or the feeds an HTML page links to.
"""

import logging
from typing import List, Optional

import requests

from ..models.news import Feed
from ..sources.base import fetch_response, DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from .detector import (
    parse_content_type, classify_response, detect_feed_type, CONTENT_KIND_XML
)
from .discovery import parse_link_tags

logger = logging.getLogger(__name__)


class FeedFinder:
    """Finds feeds behind user-supplied URLs."""

    def __init__(self,
                 timeout: float = DEFAULT_TIMEOUT,
                 user_agent: str = DEFAULT_USER_AGENT,
                 session: Optional[requests.Session] = None):
        self.timeout = timeout
        self.session = session
        self.headers = {
            'User-Agent': user_agent,
            'Accept': '*/*',
        }

    def find_feeds(self, url: str) -> List[Feed]:
        """
        Find the feeds served at or linked from a URL.

        Args:
            url: Page or feed URL

        Returns:
            Feeds found; empty when an HTML page links to none

        Raises:
            SourceError: If the URL cannot be fetched
            FeedTypeError: If the content type is unsupported or the XML root
                is not a known feed
            FeedDecodeError: If an XML body is not well-formed
        """
        logger.info(f"Looking for feeds at: {url}")
        response = fetch_response(url, url, session=self.session, timeout=self.timeout, headers=self.headers)
        content_type = parse_content_type(response.headers.get('content-type'))

        if classify_response(content_type) == CONTENT_KIND_XML:
            feeds = [Feed(endpoint=url, type=detect_feed_type(response.content))]
        else:
            feeds = parse_link_tags(response.content, url)

        logger.info(f"Found {len(feeds)} feeds at {url}")
        return feeds
