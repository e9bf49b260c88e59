#!/usr/bin/env python3
"""
Feed discovery in HTML pages.

Finds feeds advertised through ``<link>`` tags and anchors titled "RSS",
resolving every href against the page URL.
"""

import logging
from typing import List
from urllib.parse import urljoin, urlsplit

from bs4 import BeautifulSoup

from ..exceptions import FeedDiscoveryError
from ..models.news import Feed, FeedType

logger = logging.getLogger(__name__)

LINK_TYPES = (
    ('application/rss+xml', FeedType.RSS),
    ('application/atom+xml', FeedType.ATOM),
)


def _resolve(base_url: str, href: str) -> str:
    return urljoin(base_url, href.strip())


def parse_link_tags(html, base_url: str) -> List[Feed]:
    """
    Scan an HTML document for feed references.

    Args:
        html: HTML document (bytes or str)
        base_url: URL the document was fetched from

    Returns:
        Candidate feeds, link tags first (RSS then Atom), then anchors.
        Empty when the page advertises no feeds.

    Raises:
        FeedDiscoveryError: If the base URL cannot be parsed
    """
    try:
        urlsplit(base_url)
    except ValueError as e:
        raise FeedDiscoveryError(f"invalid base URL {base_url!r}: {e}") from e

    soup = BeautifulSoup(html, 'html.parser')
    feeds = []

    for link_type, feed_type in LINK_TYPES:
        for tag in soup.find_all('link', attrs={'type': link_type}):
            href = tag.get('href')
            if href is None:
                continue
            feeds.append(Feed(endpoint=_resolve(base_url, href), type=feed_type))

    for anchor in soup.find_all('a'):
        title = anchor.get('title') or ''
        href = anchor.get('href')
        if 'rss' in title.lower() and href is not None:
            feeds.append(Feed(endpoint=_resolve(base_url, href), type=FeedType.RSS))

    logger.debug(f"Discovered {len(feeds)} feed links in {base_url}")
    return feeds
