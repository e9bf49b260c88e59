#!/usr/bin/env python3
"""
News data models.

Represents a single news item, the supported feed formats and a
registered feed endpoint.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any
from urllib.parse import urlsplit

from ..exceptions import InvalidNewsItemError

_FORBIDDEN_URL_CHARS = re.compile(r'[\x00-\x20\x7f]')
_BAD_PERCENT_ESCAPE = re.compile(r'%(?![0-9A-Fa-f]{2})')
# A colon before the first slash, query or fragment must end a valid scheme
_SCHEME_PREFIX = re.compile(r'^([^/?#]*):')
_VALID_SCHEME = re.compile(r'^[A-Za-z][A-Za-z0-9+.-]*$')


class FeedType(str, Enum):
    """Feed formats a registered feed can carry."""
    RSS = 'RSS'
    ATOM = 'Atom'
    RDF = 'RDF'

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class NewsItem:
    """
    A single news item: the feed it came from, a title and a URL.

    Use ``NewsItem.create`` to build validated items; parsers rely on it to
    discard entries without a title or a usable link.
    """
    title: str
    url: str
    feed: str = ""

    @classmethod
    def create(cls, feed: str, title: str, url: str) -> 'NewsItem':
        """
        Build a validated news item.

        Raises:
            InvalidNewsItemError: If the title or URL is empty, or the URL
                cannot be parsed
        """
        feed = (feed or "").strip()
        title = (title or "").strip()
        url = (url or "").strip()

        if not title:
            raise InvalidNewsItemError('title', title, 'non-empty string')
        if not url:
            raise InvalidNewsItemError('url', url, 'non-empty URL')
        if _FORBIDDEN_URL_CHARS.search(url):
            raise InvalidNewsItemError('url', url, 'URL without whitespace or control characters')
        if _BAD_PERCENT_ESCAPE.search(url):
            raise InvalidNewsItemError('url', url, 'URL with valid percent escapes')
        prefix = _SCHEME_PREFIX.match(url)
        if prefix and not _VALID_SCHEME.match(prefix.group(1)):
            raise InvalidNewsItemError('url', url, 'URL with a valid scheme')
        try:
            urlsplit(url).port
        except ValueError as e:
            raise InvalidNewsItemError('url', url, f'parsable URL ({e})') from e

        return cls(title=title, url=url, feed=feed)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'feed': self.feed,
            'title': self.title,
            'url': self.url
        }


@dataclass
class Feed:
    """A registered feed endpoint with its known format."""
    endpoint: str
    type: FeedType
    id: str = ""

    def __post_init__(self):
        self.endpoint = self.endpoint.strip()
        self.type = FeedType(self.type)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'endpoint': self.endpoint,
            'type': self.type.value
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Feed':
        return cls(
            endpoint=data.get('endpoint', ''),
            type=data.get('type', FeedType.RSS.value),
            id=data.get('id', '')
        )
