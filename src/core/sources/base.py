#!/usr/bin/env python3
"""
Base classes for news sources.

Defines the one-method news source interface and the HTTP plumbing shared
by built-in sites and registered feeds.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Dict, Any, Optional

import requests

from ..exceptions import SourceConnectionError, SourceTimeoutError, SourceStatusError
from ..feeds.parser import parse_rss
from ..models.news import NewsItem

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30
DEFAULT_USER_AGENT = 'MorningPost/0.1'


@dataclass
class SourceMetadata:
    """Metadata about a built-in news source."""
    name: str
    display_name: str
    homepage: str
    feed_format: str = 'RSS'


def fetch_response(source_name: str,
                   url: str,
                   session: Optional[requests.Session] = None,
                   timeout: float = DEFAULT_TIMEOUT,
                   headers: Optional[Dict[str, str]] = None) -> requests.Response:
    """
    GET a URL and return the response once its body has been read.

    Args:
        source_name: Name used to attribute errors
        url: URL to fetch
        session: Optional session; a one-off request is made without it
        timeout: Request timeout in seconds
        headers: Extra request headers

    Raises:
        SourceTimeoutError: If the request timed out
        SourceConnectionError: On any other transport or body read failure
        SourceStatusError: If the status is not 200
    """
    http = session or requests
    try:
        response = http.get(url, headers=headers or {}, timeout=timeout)
    except requests.Timeout as e:
        raise SourceTimeoutError(source_name, url, timeout) from e
    except requests.RequestException as e:
        raise SourceConnectionError(source_name, url, e) from e

    if response.status_code != 200:
        status = f"{response.status_code} {response.reason or ''}".strip()
        raise SourceStatusError(source_name, url, status)

    return response


class NewsSource(ABC):
    """
    Abstract base class for all news sources.

    A source knows how to produce news items; ``identifier`` names it in
    error reports.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize news source.

        Args:
            config: Source-specific configuration
        """
        self.config = config or {}

    @property
    @abstractmethod
    def identifier(self) -> str:
        """Stable name used to attribute errors to this source."""
        pass

    @abstractmethod
    def get_news(self) -> List[NewsItem]:
        """
        Fetch and parse the news published by this source.

        Raises:
            SourceError: If fetching fails
            FeedError: If the content cannot be decoded
        """
        pass

    def __repr__(self):
        return f"{self.__class__.__name__}({self.identifier!r})"


class HTTPSource(NewsSource):
    """
    A source reachable at a single URL built from a host and an endpoint path.

    Subclasses implement ``parse`` for their payload format.
    """

    # Request headers sent with every fetch; built-in sites send none
    HEADERS: Dict[str, str] = {}

    def __init__(self,
                 http_host: str,
                 uri: str = '',
                 config: Optional[Dict[str, Any]] = None,
                 session: Optional[requests.Session] = None):
        """
        Initialize HTTP source.

        Args:
            http_host: Scheme and host, e.g. ``https://techcrunch.com``
            uri: Endpoint path appended to the host
            config: Source-specific configuration (``timeout`` in seconds)
            session: Optional shared requests session
        """
        super().__init__(config)
        self.http_host = http_host.rstrip('/')
        self.uri = uri.lstrip('/')
        self.session = session
        self.timeout = self.config.get('timeout', DEFAULT_TIMEOUT)

    @property
    def url(self) -> str:
        if not self.uri:
            return self.http_host
        return f"{self.http_host}/{self.uri}"

    @property
    def identifier(self) -> str:
        return self.url

    def fetch(self) -> bytes:
        """Fetch the raw response body."""
        logger.info(f"Fetching news from: {self.identifier}")
        response = fetch_response(
            self.identifier,
            self.url,
            session=self.session,
            timeout=self.timeout,
            headers=self.HEADERS
        )
        return response.content

    @abstractmethod
    def parse(self, content: bytes) -> List[NewsItem]:
        """Parse a raw response body into news items."""
        pass

    def get_news(self) -> List[NewsItem]:
        news = self.parse(self.fetch())
        logger.info(f"Got {len(news)} news items from {self.identifier}")
        return news


class RSSSource(HTTPSource):
    """
    Base class for built-in sites publishing an RSS feed.

    Subclasses set ``HTTP_HOST``, ``URI`` and ``METADATA``. The host and
    path can be overridden through ``config`` (useful against test servers).
    """

    HTTP_HOST = ''
    URI = ''
    METADATA: Optional[SourceMetadata] = None

    def __init__(self, config: Optional[Dict[str, Any]] = None, session: Optional[requests.Session] = None):
        config = config or {}
        super().__init__(
            config.get('http_host', self.HTTP_HOST),
            config.get('uri', self.URI),
            config=config,
            session=session
        )

    def get_metadata(self) -> SourceMetadata:
        return self.METADATA

    def parse(self, content: bytes) -> List[NewsItem]:
        return parse_rss(content)
