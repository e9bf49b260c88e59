#!/usr/bin/env python3
"""
The Guardian content search API source.

Requires an API key, taken from the source configuration or the
GUARDIAN_API_KEY environment variable.
"""

import logging
import os
from typing import List, Dict, Any, Optional

import requests

from ...exceptions import ConfigurationError
from ...feeds.guardian import parse_guardian_response
from ...models.news import NewsItem
from ..base import HTTPSource, SourceMetadata

logger = logging.getLogger(__name__)

API_KEY_ENV = 'GUARDIAN_API_KEY'


class TheGuardianSource(HTTPSource):
    """Latest results of the Guardian content search API."""

    HTTP_HOST = 'https://content.guardianapis.com'
    METADATA = SourceMetadata(
        name='theguardian',
        display_name='The Guardian',
        homepage='https://www.theguardian.com',
        feed_format='JSON'
    )

    def __init__(self, config: Optional[Dict[str, Any]] = None, session: Optional[requests.Session] = None):
        """
        Initialize Guardian source.

        Raises:
            ConfigurationError: If no API key is configured
        """
        config = {'timeout': 5, **(config or {})}
        api_key = config.get('api_key') or os.getenv(API_KEY_ENV)
        if not api_key:
            raise ConfigurationError(API_KEY_ENV, 'environment variable not found')

        super().__init__(
            config.get('http_host', self.HTTP_HOST),
            f"search?api-key={api_key}",
            config=config,
            session=session
        )

    @property
    def identifier(self) -> str:
        # The query string carries the API key
        return f"{self.http_host}/search"

    def get_metadata(self) -> SourceMetadata:
        return self.METADATA

    def parse(self, content: bytes) -> List[NewsItem]:
        return parse_guardian_response(content)
