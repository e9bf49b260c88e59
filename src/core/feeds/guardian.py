#!/usr/bin/env python3
"""
Parser for the Guardian content search API.

Unlike the XML feed parsers, results are not validated: every entry of
``response.results`` becomes a NewsItem, even with a missing title or URL.
"""

import json
import logging
from typing import List

from ..exceptions import FeedDecodeError, SourceResponseError
from ..models.news import NewsItem

logger = logging.getLogger(__name__)

GUARDIAN_STATUS_OK = 'ok'


def parse_guardian_response(content: bytes) -> List[NewsItem]:
    """
    Parse a Guardian search API payload.

    Args:
        content: Raw JSON response body

    Returns:
        One NewsItem per search result, in response order

    Raises:
        FeedDecodeError: If the body is not valid JSON
        SourceResponseError: If ``response.status`` is not ``"ok"``
    """
    try:
        payload = json.loads(content)
    except (ValueError, TypeError) as e:
        raise FeedDecodeError('JSON', e) from e

    response = payload.get('response') if isinstance(payload, dict) else None
    if not isinstance(response, dict):
        response = {}

    status = response.get('status', '')
    if status != GUARDIAN_STATUS_OK:
        raise SourceResponseError(status, response)

    results = response.get('results') or []
    logger.debug(f"Guardian search returned {len(results)} results")
    return [
        NewsItem(title=result.get('webTitle', ''), url=result.get('webUrl', ''))
        for result in results
    ]
