#!/usr/bin/env python3
"""
Feed type detection.

Decides from a response's content type, and when needed its body, whether a
URL points at an RSS, Atom or RDF feed, or at an HTML page that may link to
feeds.
"""

import logging
from typing import Optional

from ..exceptions import FeedTypeError
from ..models.news import FeedType
from .parser import decode_document, root_to_feed_type

logger = logging.getLogger(__name__)

XML_CONTENT_TYPES = frozenset({
    'application/rss+xml',
    'application/atom+xml',
    'text/xml',
    'application/xml',
})
HTML_CONTENT_TYPE = 'text/html'

CONTENT_KIND_XML = 'xml'
CONTENT_KIND_HTML = 'html'


def parse_content_type(header: Optional[str]) -> str:
    """Strip parameters from a content-type header value."""
    if not header:
        return ''
    return header.split(';', 1)[0].strip().lower()


def classify_response(content_type: str) -> str:
    """
    Classify a bare content type.

    Returns:
        ``CONTENT_KIND_XML`` for feed documents, ``CONTENT_KIND_HTML`` for
        pages to scan for feed links

    Raises:
        FeedTypeError: For any other content type
    """
    if content_type in XML_CONTENT_TYPES:
        return CONTENT_KIND_XML
    if content_type == HTML_CONTENT_TYPE:
        return CONTENT_KIND_HTML
    raise FeedTypeError(f"unexpected content type: {content_type!r}")


def detect_feed_type(content: bytes) -> FeedType:
    """
    Detect the feed format from the document's root element.

    Raises:
        FeedDecodeError: If the body is not well-formed XML
        FeedTypeError: If the root is not rss, RDF or feed
    """
    document = decode_document(content)
    feed_type = root_to_feed_type(document['root'])
    if feed_type is None:
        raise FeedTypeError("unable to detect feed type")
    logger.debug(f"Detected {feed_type.value} document (root <{document['root']}>)")
    return feed_type
