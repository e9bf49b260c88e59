#!/usr/bin/env python3
"""
RSS, Atom and RDF feed parsers.

Each parser turns raw response bytes into NewsItem objects labelled with the
feed title. Entries without a title or a usable link are dropped; a document
that is not well-formed, or that is a different feed format than requested,
fails the whole call.

Decoding goes through feedparser, which honors the charset declared in the
XML prolog (or a BOM) and transcodes before parsing. The feed format comes
from the root element's local name, compared case-insensitively.
"""

import io
import logging
import xml.sax
from typing import List, Optional
from xml.etree import ElementTree

import feedparser
from feedparser.encodings import convert_to_utf8

from ..exceptions import FeedDecodeError, FeedTypeError, InvalidNewsItemError
from ..models.news import FeedType, NewsItem

logger = logging.getLogger(__name__)

ROOT_FEED_TYPES = {
    'rss': FeedType.RSS,
    'feed': FeedType.ATOM,
    'rdf': FeedType.RDF,
}


def root_to_feed_type(root: Optional[str]) -> Optional[FeedType]:
    """Map a root element local name to the feed format it starts."""
    if not root:
        return None
    return ROOT_FEED_TYPES.get(root.lower())


def root_element(data: bytes, feed_format: str = 'XML') -> str:
    """
    Return the local name of the document's root element.

    Raises:
        FeedDecodeError: If no start tag can be read
    """
    parser = ElementTree.XMLPullParser(events=('start',))
    try:
        parser.feed(data)
        for _, element in parser.read_events():
            return element.tag.rsplit('}', 1)[-1]
    except ElementTree.ParseError as e:
        raise FeedDecodeError(feed_format, e) from e
    raise FeedDecodeError(feed_format, 'no root element')


def decode_document(content: bytes, feed_format: str = 'XML') -> feedparser.FeedParserDict:
    """
    Decode a feed document, failing on anything that is not well-formed XML.

    The returned document carries the root element's local name under
    ``root``.

    Args:
        content: Raw response body
        feed_format: Format name used in error messages

    Returns:
        Parsed feed document

    Raises:
        FeedDecodeError: If the content is empty or not well-formed XML
    """
    if not content or not content.strip():
        raise FeedDecodeError(feed_format, 'empty document')

    if isinstance(content, str):
        content = content.encode('utf-8')
    data = convert_to_utf8({}, content, {})
    # A stream keeps feedparser from treating the bytes as a path or URL
    document = feedparser.parse(io.BytesIO(data))

    # feedparser falls back to a lenient parser after a SAX failure; a strict
    # failure means the document is not well-formed.
    if document.get('bozo') and isinstance(document.get('bozo_exception'), xml.sax.SAXException):
        raise FeedDecodeError(feed_format, document.bozo_exception)

    if document.get('bozo'):
        logger.debug(f"Feed decoding warning: {document.get('bozo_exception')}")

    document['root'] = root_element(data, feed_format)
    return document


def _decode_as(content: bytes, expected: FeedType) -> feedparser.FeedParserDict:
    document = decode_document(content, expected.value)
    if root_to_feed_type(document['root']) is not expected:
        raise FeedDecodeError(expected.value, f"expected {expected.value} document but found <{document['root']}>")
    return document


def _entry_link(entry: feedparser.FeedParserDict, feed_type: FeedType) -> str:
    """
    Return the href of the entry's link element.

    RSS and RDF items only count ``<link>`` (feedparser's alternate link), so
    enclosures are never taken for the item URL. Atom entries prefer the
    alternate link and fall back to the first one.

    ``entry.link`` is not used: feedparser fills it from a permalink guid or
    an Atom id when the entry has no link element.
    """
    hrefs = [(link.get('rel'), link.get('href')) for link in entry.get('links', []) if link.get('href')]
    for rel, href in hrefs:
        if rel == 'alternate':
            return href
    if feed_type is FeedType.ATOM and hrefs:
        return hrefs[0][1]
    return ''


def _collect_items(document: feedparser.FeedParserDict, feed_type: FeedType) -> List[NewsItem]:
    feed_title = document.feed.get('title', '')
    entries = document.get('entries', [])
    news = []
    for entry in entries:
        try:
            news.append(NewsItem.create(feed_title, entry.get('title', ''), _entry_link(entry, feed_type)))
        except InvalidNewsItemError as e:
            logger.debug(f"Dropped entry from {feed_title or 'untitled feed'}: {e}")
            continue

    if len(news) != len(entries):
        logger.debug(f"Kept {len(news)}/{len(entries)} entries from {feed_title or 'untitled feed'}")
    return news


def parse_rss(content: bytes) -> List[NewsItem]:
    """Parse an RSS document (rss > channel > item)."""
    return _collect_items(_decode_as(content, FeedType.RSS), FeedType.RSS)


def parse_atom(content: bytes) -> List[NewsItem]:
    """Parse an Atom document (feed > entry)."""
    return _collect_items(_decode_as(content, FeedType.ATOM), FeedType.ATOM)


def parse_rdf(content: bytes) -> List[NewsItem]:
    """Parse an RDF document (RDF > channel, item siblings)."""
    return _collect_items(_decode_as(content, FeedType.RDF), FeedType.RDF)


PARSERS = {
    FeedType.RSS: parse_rss,
    FeedType.ATOM: parse_atom,
    FeedType.RDF: parse_rdf,
}


def parse_feed(content: bytes, feed_type: FeedType) -> List[NewsItem]:
    """
    Parse a feed document with the parser for its known type.

    Raises:
        FeedTypeError: If the feed type is not supported
        FeedDecodeError: If the content cannot be decoded
    """
    try:
        parser = PARSERS[FeedType(feed_type)]
    except ValueError as e:
        raise FeedTypeError(f"unknown feed type {feed_type!r}") from e
    return parser(content)
