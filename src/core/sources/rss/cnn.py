#!/usr/bin/env python3
"""
CNN top stories source.
"""

from ..base import RSSSource, SourceMetadata


class CNNSource(RSSSource):
    """CNN top stories RSS feed."""

    HTTP_HOST = 'http://rss.cnn.com'
    URI = 'rss/cnn_topstories.rss'
    METADATA = SourceMetadata(
        name='cnn',
        display_name='CNN',
        homepage='https://edition.cnn.com'
    )
