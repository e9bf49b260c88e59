#!/usr/bin/env python3
"""
TechCrunch source.
"""

from ..base import RSSSource, SourceMetadata


class TechCrunchSource(RSSSource):
    """TechCrunch main RSS feed."""

    HTTP_HOST = 'https://techcrunch.com'
    URI = 'feed/'
    METADATA = SourceMetadata(
        name='techcrunch',
        display_name='TechCrunch',
        homepage='https://techcrunch.com'
    )
