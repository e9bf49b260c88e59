#!/usr/bin/env python3
"""
Bitfield Consulting Go blog source.
"""

from typing import Dict, Any, Optional

import requests

from ..base import RSSSource, SourceMetadata


class BitfieldSource(RSSSource):
    """Bitfield Consulting blog, Go category (Squarespace RSS export)."""

    HTTP_HOST = 'https://bitfieldconsulting.com'
    URI = 'golang?format=rss'
    METADATA = SourceMetadata(
        name='bitfield',
        display_name='Bitfield Consulting',
        homepage='https://bitfieldconsulting.com/golang'
    )

    def __init__(self, config: Optional[Dict[str, Any]] = None, session: Optional[requests.Session] = None):
        config = {'timeout': 5, **(config or {})}
        super().__init__(config, session=session)
