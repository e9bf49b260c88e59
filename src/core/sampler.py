#!/usr/bin/env python3
"""
Random page selection.

Draws a fixed number of distinct news items from the aggregated pool for
display.
"""

import logging
import random
from typing import List, Optional, Sequence

from .exceptions import SamplingError
from .models.news import NewsItem

logger = logging.getLogger(__name__)

DEFAULT_SHOW_MAX_NEWS = 50


class NewsSampler:
    """Keeps the current page of news and redraws it on demand."""

    def __init__(self, show_max_news: int = DEFAULT_SHOW_MAX_NEWS, rng: Optional[random.Random] = None):
        if show_max_news < 1:
            raise ValueError("show_max_news must be at least 1")
        self.show_max_news = show_max_news
        self.rng = rng or random.Random()
        self.page_news: List[NewsItem] = []

    def random_news(self, pool: Sequence[NewsItem]) -> List[NewsItem]:
        """
        Draw a new page of ``show_max_news`` distinct pool items.

        Raises:
            SamplingError: If the pool holds fewer items than a page. The
                current page is left unchanged.
        """
        k = self.show_max_news
        if len(pool) < k:
            raise SamplingError(k, len(pool))

        indexes = self.rng.sample(range(len(pool)), k)
        self.page_news = [pool[idx] for idx in indexes]
        logger.debug(f"Sampled {k} of {len(pool)} news items")
        return self.page_news
