#!/usr/bin/env python3
"""
Concurrent news aggregation.

Fetches every configured source in parallel, one thread per source, and
merges their news into a shared pool. A failing source never stops its
siblings: the cycle completes, keeps what the others returned, and then
reports the first failure it observed.
"""

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Iterable, List, Optional

from .exceptions import AggregationError
from .models.news import NewsItem
from .sources.base import NewsSource

logger = logging.getLogger(__name__)

SourceProvider = Callable[[], Iterable[NewsSource]]


class NewsPool:
    """
    News gathered by aggregation cycles.

    Items are staged while a cycle runs and published when it ends, so
    readers only ever see the result of a finished cycle.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._staged: List[NewsItem] = []
        self._news: List[NewsItem] = []

    def begin_cycle(self) -> None:
        """Empty the staging area for a new cycle."""
        with self._lock:
            self._staged = []

    def add_news(self, news: Iterable[NewsItem]) -> None:
        """Append items to the current cycle."""
        news = list(news)
        with self._lock:
            self._staged.extend(news)

    def commit(self) -> None:
        """Publish the current cycle's items."""
        with self._lock:
            self._news = list(self._staged)

    def items(self) -> List[NewsItem]:
        """Snapshot of the last published cycle."""
        with self._lock:
            return list(self._news)

    @property
    def staged_count(self) -> int:
        with self._lock:
            return len(self._staged)

    def __len__(self) -> int:
        with self._lock:
            return len(self._news)


class Aggregator:
    """Runs aggregation cycles over a set of news sources."""

    def __init__(self,
                 source_provider: SourceProvider,
                 pool: Optional[NewsPool] = None,
                 max_workers: Optional[int] = None):
        """
        Initialize aggregator.

        Args:
            source_provider: Returns the sources to fetch, called once per cycle
            pool: Pool to fill (a new one by default)
            max_workers: Thread cap; one thread per source when not set
        """
        self.source_provider = source_provider
        self.pool = pool if pool is not None else NewsPool()
        self.max_workers = max_workers
        self._cycle_lock = threading.Lock()

    @classmethod
    def from_sources(cls, sources: Iterable[NewsSource], **kwargs) -> 'Aggregator':
        """Aggregator over a fixed list of sources."""
        sources = list(sources)
        return cls(lambda: sources, **kwargs)

    def _fetch(self, source: NewsSource) -> int:
        news = source.get_news()
        self.pool.add_news(news)
        return len(news)

    def get_news(self) -> None:
        """
        Run one aggregation cycle.

        Raises:
            AggregationError: If at least one source failed. The pool still
                holds the news of the sources that succeeded.
        """
        with self._cycle_lock:
            self.pool.begin_cycle()
            sources = list(self.source_provider())
            if not sources:
                logger.warning("No sources configured, nothing to aggregate")
                self.pool.commit()
                return

            logger.info(f"Fetching {len(sources)} sources in parallel")
            start_time = time.time()
            first_error: Optional[AggregationError] = None
            failed = 0

            workers = self.max_workers or len(sources)
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix='morningpost-fetch') as executor:
                futures = {executor.submit(self._fetch, source): source for source in sources}
                for future in as_completed(futures):
                    source = futures[future]
                    try:
                        future.result()
                    except Exception as e:
                        failed += 1
                        logger.error(f"Source {source.identifier} failed: {e}")
                        if first_error is None:
                            first_error = AggregationError(source.identifier, e)

            self.pool.commit()
            duration = time.time() - start_time
            logger.info(
                f"Aggregated {len(self.pool)} news items from "
                f"{len(sources) - failed}/{len(sources)} sources in {duration:.2f}s"
            )

            if first_error is not None:
                first_error.failed_sources = failed
                first_error.context['failed_sources'] = failed
                raise first_error from first_error.original_error
