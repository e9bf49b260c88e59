#!/usr/bin/env python3
"""
Dependency Injection Container

Provides a centralized way to manage dependencies and avoid scattered
instantiation throughout the codebase. Supports singleton and factory patterns.
"""

import logging
from typing import Any, Dict, Callable, TypeVar, Optional, Iterable
from functools import wraps
import threading

logger = logging.getLogger(__name__)

T = TypeVar('T')


class Container:
    """Simple dependency injection container with lifecycle management."""

    def __init__(self):
        """Initialize empty container."""
        self._factories: Dict[str, Callable] = {}
        self._singletons: Dict[str, Any] = {}
        self._lock = threading.Lock()

    def register_singleton(self, service_name: str, factory: Callable[[], T]) -> None:
        """
        Register a service as singleton (created once, reused).

        Args:
            service_name: Unique name for the service
            factory: Function that creates the service instance
        """
        with self._lock:
            self._factories[service_name] = singleton(factory) if not _is_singleton(factory) else factory
            # Remove any existing instance to force recreation
            if service_name in self._singletons:
                del self._singletons[service_name]

    def register_factory(self, service_name: str, factory: Callable[[], T]) -> None:
        """
        Register a service as factory (new instance each time).

        Args:
            service_name: Unique name for the service
            factory: Function that creates service instances
        """
        with self._lock:
            self._factories[service_name] = factory

    def register_instance(self, service_name: str, instance: T) -> None:
        """
        Register an existing instance as singleton.

        Args:
            service_name: Unique name for the service
            instance: Pre-created service instance
        """
        with self._lock:
            self._singletons[service_name] = instance

    def get(self, service_name: str) -> Any:
        """
        Get service instance by name.

        Args:
            service_name: Name of the service to retrieve

        Returns:
            Service instance

        Raises:
            KeyError: If service is not registered
        """
        # Check for existing singleton first
        if service_name in self._singletons:
            return self._singletons[service_name]

        # Check if factory is registered
        if service_name not in self._factories:
            raise KeyError(f"Service '{service_name}' not registered")

        factory = self._factories[service_name]
        if not _is_singleton(factory):
            instance = factory()
            logger.debug(f"Created new instance for '{service_name}'")
            return instance

        # Factories may resolve other services, so build outside the lock
        instance = factory()
        with self._lock:
            if service_name not in self._singletons:
                self._singletons[service_name] = instance
                logger.debug(f"Created singleton instance for '{service_name}'")
            return self._singletons[service_name]

    def has(self, service_name: str) -> bool:
        """Check if service is registered."""
        return service_name in self._factories or service_name in self._singletons

    def clear(self) -> None:
        """Clear all registered services and instances."""
        with self._lock:
            self._factories.clear()
            self._singletons.clear()

    def reset_singleton(self, service_name: str) -> None:
        """Reset a singleton instance (will be recreated on next get())."""
        with self._lock:
            if service_name in self._singletons:
                del self._singletons[service_name]
                logger.debug(f"Reset singleton '{service_name}'")


def singleton(factory_func: Callable[[], T]) -> Callable[[], T]:
    """
    Decorator to mark a factory function as singleton.

    Usage:
        @singleton
        def create_feed_store():
            return FeedStore.open(path)
    """
    @wraps(factory_func)
    def wrapper():
        return factory_func()

    wrapper._is_singleton = True
    return wrapper


def _is_singleton(factory: Callable) -> bool:
    return getattr(factory, '_is_singleton', False)


# Global container instance
_container: Optional[Container] = None
_container_lock = threading.Lock()


def get_container() -> Container:
    """Get global container instance (thread-safe singleton)."""
    global _container
    if _container is None:
        with _container_lock:
            if _container is None:
                _container = Container()
                setup_default_services(_container)
    return _container


def reset_container() -> None:
    """Reset global container (useful for testing)."""
    global _container
    with _container_lock:
        if _container:
            _container.clear()
        _container = None


def setup_default_services(container: Container) -> None:
    """Set up default service registrations with configuration injection."""

    def config():
        return container.get('config')

    @singleton
    def create_config():
        from core.config import get_config
        return get_config()

    @singleton
    def create_feed_store():
        from core.store import FeedStore
        return FeedStore.open(config().app.store_path)

    @singleton
    def create_feed_finder():
        from core.feeds.finder import FeedFinder
        app = config().app
        return FeedFinder(timeout=app.http_timeout, user_agent=app.user_agent)

    @singleton
    def create_sampler():
        from core.sampler import NewsSampler
        return NewsSampler(show_max_news=config().app.show_max_news)

    @singleton
    def create_feed_aggregator():
        from core.aggregator import Aggregator
        from core.sources.feed import FeedSource

        store = container.get('feed_store')
        app = config().app
        source_config = {'timeout': app.http_timeout, 'user_agent': app.user_agent}

        def registered_feeds():
            return [FeedSource(feed, source_config) for feed in store.get_all()]

        return Aggregator(registered_feeds)

    # Register services
    container.register_singleton('config', create_config)
    container.register_singleton('feed_store', create_feed_store)
    container.register_singleton('feed_finder', create_feed_finder)
    container.register_singleton('sampler', create_sampler)
    container.register_singleton('feed_aggregator', create_feed_aggregator)

    logger.debug("Default services registered in container")


def build_source_aggregator(config, names: Optional[Iterable[str]] = None):
    """
    Create an aggregator over the built-in sources.

    Args:
        config: Application configuration
        names: Optional subset of source names (all sources when not set)
    """
    from core.aggregator import Aggregator
    from core.sources import get_all_sources

    sources = list(get_all_sources(config.source_config(), names).values())
    return Aggregator.from_sources(sources)
