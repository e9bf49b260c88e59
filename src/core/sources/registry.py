#!/usr/bin/env python3
"""
News source registry for built-in sources.

Provides centralized registration and lookup of the fixed news sources.
"""

import logging
from typing import Dict, List, Type, Optional, Iterable

from ..exceptions import MorningPostError
from .base import NewsSource, SourceMetadata

logger = logging.getLogger(__name__)


class SourceRegistry:
    """Registry of built-in news source classes."""

    def __init__(self):
        """Initialize empty registry."""
        self._sources: Dict[str, Type[NewsSource]] = {}

    def register_source(self, source_class: Type[NewsSource], name: Optional[str] = None):
        """
        Register a news source class.

        Args:
            source_class: NewsSource subclass to register
            name: Optional custom name (uses class name if not provided)
        """
        if name is None:
            name = source_class.__name__.lower().replace('source', '')

        self._sources[name] = source_class
        logger.debug(f"Registered news source: {name}")

    def get_source(self, name: str, config: Optional[dict] = None) -> NewsSource:
        """
        Get a news source instance.

        Args:
            name: Source name
            config: Configuration for the source

        Returns:
            NewsSource instance

        Raises:
            KeyError: If source not found
            ConfigurationError: If the source cannot be configured
        """
        if name not in self._sources:
            available = list(self._sources.keys())
            raise KeyError(f"Source '{name}' not found. Available: {available}")

        # Create new instance each time to avoid shared state issues
        source_class = self._sources[name]
        return source_class(config)

    def get_all_sources(self, config: Optional[dict] = None,
                        names: Optional[Iterable[str]] = None) -> Dict[str, NewsSource]:
        """
        Get registered source instances.

        Sources that fail to initialize (e.g. a missing API key) are logged
        and left out; they never prevent the others from being built.

        Args:
            config: Default configuration for sources
            names: Optional subset of source names

        Returns:
            Dictionary mapping source names to instances
        """
        selected = list(names) if names else list(self._sources)
        sources = {}
        for name in selected:
            try:
                sources[name] = self.get_source(name, config)
            except (KeyError, MorningPostError) as e:
                logger.error(f"Failed to initialize source {name}: {e}")

        return sources

    def list_available_sources(self) -> List[str]:
        """Get list of available source names."""
        return list(self._sources.keys())

    def get_metadata(self, name: str) -> Optional[SourceMetadata]:
        """Get a registered source's metadata without instantiating it."""
        source_class = self._sources.get(name)
        return getattr(source_class, 'METADATA', None)


# Global registry instance
_global_registry = SourceRegistry()


def register_source(source_class: Type[NewsSource], name: Optional[str] = None):
    """Register a source in the global registry."""
    _global_registry.register_source(source_class, name)


def get_source(name: str, config: Optional[dict] = None) -> NewsSource:
    """Get a source from the global registry."""
    return _global_registry.get_source(name, config)


def get_all_sources(config: Optional[dict] = None, names: Optional[Iterable[str]] = None) -> Dict[str, NewsSource]:
    """Get sources from the global registry."""
    return _global_registry.get_all_sources(config, names)


def list_available_sources() -> List[str]:
    """List available sources in the global registry."""
    return _global_registry.list_available_sources()


def get_source_metadata(name: str) -> Optional[SourceMetadata]:
    """Get metadata of a source in the global registry."""
    return _global_registry.get_metadata(name)
