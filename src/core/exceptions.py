#!/usr/bin/env python3
"""
Standardized exception hierarchy for MorningPost.

Provides specific exception types for different error conditions with
proper error context. Per-source errors carry the source identity so an
aggregation cycle can report which endpoint failed.
"""

from typing import Optional, Dict, Any


class MorningPostError(Exception):
    """Base exception for all MorningPost errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        """
        Initialize base exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            context: Additional error context
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            'error_type': self.__class__.__name__,
            'error_code': self.error_code,
            'message': self.message,
            'context': self.context
        }


# Source-related exceptions
class SourceError(MorningPostError):
    """Base exception for news source errors."""
    pass


class SourceConnectionError(SourceError):
    """Failed to connect to (or read from) a news source."""

    def __init__(self, source_name: str, url: str, original_error: Exception):
        message = f"Failed to connect to {source_name} at {url}: {original_error}"
        context = {
            'source_name': source_name,
            'url': url,
            'original_error': str(original_error)
        }
        super().__init__(message, context=context)


class SourceTimeoutError(SourceConnectionError):
    """Source request timed out."""

    def __init__(self, source_name: str, url: str, timeout_seconds: float):
        message = f"Timeout connecting to {source_name} after {timeout_seconds}s"
        context = {
            'source_name': source_name,
            'url': url,
            'timeout_seconds': timeout_seconds
        }
        SourceError.__init__(self, message, context=context)


class SourceStatusError(SourceError):
    """Source answered with a status other than 200."""

    def __init__(self, source_name: str, url: str, status: str):
        message = f"unexpected response status {status!r} from {source_name}"
        context = {
            'source_name': source_name,
            'url': url,
            'status': status
        }
        super().__init__(message, context=context)
        self.status = status


class SourceResponseError(SourceError):
    """A JSON API answered 200 but reported a failure in its payload."""

    def __init__(self, status: str, detail: Any):
        message = f"unexpected response status {status!r}: {detail}"
        context = {
            'status': status,
            'detail': str(detail)
        }
        super().__init__(message, context=context)
        self.status = status


class AggregationError(SourceError):
    """First failure observed during an aggregation cycle."""

    def __init__(self, source_id: str, original_error: Exception, failed_sources: int = 1):
        message = f"{source_id!r}: {original_error}"
        context = {
            'source_id': source_id,
            'failed_sources': failed_sources,
            'original_error': str(original_error)
        }
        super().__init__(message, context=context)
        self.source_id = source_id
        self.original_error = original_error
        self.failed_sources = failed_sources


# Feed decoding/detection exceptions
class FeedError(MorningPostError):
    """Base exception for feed decoding and detection errors."""
    pass


class FeedDecodeError(FeedError):
    """Content is not a well-formed document of the expected format."""

    def __init__(self, feed_format: str, detail: Any):
        message = f"cannot decode {feed_format} data: {detail}"
        context = {
            'feed_format': feed_format,
            'detail': str(detail)
        }
        super().__init__(message, context=context)


class FeedTypeError(FeedError):
    """Feed type could not be determined or is not supported."""
    pass


class FeedDiscoveryError(FeedError):
    """Feed links could not be discovered in an HTML document."""
    pass


# Validation-related exceptions
class ValidationError(MorningPostError):
    """Data validation failed."""

    def __init__(self, field: str, value: Any, expected: str):
        message = f"Validation failed for {field}: expected {expected}, got {value!r}"
        context = {
            'field': field,
            'value': str(value),
            'expected': expected
        }
        super().__init__(message, context=context)


class InvalidNewsItemError(ValidationError):
    """A news item has an empty title or an empty/unparsable URL."""
    pass


# Presentation and storage exceptions
class SamplingError(MorningPostError):
    """Cannot draw the requested number of news items from the pool."""

    def __init__(self, requested: int, available: int):
        message = "cannot sample: requested k exceeds available pool size"
        context = {
            'requested': requested,
            'available': available
        }
        super().__init__(message, context=context)
        self.requested = requested
        self.available = available


class StoreError(MorningPostError):
    """Feed store could not be loaded or saved."""

    def __init__(self, operation: str, path: str, original_error: Exception):
        message = f"Feed store {operation} failed for {path}: {original_error}"
        context = {
            'operation': operation,
            'path': path,
            'original_error': str(original_error)
        }
        super().__init__(message, context=context)


# Configuration-related exceptions
class ConfigurationError(MorningPostError):
    """Configuration is invalid or missing."""

    def __init__(self, config_key: str, issue: str):
        message = f"Configuration error for {config_key}: {issue}"
        context = {
            'config_key': config_key,
            'issue': issue
        }
        super().__init__(message, context=context)
