"""
Web UI for browsing news and managing registered feeds.
"""

from .app import create_app, run

__all__ = ['create_app', 'run']
