#!/usr/bin/env python3
"""
JSON API news sources.
"""

from .theguardian import TheGuardianSource

__all__ = ['TheGuardianSource']
