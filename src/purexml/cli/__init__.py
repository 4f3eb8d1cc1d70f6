"""Command-line interface for purexml.

Provides ``parse``, ``validate`` and ``render`` commands over XML files.
"""

from .main import main

__all__ = ["main"]
