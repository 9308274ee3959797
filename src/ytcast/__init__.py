"""
ytcast - YouTube channels as podcast feeds.

Turns a YouTube channel into an RSS podcast feed and serves the channel's
videos as cached media files through a small HTTP API.
"""

from __future__ import annotations

__version__ = "0.3.0"
__author__ = "ytcast"
__license__ = "MIT"

__all__ = ["__version__", "__author__", "__license__"]
