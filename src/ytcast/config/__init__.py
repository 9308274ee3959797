"""
Configuration management module for ytcast.

Handles application settings loaded from environment variables and ``.env``,
and the console logging setup used by the command line.
"""

from __future__ import annotations

from ytcast.config.logging_config import configure_logging

__all__ = ["configure_logging"]
