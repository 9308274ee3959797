"""
Command-line interface for ytcast.
"""

from __future__ import annotations

__all__: list[str] = []
