"""
Verse content module for Tasmee library.

Provides the content source interface and helpers to build validated verses.
"""

from tasmee.data.content import (
    ContentSource,
    StaticContentSource,
    build_verse,
    parse_api_verses,
)

__all__ = [
    "ContentSource",
    "StaticContentSource",
    "build_verse",
    "parse_api_verses",
]
