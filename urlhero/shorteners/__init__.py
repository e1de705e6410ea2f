"""
Shortener descriptors and the shortcode cleaning pipeline.
"""

from urlhero.shorteners.registry import DEFAULT_SHORTENERS, ShortenerRegistry, default_registry
from urlhero.shorteners.shortener import Shortener, clean_url, parse_url, sort_shortcodes

__all__ = [
    "DEFAULT_SHORTENERS",
    "Shortener",
    "ShortenerRegistry",
    "clean_url",
    "default_registry",
    "parse_url",
    "sort_shortcodes",
]
