"""Transformers for article text, reading order and XHTML rendering."""

from .reading_order import find_head, resolve_reading_order
from .renderer import XHTMLRenderer
from .sanitizer import sanitize_body
from .titles import derive_title, excerpt, shorten

__all__ = [
    "XHTMLRenderer",
    "derive_title",
    "excerpt",
    "find_head",
    "resolve_reading_order",
    "sanitize_body",
    "shorten",
]
