#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for markguard."""

from markguard.options.base import CloneFrozenMixin
from markguard.options.sanitizer import CustomHtmlSanitizer, SanitizerOptions

__all__ = [
    "CloneFrozenMixin",
    "CustomHtmlSanitizer",
    "SanitizerOptions",
]
