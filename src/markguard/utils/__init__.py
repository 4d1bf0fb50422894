#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markguard/utils/__init__.py
"""Utility modules for markguard package.

This package contains the URL security helpers used by the sanitization policy.
"""

from markguard.utils.security import (
    is_relative_url,
    is_url_scheme_dangerous,
    normalize_url_for_scheme_check,
    sanitize_null_bytes,
)

__all__ = [
    "is_relative_url",
    "is_url_scheme_dangerous",
    "normalize_url_for_scheme_check",
    "sanitize_null_bytes",
]
