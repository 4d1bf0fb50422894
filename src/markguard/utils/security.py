#  Copyright (c) 2025 Tom Villani, Ph.D.
"""URL security utilities for markguard.

This module inspects attribute values that a browser would resolve as URIs
and decides whether they start with a scheme capable of running script.

Functions
---------
- sanitize_null_bytes: Remove null and zero-width characters
- normalize_url_for_scheme_check: Reduce a URL to the form a browser resolves
- is_relative_url: Check for scheme-less references
- is_url_scheme_dangerous: Check a URL against dangerous schemes
"""

from collections.abc import Iterable

from markguard.constants import (
    DANGEROUS_DATA_MEDIA_TYPES,
    DANGEROUS_NULL_LIKE_CHARS,
    DANGEROUS_URI_SCHEMES,
    URL_IGNORED_WHITESPACE,
)

_URL_IGNORED_TABLE = str.maketrans("", "", URL_IGNORED_WHITESPACE)
_NULL_LIKE_TABLE = str.maketrans("", "", "".join(DANGEROUS_NULL_LIKE_CHARS))
_RELATIVE_PREFIXES = ("#", "/", "./", "../", "?")
# C0 controls and space
_LEADING_CONTROL_CHARS = "".join(chr(c) for c in range(0x21))


def sanitize_null_bytes(content: str) -> str:
    """Drop NUL and zero-width characters from an attribute value.

    They render as nothing, so ``jav\\u200bascript:`` has to be judged as
    ``javascript:``. The removed set is ``DANGEROUS_NULL_LIKE_CHARS``.

    >>> sanitize_null_bytes("java\\x00script:")
    'javascript:'

    """
    if not content:
        return content
    return content.translate(_NULL_LIKE_TABLE)


def normalize_url_for_scheme_check(url: str) -> str:
    """Reduce a URL to the form a browser uses when resolving its scheme.

    Browsers strip leading C0 control characters and spaces, and drop ASCII
    tab, LF and CR anywhere in the URL. Attackers rely on this to write
    ``java&#9;script:`` or ``\\x01javascript:`` past naive prefix checks.

    Parameters
    ----------
    url : str
        Raw attribute value (entities already decoded by the parser)

    Returns
    -------
    str
        Lowercased, normalized URL

    Examples
    --------
    >>> normalize_url_for_scheme_check(" \\tJava\\nScript:alert(1)")
    'javascript:alert(1)'

    """
    url = sanitize_null_bytes(url).translate(_URL_IGNORED_TABLE)
    return url.lstrip(_LEADING_CONTROL_CHARS).lower()


def is_relative_url(url: str) -> bool:
    """Return True for empty values and scheme-less references such as ``#top`` or ``../a``."""
    url = url.strip() if url else ""
    return not url or url.startswith(_RELATIVE_PREFIXES)


def is_url_scheme_dangerous(
    url: str,
    schemes: Iterable[str] = DANGEROUS_URI_SCHEMES,
    data_media_types: Iterable[str] = DANGEROUS_DATA_MEDIA_TYPES,
) -> bool:
    """Check if a URL starts with a dangerous scheme.

    The check is anchored at the start of the normalized value and is
    case-insensitive: ``https://example.com/?q=javascript:`` is safe, while
    ``JaVaScRiPt:alert(1)`` is not.

    Parameters
    ----------
    url : str
        URL to check
    schemes : iterable of str
        Scheme names (without the trailing colon) that are always dangerous
    data_media_types : iterable of str
        Media types that make a ``data:`` URL dangerous

    Returns
    -------
    bool
        True if URL uses a dangerous scheme, False otherwise

    Examples
    --------
    >>> is_url_scheme_dangerous("https://example.com")
    False
    >>> is_url_scheme_dangerous("javascript:alert('xss')")
    True
    >>> is_url_scheme_dangerous("data:text/html,<script>alert('xss')</script>")
    True
    >>> is_url_scheme_dangerous("data:image/png;base64,iVBORw0KGgo=")
    False
    >>> is_url_scheme_dangerous("/relative/path")
    False

    """
    if not isinstance(url, str) or not url:
        return False

    normalized = normalize_url_for_scheme_check(url)
    if is_relative_url(normalized):
        return False

    scheme, sep, rest = normalized.partition(":")
    if not sep:
        return False

    if scheme in {s.lower() for s in schemes}:
        return True

    if scheme == "data":
        media_type = rest.lstrip().split(",", 1)[0].split(";", 1)[0].strip()
        return media_type in {t.lower() for t in data_media_types}

    return False


__all__ = [
    "sanitize_null_bytes",
    "normalize_url_for_scheme_check",
    "is_relative_url",
    "is_url_scheme_dangerous",
]
