"""markguard - Policy-driven HTML sanitization for rich-text and markdown editors.

markguard renders user-authored HTML safely. It parses untrusted markup into a
tree, removes denied elements together with their subtree, strips every
attribute outside the HTML and SVG allowlists, strips URI attributes whose
value starts with a script-executing scheme, and serializes the result.

Key Features
------------
- Immutable, explicitly constructed policies (``SanitizerPolicy``)
- Exact-name and true prefix-wildcard matching, no ad hoc regexes
- Fail-closed: unknown attributes are removed, never reported
- Idempotent output: sanitizing sanitized markup changes nothing
- Host override: delegate to a custom sanitizer or disable sanitization

Requirements
------------
- Python 3.10+
- beautifulsoup4

Examples
--------
Basic usage:

    >>> from markguard import sanitize_html
    >>> sanitize_html('<p onclick="alert(1)">hi</p>')
    '<p>hi</p>'

Custom policy:

    >>> from markguard import HtmlSanitizer, SanitizerPolicy
    >>> policy = SanitizerPolicy(denied_tags=frozenset({"script", "img"}))
    >>> HtmlSanitizer(policy).sanitize('<p>text<img src="a.png"></p>')
    '<p>text</p>'

Host configuration:

    >>> from markguard import SanitizerOptions, resolve_sanitizer
    >>> sanitize = resolve_sanitizer(SanitizerOptions())
    >>> sanitize('<a href="javascript:alert(1)">x</a>')
    '<a>x</a>'

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "markguard requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from markguard.exceptions import MarkguardError, ParsingError, PolicyError, ValidationError
from markguard.filters import AttributeFilter, TagFilter
from markguard.options import SanitizerOptions
from markguard.policy import NameMatcher, SanitizerPolicy, default_policy
from markguard.sanitizer import HtmlSanitizer, sanitize_html, sanitize_html_content, strip_comments
from markguard.strategy import (
    BuiltinSanitizer,
    DelegatedSanitizer,
    PassThroughSanitizer,
    SanitizerStrategy,
    resolve_sanitizer,
)
from markguard.tree import SoupTreeAdapter, TreeAdapter

__all__ = [
    "__version__",
    # Sanitizing
    "HtmlSanitizer",
    "sanitize_html",
    "sanitize_html_content",
    "strip_comments",
    # Policy
    "NameMatcher",
    "SanitizerPolicy",
    "default_policy",
    # Filters and tree
    "TagFilter",
    "AttributeFilter",
    "TreeAdapter",
    "SoupTreeAdapter",
    # Host configuration
    "SanitizerOptions",
    "SanitizerStrategy",
    "BuiltinSanitizer",
    "DelegatedSanitizer",
    "PassThroughSanitizer",
    "resolve_sanitizer",
    # Exceptions
    "MarkguardError",
    "ValidationError",
    "PolicyError",
    "ParsingError",
]
