#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markguard/policy.py
"""Sanitization policy: which tags, attribute names and URI values survive.

The policy is an explicitly constructed, immutable object. Allow and deny
decisions are made with two kinds of matcher and nothing else:

- exact match: the whole name must be a member of a set
- prefix wildcard: the name must start with the prefix AND continue past it

There are no regular expressions, so no rule can accidentally accept names
that merely begin with a safe token (``srcx``, ``hrefs``) or miss names that
a wildcard was meant to cover (``data-anything``).

Examples
--------
    >>> policy = SanitizerPolicy()
    >>> policy.is_allowed_attribute("href")
    True
    >>> policy.is_allowed_attribute("srcx")
    False
    >>> policy.is_allowed_attribute("data-user-id")
    True
    >>> policy.is_dangerous_uri_value("JavaScript:alert(1)")
    True

"""

from __future__ import annotations

import functools
from dataclasses import dataclass, field

from markguard.constants import (
    DANGEROUS_DATA_MEDIA_TYPES,
    DANGEROUS_URI_SCHEMES,
    DEFAULT_CASE_SENSITIVE_NAMES,
    DENIED_TAGS,
    EVENT_HANDLER_PREFIX,
    HTML_ATTRIBUTE_ALLOWLIST,
    HTML_ATTRIBUTE_PREFIXES,
    SVG_ATTRIBUTE_ALLOWLIST,
    URI_BEARING_ATTRIBUTES,
)
from markguard.exceptions import PolicyError
from markguard.options.base import CloneFrozenMixin
from markguard.utils.security import is_url_scheme_dangerous


@dataclass(frozen=True)
class NameMatcher:
    """Match names against an exact set and a set of prefix wildcards.

    Parameters
    ----------
    exact : frozenset of str
        Names accepted only when the whole name is a member.
    prefixes : frozenset of str
        Prefix wildcards. A name matches when it starts with the prefix and has
        at least one more character, so ``data-`` matches ``data-id`` but not
        ``data-`` itself.

    Raises
    ------
    PolicyError
        If a prefix is empty, which would match every name.

    """

    exact: frozenset[str] = frozenset()
    prefixes: frozenset[str] = frozenset()
    _folded_exact: frozenset[str] = field(init=False, repr=False, compare=False)
    _folded_prefixes: frozenset[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        exact = frozenset(self.exact)
        prefixes = frozenset(self.prefixes)
        if any(not prefix for prefix in prefixes):
            raise PolicyError(
                "Empty prefix wildcards are not allowed: they match every name",
                parameter_name="prefixes",
                parameter_value=prefixes,
            )

        object.__setattr__(self, "exact", exact)
        object.__setattr__(self, "prefixes", prefixes)
        object.__setattr__(self, "_folded_exact", frozenset(name.lower() for name in exact))
        object.__setattr__(self, "_folded_prefixes", frozenset(prefix.lower() for prefix in prefixes))

    def matches(self, name: str, case_sensitive: bool = False) -> bool:
        """Return True if ``name`` matches an exact entry or a prefix wildcard."""
        if not isinstance(name, str) or not name:
            return False

        if case_sensitive:
            exact, prefixes = self.exact, self.prefixes
        else:
            name = name.lower()
            exact, prefixes = self._folded_exact, self._folded_prefixes

        if name in exact:
            return True

        return any(len(name) > len(prefix) and name.startswith(prefix) for prefix in prefixes)


@dataclass(frozen=True)
class SanitizerPolicy(CloneFrozenMixin):
    """Immutable sanitization policy.

    Every query is pure and total: any string (including the empty string)
    is a valid argument and unmatched input yields ``False``. Non-string
    input also yields ``False``.

    Parameters
    ----------
    denied_tags : frozenset of str
        Tags removed together with their entire subtree.
    html_attributes : NameMatcher
        HTML attribute allowlist.
    svg_attributes : NameMatcher
        SVG attribute allowlist. Checked for every element, not only for
        elements inside ``<svg>``.
    uri_attributes : NameMatcher
        Attributes whose value is resolved as a URI.
    dangerous_schemes : frozenset of str
        Scheme names that must never start a URI-bearing value.
    dangerous_data_media_types : frozenset of str
        Media types that make a ``data:`` URL dangerous.
    event_handler_prefix : str, default "on"
        Attribute names made of this prefix plus at least one more character
        bind inline event handlers.
    case_sensitive : bool, default False
        Compare tag and attribute names case-sensitively. The default folds
        case, so ``OnClick`` is treated exactly like ``onclick``.

    """

    denied_tags: frozenset[str] = field(
        default=DENIED_TAGS,
        metadata={"help": "Tags removed together with their subtree", "importance": "security"},
    )
    html_attributes: NameMatcher = field(
        default_factory=lambda: NameMatcher(HTML_ATTRIBUTE_ALLOWLIST, HTML_ATTRIBUTE_PREFIXES),
        metadata={"help": "HTML attribute allowlist (exact names and prefix wildcards)", "importance": "security"},
    )
    svg_attributes: NameMatcher = field(
        default_factory=lambda: NameMatcher(SVG_ATTRIBUTE_ALLOWLIST),
        metadata={"help": "SVG attribute allowlist", "importance": "security"},
    )
    uri_attributes: NameMatcher = field(
        default_factory=lambda: NameMatcher(URI_BEARING_ATTRIBUTES),
        metadata={"help": "Attributes whose values are checked for dangerous schemes", "importance": "security"},
    )
    dangerous_schemes: frozenset[str] = field(
        default=DANGEROUS_URI_SCHEMES,
        metadata={"help": "URI schemes stripped from URI-bearing attributes", "importance": "security"},
    )
    dangerous_data_media_types: frozenset[str] = field(
        default=DANGEROUS_DATA_MEDIA_TYPES,
        metadata={"help": "data: URL media types treated as dangerous", "importance": "security"},
    )
    event_handler_prefix: str = field(
        default=EVENT_HANDLER_PREFIX,
        metadata={"help": "Prefix identifying inline event handler attributes", "importance": "advanced"},
    )
    case_sensitive: bool = field(
        default=DEFAULT_CASE_SENSITIVE_NAMES,
        metadata={"help": "Compare tag and attribute names case-sensitively", "importance": "advanced"},
    )
    _folded_denied_tags: frozenset[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Normalize table types and validate the policy.

        Raises
        ------
        PolicyError
            If the event handler prefix is empty.

        """
        if not self.event_handler_prefix:
            raise PolicyError(
                "event_handler_prefix must not be empty",
                parameter_name="event_handler_prefix",
                parameter_value=self.event_handler_prefix,
            )

        object.__setattr__(self, "denied_tags", frozenset(self.denied_tags))
        object.__setattr__(self, "dangerous_schemes", frozenset(s.lower() for s in self.dangerous_schemes))
        object.__setattr__(
            self, "dangerous_data_media_types", frozenset(t.lower() for t in self.dangerous_data_media_types)
        )
        object.__setattr__(self, "_folded_denied_tags", frozenset(tag.lower() for tag in self.denied_tags))

    def is_denied_tag(self, name: str) -> bool:
        """Return True if elements named ``name`` must be removed with their subtree."""
        if not isinstance(name, str) or not name:
            return False
        if self.case_sensitive:
            return name in self.denied_tags
        return name.lower() in self._folded_denied_tags

    def is_allowed_attribute(self, name: str) -> bool:
        """Return True if ``name`` matches the HTML or the SVG allowlist."""
        return self.html_attributes.matches(name, self.case_sensitive) or self.svg_attributes.matches(
            name, self.case_sensitive
        )

    def is_uri_bearing(self, name: str) -> bool:
        """Return True if the value of ``name`` is resolved as a URI."""
        return self.uri_attributes.matches(name, self.case_sensitive)

    def is_dangerous_uri_value(self, value: str) -> bool:
        """Return True if ``value`` starts with a dangerous scheme (case-insensitive)."""
        return is_url_scheme_dangerous(value, self.dangerous_schemes, self.dangerous_data_media_types)

    def is_event_handler_attribute(self, name: str) -> bool:
        """Return True if ``name`` binds an inline event handler (``on`` + event name)."""
        if not isinstance(name, str):
            return False

        prefix = self.event_handler_prefix
        if not self.case_sensitive:
            name, prefix = name.lower(), prefix.lower()

        return len(name) > len(prefix) and name.startswith(prefix)


@functools.lru_cache(maxsize=1)
def default_policy() -> SanitizerPolicy:
    """Return the shared default policy.

    The returned object is immutable and safe to share across threads.
    """
    return SanitizerPolicy()


__all__ = [
    "NameMatcher",
    "SanitizerPolicy",
    "default_policy",
]
