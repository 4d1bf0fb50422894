#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markguard/strategy.py
"""Sanitizer strategies selected from host configuration.

A host editor either sanitizes with the built-in policy, delegates to its own
function, or passes markup through. The choice is a tagged union resolved once
by :func:`resolve_sanitizer`; callers never inspect the override at call time.

Every strategy is called the same way::

    strategy = resolve_sanitizer(options)
    safe = strategy(content, as_text=True)

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, ClassVar, Literal, Union

from bs4 import BeautifulSoup
from bs4.element import PageElement

from markguard.options.sanitizer import CustomHtmlSanitizer, SanitizerOptions
from markguard.sanitizer import HtmlSanitizer
from markguard.tree import SoupTreeAdapter, TreeAdapter

logger = logging.getLogger(__name__)

StrategyKind = Literal["builtin", "delegated", "pass-through"]


def _is_tree(content: Any) -> bool:
    return isinstance(content, PageElement) and not isinstance(content, str)


@dataclass(frozen=True)
class BuiltinSanitizer:
    """Sanitize with the built-in policy."""

    sanitizer: HtmlSanitizer = field(default_factory=HtmlSanitizer)
    kind: ClassVar[StrategyKind] = "builtin"

    def __call__(self, content: str | PageElement, as_text: bool = True) -> str | BeautifulSoup:
        return self.sanitizer.sanitize(content, as_text=as_text)


@dataclass(frozen=True)
class DelegatedSanitizer:
    """Hand raw markup to a host-supplied function and return its result unchanged.

    The function always receives text; tree input is serialized first. Its
    return value (text or fragment) is the result, whatever ``as_text`` says.
    """

    func: CustomHtmlSanitizer
    adapter: TreeAdapter = field(default_factory=SoupTreeAdapter)
    kind: ClassVar[StrategyKind] = "delegated"

    def __call__(self, content: str | PageElement, as_text: bool = True) -> str | BeautifulSoup:
        if _is_tree(content):
            content = self.adapter.serialize(self.adapter.adopt(content), as_text=True)
        return self.func(content)


@dataclass(frozen=True)
class PassThroughSanitizer:
    """Return markup unmodified. Use only with trusted content.

    Text stays text and trees stay trees unless ``as_text`` asks for the other
    representation, in which case the adapter converts without filtering.
    """

    adapter: TreeAdapter = field(default_factory=SoupTreeAdapter)
    kind: ClassVar[StrategyKind] = "pass-through"

    def __call__(self, content: str | PageElement, as_text: bool = True) -> str | BeautifulSoup:
        if _is_tree(content):
            root = self.adapter.adopt(content)
            return self.adapter.serialize(root, as_text=as_text)

        if as_text:
            return content
        return self.adapter.parse(content)


SanitizerStrategy = Union[BuiltinSanitizer, DelegatedSanitizer, PassThroughSanitizer]


def resolve_sanitizer(options: SanitizerOptions | None = None) -> SanitizerStrategy:
    """Select the sanitizer strategy for a host configuration.

    Precedence:

    1. ``custom_html_sanitizer`` set: :class:`DelegatedSanitizer`
    2. ``use_default_html_sanitizer`` true: :class:`BuiltinSanitizer`
    3. otherwise: :class:`PassThroughSanitizer`

    Parameters
    ----------
    options : SanitizerOptions, optional
        Host configuration. None uses the defaults (built-in sanitizer).

    Returns
    -------
    SanitizerStrategy
        Callable strategy ``strategy(content, as_text=True)``

    Examples
    --------
        >>> resolve_sanitizer().kind
        'builtin'
        >>> resolve_sanitizer(SanitizerOptions(use_default_html_sanitizer=False)).kind
        'pass-through'

    """
    options = options or SanitizerOptions()

    strategy: SanitizerStrategy
    if options.custom_html_sanitizer is not None:
        strategy = DelegatedSanitizer(options.custom_html_sanitizer)
    elif options.use_default_html_sanitizer:
        strategy = BuiltinSanitizer(HtmlSanitizer(options.policy))
    else:
        logger.warning("HTML sanitization is disabled; markup will be passed through unmodified")
        strategy = PassThroughSanitizer()

    logger.debug("Resolved HTML sanitizer strategy: %s", strategy.kind)
    return strategy


__all__ = [
    "BuiltinSanitizer",
    "DelegatedSanitizer",
    "PassThroughSanitizer",
    "SanitizerStrategy",
    "resolve_sanitizer",
]
