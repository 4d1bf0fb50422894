#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markguard/sanitizer.py
"""HTML sanitization for editor output.

This module provides the sanitizer facade used to render user-authored HTML
safely. The pipeline runs strictly one way::

    raw text -> strip comments -> parse -> TagFilter -> AttributeFilter -> normalize -> serialize

Input may also be an already constructed BeautifulSoup tree or node, which
skips the comment-stripping and parsing steps.

The sanitizer is default-deny. Attributes outside the allowlists are removed
silently, which means legitimate but rare attributes are lost as well. That
tradeoff is intentional.

The module also supports the HTML passthrough strategies used when rendering
raw HTML blocks:
- pass-through: No sanitization (use only with trusted content)
- escape: HTML-escape all content
- drop: Remove HTML nodes entirely
- sanitize: Remove dangerous elements/attributes but preserve safe HTML
"""

from __future__ import annotations

import html
import logging
import re
from typing import Any

from bs4 import BeautifulSoup
from bs4.element import PageElement

from markguard.constants import COMMENT_PATTERN, HTML_PASSTHROUGH_MODES, HtmlPassthroughMode
from markguard.exceptions import ValidationError
from markguard.filters import AttributeFilter, TagFilter
from markguard.policy import SanitizerPolicy, default_policy
from markguard.tree import SoupTreeAdapter, TreeAdapter

logger = logging.getLogger(__name__)

_COMMENT_RE = re.compile(COMMENT_PATTERN)


def strip_comments(text: str) -> str:
    """Remove every ``<!-- ... -->`` span from raw markup.

    Parameters
    ----------
    text : str
        Raw markup

    Returns
    -------
    str
        Markup without comment spans

    Examples
    --------
    >>> strip_comments("<p>a<!-- hidden -->b</p>")
    '<p>ab</p>'

    """
    return _COMMENT_RE.sub("", text)


class HtmlSanitizer:
    """Policy-driven HTML sanitizer.

    A sanitizer holds only immutable configuration, so one instance may be
    shared by concurrent callers. Every call to :meth:`sanitize` builds and
    owns its own tree.

    Parameters
    ----------
    policy : SanitizerPolicy, optional
        Sanitization policy. Defaults to :func:`~markguard.policy.default_policy`.
    adapter : TreeAdapter, optional
        Tree primitives. Defaults to :class:`~markguard.tree.SoupTreeAdapter`.

    Examples
    --------
        >>> sanitizer = HtmlSanitizer()
        >>> sanitizer.sanitize('<p onclick="alert(1)">hi</p>')
        '<p>hi</p>'
        >>> sanitizer.sanitize('<img src="javascript:alert(1)">')
        '<img>'
        >>> sanitizer.sanitize('<script>alert(1)</script><p>safe</p>')
        '<p>safe</p>'

    """

    def __init__(self, policy: SanitizerPolicy | None = None, adapter: TreeAdapter | None = None):
        self.policy = policy or default_policy()
        self.adapter = adapter or SoupTreeAdapter()
        self.tag_filter = TagFilter(self.policy, self.adapter)
        self.attribute_filter = AttributeFilter(self.policy, self.adapter)

    def build_tree(self, content: str | PageElement) -> Any:
        """Turn raw markup or an existing node into a root container owned by this call.

        Raises
        ------
        ValidationError
            If ``content`` is neither a string nor a tree node
        ParsingError
            If the markup cannot be parsed

        """
        if isinstance(content, str) and not isinstance(content, PageElement):
            return self.adapter.parse(strip_comments(content))

        if isinstance(content, PageElement):
            return self.adapter.adopt(content)

        raise ValidationError(
            f"Cannot sanitize content of type '{type(content).__name__}'; expected str or a markup tree",
            parameter_name="content",
            parameter_value=type(content),
        )

    def sanitize(self, content: str | PageElement, as_text: bool = True) -> str | BeautifulSoup:
        """Sanitize markup text or a markup tree.

        Parameters
        ----------
        content : str or bs4 node
            Raw markup text, or a BeautifulSoup tree/node. A node is moved out
            of its current tree into the sanitizer's own root container.
        as_text : bool, default True
            Return serialized markup when True, the sanitized root container
            (a tree fragment) when False.

        Returns
        -------
        str or BeautifulSoup
            Sanitized markup text or fragment

        Raises
        ------
        ParsingError
            If raw markup cannot be parsed. Nothing is returned in that case.
        ValidationError
            If ``content`` has an unsupported type

        """
        root = self.build_tree(content)

        comments = self.adapter.remove_comments(root)
        if comments:
            logger.debug("Removed %d comment, CDATA, declaration or processing instruction node(s)", comments)

        self.tag_filter.apply(root)
        self.attribute_filter.apply(root)
        self.adapter.normalize(root)

        return self.adapter.serialize(root, as_text)

    __call__ = sanitize


def sanitize_html(
    content: str | PageElement, as_text: bool = True, policy: SanitizerPolicy | None = None
) -> str | BeautifulSoup:
    """Sanitize markup with the default tree adapter.

    Parameters
    ----------
    content : str or bs4 node
        Raw markup text or a BeautifulSoup tree/node
    as_text : bool, default True
        Return text when True, a tree fragment when False
    policy : SanitizerPolicy, optional
        Policy to apply. Defaults to the shared default policy.

    Returns
    -------
    str or BeautifulSoup
        Sanitized markup

    Examples
    --------
    >>> sanitize_html('<a href="https://example.com" data-custom="x">link</a>')
    '<a href="https://example.com" data-custom="x">link</a>'

    """
    return HtmlSanitizer(policy).sanitize(content, as_text=as_text)


def sanitize_html_content(content: str, mode: HtmlPassthroughMode = "sanitize") -> str:
    """Process raw HTML content according to a passthrough mode.

    This function is designed for renderers emitting raw HTML blocks that
    came from user-authored markdown.

    Parameters
    ----------
    content : str
        HTML content
    mode : {"pass-through", "escape", "drop", "sanitize"}, default "sanitize"
        - "pass-through": Return content unchanged (for trusted sources)
        - "escape": HTML-escape all content
        - "drop": Return empty string (remove all HTML)
        - "sanitize": Remove denied elements and disallowed attributes

    Returns
    -------
    str
        Processed HTML content

    Raises
    ------
    ValidationError
        If ``mode`` is not one of the supported modes

    Examples
    --------
    >>> sanitize_html_content("<script>alert('xss')</script>", mode="escape")
    '&lt;script&gt;alert(&#x27;xss&#x27;)&lt;/script&gt;'

    >>> sanitize_html_content("<script>alert('xss')</script>", mode="drop")
    ''

    >>> sanitize_html_content("<p>Hello <strong>world</strong></p>", mode="sanitize")
    '<p>Hello <strong>world</strong></p>'

    """
    if mode == "pass-through":
        return content

    if mode == "escape":
        return html.escape(content)

    if mode == "drop":
        return ""

    if mode == "sanitize":
        return sanitize_html(content, as_text=True)

    raise ValidationError(
        f"Unknown HTML passthrough mode '{mode}'. Expected one of: {', '.join(HTML_PASSTHROUGH_MODES)}",
        parameter_name="mode",
        parameter_value=mode,
    )


__all__ = [
    "HtmlSanitizer",
    "sanitize_html",
    "sanitize_html_content",
    "strip_comments",
]
