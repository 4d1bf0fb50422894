#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markguard/filters.py
"""Tree filters applied by the sanitizer, in order.

1. :class:`TagFilter` removes denied elements together with their subtree.
2. :class:`AttributeFilter` strips every attribute the policy does not keep.

Both filters mutate the tree in place through a :class:`~markguard.tree.TreeAdapter`
and return how many nodes or attributes they removed.
"""

from __future__ import annotations

import logging
from typing import Any

from markguard.policy import SanitizerPolicy, default_policy
from markguard.tree import SoupTreeAdapter, TreeAdapter

logger = logging.getLogger(__name__)


class TagFilter:
    """Remove every denied element, anywhere in the tree, with its subtree.

    Children of a denied element are discarded along with it rather than
    re-parented. A denied element nested inside another denied element is
    removed once, as part of its ancestor; visiting it afterwards is a no-op.

    Parameters
    ----------
    policy : SanitizerPolicy, optional
        Policy supplying ``is_denied_tag``. Defaults to :func:`default_policy`.
    adapter : TreeAdapter, optional
        Tree primitives. Defaults to :class:`SoupTreeAdapter`.

    """

    def __init__(self, policy: SanitizerPolicy | None = None, adapter: TreeAdapter | None = None):
        self.policy = policy or default_policy()
        self.adapter = adapter or SoupTreeAdapter()

    def apply(self, root: Any) -> int:
        """Remove denied elements under ``root``.

        Parameters
        ----------
        root : Any
            Root container produced by the tree adapter

        Returns
        -------
        int
            Number of denied elements found (nested ones included)

        """
        denied = self.adapter.find_all(root, self.policy.is_denied_tag)
        for node in denied:
            self.adapter.remove(node)

        if denied:
            logger.debug("Removed %d denied element(s)", len(denied))
        return len(denied)


class AttributeFilter:
    """Strip attributes outside the allowlists and URI attributes with dangerous values.

    For every attribute of every element the decision is::

        allowed = policy.is_allowed_attribute(name)
        suspicious = allowed and policy.is_uri_bearing(name) and policy.is_dangerous_uri_value(value)
        strip = not allowed or suspicious

    Decisions are attribute-local: stripping one attribute never changes the
    decision for another attribute on the same element. When a stripped
    attribute is an event handler, any live binding for it is cleared as well.

    Parameters
    ----------
    policy : SanitizerPolicy, optional
        Policy supplying the attribute queries. Defaults to :func:`default_policy`.
    adapter : TreeAdapter, optional
        Tree primitives. Defaults to :class:`SoupTreeAdapter`.

    Examples
    --------
        >>> attribute_filter = AttributeFilter()
        >>> attribute_filter.should_strip("href", "https://example.com")
        False
        >>> attribute_filter.should_strip("href", "javascript:alert(1)")
        True
        >>> attribute_filter.should_strip("onclick", "alert(1)")
        True

    """

    def __init__(self, policy: SanitizerPolicy | None = None, adapter: TreeAdapter | None = None):
        self.policy = policy or default_policy()
        self.adapter = adapter or SoupTreeAdapter()

    def should_strip(self, name: str, value: str) -> bool:
        """Return True if the attribute ``name=value`` must be removed."""
        allowed = self.policy.is_allowed_attribute(name)
        suspicious = allowed and self.policy.is_uri_bearing(name) and self.policy.is_dangerous_uri_value(value)
        return not allowed or suspicious

    def filter_node(self, node: Any) -> list[str]:
        """Strip disallowed attributes from a single element.

        Returns
        -------
        list of str
            Names of the stripped attributes, in document order

        """
        stripped = []
        for name, value in self.adapter.list_attributes(node):
            if not self.should_strip(name, value):
                continue

            self.adapter.remove_attribute(node, name)
            if self.policy.is_event_handler_attribute(name):
                self.adapter.clear_live_handler(node, name)
            stripped.append(name)

        return stripped

    def apply(self, root: Any) -> int:
        """Strip disallowed attributes from every element under ``root``.

        Returns
        -------
        int
            Total number of attributes stripped

        """
        total = 0
        for node in self.adapter.find_all(root):
            stripped = self.filter_node(node)
            if stripped:
                logger.debug("Stripped attribute(s) %s from <%s>", ", ".join(stripped), getattr(node, "name", "?"))
                total += len(stripped)
        return total


__all__ = [
    "TagFilter",
    "AttributeFilter",
]
