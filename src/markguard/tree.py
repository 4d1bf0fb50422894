#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markguard/tree.py
"""Tree adapters: the boundary between the sanitizer and a concrete markup tree.

The filters in :mod:`markguard.filters` never touch a tree directly. They go
through a :class:`TreeAdapter`, which parses text into a mutable tree, finds
and removes nodes, edits attributes and serializes the result.

:class:`SoupTreeAdapter` is the default implementation, backed by
BeautifulSoup with the standard library ``html.parser`` builder.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from bs4 import BeautifulSoup
from bs4.builder import HTMLTreeBuilder, ParserRejectedMarkup
from bs4.dammit import EntitySubstitution
from bs4.element import PageElement, PreformattedString, Tag
from bs4.formatter import HTMLFormatter

from markguard.constants import DEFAULT_HTML_PARSER
from markguard.exceptions import ParsingError

logger = logging.getLogger(__name__)


class FragmentFormatter(HTMLFormatter):
    """HTML formatter that writes attributes in document order.

    The stock formatter sorts attributes by name.
    """

    def attributes(self, tag: Tag):
        if tag.attrs is None:
            return []
        return list(tag.attrs.items())


# Void elements are written as <img>, and only &, < and > are escaped
FRAGMENT_FORMATTER = FragmentFormatter(
    entity_substitution=EntitySubstitution.substitute_xml,
    void_element_close_prefix=None,
)

# Whitespace the tree builder collapses when a text run contains nothing else
_ASCII_SPACES = "\x20\x0a\x09\x0c\x0d"

_LIVE_HANDLERS_KEY = "_markguard_live_handlers"


class TreeAdapter(ABC):
    """Abstract tree primitives consumed by the sanitizer.

    Implementations must make ``remove`` and ``remove_attribute`` no-ops when
    the target is already gone; filters rely on that to stay error free.
    """

    @abstractmethod
    def parse(self, text: str) -> Any:
        """Parse markup text into a new root container.

        Raises
        ------
        ParsingError
            If the markup cannot be turned into a tree

        """
        raise NotImplementedError

    @abstractmethod
    def adopt(self, node: Any) -> Any:
        """Move an existing node or fragment into a new root container."""
        raise NotImplementedError

    @abstractmethod
    def find_all(self, root: Any, match: Callable[[str], bool] | None = None) -> list[Any]:
        """Return every element under ``root`` whose tag name satisfies ``match``.

        With ``match=None`` every element is returned.
        """
        raise NotImplementedError

    @abstractmethod
    def remove(self, node: Any) -> None:
        """Remove ``node`` together with its entire subtree."""
        raise NotImplementedError

    @abstractmethod
    def list_attributes(self, node: Any) -> list[tuple[str, str]]:
        """Return a snapshot of ``(name, value)`` pairs for ``node``."""
        raise NotImplementedError

    @abstractmethod
    def remove_attribute(self, node: Any, name: str) -> None:
        """Remove attribute ``name`` from ``node`` if present."""
        raise NotImplementedError

    @abstractmethod
    def clear_live_handler(self, node: Any, name: str) -> None:
        """Clear a runtime event-handler binding for ``name`` on ``node``."""
        raise NotImplementedError

    @abstractmethod
    def remove_comments(self, root: Any) -> int:
        """Remove every comment-like node under ``root`` and return how many were removed.

        Comment-like nodes are comments, CDATA and marked sections,
        processing instructions and declarations.
        """
        raise NotImplementedError

    @abstractmethod
    def normalize(self, root: Any) -> None:
        """Put the text nodes under ``root`` in the form a fresh parse would produce."""
        raise NotImplementedError

    @abstractmethod
    def serialize(self, root: Any, as_text: bool = True) -> Any:
        """Return ``root`` as markup text, or the root container itself."""
        raise NotImplementedError


class SoupTreeAdapter(TreeAdapter):
    """BeautifulSoup implementation of :class:`TreeAdapter`.

    Attribute values are always plain strings: trees are parsed with
    ``multi_valued_attributes=None``, and list values on adopted trees are
    joined with spaces when listed.

    Live handler bindings model runtime callbacks attached to an element
    independently of its textual attributes (for example by an editor view
    that wires ``onclick`` directly on the node). They are stored on the
    element object, not in ``Tag.attrs``, so serialization never shows them.

    Parameters
    ----------
    parser : str, default "html.parser"
        BeautifulSoup tree builder used by ``parse`` and ``adopt``.

    Examples
    --------
        >>> adapter = SoupTreeAdapter()
        >>> root = adapter.parse('<p class="x">hi</p>')
        >>> adapter.list_attributes(root.p)
        [('class', 'x')]
        >>> adapter.serialize(root)
        '<p class="x">hi</p>'

    """

    def __init__(self, parser: str = DEFAULT_HTML_PARSER):
        self.parser = parser

    def _new_root(self, markup: str = "") -> BeautifulSoup:
        return BeautifulSoup(markup, self.parser, multi_valued_attributes=None)

    def parse(self, text: str) -> BeautifulSoup:
        try:
            return self._new_root(text)
        except (ParserRejectedMarkup, AssertionError) as e:
            logger.debug("Parser %r rejected markup: %s", self.parser, e)
            raise ParsingError(
                f"Markup could not be parsed: {e}",
                parsing_stage="tree_construction",
                original_error=e,
            ) from e

    def adopt(self, node: PageElement) -> BeautifulSoup:
        root = self._new_root()
        root.append(node)
        return root

    def find_all(self, root: Tag, match: Callable[[str], bool] | None = None) -> list[Tag]:
        if match is None:
            return list(root.find_all(True))
        return list(root.find_all(lambda tag: match(tag.name)))

    def remove(self, node: PageElement) -> None:
        if getattr(node, "decomposed", False) or node.parent is None:
            return
        node.decompose()

    def list_attributes(self, node: Tag) -> list[tuple[str, str]]:
        attributes = []
        for name, value in node.attrs.items():
            if isinstance(value, (list, tuple)):
                value = " ".join(str(v) for v in value)
            elif value is None:
                value = ""
            attributes.append((name, str(value)))
        return attributes

    def remove_attribute(self, node: Tag, name: str) -> None:
        node.attrs.pop(name, None)

    def bind_handler(self, node: Tag, name: str, handler: Callable[..., Any]) -> None:
        """Attach a live event-handler binding to ``node``."""
        node.__dict__.setdefault(_LIVE_HANDLERS_KEY, {})[name] = handler

    def live_handlers(self, node: Tag) -> dict[str, Callable[..., Any]]:
        """Return a copy of the live event-handler bindings on ``node``."""
        return dict(node.__dict__.get(_LIVE_HANDLERS_KEY, {}))

    def clear_live_handler(self, node: Tag, name: str) -> None:
        handlers = node.__dict__.get(_LIVE_HANDLERS_KEY)
        if not handlers:
            return
        # Bindings may have been registered under a different case than the parsed name
        for bound_name in [key for key in handlers if key.lower() == name.lower()]:
            del handlers[bound_name]

    def remove_comments(self, root: Tag) -> int:
        # Comment, CData, Declaration, Doctype and ProcessingInstruction are all
        # written out verbatim, so none of them may survive
        specials = list(root.find_all(string=lambda text: isinstance(text, PreformattedString)))
        for special in specials:
            special.extract()
        return len(specials)

    def normalize(self, root: Tag) -> None:
        """Merge adjacent text nodes and collapse whitespace-only text.

        Removing nodes can leave neighbouring strings that serialize as one
        run. The tree builder turns a run of ASCII whitespace into a single
        newline (or space) outside ``pre`` and ``textarea``, so the same is
        done here to make serialized output parse back to an identical tree.
        """
        root.smooth()
        preserve = HTMLTreeBuilder.DEFAULT_PRESERVE_WHITESPACE_TAGS
        for string in list(root.find_all(string=True)):
            if isinstance(string, PreformattedString) or not string:
                continue
            if string.strip(_ASCII_SPACES):
                continue
            if any(parent.name in preserve for parent in string.parents):
                continue
            collapsed = "\n" if "\n" in string else " "
            if string != collapsed:
                string.replace_with(type(string)(collapsed))

    def serialize(self, root: BeautifulSoup, as_text: bool = True) -> str | BeautifulSoup:
        if not as_text:
            return root
        return root.decode(formatter=FRAGMENT_FORMATTER)


__all__ = [
    "FRAGMENT_FORMATTER",
    "FragmentFormatter",
    "TreeAdapter",
    "SoupTreeAdapter",
]
