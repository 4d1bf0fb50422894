#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the markguard library.

This module centralizes the default sanitization policy tables and the
configuration defaults used across markguard. The tables are plain frozensets;
:mod:`markguard.policy` wraps them into matchers with documented semantics.

Constants are organized by category:
1. Type Definitions - All Literal types and type aliases
2. Tag Policy - Elements removed together with their subtree
3. Attribute Policy - HTML and SVG attribute allowlists
4. URI Policy - URI-bearing attributes and dangerous schemes
5. Sanitizer Defaults - Host configuration defaults
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions - All Literal Types and Type Aliases
# =============================================================================

HtmlPassthroughMode = Literal["pass-through", "escape", "drop", "sanitize"]

# =============================================================================
# Tag Policy
# =============================================================================

# Elements removed with their entire subtree. Children are never promoted.
DENIED_TAGS = frozenset(
    {
        # Script execution
        "script",
        # Embedding and navigation containers
        "iframe",
        "frame",
        "frameset",
        "embed",
        "object",
        "applet",
        # Raw input and form elements
        "textarea",
        "form",
        "button",
        "select",
        "input",
        # Metadata and styling
        "meta",
        "style",
        "link",
        "base",
        "title",
        "details",
        "summary",
        # Raw-text legacy elements (serialize/reparse mismatches)
        "noscript",
        "noembed",
        "noframes",
        "xmp",
        "plaintext",
    }
)

# =============================================================================
# Attribute Policy
# =============================================================================

HTML_ATTRIBUTE_ALLOWLIST = frozenset(
    {
        "abbr",
        "align",
        "alt",
        "axis",
        "bgcolor",
        "border",
        "cellpadding",
        "cellspacing",
        "class",
        "clear",
        "color",
        "cols",
        "compact",
        "coords",
        "dir",
        "face",
        "headers",
        "height",
        "hreflang",
        "hspace",
        "ismap",
        "lang",
        "language",
        "nohref",
        "nowrap",
        "rel",
        "rev",
        "rows",
        "rules",
        "scope",
        "scrolling",
        "shape",
        "size",
        "span",
        "start",
        "summary",
        "tabindex",
        "target",
        "title",
        "type",
        "valign",
        "value",
        "vspace",
        "width",
        "checked",
        "mathvariant",
        "encoding",
        "id",
        "name",
        "background",
        "cite",
        "href",
        "longdesc",
        "src",
        "usemap",
        "xlink:href",
        "style",
    }
)

# Any attribute name that starts with one of these and has at least one more character
HTML_ATTRIBUTE_PREFIXES = frozenset({"data-"})

SVG_ATTRIBUTE_ALLOWLIST = frozenset(
    {
        "accent-height",
        "accumulate",
        "additive",
        "alphabetic",
        "arabic-form",
        "ascent",
        "baseProfile",
        "bbox",
        "begin",
        "by",
        "calcMode",
        "cap-height",
        "class",
        "color",
        "color-rendering",
        "content",
        "cx",
        "cy",
        "d",
        "dx",
        "dy",
        "descent",
        "display",
        "dur",
        "end",
        "fill",
        "fill-rule",
        "font-family",
        "font-size",
        "font-stretch",
        "font-style",
        "font-variant",
        "font-weight",
        "from",
        "fx",
        "fy",
        "g1",
        "g2",
        "glyph-name",
        "gradientUnits",
        "hanging",
        "height",
        "horiz-adv-x",
        "horiz-origin-x",
        "ideographic",
        "k",
        "keyPoints",
        "keySplines",
        "keyTimes",
        "lang",
        "marker-end",
        "marker-mid",
        "marker-start",
        "markerHeight",
        "markerUnits",
        "markerWidth",
        "mathematical",
        "max",
        "min",
        "offset",
        "opacity",
        "orient",
        "origin",
        "overline-position",
        "overline-thickness",
        "panose-1",
        "path",
        "pathLength",
        "points",
        "preserveAspectRatio",
        "r",
        "refX",
        "refY",
        "repeatCount",
        "repeatDur",
        "requiredExtensions",
        "requiredFeatures",
        "restart",
        "rotate",
        "rx",
        "ry",
        "slope",
        "stemh",
        "stemv",
        "stop-color",
        "stop-opacity",
        "strikethrough-position",
        "strikethrough-thickness",
        "stroke",
        "stroke-dasharray",
        "stroke-dashoffset",
        "stroke-linecap",
        "stroke-linejoin",
        "stroke-miterlimit",
        "stroke-opacity",
        "stroke-width",
        "systemLanguage",
        "target",
        "text-anchor",
        "to",
        "transform",
        "type",
        "u1",
        "u2",
        "underline-position",
        "underline-thickness",
        "unicode",
        "unicode-range",
        "units-per-em",
        "values",
        "version",
        "viewBox",
        "visibility",
        "width",
        "widths",
        "x",
        "x-height",
        "x1",
        "x2",
        "xlink:actuate",
        "xlink:arcrole",
        "xlink:role",
        "xlink:show",
        "xlink:title",
        "xlink:type",
        "xml:base",
        "xml:lang",
        "xml:space",
        "xmlns",
        "xmlns:xlink",
        "y",
        "y1",
        "y2",
        "zoomAndPan",
    }
)

# Inline event handlers are "on" followed by the event name
EVENT_HANDLER_PREFIX = "on"

# =============================================================================
# URI Policy
# =============================================================================

# Attributes whose value is resolved as a navigable or resource-loading URI
URI_BEARING_ATTRIBUTES = frozenset(
    {
        "href",
        "src",
        "background",
        "xlink:href",
        "cite",
        "longdesc",
        "usemap",
        "xml:base",
        "action",
        "formaction",
        "poster",
    }
)

# Scheme names (without the colon) that must never start a URI-bearing value.
# "x" is a bare single-letter scheme used to obfuscate payloads.
DANGEROUS_URI_SCHEMES = frozenset({"javascript", "vbscript", "livescript", "x"})

# data: URLs with these media types render or execute active content
DANGEROUS_DATA_MEDIA_TYPES = frozenset(
    {
        "text/html",
        "text/javascript",
        "application/javascript",
        "application/x-javascript",
        "image/svg+xml",
    }
)

# Characters removed from a URI value before its scheme is inspected
DANGEROUS_NULL_LIKE_CHARS = [
    "\x00",  # NULL
    "\ufeff",  # BOM/Zero Width No-Break Space
    "\u200b",  # Zero Width Space
    "\u200c",  # Zero Width Non-Joiner
    "\u200d",  # Zero Width Joiner
    "\u2060",  # Word Joiner
]

# Browsers drop ASCII tab and newlines anywhere inside a URL
URL_IGNORED_WHITESPACE = "\t\n\r"

# =============================================================================
# Sanitizer Defaults
# =============================================================================

DEFAULT_USE_HTML_SANITIZER = True
DEFAULT_CASE_SENSITIVE_NAMES = False
DEFAULT_HTML_PASSTHROUGH_MODE: HtmlPassthroughMode = "sanitize"
HTML_PASSTHROUGH_MODES = ["pass-through", "escape", "drop", "sanitize"]

# Tree adapter
DEFAULT_HTML_PARSER = "html.parser"
COMMENT_PATTERN = r"<!--[\s\S]*?-->"
