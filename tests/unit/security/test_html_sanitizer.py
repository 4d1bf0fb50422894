#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the HTML sanitizer facade.

This module tests the security-critical behaviour of markguard.sanitizer:
denied-element subtree removal, attribute stripping, dangerous URI handling,
comment removal, tree input and the passthrough modes.
"""

import logging

import pytest
from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup
from bs4.element import CData, Declaration, ProcessingInstruction

from markguard.exceptions import ParsingError, ValidationError
from markguard.policy import SanitizerPolicy
from markguard.sanitizer import HtmlSanitizer, sanitize_html, sanitize_html_content, strip_comments


@pytest.mark.unit
@pytest.mark.security
class TestEditorScenarios:
    """Test suite for the reference editor scenarios."""

    def test_event_handler_stripped(self, sanitizer):
        """Test that an inline event handler is removed and the text kept."""
        assert sanitizer.sanitize('<p onclick="alert(1)">hi</p>') == "<p>hi</p>"

    def test_dangerous_src_stripped(self, sanitizer):
        """Test that a javascript: src is removed while the allowed img stays."""
        assert sanitizer.sanitize('<img src="javascript:alert(1)">') == "<img>"

    def test_script_subtree_removed(self, sanitizer):
        """Test that a script element disappears with its content."""
        assert sanitizer.sanitize("<script>alert(1)</script><p>safe</p>") == "<p>safe</p>"

    def test_link_with_data_attribute(self, sanitizer):
        """Test that a safe href and a data- attribute are both kept."""
        content = '<a href="https://example.com" data-custom="x">link</a>'
        assert sanitizer.sanitize(content) == content

    def test_attribute_order_kept(self, sanitizer):
        """Test that surviving attributes keep their document order."""
        content = '<a title="t" href="/x" class="c">x</a>'
        assert sanitizer.sanitize(content) == content

    def test_svg_attributes(self, sanitizer):
        """Test that SVG allowlisted attributes survive and event handlers do not."""
        result = sanitizer.sanitize('<svg><circle cx="1" fill="red" onmouseover="x()"/></svg>')
        soup = BeautifulSoup(result, "html.parser")
        assert soup.svg is not None
        assert soup.circle.attrs == {"cx": "1", "fill": "red"}


@pytest.mark.unit
@pytest.mark.security
class TestDeniedElements:
    """Test suite for denied element removal."""

    def test_deep_subtree_removed(self, sanitizer):
        """Test that descendants of a denied element are never promoted."""
        content = "<div><ul><li><object><p><b>inner</b></p></object></li></ul></div>"
        assert sanitizer.sanitize(content) == "<div><ul><li></li></ul></div>"

    def test_nested_denied_elements(self, sanitizer):
        """Test denied elements nested in denied elements."""
        content = "<form><select><option>a</option></select><textarea>b</textarea></form><p>c</p>"
        assert sanitizer.sanitize(content) == "<p>c</p>"

    @pytest.mark.parametrize(
        "content",
        [
            '<iframe src="https://evil.example"></iframe>',
            '<embed src="x.swf">',
            '<object data="x.swf"><param name="a" value="b"></object>',
            '<meta http-equiv="refresh" content="0;url=javascript:alert(1)">',
            '<link rel="stylesheet" href="evil.css">',
            "<style>body { background: red }</style>",
            "<title>t</title>",
            "<details><summary>s</summary>hidden</details>",
            '<input type="text" value="x">',
            "<button>b</button>",
        ],
    )
    def test_denied_elements_removed(self, sanitizer, content):
        """Test that each denied element is removed entirely."""
        assert sanitizer.sanitize(f"<p>before</p>{content}<p>after</p>") == "<p>before</p><p>after</p>"

    def test_uppercase_tags(self, sanitizer):
        """Test that tag case does not matter."""
        assert sanitizer.sanitize("<SCRIPT>alert(1)</SCRIPT><P>x</P>") == "<p>x</p>"


@pytest.mark.unit
@pytest.mark.security
class TestAttributeStripping:
    """Test suite for attribute stripping."""

    def test_lookalike_attribute_stripped(self, sanitizer):
        """Test that names merely starting with an allowed name are removed."""
        assert sanitizer.sanitize('<img srcx="a.png" src="b.png">') == '<img src="b.png">'

    def test_unknown_attributes_stripped(self, sanitizer):
        """Test fail-closed handling of unknown attributes."""
        assert sanitizer.sanitize('<a ping="https://t.example" href="/x">x</a>') == '<a href="/x">x</a>'

    def test_style_attribute_kept(self, sanitizer):
        """Test that inline style is allowed."""
        assert sanitizer.sanitize('<p style="color: red">x</p>') == '<p style="color: red">x</p>'

    def test_query_string_containing_scheme_kept(self, sanitizer):
        """Test that scheme detection is anchored at the start of the value."""
        content = '<a href="https://example.com/?next=javascript:alert(1)">x</a>'
        assert sanitizer.sanitize(content) == content

    def test_non_uri_attribute_with_scheme_text_kept(self, sanitizer):
        """Test that only URI-bearing attributes are value-checked."""
        content = '<abbr title="javascript:alert(1)">x</abbr>'
        assert sanitizer.sanitize(content) == content

    @pytest.mark.parametrize(
        "href",
        [
            "javascript:alert(1)",
            "JaVaScRiPt:alert(1)",
            "&#106;avascript:alert(1)",
            "&#x6A;avascript:alert(1)",
            "javascript&colon;alert(1)",
            "java&#9;script:alert(1)",
            "java&#10;script:alert(1)",
            "&#1;javascript:alert(1)",
            "  javascript:alert(1)",
            "vbscript:msgbox(1)",
            "data:text/html;base64,PHNjcmlwdD5hbGVydCgxKTwvc2NyaXB0Pg==",
        ],
    )
    def test_obfuscated_schemes_stripped(self, sanitizer, href):
        """Test that entity and whitespace obfuscated schemes are still caught."""
        assert sanitizer.sanitize(f'<a href="{href}">x</a>') == "<a>x</a>"

    def test_xlink_href_stripped(self, sanitizer):
        """Test that xlink:href is treated as URI-bearing."""
        result = sanitizer.sanitize('<svg><a xlink:href="javascript:alert(1)"><text>x</text></a></svg>')
        soup = BeautifulSoup(result, "html.parser")
        assert "xlink:href" not in soup.find("a").attrs

    def test_safe_data_image_kept(self, sanitizer):
        """Test that raster data URLs are not treated as dangerous."""
        content = '<img src="data:image/png;base64,iVBORw0KGgo=">'
        assert sanitizer.sanitize(content) == content


@pytest.mark.unit
@pytest.mark.security
class TestComments:
    """Test suite for comment removal."""

    def test_strip_comments(self):
        """Test the raw comment stripping helper."""
        assert strip_comments("a<!-- x -->b<!--\nmulti\nline-->c") == "abc"

    def test_comments_removed(self, sanitizer):
        """Test that comments never reach the output."""
        assert sanitizer.sanitize("<p>a<!-- secret -->b</p>") == "<p>ab</p>"

    def test_conditional_comment_removed(self, sanitizer):
        """Test that markup hidden in conditional comments is removed."""
        assert sanitizer.sanitize("<!--[if IE]><script>alert(1)</script><![endif]--><p>x</p>") == "<p>x</p>"

    def test_comment_nodes_in_tree_removed(self, sanitizer):
        """Test that comment nodes in tree input are removed too."""
        soup = BeautifulSoup("<div><!-- hidden --><p>x</p></div>", "html.parser")
        assert sanitizer.sanitize(soup) == "<div><p>x</p></div>"


@pytest.mark.unit
@pytest.mark.security
class TestSpecialNodes:
    """Test suite for CDATA, marked sections, processing instructions and declarations."""

    @pytest.mark.parametrize(
        "content",
        [
            "<![CDATA[><img src=x onerror=alert(1)>]]>",
            "<![ignore[><img src=x onerror=alert(1)>]]>",
            "<?x <img src=x onerror=alert(1)>?>",
            '<?xml-stylesheet href="javascript:alert(1)"?>',
        ],
    )
    def test_hidden_markup_removed(self, sanitizer, content):
        """Test that markup smuggled inside verbatim nodes never reaches the output."""
        try:
            result = sanitizer.sanitize(content)
        except ParsingError:
            return
        assert "onerror" not in result
        assert "alert" not in result
        assert "<!" not in result
        assert "<?" not in result

    def test_doctype_removed(self, sanitizer):
        """Test that a doctype is not written back out."""
        assert sanitizer.sanitize("<!DOCTYPE html><p>x</p>") == "<p>x</p>"

    def test_special_nodes_in_tree_removed(self, sanitizer):
        """Test that verbatim nodes added to tree input are removed."""
        soup = BeautifulSoup("<div><p>x</p></div>", "html.parser")
        soup.div.append(CData("><img src=x onerror=alert(1)>"))
        soup.div.append(ProcessingInstruction("x <img src=x onerror=alert(1)>"))
        soup.div.append(Declaration("ignore[<img src=x onerror=alert(1)>"))
        assert sanitizer.sanitize(soup) == "<div><p>x</p></div>"

    def test_idempotent(self, sanitizer):
        """Test that sanitized output containing former special nodes is a fixed point."""
        once = sanitizer.sanitize("<p>a</p><![CDATA[x]]><?pi y?><!DOCTYPE html><p>b</p>")
        assert "<p>a</p>" in once
        assert sanitizer.sanitize(once) == once


@pytest.mark.unit
class TestWhitespace:
    """Test suite for whitespace left behind by removed nodes."""

    def test_removed_element_between_newlines(self, sanitizer):
        """Test that the newlines around a removed element collapse to one."""
        result = sanitizer.sanitize("<p>a</p>\n<script>x()</script>\n<p>b</p>")
        assert result == "<p>a</p>\n<p>b</p>"
        assert sanitizer.sanitize(result) == result

    def test_removed_element_between_spaces(self, sanitizer):
        """Test that spaces and tabs around a removed element collapse to a space."""
        result = sanitizer.sanitize("<p>a</p> <iframe></iframe>\t<p>b</p>")
        assert result == "<p>a</p> <p>b</p>"

    def test_removed_comment_between_text(self, sanitizer):
        """Test that text on both sides of a removed node is joined."""
        soup = BeautifulSoup("<p>a<!-- x -->  b</p>", "html.parser")
        assert sanitizer.sanitize(soup) == "<p>a  b</p>"

    def test_pre_whitespace_preserved(self, sanitizer):
        """Test that whitespace inside pre is kept as written."""
        result = sanitizer.sanitize("<pre><b>a</b>  <script>x</script>\n<b>b</b></pre>")
        assert result == "<pre><b>a</b>  \n<b>b</b></pre>"
        assert sanitizer.sanitize(result) == result

    def test_tree_and_text_agree(self, sanitizer):
        """Test that a document sanitizes the same way as text and as a tree."""
        markup = "<div>\n  <p>a</p>\n  <iframe></iframe>\n  <p>b</p>\n</div>"
        expected = "<div>\n<p>a</p>\n<p>b</p>\n</div>"
        assert sanitizer.sanitize(markup) == expected
        assert sanitizer.sanitize(BeautifulSoup(markup, "html.parser")) == expected


@pytest.mark.unit
@pytest.mark.security
class TestTreeInput:
    """Test suite for sanitizing existing trees."""

    def test_tree_to_text(self, sanitizer):
        """Test that a parsed document is sanitized like its markup."""
        soup = BeautifulSoup('<div onclick="x"><script>y</script><p>ok</p></div>', "html.parser")
        assert sanitizer.sanitize(soup) == "<div><p>ok</p></div>"

    def test_node_input(self, sanitizer):
        """Test that a single node can be sanitized."""
        soup = BeautifulSoup('<section><p onclick="x">a</p><p>b</p></section>', "html.parser")
        assert sanitizer.sanitize(soup.p) == "<p>a</p>"

    def test_fragment_output(self, sanitizer):
        """Test that as_text=False returns a sanitized tree."""
        result = sanitizer.sanitize('<p onclick="x">a<script>b</script></p>', as_text=False)
        assert isinstance(result, BeautifulSoup)
        assert result.find("script") is None
        assert result.p.attrs == {}

    def test_tree_live_handlers_cleared(self, sanitizer, adapter):
        """Test that live bindings for stripped handlers are cleared on tree input."""
        soup = BeautifulSoup('<button onclick="a"></button><p onclick="b">x</p>', "html.parser")
        paragraph = soup.p
        adapter.bind_handler(paragraph, "onclick", print)
        result = sanitizer.sanitize(soup, as_text=False)
        assert result.p is paragraph
        assert adapter.live_handlers(paragraph) == {}


@pytest.mark.unit
class TestErrors:
    """Test suite for sanitizer error handling."""

    @pytest.mark.parametrize("content", [None, 42, b"<p>x</p>", ["<p>x</p>"]])
    def test_unsupported_type(self, sanitizer, content):
        """Test that non-markup input raises ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            sanitizer.sanitize(content)
        assert exc_info.value.parameter_name == "content"

    def test_parse_failure_propagates(self, sanitizer, monkeypatch):
        """Test that parse failures raise instead of returning partial output."""

        def reject(*args, **kwargs):
            raise ParserRejectedMarkup("boom")

        monkeypatch.setattr("markguard.tree.BeautifulSoup", reject)
        with pytest.raises(ParsingError):
            sanitizer.sanitize("<p>x</p>")

    def test_empty_input(self, sanitizer):
        """Test that empty markup produces empty output."""
        assert sanitizer.sanitize("") == ""

    def test_plain_text(self, sanitizer):
        """Test that text without markup is returned escaped but otherwise intact."""
        assert sanitizer.sanitize("a &lt; b &amp; c") == "a &lt; b &amp; c"


@pytest.mark.unit
class TestSanitizerObject:
    """Test suite for HtmlSanitizer construction and reuse."""

    def test_callable(self, sanitizer):
        """Test that the sanitizer instance is callable."""
        assert sanitizer('<p onclick="x">a</p>') == "<p>a</p>"

    def test_reuse(self, sanitizer):
        """Test that one instance sanitizes independent inputs."""
        assert sanitizer.sanitize("<p>a</p>") == "<p>a</p>"
        assert sanitizer.sanitize("<script>x</script>") == ""
        assert sanitizer.sanitize("<p>b</p>") == "<p>b</p>"

    def test_idempotent(self, sanitizer):
        """Test that sanitized output is a fixed point."""
        content = '<div onclick="x"><a href="javascript:y" title="t">a</a><object>z</object><img src="i.png"></div>'
        once = sanitizer.sanitize(content)
        assert sanitizer.sanitize(once) == once

    def test_custom_policy(self):
        """Test that a sanitizer applies the policy it is given."""
        policy = SanitizerPolicy(denied_tags=frozenset({"img"}))
        assert HtmlSanitizer(policy).sanitize('<p>a<img src="x.png"></p><script>b</script>') == (
            "<p>a</p><script>b</script>"
        )

    def test_logs_removals(self, sanitizer, caplog):
        """Test that removals are logged at debug level."""
        caplog.set_level(logging.DEBUG, logger="markguard")
        sanitizer.sanitize('<script>x</script><p onclick="y">z</p>')
        assert "Removed 1 denied element(s)" in caplog.text
        assert "onclick" in caplog.text

    def test_module_function(self):
        """Test the sanitize_html convenience function."""
        assert sanitize_html('<p onclick="x">a</p>') == "<p>a</p>"
        assert isinstance(sanitize_html("<p>a</p>", as_text=False), BeautifulSoup)


@pytest.mark.unit
@pytest.mark.security
class TestSanitizeHtmlContent:
    """Test suite for sanitize_html_content passthrough modes."""

    def test_pass_through_mode_unchanged(self):
        """Test that pass-through mode returns content unchanged."""
        content = '<script>alert("xss")</script>'
        assert sanitize_html_content(content, mode="pass-through") == content

    def test_escape_mode_escapes_html(self):
        """Test that escape mode HTML-escapes all content."""
        result = sanitize_html_content('<script>alert("xss")</script>', mode="escape")
        assert result == "&lt;script&gt;alert(&quot;xss&quot;)&lt;/script&gt;"

    def test_drop_mode_removes_all(self):
        """Test that drop mode returns empty string."""
        assert sanitize_html_content("<p>x</p>", mode="drop") == ""

    def test_sanitize_mode(self):
        """Test that sanitize mode applies the default policy."""
        content = '<script>alert("xss")</script><div onclick="alert()">Safe content</div>'
        assert sanitize_html_content(content, mode="sanitize") == "<div>Safe content</div>"

    def test_default_mode_is_sanitize(self):
        """Test the default mode."""
        assert sanitize_html_content("<script>x</script><p>y</p>") == "<p>y</p>"

    def test_unknown_mode(self):
        """Test that an unknown mode is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            sanitize_html_content("<p>x</p>", mode="bogus")
        assert exc_info.value.parameter_name == "mode"
