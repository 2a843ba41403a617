"""Tests for the Markdown serializer."""

from __future__ import annotations

from docbook2md.markdown import convert_fragment_to_markdown, make_href_resolver


class TestBlocks:
    """Tests for block-level serialization."""

    def test_heading_keeps_anchor(self) -> None:
        """A heading id is written as a heading attribute."""
        assert convert_fragment_to_markdown('<h2 id="ch1">Intro</h2>') == "## Intro {#ch1}"

    def test_heading_without_anchor(self) -> None:
        assert convert_fragment_to_markdown("<h3>Plain</h3>") == "### Plain"

    def test_containers_are_flattened(self) -> None:
        """Sections and divs disappear, their children remain."""
        html = '<section><div class="titlepage"><h2>T</h2></div><p>One</p><div><p>Two</p></div></section>'

        assert convert_fragment_to_markdown(html) == "## T\n\nOne\n\nTwo"

    def test_text_next_to_blocks_becomes_paragraph(self) -> None:
        """Loose text and inline elements form one paragraph."""
        html = '<div class="example"><h6 id="ex1">Caption</h6>Body <em>text</em></div>'

        assert convert_fragment_to_markdown(html) == "###### Caption {#ex1}\n\nBody *text*"

    def test_program_listing_becomes_fence(self) -> None:
        html = '<pre class="programlisting"><code>if a &lt; b:\n    pass</code></pre>'

        assert convert_fragment_to_markdown(html) == "```\nif a < b:\n    pass\n```"

    def test_fence_grows_around_backticks(self) -> None:
        html = "<pre><code>```\nx\n```</code></pre>"

        assert convert_fragment_to_markdown(html) == "````\n```\nx\n```\n````"

    def test_lists(self) -> None:
        """Ordered, unordered and nested lists."""
        html = "<ol><li>one<ul><li>inner</li></ul></li><li>two</li></ol>"

        assert convert_fragment_to_markdown(html) == "1. one\n  - inner\n2. two"

    def test_table(self) -> None:
        html = (
            "<table><thead><tr><th>Key</th><th>Value</th></tr></thead>"
            "<tbody><tr><td>a</td><td>1</td></tr></tbody></table>"
        )

        assert convert_fragment_to_markdown(html) == "| Key | Value |\n| --- | --- |\n| a | 1 |"

    def test_blockquote(self) -> None:
        html = "<blockquote><p>First</p><p>Second</p></blockquote>"

        assert convert_fragment_to_markdown(html) == "> First\n>\n> Second"

    def test_strips_navigation_and_scripts(self) -> None:
        html = '<div class="navheader">Prev Next</div><script>x()</script><p>Kept</p>'

        assert convert_fragment_to_markdown(html) == "Kept"


class TestInline:
    """Tests for inline serialization."""

    def test_emphasis_code_and_links(self) -> None:
        html = '<p>Use <code>make</code> with <strong>care</strong>, see <a href="https://example.com">docs</a>.</p>'

        assert convert_fragment_to_markdown(html) == (
            "Use `make` with **care**, see [docs](https://example.com)."
        )

    def test_footnote_reference(self) -> None:
        """A marker followed by an empty link renders as a footnote link."""
        html = '<p>Done<sup>3<a class="footnote" href="#ftn.x" id="x"></a></sup>.</p>'

        assert convert_fragment_to_markdown(html) == "Done[^3](#ftn.x)."

    def test_footnote_body_keeps_anchor(self) -> None:
        """A marker carrying an id stays an HTML superscript."""
        html = '<p><sup id="ftn.x">[1] <a href="#x">↑</a></sup>Root needed.</p>'

        assert convert_fragment_to_markdown(html) == (
            '<sup id="ftn.x">[1] [↑](#x)</sup>Root needed.'
        )

    def test_plain_superscript(self) -> None:
        assert convert_fragment_to_markdown("<p>x<sup>2</sup></p>") == "x^2"


class TestHrefResolver:
    """Tests for make_href_resolver."""

    def test_points_to_other_file(self) -> None:
        resolve = make_href_resolver({"sec": "steps.md", "own": "intro.md"}, "intro.md")

        assert resolve("#sec") == "steps.md#sec"
        assert resolve("#own") == "#own"
        assert resolve("#unknown") == "#unknown"
        assert resolve("https://example.com/#sec") == "https://example.com/#sec"

    def test_used_for_links_and_footnotes(self) -> None:
        resolve = make_href_resolver({"sec": "steps.md", "ftn.x": "notes.md"}, "intro.md")
        html = '<p><a href="#sec">Steps</a><sup>1<a href="#ftn.x"></a></sup></p>'

        assert convert_fragment_to_markdown(html, resolve_href=resolve) == (
            "[Steps](steps.md#sec)[^1](notes.md#ftn.x)"
        )
