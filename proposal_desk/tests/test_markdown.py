"""
Tests: Markdown → HTML fragment rendering and plain-text stripping.

Run with:
    pytest proposal_desk/tests/test_markdown.py -v
"""

from proposal_desk.services.markdown_service import (
    escape_html,
    format_inline,
    markdown_to_html,
    strip_markdown,
)


class TestBlocks:
    def test_heading_then_paragraph(self):
        html = markdown_to_html("# Title\n\nSome *text* here")
        assert html == "<h1>Title</h1><p>Some <em>text</em> here</p>"

    def test_heading_levels(self):
        html = markdown_to_html("# One\n## Two\n### Three")
        assert html == "<h1>One</h1><h2>Two</h2><h3>Three</h3>"

    def test_four_hashes_is_paragraph(self):
        assert markdown_to_html("#### Deep") == "<p>#### Deep</p>"

    def test_hash_without_space_is_paragraph(self):
        assert markdown_to_html("#tag") == "<p>#tag</p>"

    def test_list_grouping(self):
        html = markdown_to_html("- a\n- b\n- c")
        assert html == "<ul><li>a</li><li>b</li><li>c</li></ul>"
        assert html.count("<ul>") == 1
        assert "<p>" not in html

    def test_all_list_markers(self):
        assert markdown_to_html("- a\n* b\n+ c") == "<ul><li>a</li><li>b</li><li>c</li></ul>"

    def test_paragraph_lines_joined_with_space(self):
        assert markdown_to_html("first line\n  second line  ") == "<p>first line second line</p>"

    def test_text_after_list_closes_it(self):
        html = markdown_to_html("- a\n- b\nafter")
        assert html == "<ul><li>a</li><li>b</li></ul><p>after</p>"

    def test_list_after_text_closes_paragraph(self):
        html = markdown_to_html("intro\n- a")
        assert html == "<p>intro</p><ul><li>a</li></ul>"

    def test_blank_line_splits_lists(self):
        html = markdown_to_html("- a\n\n- b")
        assert html == "<ul><li>a</li></ul><ul><li>b</li></ul>"

    def test_heading_flushes_list(self):
        html = markdown_to_html("## Scope\n- Audit\n- Redesign\n## Timeline\n- Week 1")
        assert html == (
            "<h2>Scope</h2><ul><li>Audit</li><li>Redesign</li></ul>"
            "<h2>Timeline</h2><ul><li>Week 1</li></ul>"
        )

    def test_crlf_line_endings(self):
        assert markdown_to_html("# A\r\n\r\nb") == "<h1>A</h1><p>b</p>"

    def test_numbered_list_is_paragraph(self):
        assert markdown_to_html("1. one\n2. two") == "<p>1. one 2. two</p>"

    def test_empty_input(self):
        assert markdown_to_html("") == ""
        assert markdown_to_html("\n\n   \n") == ""

    def test_fragment_only(self):
        html = markdown_to_html("# Title\n\ntext")
        assert "<html" not in html
        assert "<body" not in html


class TestInlineAndEscaping:
    def test_script_is_escaped(self):
        html = markdown_to_html("Hello <script>alert('x')</script>")
        assert "<script>" not in html
        assert html == "<p>Hello &lt;script&gt;alert(&#39;x&#39;)&lt;/script&gt;</p>"

    def test_escape_all_significant_characters(self):
        assert escape_html("& < > \" '") == "&amp; &lt; &gt; &quot; &#39;"

    def test_bold_italic_code(self):
        assert format_inline("**b** and *i* and `c`") == (
            "<strong>b</strong> and <em>i</em> and <code>c</code>"
        )

    def test_inline_inside_list_item(self):
        assert markdown_to_html("- **Bold** item") == "<ul><li><strong>Bold</strong> item</li></ul>"

    def test_inline_inside_heading(self):
        assert markdown_to_html("## Use `code`") == "<h2>Use <code>code</code></h2>"

    def test_markup_inside_code_stays_escaped(self):
        assert markdown_to_html("`<b>`") == "<p><code>&lt;b&gt;</code></p>"


class TestStripMarkdown:
    def test_strips_markers_and_empty_lines(self):
        lines = strip_markdown("## Scope\n\n- **Audit** of `site`\n- _Redesign_\n")
        assert lines == ["Scope", "- Audit of site", "- Redesign"]

    def test_empty(self):
        assert strip_markdown("") == []
