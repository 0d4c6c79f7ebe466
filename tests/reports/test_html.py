"""Tests for the Markdown -> HTML email rendering."""

from datetime import datetime

from reports.html import markdown_to_html, render_email_page


class TestMarkdownToHtml:
    def test_headings(self):
        out = markdown_to_html("# Title\n## Section\n### Sub")
        assert "<h1" in out and ">Title</h1>" in out
        assert ">Section</h2>" in out
        assert ">Sub</h3>" in out

    def test_bold_before_italic(self):
        out = markdown_to_html("**bold** and *soft*")
        assert ">bold</strong>" in out
        assert "<em>soft</em>" in out
        assert "<em>*" not in out

    def test_inline_code_and_links(self):
        out = markdown_to_html("Run `df -h` or see [docs](https://example.com/x)")
        assert ">df -h</code>" in out
        assert '<a href="https://example.com/x"' in out
        assert ">docs</a>" in out

    def test_bullet_list_wrapped(self):
        out = markdown_to_html("Intro\n\n- one\n- two\n\nAfter")
        assert out.count("<ul") == 1
        assert out.count("<li") == 2
        assert ">one</li><li" in out

    def test_numbered_lines_untouched(self):
        out = markdown_to_html("1. first")
        assert "<li" not in out
        assert "1. first" in out

    def test_code_fence(self):
        out = markdown_to_html("```\nsudo apt-get clean\n```")
        assert "<pre" in out
        assert "sudo apt-get clean</code></pre>" in out

    def test_html_escaped(self):
        out = markdown_to_html("<script>alert(1)</script> & more")
        assert "<script>" not in out
        assert "&lt;script&gt;" in out
        assert "&amp; more" in out

    def test_horizontal_rule_and_breaks(self):
        out = markdown_to_html("above\n---\nbelow")
        assert "<hr" in out
        assert "<br>" in out

    def test_paragraphs(self):
        out = markdown_to_html("first\n\nsecond")
        assert out.startswith("<p")
        assert out.endswith("</p>")
        assert out.count("<p") == 2

    def test_empty(self):
        assert markdown_to_html("") == '<p style="margin:10px 0;"></p>'


class TestRenderEmailPage:
    def test_page(self):
        page = render_email_page("Daily <summary>", "# Hi", now=datetime(2024, 3, 15, 9, 30, 5))
        assert page.startswith("<!DOCTYPE html>")
        assert "<title>Daily &lt;summary&gt;</title>" in page
        assert ">Hi</h1>" in page
        assert "Sent at 2024-03-15 09:30:05" in page
