"""Markdown rendering helpers for question and option text.

Bank questions are plain text that occasionally carries Markdown emphasis,
inline code or lists. The rendered HTML targets Qt's rich-text engine
(``QTextBrowser``/``QLabel``), which supports only a subset of HTML 4 and CSS,
so the document wrapper keeps styling to simple inline rules.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from html import escape

from markdown_it import MarkdownIt


@dataclass(slots=True)
class MarkdownRenderer:
    """Converts Markdown into HTML fragments or small rich-text documents."""

    enable_html: bool = False
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = (
            MarkdownIt("commonmark", {"html": self.enable_html, "breaks": True})
            .enable("table")
            .enable("strikethrough")
        )

    def render_fragment(self, markdown_text: str) -> str:
        """Render a markdown string into an HTML fragment."""

        sanitized = markdown_text.strip()
        if not sanitized:
            return "<p><em>No content provided.</em></p>"
        return self._markdown.render(sanitized)

    def render_inline(self, markdown_text: str) -> str:
        """Render a single line without the surrounding paragraph tags."""

        sanitized = markdown_text.strip()
        if not sanitized:
            return ""
        return self._markdown.renderInline(sanitized)

    @staticmethod
    def wrap_document(body_html: str, font_size: int = 14) -> str:
        """Wrap HTML in a document sized for the question view."""

        return (
            "<html><body "
            f"style=\"font-size: {font_size}pt; line-height: 140%;\">"
            f"{body_html}</body></html>"
        )

    @staticmethod
    def plain_text_fallback(text: str) -> str:
        return f"<p>{escape(text)}</p>"


renderer = MarkdownRenderer()
# Shared instance; MarkdownIt is safe for repeated read-only renders on the Qt thread.
