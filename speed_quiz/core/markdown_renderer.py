"""Markdown rendering helper for question prompts.

Prompts are rendered to the small HTML subset understood by ``QLabel`` rich
text. Raw HTML in prompts is disabled so service-provided text cannot inject
markup.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from markdown_it import MarkdownIt


@dataclass(slots=True)
class MarkdownRenderer:
    """Converts markdown into HTML fragments."""

    enable_html: bool = False
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = MarkdownIt("commonmark", {"html": self.enable_html}).enable("strikethrough")

    def render_fragment(self, markdown_text: str) -> str:
        """Render a markdown string into an HTML fragment."""

        sanitized = markdown_text.strip()
        if not sanitized:
            return "<p><em>No content provided.</em></p>"
        return self._markdown.render(sanitized)


renderer = MarkdownRenderer()
