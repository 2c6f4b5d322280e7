from speed_quiz.core.markdown_renderer import MarkdownRenderer


def test_renders_emphasis() -> None:
    html = MarkdownRenderer().render_fragment("What is **2 + 2**?")

    assert "<strong>2 + 2</strong>" in html


def test_raw_html_is_escaped() -> None:
    html = MarkdownRenderer().render_fragment("<b>bold</b> prompt")

    assert "<b>" not in html
    assert "&lt;b&gt;" in html


def test_empty_prompt_placeholder() -> None:
    assert MarkdownRenderer().render_fragment("   ") == "<p><em>No content provided.</em></p>"
