"""Question rendering utilities for displaying exam questions."""

from __future__ import annotations

from html import escape

from exam_trainer.core.markdown_renderer import renderer
from exam_trainer.core.models import QuizQuestion, UserAnswer
from exam_trainer.styling.color_palette import ColorPalette, Theme


def render_question(question: QuizQuestion, position: int, total: int, font_size: int = 14) -> str:
    """Render the question heading and body as rich text.

    Args:
        question: The bank question to display
        position: 1-based position of the question within the attempt
        total: Number of questions in the attempt
        font_size: Font size in points for the question text (default 14)

    Returns:
        HTML string ready for display in a QTextBrowser
    """
    category = f" &middot; {escape(question.category)}" if question.category else ""
    heading = (
        f"<p><b>Question {position} of {total}</b> "
        f"<small>(#{question.serial}{category})</small></p>"
    )
    return renderer.wrap_document(heading + renderer.render_fragment(question.question), font_size=font_size)


def render_option_label(option_text: str) -> str:
    """Render one option's text for a rich-text QLabel."""
    return renderer.render_inline(option_text) or renderer.plain_text_fallback(option_text)


def render_question_review(
    question: QuizQuestion,
    answer: UserAnswer | None,
    *,
    show_verdict: bool = True,
) -> str:
    """Render a question with its correct options and the learner's choice marked."""
    category = f" <small>({escape(question.category)})</small>" if question.category else ""
    verdict = ""
    if show_verdict and answer is None:
        verdict = " &middot; <i>Not answered</i>"
    elif show_verdict:
        color = ColorPalette.SUCCESS if answer.is_correct else ColorPalette.ERROR
        label = "Correct" if answer.is_correct else "Incorrect"
        verdict = f" &middot; <b style=\"color: {color.get(Theme.LIGHT)};\">{label}</b>"

    parts = [
        f"<p><b>Question {question.serial}</b>{category}{verdict}</p>",
        renderer.render_fragment(question.question),
        "<ul>",
    ]
    selected = answer.selected_options if answer is not None else frozenset()
    for option in question.options:
        text = render_option_label(option.option_value)
        markers = []
        if option.is_correct_ans:
            markers.append("correct answer")
        if option.option_value in selected:
            markers.append("your answer")
        suffix = f" <i>({', '.join(markers)})</i>" if markers else ""
        if option.is_correct_ans:
            text = f"<b>{text}</b>"
        parts.append(f"<li>{text}{suffix}</li>")
    parts.append("</ul>")
    return "".join(parts)
