"""Question rendering utilities for the take-quiz and results views."""

from __future__ import annotations

from testgenie.core.markdown_math_renderer import renderer
from testgenie.core.models import Question, Quiz
from testgenie.styling.color_palette import ColorPalette, Theme

_REVIEW_CSS = """
      .review-question { border-bottom: 1px solid #e5e7eb; padding: 0.75rem 0; }
      .review-option { padding: 0.35rem 0.6rem; border-radius: 6px; margin: 0.25rem 0; }
      .explanation { background: #eff6ff; color: #1d4ed8; padding: 0.5rem 0.75rem; border-radius: 6px; }
      .muted { color: #6b7280; font-size: 0.9em; }
"""


def render_question(question: Question, number: int, total: int, font_size: int = 14,
                    show_explanation: bool = False) -> str:
    """Render the current question (and its explanation once revealed) as HTML."""
    parts = [
        f"<p class=\"muted\">Question {number} of {total}</p>",
        renderer.render_fragment(question.text),
    ]
    if show_explanation and question.explanation:
        parts.append(
            "<div class=\"explanation\"><strong>Explanation:</strong> "
            f"{renderer.render_inline(question.explanation)}</div>"
        )
    return renderer.wrap_with_mathjax("\n".join(parts), font_size=font_size, extra_css=_REVIEW_CSS)


def render_review(quiz: Quiz, font_size: int = 12, theme: Theme = Theme.LIGHT) -> str:
    """Render every question with the user's answer and the correct option highlighted."""
    answers = quiz.user_answers or {}
    correct_bg = ColorPalette.OPTION_CORRECT_BG.get(theme)
    wrong_bg = ColorPalette.OPTION_INCORRECT_BG.get(theme)
    blocks: list[str] = []
    for number, question in enumerate(quiz.questions, start=1):
        chosen_id = answers.get(question.id)
        lines = [
            "<div class=\"review-question\">",
            f"<p><strong>{number}.</strong> {renderer.render_inline(question.text)}</p>",
        ]
        for option in question.options:
            style = ""
            suffix = ""
            if option.is_correct:
                style = f" style=\"background: {correct_bg};\""
                suffix = " ✓"
            elif chosen_id and option.id == chosen_id:
                style = f" style=\"background: {wrong_bg};\""
                suffix = " ✗"
            if chosen_id and option.id == chosen_id:
                suffix += " <span class=\"muted\">(your answer)</span>"
            lines.append(
                f"<div class=\"review-option\"{style}>{renderer.render_inline(option.text)}{suffix}</div>"
            )
        if not chosen_id:
            lines.append("<p class=\"muted\">Not answered</p>")
        if question.explanation:
            lines.append(
                "<details><summary>Explanation</summary>"
                f"<div class=\"explanation\">{renderer.render_inline(question.explanation)}</div></details>"
            )
        lines.append("</div>")
        blocks.append("\n".join(lines))
    if not blocks:
        blocks.append("<p><em>No questions to review.</em></p>")
    return renderer.wrap_with_mathjax(
        "\n".join(blocks), title=quiz.title, font_size=font_size, extra_css=_REVIEW_CSS
    )
