"""Static HTML dashboard generator — renders a FeedbackReport to a self-contained HTML file."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from pfe.schemas.feedback import CATEGORIES, FeedbackReport

_TEMPLATE_DIR = Path(__file__).parent / "templates"

# Tailwind-ish palette the original feedback panel used, keyed by bucket label.
_LABEL_COLORS = {
    "Excellent": "#16a34a",
    "Good": "#2563eb",
    "Fair": "#ca8a04",
    "Needs work": "#dc2626",
}


def render_dashboard(
    report: FeedbackReport,
    *,
    title: str = "",
    prompt: str = "",
    applied_ids: frozenset[str] | set[str] = frozenset(),
) -> str:
    """Render a FeedbackReport into a self-contained HTML page.

    Suggestions with both original and suggested text get a Current/Suggested
    diff block. ``prompt`` is shown verbatim above the suggestions when given.
    """
    env = Environment(loader=FileSystemLoader(str(_TEMPLATE_DIR)), autoescape=True)
    template = env.get_template("feedback.html")

    score = report.score
    suggestions = [
        {**s.model_dump(), "is_applicable": s.is_applicable, "applied": s.id in applied_ids}
        for s in report.suggestions
    ]

    return template.render(
        title=title or "Prompt Feedback",
        prompt=prompt,
        overall=score.overall,
        label=score.label,
        label_color=_LABEL_COLORS.get(score.label, "#6b7280"),
        categories=[(c.capitalize(), getattr(score, c)) for c in CATEGORIES],
        suggestions=suggestions,
    )
