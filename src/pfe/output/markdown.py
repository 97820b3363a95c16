"""Markdown report builder — renders a FeedbackReport to a structured Markdown document."""

from __future__ import annotations

from pfe.schemas.feedback import CATEGORIES, FeedbackReport

SEVERITY_ICONS = {"error": "🔴", "warning": "🟡", "suggestion": "💡"}


def _blockquote(text: str, *, strike: bool = False) -> str:
    """Quote every line so multi-line text stays inside one blockquote."""
    lines = []
    for line in text.splitlines() or [""]:
        if strike and line.strip():
            line = f"~~{line}~~"
        lines.append(f"> {line}" if line else ">")
    return "\n".join(lines) + "\n"


def render_markdown_report(
    report: FeedbackReport,
    *,
    title: str = "",
    applied_ids: frozenset[str] | set[str] = frozenset(),
) -> str:
    """Render a FeedbackReport into a Markdown string."""
    sections: list[str] = []
    score = report.score

    sections.append(f"# Prompt Feedback: {title}\n" if title else "# Prompt Feedback\n")

    # Scores
    sections.append(f"**Overall:** {score.overall}/100 ({score.label})\n")
    sections.append("| Category | Score |")
    sections.append("|----------|-------|")
    for category in CATEGORIES:
        sections.append(f"| {category.capitalize()} | {getattr(score, category)} |")
    sections.append("")

    # Suggestions
    if not report.suggestions:
        sections.append("No suggestions — this prompt looks good.\n")
        return "\n".join(sections)

    sections.append(f"## Ways to improve your prompt ({len(report.suggestions)})\n")
    for s in report.suggestions:
        icon = SEVERITY_ICONS.get(s.type, "⚪")
        applied = " ✅ Applied" if s.id in applied_ids else ""
        sections.append(f"### {icon} {s.title} (`{s.id}`){applied}\n")
        sections.append(f"**Category:** {s.category} | **Type:** {s.type}\n")
        sections.append(f"{s.description}\n")
        if s.is_applicable:
            sections.append("**Current:**\n")
            sections.append(_blockquote(s.original_text or "", strike=True))
            sections.append("**Suggested:**\n")
            sections.append(_blockquote(s.suggested_text or ""))
        elif s.original_text:
            sections.append(f"*In:* `{s.original_text}`\n")

    return "\n".join(sections)
