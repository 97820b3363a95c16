"""Rich terminal rendering and user interaction for prompt feedback."""

from __future__ import annotations

import sys

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from pfe.schemas.agent import Tool
from pfe.schemas.feedback import CATEGORIES, FeedbackReport, FeedbackScore, FeedbackSuggestion

console = Console()

_LABEL_STYLES = {
    "Excellent": "green",
    "Good": "blue",
    "Fair": "yellow",
    "Needs work": "red",
}
_TYPE_STYLES = {"error": "red", "warning": "blue", "suggestion": "yellow"}


def print_score(score: FeedbackScore) -> None:
    """Print the overall score and the four category scores."""
    style = _LABEL_STYLES.get(score.label, "white")
    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("Category")
    table.add_column("Score", justify="right")
    for category in CATEGORIES:
        table.add_row(category.capitalize(), str(getattr(score, category)))
    console.print(
        Panel(
            table,
            title=f"[bold {style}]{score.overall}/100 — {score.label}[/]",
            title_align="left",
            expand=False,
        )
    )


def print_suggestion(
    suggestion: FeedbackSuggestion,
    *,
    applied: bool = False,
    expanded: bool = False,
) -> None:
    style = _TYPE_STYLES.get(suggestion.type, "magenta")
    marker = " [green]✓ Applied[/]" if applied else ""
    console.print(
        f"[{style}]●[/] [bold]{suggestion.title}[/] [dim]({suggestion.id}, {suggestion.category})[/]{marker}"
    )
    console.print(f"    {suggestion.description}")
    if expanded and suggestion.is_applicable:
        console.print(f"    [red]Current:[/]   [strike]{escape(suggestion.original_text or '')}[/]")
        console.print(f"    [green]Suggested:[/] {escape(suggestion.suggested_text or '')}")
    elif expanded and suggestion.original_text:
        console.print(f"    [dim]In:[/] {escape(suggestion.original_text)}")


def print_report(
    report: FeedbackReport,
    *,
    applied_ids: frozenset[str] | set[str] = frozenset(),
    expanded: bool = True,
) -> None:
    """Print the score panel followed by every suggestion."""
    print_score(report.score)
    if not report.suggestions:
        console.print("[green]No suggestions — this prompt looks good.[/]")
        return
    console.print(f"\n[bold]Ways to improve your prompt[/] ({len(report.suggestions)})\n")
    for s in report.suggestions:
        print_suggestion(s, applied=s.id in applied_ids, expanded=expanded)


def print_tools(tools: list[Tool]) -> None:
    table = Table(title="Available tools")
    table.add_column("")
    table.add_column("Key", style="cyan")
    table.add_column("Name")
    table.add_column("Author")
    table.add_column("Category")
    table.add_column("Verified", justify="center")
    for t in tools:
        table.add_row(t.logo, t.value, t.label, t.author, t.category, "✓" if t.verified else "")
    console.print(table)


def ask_accept(suggestion: FeedbackSuggestion) -> bool:
    """Ask whether to apply a suggestion.

    Returns False without prompting when stdin is not interactive.
    """
    if not sys.stdin.isatty():
        console.print(f"[yellow]Non-interactive, skipped:[/] {suggestion.id}")
        return False
    try:
        answer = Prompt.ask(
            "[yellow]Apply this suggestion?[/]", choices=["y", "n"], default="n"
        )
    except EOFError:
        return False
    return answer == "y"
