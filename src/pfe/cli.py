"""Typer CLI — ``pfe analyze``, ``pfe review``, ``pfe agent``, ``pfe tools`` and ``pfe validate``."""

from __future__ import annotations

import logging
import sys
from enum import Enum
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.markup import escape

from pfe.config import load_agent, load_config, resolve_config
from pfe.schemas.config import FeedbackConfig
from pfe.schemas.feedback import FeedbackReport
from pfe.shared.display import console

# Load .env file from the working directory (if it exists)
load_dotenv()

app = typer.Typer(
    name="pfe",
    help="Prompt Feedback Engine — score agent instruction prompts and apply suggested fixes.",
    no_args_is_help=True,
)


class OutputFormat(str, Enum):
    table = "table"
    json = "json"
    markdown = "markdown"
    html = "html"


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
    )


def _load_config_or_exit(config: Path | None) -> FeedbackConfig:
    try:
        return resolve_config(config)
    except Exception as exc:
        console.print(f"[red]Config validation failed:[/] {exc}")
        raise typer.Exit(code=1)


def _read_prompt(path: Path | None, text: str | None) -> str:
    if text is not None:
        return text
    if path is None:
        console.print("[red]Error:[/] give a prompt file, '-' for stdin, or --text.")
        raise typer.Exit(code=1)
    if str(path) == "-":
        return sys.stdin.read()
    if not path.exists():
        console.print(f"[red]Prompt file not found:[/] {path}")
        raise typer.Exit(code=1)
    return path.read_text()


@app.command()
def analyze(
    path: Path = typer.Argument(None, help="Prompt file to analyze ('-' reads stdin)."),
    text: str = typer.Option(None, "--text", "-t", help="Analyze this text instead of a file."),
    config: Path = typer.Option(None, "--config", "-c", help="Path to feedback-config.yml"),
    fmt: OutputFormat = typer.Option(OutputFormat.table, "--format", "-f", help="Output format."),
    output: Path = typer.Option(None, "--output", "-o", help="Write the report here instead of stdout (markdown, json or html)."),
    fail_under: int = typer.Option(None, "--fail-under", help="Exit 1 if the overall score is below this."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Score a prompt and list suggestions for improving it.

    Examples:

        pfe analyze prompts/researcher.txt

        pfe analyze --text "You are a helpful agent." --format json

        cat prompt.txt | pfe analyze - --format html --output feedback.html
    """
    _setup_logging(verbose)
    from pfe.analysis.analyzer import analyze as run_analysis

    if fmt is OutputFormat.table and output is not None:
        console.print("[red]Error:[/] table output is terminal-only; use --format markdown, json or html with --output.")
        raise typer.Exit(code=1)

    cfg = _load_config_or_exit(config)
    prompt = _read_prompt(path, text)
    report = run_analysis(prompt, cfg)
    title = path.name if path is not None and str(path) != "-" else ""

    if fmt is OutputFormat.table:
        from pfe.shared.display import print_report

        print_report(report)
    else:
        rendered = _render(report, fmt, title=title, prompt=prompt)
        if output is not None:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(rendered)
            console.print(f"[green]Report written to:[/] {output}")
        else:
            typer.echo(rendered)

    if fail_under is not None and report.score.overall < fail_under:
        raise typer.Exit(code=1)


def _render(report: FeedbackReport, fmt: OutputFormat, *, title: str, prompt: str) -> str:
    if fmt is OutputFormat.json:
        import json

        payload = report.model_dump()
        payload["overall"] = report.score.overall
        payload["label"] = report.score.label
        return json.dumps(payload, indent=2, ensure_ascii=False)
    if fmt is OutputFormat.html:
        from pfe.output.dashboard import render_dashboard

        return render_dashboard(report, title=title, prompt=prompt)
    from pfe.output.markdown import render_markdown_report

    return render_markdown_report(report, title=title)


@app.command()
def review(
    path: Path = typer.Argument(..., help="Prompt file to review and edit in place."),
    config: Path = typer.Option(None, "--config", "-c", help="Path to feedback-config.yml"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Apply every applicable suggestion without asking."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Walk through fixable suggestions, applying the ones you accept to the file."""
    _setup_logging(verbose)
    from pfe.lifecycle import FeedbackSession
    from pfe.shared.display import ask_accept, print_report, print_score, print_suggestion

    cfg = _load_config_or_exit(config)
    if not path.exists():
        console.print(f"[red]Prompt file not found:[/] {path}")
        raise typer.Exit(code=1)

    original = path.read_text()
    session = FeedbackSession(original, cfg)
    print_score(session.report.score)

    dismissed: set[str] = set()
    while True:
        pending = [
            s for s in session.report.applicable()
            if s.id not in dismissed and not session.is_applied(s.id)
        ]
        if not pending:
            break
        suggestion = pending[0]
        session.expand(suggestion.id)
        console.print("")
        print_suggestion(suggestion, expanded=True)
        if yes or ask_accept(suggestion):
            session.accept(suggestion.id)
        else:
            session.dismiss(suggestion.id)
            dismissed.add(suggestion.id)

    console.print("")
    print_report(session.report, applied_ids=session.lifecycle.applied_ids, expanded=False)

    if session.text != original:
        path.write_text(session.text)
        console.print(f"\n[green]Updated prompt written to:[/] {path}")
    else:
        console.print("\n[dim]No changes made.[/]")


@app.command()
def agent(
    path: Path = typer.Argument(..., help="Agent definition YAML (title, description, prompt, tools)."),
    config: Path = typer.Option(None, "--config", "-c", help="Path to feedback-config.yml"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Validate an agent definition and analyze its instruction prompt."""
    _setup_logging(verbose)
    from pfe.analysis.analyzer import analyze as run_analysis
    from pfe.shared.display import print_report

    cfg = _load_config_or_exit(config)
    try:
        definition = load_agent(path)
    except Exception as exc:
        console.print(f"[red]Agent validation failed:[/] {exc}")
        raise typer.Exit(code=1)

    console.print(f"[bold]{escape(definition.title)}[/]")
    if definition.description:
        console.print(f"  {escape(definition.description)}")
    selected = definition.selected_tools()
    if selected:
        console.print("  Tools: " + ", ".join(f"{t.logo} {t.label}" for t in selected))
    else:
        console.print("  Tools: (none)")
    console.print("")

    print_report(run_analysis(definition.prompt, cfg))


@app.command()
def tools() -> None:
    """List the tools an agent can be given."""
    from pfe.schemas.agent import AVAILABLE_TOOLS
    from pfe.shared.display import print_tools

    print_tools(AVAILABLE_TOOLS)


@app.command()
def validate(
    config: Path = typer.Option(..., "--config", "-c", help="Path to feedback-config.yml"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Validate a configuration file without analyzing anything."""
    _setup_logging(verbose)

    try:
        cfg = load_config(config)
    except Exception as exc:
        console.print(f"[red]Config validation failed:[/] {exc}")
        raise typer.Exit(code=1)

    console.print("[green]Config is valid![/]\n")
    p = cfg.penalties
    console.print(
        f"  Penalties:   correctness {p.correctness}, clarity {p.clarity}, "
        f"engagement {p.engagement}, delivery {p.delivery}"
    )
    console.print(f"  Word range:  {cfg.min_words}-{cfg.max_words}")
    console.print(f"  Examples expected above:  {cfg.examples_min_length} chars")
    console.print(f"  Structure expected above: {cfg.structure_min_length} chars")
    console.print(f"  Collapse delay: {cfg.collapse_delay}s")
