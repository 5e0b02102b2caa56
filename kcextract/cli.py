"""
Command-line interface for kcextract.

Provides commands for:
- Replaying an OCR transcript through the extraction pipeline
- Checking how a title or snippet would be classified
- Inspecting lexer tokens and their taxonomy chains
- System diagnostics

Usage:
    kcx analyze transcript.jsonl --url https://youtu.be/abc --title "C++ for beginners"
    kcx classify "Intro to Java"
    kcx tokens "int *p = &x;" --language cpp
    kcx doctor
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from kcextract import __version__
from kcextract.classifier import LanguageClassifier, SubprocessLanguageModel
from kcextract.config import CLASSIFICATION_THRESHOLD, CLASSIFIER_BINARY, POLL_INTERVAL
from kcextract.diagnostics import collect_diagnostics, summarize_checks
from kcextract.lexer.base import iter_windows
from kcextract.models import ProgrammingLanguage, Video
from kcextract.parser import create_parser
from kcextract.producer import TranscriptProducer
from kcextract.stream import ChannelClosedError, CoordinatorConfig, run_analysis

app = typer.Typer(
    name="kcx",
    help="kcextract: knowledge component extraction for coding tutorials",
    add_completion=False,
)
console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"kcextract v{__version__}")
        raise typer.Exit()


def _parse_language(value: str) -> ProgrammingLanguage:
    try:
        return ProgrammingLanguage.from_name(value)
    except ValueError as exc:
        raise typer.BadParameter(str(exc))


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(
        False, "--verbose",
        help="Log language resolution and parser activity",
    ),
):
    """kcextract: find the programming concepts a tutorial shows, and when."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


@app.command()
def analyze(
    transcript: Path = typer.Argument(
        ...,
        help="JSON Lines transcript, one {\"t\": seconds, \"text\": fragment} per line",
    ),
    url: str = typer.Option(
        ..., "--url", "-u",
        help="Video URL used as time stamp prefix",
    ),
    title: str = typer.Option(
        "", "--title", "-t",
        help="Video title, used as the language hint",
    ),
    output_file: Optional[Path] = typer.Option(
        None, "--output", "-o",
        help="Write the JSON result here instead of stdout",
    ),
    classifier: Path = typer.Option(
        CLASSIFIER_BINARY, "--classifier",
        help="Language classifier executable",
    ),
    threshold: int = typer.Option(
        CLASSIFICATION_THRESHOLD, "--threshold",
        help="Characters accumulated before the classifier is asked",
    ),
    poll_interval: float = typer.Option(
        POLL_INTERVAL, "--poll-interval",
        help="Pause after each fragment (seconds)",
    ),
):
    """Replay a transcript and extract its knowledge components."""
    try:
        producer = TranscriptProducer.from_path(transcript)
    except FileNotFoundError:
        console.print(f"[red]Transcript not found: {transcript}[/]")
        raise typer.Exit(1)
    except ValueError as exc:
        console.print(f"[red]Invalid transcript {transcript}: {exc}[/]")
        raise typer.Exit(1)

    config = CoordinatorConfig(threshold=threshold, poll_interval=poll_interval)
    try:
        result = run_analysis(
            Video(url=url, title=title),
            producer,
            model=SubprocessLanguageModel(classifier),
            config=config,
        )
    except ChannelClosedError as exc:
        console.print(f"[red]Analysis aborted: {exc}[/]")
        raise typer.Exit(1)

    if output_file:
        output_file.write_text(result.to_json(), encoding="utf-8")
        console.print(result.summary())
        console.print(f"[green]✓ Saved to {output_file}[/]")
    else:
        print(result.to_json())


@app.command()
def classify(
    text: str = typer.Argument(..., help="Title or code snippet"),
    model: bool = typer.Option(
        False, "--model", "-m",
        help="Also ask the language classifier executable",
    ),
    classifier: Path = typer.Option(
        CLASSIFIER_BINARY, "--classifier",
        help="Language classifier executable",
    ),
):
    """Show how a title or snippet resolves to a language."""
    resolver = LanguageClassifier(SubprocessLanguageModel(classifier))
    by_hint = resolver.classify_by_hint(text)
    console.print(f"Hint:  {by_hint.value if by_hint else '[yellow]unresolved[/]'}")
    if model:
        by_model = resolver.classify_by_model(text)
        console.print(f"Model: {by_model.value if by_model else '[yellow]unresolved[/]'}")


@app.command()
def tokens(
    snippet: str = typer.Argument(..., help="Source code to tokenize"),
    language: str = typer.Option(
        "cpp", "--language", "-l",
        help="Grammar to use: c, cpp, java or python",
    ),
    json_output: bool = typer.Option(False, "--json", help="Emit tokens as JSON instead of a table"),
):
    """Show lexer tokens and the taxonomy chain of each."""
    parser = create_parser("", _parse_language(language))
    rows = []
    for window in iter_windows(parser.tokenize(snippet)):
        result = parser.classify(window)
        rows.append({
            "token": window.current.literal,
            "resolved": result.token.literal if result else None,
            "chain": str(result.chain) if result else None,
        })

    if json_output:
        print(json.dumps(rows, indent=2, ensure_ascii=False))
        return

    table = Table(title=f"Tokens ({parser.language.value})")
    table.add_column("Token", style="cyan")
    table.add_column("Resolved")
    table.add_column("Category chain")
    for row in rows:
        table.add_row(
            escape(row["token"]),
            escape(row["resolved"] or ""),
            escape(row["chain"]) if row["chain"] else "[dim]skipped[/]",
        )
    console.print(table)


@app.command()
def doctor(json_output: bool = typer.Option(False, "--json", help="Emit diagnostics as JSON instead of a table")):
    """Check the language classifier and dependencies."""

    checks = collect_diagnostics()
    if json_output:
        print(json.dumps([c.__dict__ for c in checks], indent=2))
        return

    table = Table(title="kcextract environment health", show_lines=True)
    table.add_column("Status", justify="center")
    table.add_column("Item")
    table.add_column("Detail")

    icons = {"ok": "✅", "warn": "⚠️", "error": "❌"}
    for c in checks:
        table.add_row(icons.get(c.status, "•"), c.name, c.detail)

    console.print(table)
    summary = summarize_checks(checks)
    console.print(
        f"[bold]{summary['ok']} OK[/bold], "
        f"[yellow]{summary['warn']} warning(s)[/yellow], "
        f"[red]{summary['error']} error(s)[/red]."
    )
