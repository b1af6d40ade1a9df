"""Human-readable progress and summary output for the console."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule

from wikisniffer.models.results import BatchSummary


def print_progress(console: Console, index: int, total: int, term: str) -> None:
    if index > 1:
        console.print("[dim]Waiting before next search...[/dim]")
    console.print(f"--- Processing {index}/{total}: [bold]{escape(term)}[/bold] ---")


def render_summary(console: Console, summary: BatchSummary) -> None:
    """Print success/failure counts, saved screenshots, and failed terms."""
    console.print()
    console.print(Rule("[bold]Summary[/bold]"))
    if not summary.total:
        console.print("[yellow]No terms to process.[/yellow]")
        return

    console.print(f"[green]✓[/green] Successful: {summary.succeeded}/{summary.total}")
    console.print(f"[red]✗[/red] Failed: {summary.failed}/{summary.total}")

    if summary.screenshots:
        console.print("\nScreenshots saved:")
        for name in summary.screenshots:
            console.print(f"  • {name}")

    if summary.failed_terms:
        console.print("\n[red]Failed terms:[/red]")
        for term in summary.failed_terms:
            console.print(f"  • {escape(term)}")
