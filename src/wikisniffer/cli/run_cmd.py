"""CLI command that searches Wikipedia and screenshots the results."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

console = Console()
err_console = Console(stderr=True)

USAGE = """\
WikiSniffer - Wikipedia Search & Screenshot Tool

Usage:
  wikisniffer run <terms-file>
  wikisniffer run "search term"

Examples:
  wikisniffer run terms.txt
  wikisniffer run "artificial intelligence"

Features:
  • Automated Wikipedia search and navigation
  • Full-page screenshot capture with smooth scrolling
  • Batch processing from text files
  • Progress reporting and summary
  • Error screenshots for debugging

The terms file should contain one search term per line.
Screenshots are saved in the ./snapshots/ directory.
"""

EXIT_FAILURES = 1
EXIT_STARTUP = 2
EXIT_INTERRUPTED = 130


def run(
    target: Optional[str] = typer.Argument(None, help="Path to a terms file (one per line) or a single search term."),
    output_dir: Optional[Path] = typer.Option(None, "--output", "-o", help="Directory for screenshots."),
    headless: Optional[bool] = typer.Option(None, "--headless/--headed", help="Run the browser without a window."),
    pause_ms: Optional[int] = typer.Option(None, "--pause-ms", min=0, help="Delay between terms in milliseconds."),
    as_json: bool = typer.Option(False, "--json", help="Print the summary as JSON."),
) -> None:
    """Search Wikipedia for each term, open the first result, and save a full-page screenshot."""
    if target is None:
        console.print(USAGE, highlight=False)
        raise typer.Exit()

    from wikisniffer.exceptions import BrowserStartupError, RunInterrupted, TermsFileError
    from wikisniffer.runner.jobs import WikiSnifferJob, configure_logging
    from wikisniffer.settings import get_settings

    settings = get_settings().model_copy(deep=True)
    if output_dir is not None:
        settings.output.dir = str(output_dir.resolve())
    if headless is not None:
        settings.browser.headless = headless
    if pause_ms is not None:
        settings.batch.pause_ms = pause_ms

    configure_logging(settings)

    job = WikiSnifferJob(settings, console, as_json=as_json)
    try:
        summary = job.execute(target)
    except BrowserStartupError as e:
        err_console.print(f"[red]✗[/red] Fatal error: {e}")
        raise typer.Exit(code=EXIT_STARTUP)
    except TermsFileError as e:
        err_console.print(f"[red]✗[/red] Error reading terms file: {e.reason}")
        raise typer.Exit(code=EXIT_FAILURES)
    except (RunInterrupted, KeyboardInterrupt):
        err_console.print("\nReceived interrupt signal, browser closed.")
        raise typer.Exit(code=EXIT_INTERRUPTED)

    if summary.failed:
        raise typer.Exit(code=EXIT_FAILURES)
    if summary.total:
        console.print("\n[green]All terms processed.[/green]")
