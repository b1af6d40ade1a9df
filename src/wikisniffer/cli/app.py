"""Unified CLI entry point for WikiSniffer.

Config precedence: settings.default.toml -> settings.<env>.toml -> settings.local.toml
-> env vars (WIKISNIFFER_* with double underscores) -> CLI flags.
"""

from __future__ import annotations

import typer

from wikisniffer.cli.run_cmd import run
from wikisniffer.cli.settings_cmd import settings_app

try:
    from importlib.metadata import version

    VERSION = version("wikisniffer")
except Exception:
    VERSION = "unknown"

APP_HELP = (
    "wikisniffer — search Wikipedia and save full-page screenshots of the first result. "
    "Config precedence: settings.default.toml -> settings.<env>.toml -> settings.local.toml -> env vars (WIKISNIFFER_* with __) -> CLI flags."
)

app = typer.Typer(add_completion=False, help=APP_HELP)

app.command("run")(run)
app.add_typer(settings_app, name="settings")


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context, version: bool = typer.Option(False, "--version", help="Show version and exit.")) -> None:
    """Show help when no subcommand is provided."""
    if version:
        typer.echo(f"wikisniffer {VERSION}")
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


if __name__ == "__main__":
    app()
