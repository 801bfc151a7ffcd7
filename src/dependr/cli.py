from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from dependr import __version__
from dependr.errors import DependrError
from dependr.pipeline import run
from dependr.render import render_catalog, render_result
from dependr.settings import load_settings

app = typer.Typer(help="dependr: keep dependabot.yml in step with the ecosystems in a repository")
console = Console()
err_console = Console(stderr=True)


def _execute(target: Path, create_if_missing: bool, dry_run: bool, settings_file: Path | None) -> None:
    try:
        settings = load_settings(settings_file)
        result = run(target, create_if_missing=create_if_missing, settings=settings, dry_run=dry_run)
    except DependrError as exc:
        err_console.print(f"[bold red]Error:[/] {escape(str(exc))}", highlight=False)
        raise typer.Exit(1)
    render_result(result, console=console, show_content=dry_run)


@app.command("version")
def version() -> None:
    console.print(f"dependr {__version__}")


@app.command("scan")
def scan_cmd(
    target: Path = typer.Argument(Path("."), help="Repository directory or dependabot file"),
    create_if_missing: bool = typer.Option(
        False,
        "--create-if-missing",
        "-c",
        help="Create dependabot.yml if missing. Defaults to .github/dependabot.yml",
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the merged document instead of writing it"),
    settings_file: Path | None = typer.Option(None, "--settings", help="Custom settings file"),
) -> None:
    _execute(target, create_if_missing, dry_run, settings_file)


@app.command("sniff")
def sniff_cmd(
    path: Path = typer.Option(..., "--path", "-p", help="Path to dependabot file or root of project"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the merged document instead of writing it"),
    settings_file: Path | None = typer.Option(None, "--settings", help="Custom settings file"),
) -> None:
    _execute(path, False, dry_run, settings_file)


@app.command("ecosystems")
def ecosystems_cmd() -> None:
    render_catalog(console=console)


if __name__ == "__main__":
    app()
