from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from dependr.ecosystems import GITHUB_ACTIONS, WELL_KNOWN_FILES, WELL_KNOWN_SUFFIXES, WORKFLOWS_DIR
from dependr.models import Update
from dependr.pipeline import RunResult
from dependr.settings import settings_summary


def _status(result: RunResult) -> tuple[str, str]:
    if not result.added:
        if not result.location.config_exists:
            return "nothing to do", "bold green"
        return "up to date", "bold green"
    if result.written:
        return ("created" if result.created else "updated"), "bold yellow"
    return "pending (dry run)", "bold cyan"


def _updates_table(title: str, updates: list[Update]) -> Table:
    table = Table(title=title)
    table.add_column("Ecosystem", style="cyan")
    table.add_column("Directory")
    table.add_column("Interval")
    for update in updates:
        table.add_row(update.ecosystem, update.directory, update.schedule.interval)
    return table


def render_result(result: RunResult, console: Console | None = None, show_content: bool = False) -> None:
    console = console or Console()
    label, style = _status(result)
    location = result.location

    summary = (
        f"[bold]Repository:[/bold] {location.root}\n"
        f"[bold]Config:[/bold] {location.config_relative_path}"
        f"{'' if location.config_exists else ' (new)'}\n"
        f"[bold]Detected:[/bold] {len(result.detected)}\n"
        f"[bold]Added:[/bold] {len(result.added)}\n"
        f"[bold]Settings:[/bold] {settings_summary(result.settings)}"
    )
    console.print(Panel(summary, title=f"Status: [{style}]{label.upper()}[/]", border_style=style))

    if result.added:
        console.print(_updates_table("Added Updates", result.added))
    if show_content and result.content:
        console.print(Syntax(result.content, "yaml"))


def render_catalog(console: Console | None = None) -> None:
    console = console or Console()
    table = Table(title="Ecosystems")
    table.add_column("Ecosystem", style="cyan")
    table.add_column("Detected by")

    sources: dict[str, list[str]] = {}
    for name, ecosystem in WELL_KNOWN_FILES.items():
        sources.setdefault(ecosystem, []).append(name)
    for suffix, ecosystem in WELL_KNOWN_SUFFIXES.items():
        sources.setdefault(ecosystem, []).append(f"*{suffix}")
    sources.setdefault(GITHUB_ACTIONS, []).append(f"{WORKFLOWS_DIR}/")

    for ecosystem in sorted(sources):
        table.add_row(ecosystem, ", ".join(sources[ecosystem]))
    console.print(table)
