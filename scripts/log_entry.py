#!/usr/bin/env python3
"""
Log screen time manually.

This is the ONLY way usage gets into the system.
Also edits, deletes and lists recent entries.
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import logging
import os

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.prompt import Confirm
from rich.table import Table

from screenlog.core.config import Config
from screenlog.core.models import Category, Device, ValidationError
from screenlog.core.store import ScreenTimeStore
from screenlog.core.utils import format_duration
from screenlog.guardrails.goals import any_goal_reached, check_goal_limits
from screenlog.ingest.manual import log_manual_entry, to_minutes
from screenlog.review.usage import recent_entries

app = typer.Typer(help="Log, edit and delete screen time entries")
console = Console()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "WARNING").upper(),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

CATEGORY_HELP = ", ".join(c.value for c in Category)
DEVICE_HELP = ", ".join(d.value for d in Device)


def _open_store() -> ScreenTimeStore:
    load_dotenv()
    return ScreenTimeStore(Config.from_env())


def _fail(message: str) -> None:
    console.print(f"[red]{message}[/red]")
    raise typer.Exit(1)


@app.command()
def add(
    app_name: str = typer.Option(..., "--app", "-a", help="App name (e.g., Instagram)"),
    category: str = typer.Option("social media", "--category", "-c", help=f"Category ({CATEGORY_HELP})"),
    device: str = typer.Option("phone", "--device", "-d", help=f"Device ({DEVICE_HELP})"),
    hours: int = typer.Option(0, "--hours", "-H", help="Hours (0-24)"),
    minutes: int = typer.Option(15, "--minutes", "-m", help="Minutes (0-59)"),
    notes: str = typer.Option("", "--notes", "-n", help="Notes"),
    date: str = typer.Option(None, "--date", help="Date (YYYY-MM-DD), defaults to today"),
):
    """
    Log time spent in an app.

    Example:
        python scripts/log_entry.py add --app Instagram -c "social media" -d phone -m 45
    """
    store = _open_store()

    try:
        entry = log_manual_entry(store, app_name, category, device, hours, minutes, notes, date)
    except ValidationError as e:
        _fail(str(e))

    console.print(
        f"\n[green]Logged {format_duration(entry.duration)} of {entry.app} "
        f"on {entry.date}.[/green]"
    )
    console.print(f"Today's screen time: [bold]{format_duration(store.today_usage())}[/bold]\n")

    for warning in check_goal_limits(store.goals, store.entries, store.today):
        console.print(f"[yellow]{warning}[/yellow]")


@app.command()
def edit(
    entry_id: str = typer.Argument(..., help="Entry ID"),
    app_name: str = typer.Option(None, "--app", "-a", help="App name"),
    category: str = typer.Option(None, "--category", "-c", help=f"Category ({CATEGORY_HELP})"),
    device: str = typer.Option(None, "--device", "-d", help=f"Device ({DEVICE_HELP})"),
    hours: int = typer.Option(None, "--hours", "-H", help="Hours (0-24)"),
    minutes: int = typer.Option(None, "--minutes", "-m", help="Minutes (0-59)"),
    notes: str = typer.Option(None, "--notes", "-n", help="Notes"),
    date: str = typer.Option(None, "--date", help="Date (YYYY-MM-DD)"),
):
    """
    Change fields of an existing entry.
    """
    store = _open_store()

    entry = store.get_entry(entry_id)
    if not entry:
        _fail(f"Entry {entry_id} not found.")

    fields = {}
    if app_name is not None:
        fields["app"] = app_name
    if category is not None:
        fields["category"] = category.lower()
    if device is not None:
        fields["device"] = device.lower()
    if notes is not None:
        fields["notes"] = notes
    if date is not None:
        fields["date"] = date

    try:
        if hours is not None or minutes is not None:
            fields["duration"] = to_minutes(
                hours if hours is not None else entry.duration // 60,
                minutes if minutes is not None else entry.duration % 60,
            )
        updated = store.update_entry(entry_id, **fields)
    except ValidationError as e:
        _fail(str(e))

    console.print(f"\n[green]Entry updated: {updated}[/green]\n")


@app.command()
def delete(
    entry_id: str = typer.Argument(..., help="Entry ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """
    Permanently delete an entry, with a chance to undo.
    """
    store = _open_store()

    entry = store.get_entry(entry_id)
    if not entry:
        _fail(f"Entry {entry_id} not found.")

    if not yes and not Confirm.ask(
        f"Delete entry? This will permanently remove {entry}", console=console
    ):
        console.print("Cancelled.")
        raise typer.Exit(0)

    removed = store.delete_entry(entry_id)
    console.print("[green]Entry deleted.[/green]")

    if not yes and Confirm.ask("Undo?", console=console, default=False):
        restored = store.restore_entry(removed)
        console.print(f"[green]Entry restored as {restored.id}.[/green]")


@app.command()
def recent(
    limit: int = typer.Option(None, "--limit", "-l", help="Number of entries (default from settings)"),
):
    """
    Show the most recent entries.
    """
    store = _open_store()
    limit = limit or store.config.recent_entries_limit

    entries = recent_entries(store.entries, limit)
    if not entries:
        console.print("No entries yet. Start tracking your screen time!")
        return

    table = Table(title="Recent Entries")
    table.add_column("ID", style="dim")
    table.add_column("Date")
    table.add_column("App")
    table.add_column("Category")
    table.add_column("Device")
    table.add_column("Time", justify="right")
    table.add_column("Notes")

    for entry in entries:
        table.add_row(
            entry.id,
            entry.date,
            entry.app,
            entry.category.value,
            entry.device.value,
            format_duration(entry.duration),
            entry.notes or "",
        )

    console.print(table)

    if any_goal_reached(store.goals, store.entries, store.today):
        console.print("[red]A daily goal limit has been reached. See: python scripts/goals.py status[/red]")


if __name__ == "__main__":
    app()
