#!/usr/bin/env python3
"""
Usage breakdown script.

Shows one day's screen time by category, app or device.
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

from screenlog.core.config import Config
from screenlog.core.models import ValidationError, validate_date
from screenlog.core.store import ScreenTimeStore
from screenlog.review.breakdown import print_breakdown
from screenlog.review.usage import GROUP_KEYS

app = typer.Typer(help="Usage breakdown for a day")
console = Console()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "WARNING").upper(),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


@app.command()
def main(
    date: str = typer.Option(None, "--date", "-d", help="Date (YYYY-MM-DD), defaults to today"),
    view: str = typer.Option("category", "--by", "-b", help="Group by (category, app, device)"),
):
    """
    Show a day's screen time breakdown.

    Example:
        python scripts/stats.py --date 2024-03-01 --by app
    """
    load_dotenv()
    store = ScreenTimeStore(Config.from_env())

    if view not in GROUP_KEYS:
        console.print(f"[red]Invalid view: {view} (expected one of: {', '.join(GROUP_KEYS)})[/red]")
        raise typer.Exit(1)

    try:
        if date:
            validate_date(date)
    except ValidationError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if date and date > store.today:
        console.print("[yellow]That date is in the future.[/yellow]")

    print_breakdown(store, date, view)


if __name__ == "__main__":
    app()
