#!/usr/bin/env python3
"""
Weekly review script.

Shows daily totals, the category split and goal status for this week.
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import typer
from dotenv import load_dotenv
from rich.console import Console

from screenlog.core.config import Config
from screenlog.core.models import ValidationError, validate_date
from screenlog.core.store import ScreenTimeStore
from screenlog.review.weekly import format_weekly_review, export_weekly_review

app = typer.Typer(help="Weekly review")
console = Console()


@app.command()
def main(
    date: str = typer.Option(None, "--date", "-d", help="Any day of the week to review (YYYY-MM-DD)"),
    export: bool = typer.Option(False, "--export", "-e", help="Export to file"),
    telegram: bool = typer.Option(False, "--telegram", "-t", help="Send to Telegram"),
):
    """
    Generate weekly review.

    Shows daily screen time, category split, and where each goal stands.
    """
    load_dotenv()
    store = ScreenTimeStore(Config.from_env())

    if date:
        try:
            validate_date(date)
        except ValidationError as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(1)

    review_text = format_weekly_review(store, date)

    if export:
        filepath = export_weekly_review(store, date)
        console.print(f"[green]Review exported to {filepath}[/green]")
    elif telegram:
        from screenlog.notify.telegram import TelegramNotifier
        telegram_notifier = TelegramNotifier(store.config)
        if telegram_notifier.send_review(review_text):
            console.print("[green]Review sent to Telegram[/green]")
        else:
            console.print("[yellow]Telegram send failed, printing to console[/yellow]\n")
            print(review_text)
    else:
        print(review_text)


if __name__ == "__main__":
    app()
