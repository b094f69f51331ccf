#!/usr/bin/env python3
"""
Export data to CSV.

Exports entries or goals to CSV format for external analysis.
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import csv
import typer
from datetime import datetime
from dotenv import load_dotenv
from rich.console import Console

from screenlog.core.config import Config
from screenlog.core.store import ScreenTimeStore

app = typer.Typer(help="Export data to CSV")
console = Console()


def _open_store() -> ScreenTimeStore:
    load_dotenv()
    return ScreenTimeStore(Config.from_env())


def _default_output(kind: str) -> str:
    output = f"data/{kind}_export_{datetime.utcnow().strftime('%Y%m%d_%H%M%S')}.csv"
    Path(output).parent.mkdir(parents=True, exist_ok=True)
    return output


@app.command()
def entries(
    output: str = typer.Option(None, "--output", "-o", help="Output file path"),
):
    """
    Export all entries to CSV, oldest first.
    """
    store = _open_store()
    output = output or _default_output("entries")

    rows = sorted(store.entries, key=lambda e: e.date)

    with open(output, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([
            "id",
            "date",
            "device",
            "app",
            "category",
            "duration",
            "notes",
        ])

        for entry in rows:
            writer.writerow([
                entry.id,
                entry.date,
                entry.device.value,
                entry.app,
                entry.category.value,
                entry.duration,
                entry.notes or "",
            ])

    console.print(f"[green]Exported {len(rows)} entries to {output}[/green]")


@app.command()
def goals(
    output: str = typer.Option(None, "--output", "-o", help="Output file path"),
):
    """
    Export all goals to CSV.
    """
    store = _open_store()
    output = output or _default_output("goals")

    with open(output, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([
            "id",
            "type",
            "target",
            "limit",
        ])

        for goal in store.goals:
            writer.writerow([
                goal.id,
                goal.type.value,
                goal.target or "",
                goal.limit,
            ])

    console.print(f"[green]Exported {len(store.goals)} goals to {output}[/green]")


if __name__ == "__main__":
    app()
