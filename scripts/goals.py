#!/usr/bin/env python3
"""
Goal management.

Set, change and remove daily screen time limits, and see how today measures up.
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
from rich.table import Table

from screenlog.core.config import Config
from screenlog.core.models import GoalType, ValidationError
from screenlog.core.store import ScreenTimeStore
from screenlog.core.utils import format_duration
from screenlog.guardrails.goals import check_goal_limits
from screenlog.notify.telegram import TelegramNotifier
from screenlog.review.usage import goal_progress, goal_usage

app = typer.Typer(help="Manage daily screen time goals")
console = Console()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "WARNING").upper(),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def _open_store() -> ScreenTimeStore:
    load_dotenv()
    return ScreenTimeStore(Config.from_env())


def _fail(message: str) -> None:
    console.print(f"[red]{message}[/red]")
    raise typer.Exit(1)


def _normalize_target(goal_type: str, target: str) -> str:
    # Category names are stored lowercase; app names keep their case
    if target is not None and goal_type == GoalType.CATEGORY.value:
        return target.lower()
    return target


@app.command()
def add(
    goal_type: str = typer.Option("total", "--type", "-t", help="Goal type (app, category, total)"),
    target: str = typer.Option(None, "--target", help="App name or category (not used for total)"),
    limit: int = typer.Option(None, "--limit", "-l", help="Daily limit in minutes (default from settings)"),
):
    """
    Add a daily limit.

    Example:
        python scripts/goals.py add --type category --target gaming --limit 60
    """
    store = _open_store()
    limit = limit if limit is not None else store.config.default_goal_limit

    try:
        goal_type = goal_type.lower()
        goal = store.add_goal(goal_type, _normalize_target(goal_type, target), limit)
    except ValidationError as e:
        _fail(str(e))

    console.print(f"\n[green]Goal added: {goal.label}, {format_duration(goal.limit)} per day[/green]\n")


@app.command()
def edit(
    goal_id: str = typer.Argument(..., help="Goal ID"),
    goal_type: str = typer.Option(None, "--type", "-t", help="Goal type (app, category, total)"),
    target: str = typer.Option(None, "--target", help="App name or category"),
    limit: int = typer.Option(None, "--limit", "-l", help="Daily limit in minutes"),
):
    """
    Change an existing goal.
    """
    store = _open_store()

    existing = store.get_goal(goal_id)
    if not existing:
        _fail(f"Goal {goal_id} not found.")

    fields = {}
    if goal_type is not None:
        fields["type"] = goal_type.lower()
    if target is not None:
        fields["target"] = _normalize_target(fields.get("type", existing.type.value), target)
    if limit is not None:
        fields["limit"] = limit

    try:
        goal = store.update_goal(goal_id, **fields)
    except ValidationError as e:
        _fail(str(e))

    console.print(f"\n[green]Goal updated: {goal}[/green]\n")


@app.command()
def delete(goal_id: str = typer.Argument(..., help="Goal ID")):
    """
    Remove a goal.
    """
    store = _open_store()

    if not store.delete_goal(goal_id):
        _fail(f"Goal {goal_id} not found.")

    console.print("[green]Goal deleted.[/green]")


@app.command()
def status(
    notify: bool = typer.Option(False, "--notify", help="Send reached limits to Telegram"),
):
    """
    Show today's progress toward every goal.
    """
    store = _open_store()

    if not store.goals:
        console.print("No goals set yet. Add a goal to start managing your screen time.")
        return

    table = Table(title=f"Goals - {store.today}")
    table.add_column("ID", style="dim")
    table.add_column("Goal")
    table.add_column("Used", justify="right")
    table.add_column("Limit", justify="right")
    table.add_column("Progress", justify="right")

    for goal in store.goals:
        used = goal_usage(goal, store.entries, store.today)
        progress = goal_progress(goal, store.entries, store.today)
        style = "red" if used >= goal.limit else "green"
        table.add_row(
            goal.id,
            goal.label,
            format_duration(used),
            format_duration(goal.limit),
            f"[{style}]{progress}%[/{style}]",
        )

    console.print(table)

    warnings = check_goal_limits(store.goals, store.entries, store.today)
    for warning in warnings:
        console.print(f"[yellow]{warning}[/yellow]")

    if notify and warnings:
        if TelegramNotifier(store.config).send_goal_warnings(warnings):
            console.print("[green]Warnings sent to Telegram[/green]")
        else:
            console.print("[yellow]Telegram not configured or failed[/yellow]")


if __name__ == "__main__":
    app()
