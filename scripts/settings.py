#!/usr/bin/env python3
"""
Settings CLI.

Shows the active configuration and what is in local storage.
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import logging
import os

import typer

app = typer.Typer(help="ScreenLog settings")

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "WARNING").upper(),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


@app.command()
def current():
    """Show current settings."""
    from dotenv import load_dotenv
    from screenlog.core.config import Config

    load_dotenv()
    config = Config.from_env()

    typer.echo(config.get_settings_summary())


@app.command()
def storage():
    """List local storage keys and record counts."""
    import json

    from dotenv import load_dotenv
    from screenlog.core.config import Config
    from screenlog.core.storage import LocalStorage

    load_dotenv()
    local_storage = LocalStorage(Config.from_env())

    keys = local_storage.keys()
    if not keys:
        typer.echo("Local storage is empty.")
        return

    for key in keys:
        value = local_storage.get_item(key)
        try:
            count = f"{len(json.loads(value))} record(s)"
        except (ValueError, TypeError) as e:
            count = f"unreadable ({e})"
        typer.echo(f"{key}: {count}")


if __name__ == "__main__":
    app()
