"""JSON formatter for CLI output."""

import json
from pathlib import Path

from pydantic import BaseModel
from rich.console import Console


def format_json(console: Console, result: BaseModel) -> None:
    """Display any report as JSON."""
    console.print_json(result.model_dump_json(indent=2))


def export_json(result: BaseModel, path: str | Path) -> None:
    """Export a report to a JSON file."""
    with open(path, "w") as f:
        json.dump(result.model_dump(mode="json"), f, indent=2, default=str)
