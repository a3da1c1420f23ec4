"""Shared utility functions for modulegen.

Provides JSON/YAML I/O, parameter-scope loading, Rich-based progress
reporting, and structure rendering.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import TypeAdapter, ValidationError
from rich.console import Console
from rich.markup import escape
from rich.rule import Rule
from rich.table import Table
from rich.tree import Tree

from modulegen.parser.models import Folder, GenerationInput

console = Console()

_PARAMETERS_ADAPTER = TypeAdapter(dict[str, str])


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


async def save_json(data: dict[str, Any] | list[Any], path: str | Path) -> None:
    """Save data as pretty-printed JSON.

    Parent directories are created automatically.  The write runs in a
    worker thread to avoid blocking the event loop.
    """
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    content = json.dumps(data, indent=2, ensure_ascii=False, default=str)
    await asyncio.to_thread(file_path.write_text, content, "utf-8")


# ---------------------------------------------------------------------------
# Parameter scopes
# ---------------------------------------------------------------------------


def parse_parameters(raw: str) -> dict[str, str]:
    """Decode a JSON object of string parameters given on the command line.

    Raises:
        ValueError: If *raw* is not a flat string-to-string JSON object.
    """
    try:
        return _PARAMETERS_ADAPTER.validate_json(raw)
    except ValidationError as exc:
        raise ValueError(f"Parameters must be a JSON object of strings: {raw}") from exc


def load_parameters_file(path: str | Path) -> dict[str, str]:
    """Load global parameters from a YAML (or JSON) mapping file.

    Scalar values are converted to strings; an empty file yields ``{}``.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the document is not a mapping of scalars.
    """
    file_path = Path(path)
    data = yaml.safe_load(file_path.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Parameters file must contain a mapping: {file_path}")

    params: dict[str, str] = {}
    for key, value in data.items():
        if isinstance(value, (dict, list)):
            raise ValueError(f"Parameter '{key}' in {file_path} must be a scalar")
        params[str(key)] = "" if value is None else str(value)
    return params


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_duration(seconds: float) -> str:
    """Format a duration in seconds to a human-readable string.

    Examples::

        format_duration(3.7)    -> "3.7s"
        format_duration(65.2)   -> "1m 5s"
    """
    if seconds < 0:
        return "0.0s"

    minutes = int(seconds // 60)
    secs = seconds % 60
    if minutes > 0:
        return f"{minutes}m {int(secs)}s"
    return f"{secs:.1f}s"


def build_structure_tree(generation_input: GenerationInput, title: str = "Outline") -> Tree:
    """Build a Rich tree of the parsed folders and files."""
    root = Tree(f"[bold]{title}[/bold]")

    def _add(branch: Tree, folder: Folder) -> None:
        node = branch.add(f"[bold blue]{escape(folder.name)}/[/bold blue]")
        for child in folder.folders:
            _add(node, child)
        for file in folder.files:
            label = escape(file.name)
            if file.template_id:
                label += f" [dim]{escape('[' + file.template_id + ']')}[/dim]"
            node.add(label)

    for folder in generation_input.folders:
        _add(root, folder)
    return root


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


STEP_NAMES: dict[int, str] = {
    1: "PARSE",
    2: "GENERATE",
    3: "MANIFEST",
}

STEP_COLORS: dict[int, str] = {
    1: "bright_cyan",
    2: "bright_green",
    3: "bright_blue",
}


def print_step_header(step: int, name: str) -> None:
    """Print a full-width rule announcing a run step."""
    color = STEP_COLORS.get(step, "white")
    console.print()
    console.print(
        Rule(
            f"[bold {color}] Step {step}: {name.upper()} [/bold {color}]",
            style=color,
        )
    )


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")
