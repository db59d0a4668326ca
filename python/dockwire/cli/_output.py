# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Rich output formatters for the CLI."""

from __future__ import annotations

import dataclasses
import json
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dockwire.errors import DockwireError
    from dockwire.types import Container

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

_console = Console()
_err_console = Console(stderr=True)


def format_container_list(items: list[Container], *, json_output: bool = False) -> None:
    """Print a list of containers as a rich table or JSON."""
    if json_output:
        rows = [dataclasses.asdict(item) for item in items]
        click_echo_json(rows)
        return

    if not items:
        _console.print("[dim]No containers found.[/dim]")
        return

    table = Table(title="Containers")
    table.add_column("Name", style="cyan")
    table.add_column("ID", style="dim")
    table.add_column("State")
    table.add_column("Status")
    table.add_column("Image")

    for item in items:
        state_style = "green" if item.state == "running" else "yellow"
        table.add_row(
            item.name,
            item.id[:12],
            f"[{state_style}]{item.state}[/{state_style}]",
            item.status,
            item.image,
        )

    _console.print(table)


def format_daemon_text(body: str, *, title: str, json_output: bool = False) -> None:
    """Print an opaque daemon JSON body, as-is or as a panel of its top-level fields."""
    if json_output:
        sys.stdout.write(body.rstrip("\n") + "\n")
        return

    try:
        data = json.loads(body)
    except json.JSONDecodeError:
        data = None
    if not isinstance(data, dict):
        _console.print(body, markup=False)
        return

    lines = [
        f"[bold]{escape(str(key))}:[/bold] {escape(str(value))}"
        for key, value in data.items()
        if isinstance(value, (str, int, float, bool))
    ]
    panel = Panel("\n".join(lines) or "[dim]Nothing to report.[/dim]", title=title, expand=False)
    _console.print(panel)


def format_error(err: DockwireError) -> None:
    """Print an SDK error as a rich panel with suggestions."""
    title, suggestion = _error_info(err)
    lines = [escape(str(err))]
    if suggestion:
        lines.append(f"\n[dim]{suggestion}[/dim]")

    panel = Panel(
        "\n".join(lines),
        title=f"[red]{title}[/red]",
        expand=False,
    )
    _err_console.print(panel)


def _error_info(err: DockwireError) -> tuple[str, str]:
    """Map an SDK error to a title and suggestion string."""
    from dockwire.errors import ErrorKind, SocketNotFound  # noqa: PLC0415

    if isinstance(err, SocketNotFound):
        return "Engine Not Found", "Start Docker or Podman and try again."
    kind = getattr(err, "kind", None)
    if kind is ErrorKind.NO_RESPONSE:
        return "No Response", "Check that the daemon is running and the socket is readable."
    if kind is ErrorKind.MALFORMED_RESPONSE:
        return "Malformed Response", "Is the socket really a Docker-compatible API?"
    if kind is ErrorKind.REQUEST_PREPARATION:
        return "Invalid Request", ""
    if kind is ErrorKind.DECODE:
        return "Unexpected Response", "The daemon's API version may not be supported."
    if kind is ErrorKind.ENCODE:
        return "Invalid Configuration", ""
    return "Error", ""


def print_success(msg: str) -> None:
    """Print a success message with a checkmark."""
    _console.print(f"[green]✓[/green] {msg}")


def click_echo_json(data: object) -> None:
    """Serialize data to JSON and echo to stdout."""
    sys.stdout.write(json.dumps(data, indent=2, default=str) + "\n")
