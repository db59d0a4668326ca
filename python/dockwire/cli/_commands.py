# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""CLI command implementations."""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from dockwire.cli.main import CliContext
    from dockwire.client import DockerClient

from dockwire.cli._output import (
    format_container_list,
    format_daemon_text,
    format_error,
    print_success,
)
from dockwire.errors import DockwireError


def _get_ctx(ctx: click.Context) -> CliContext:
    """Extract the CliContext from Click's context object."""
    return ctx.obj  # type: ignore[no-any-return]


def _make_client(socket_path: str | None) -> DockerClient:
    """Build a client from config, with *socket_path* taking precedence."""
    from dockwire._config import load_config  # noqa: PLC0415
    from dockwire.client import DockerClient  # noqa: PLC0415

    config = load_config(Path.cwd())
    if socket_path is not None:
        config = dataclasses.replace(config, socket=socket_path)
    return DockerClient.from_config(config)


def _parse_labels(pairs: tuple[str, ...]) -> dict[str, str] | None:
    """Turn ``KEY=VALUE`` pairs into a dict, or ``None`` when empty."""
    if not pairs:
        return None
    labels: dict[str, str] = {}
    for pair in pairs:
        if "=" not in pair:
            msg = f"expected KEY=VALUE, got {pair!r}"
            raise click.BadParameter(msg, param_hint="--label")
        key, value = pair.split("=", 1)
        labels[key] = value
    return labels


# ---------------------------------------------------------------------------
# Read-only commands
# ---------------------------------------------------------------------------


@click.command("ps")
@click.option("--all", "-a", "all_containers", is_flag=True, help="Include stopped containers.")
@click.option("--limit", "-n", type=click.IntRange(min=0), default=None, help="Return at most N containers.")
@click.option("--filter", "-f", "filter_expr", default=None, help="Daemon filter expression.")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON.")
@click.pass_context
def ps_cmd(
    ctx: click.Context,
    limit: int | None,
    filter_expr: str | None,
    *,
    all_containers: bool,
    json_output: bool,
) -> None:
    """List containers."""
    cli_ctx = _get_ctx(ctx)
    try:
        client = _make_client(cli_ctx.socket)
        if filter_expr is not None:
            items = client.get_container_details_with_filter(filter_expr, limit)
        elif all_containers:
            items = client.list_all_containers(limit)
        else:
            items = client.list_running_containers(limit)
    except DockwireError as exc:
        format_error(exc)
        raise SystemExit(1) from exc
    format_container_list(items, json_output=json_output)


@click.command("version")
@click.option("--json", "json_output", is_flag=True, help="Output raw JSON.")
@click.pass_context
def version_cmd(ctx: click.Context, *, json_output: bool) -> None:
    """Show the daemon's version."""
    cli_ctx = _get_ctx(ctx)
    try:
        body = _make_client(cli_ctx.socket).get_version_info()
    except DockwireError as exc:
        format_error(exc)
        raise SystemExit(1) from exc
    format_daemon_text(body, title="Daemon Version", json_output=json_output)


@click.command("info")
@click.option("--json", "json_output", is_flag=True, help="Output raw JSON.")
@click.pass_context
def info_cmd(ctx: click.Context, *, json_output: bool) -> None:
    """Show daemon-wide system information."""
    cli_ctx = _get_ctx(ctx)
    try:
        body = _make_client(cli_ctx.socket).get_system_info()
    except DockwireError as exc:
        format_error(exc)
        raise SystemExit(1) from exc
    format_daemon_text(body, title="Daemon Info", json_output=json_output)


@click.command("ping")
@click.pass_context
def ping_cmd(ctx: click.Context) -> None:
    """Check that the daemon answers."""
    cli_ctx = _get_ctx(ctx)
    try:
        reply = _make_client(cli_ctx.socket).ping()
    except DockwireError as exc:
        format_error(exc)
        raise SystemExit(1) from exc
    print_success(f"Daemon replied {reply}")


# ---------------------------------------------------------------------------
# Mutating commands
# ---------------------------------------------------------------------------


@click.command("create", context_settings={"allow_interspersed_args": False})
@click.argument("name")
@click.argument("image")
@click.argument("cmd", nargs=-1)
@click.option("--env", "-e", multiple=True, help="Environment variable KEY=VALUE.")
@click.option("--label", "-l", multiple=True, help="Label KEY=VALUE.")
@click.option("--workdir", "-w", default="", help="Working directory inside the container.")
@click.option("--tty", "-t", is_flag=True, help="Allocate a pseudo-TTY.")
@click.pass_context
def create_cmd(  # noqa: PLR0913
    ctx: click.Context,
    name: str,
    image: str,
    cmd: tuple[str, ...],
    env: tuple[str, ...],
    label: tuple[str, ...],
    workdir: str,
    *,
    tty: bool,
) -> None:
    """Create a container NAME from IMAGE running CMD.

    Options go before NAME; everything after IMAGE is the command.
    """
    from dockwire.types import ContainerConfig  # noqa: PLC0415

    cli_ctx = _get_ctx(ctx)
    config = ContainerConfig.minimal(image, cmd).with_overrides(
        env=env,
        labels=_parse_labels(label),
        working_dir=workdir,
        tty=tty,
    )
    try:
        resp = _make_client(cli_ctx.socket).create_container(name, config)
    except DockwireError as exc:
        format_error(exc)
        raise SystemExit(1) from exc
    print_success(f"Created container {name} ({resp.id[:12]})")
    for warning in resp.warnings:
        click.echo(f"warning: {warning}", err=True)
