# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""CLI entry point for dockwire."""

from __future__ import annotations

import dataclasses

import click

from dockwire import __version__


@dataclasses.dataclass
class CliContext:
    """Shared state passed through Click's context object."""

    socket: str | None = None
    verbose: bool = False


@click.group()
@click.option(
    "--socket",
    envvar="DOCKWIRE_SOCKET",
    default=None,
    help="Path to container engine socket.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.version_option(version=__version__, prog_name="dockwire")
@click.pass_context
def cli(ctx: click.Context, socket: str | None, *, verbose: bool) -> None:
    """Talk to a Docker-compatible daemon over its Unix socket."""
    ctx.ensure_object(dict)
    ctx.obj = CliContext(socket=socket, verbose=verbose)


# --- Register commands ---

from dockwire.cli._commands import (  # noqa: E402
    create_cmd,
    info_cmd,
    ping_cmd,
    ps_cmd,
    version_cmd,
)

cli.add_command(ps_cmd)
cli.add_command(create_cmd)
cli.add_command(version_cmd)
cli.add_command(info_cmd)
cli.add_command(ping_cmd)
