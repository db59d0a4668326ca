# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Concrete daemon client."""

from __future__ import annotations

from typing import TYPE_CHECKING

from dockwire._config import DockwireConfig, default_log_dir, load_config
from dockwire._logger import RequestLogger
from dockwire._transport import Transport, UnixSocketTransport, detect_socket
from dockwire.containers import Containers
from dockwire.errors import SocketNotFound
from dockwire.version import Version

if TYPE_CHECKING:
    from pathlib import Path


class DockerClient(Containers, Version):
    """Talks to a Docker-compatible daemon through a :class:`Transport`.

    Example::

        client = DockerClient.connect("unix:///var/run/docker.sock")
        for c in client.list_running_containers():
            print(c.name, c.status)
    """

    def __init__(self, transport: Transport, *, logger: RequestLogger | None = None) -> None:
        self.transport = transport
        self.logger = logger

    def __repr__(self) -> str:
        return f"DockerClient({self.transport!r})"

    def request(self, formatted: bytes) -> bytes | None:
        return self.transport.send(formatted)

    @classmethod
    def connect(
        cls,
        socket_path: str | None = None,
        *,
        timeout: float = 60.0,
        logger: RequestLogger | None = None,
    ) -> DockerClient:
        """Client over a Unix socket, auto-detected when *socket_path* is ``None``.

        Raises:
            SocketNotFound: if no socket is given and none can be detected.

        """
        if socket_path is None:
            socket_path = detect_socket()
            if socket_path is None:
                raise SocketNotFound
        return cls(UnixSocketTransport(socket_path, timeout=timeout), logger=logger)

    @classmethod
    def from_config(
        cls,
        config: DockwireConfig | None = None,
        *,
        project_root: Path | None = None,
    ) -> DockerClient:
        """Client built from a loaded (or freshly loaded) configuration."""
        if config is None:
            config = load_config(project_root)
        logger = None
        if config.auto_log:
            logger = RequestLogger(config.log_dir or default_log_dir())
        return cls.connect(config.socket, timeout=config.timeout, logger=logger)
