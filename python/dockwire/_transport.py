# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Blocking HTTP-over-Unix-socket transport for Docker/Podman.

Each ``send`` opens its own connection to the Unix socket, writes the whole
request, reads until the daemon closes the connection, and closes it again.
This is the connection-per-operation model: Unix sockets are free, and no
state is shared between calls.
"""

from __future__ import annotations

import os
import pathlib
import socket
from typing import Protocol

_READ_SIZE = 65536


class Transport(Protocol):
    """Anything that can carry one formatted request to the daemon."""

    def send(self, request: bytes) -> bytes | None:
        """Send *request* and return the raw response, or ``None``."""
        ...


# ---------------------------------------------------------------------------
# Socket detection
# ---------------------------------------------------------------------------


def normalize_socket_path(value: str) -> str:
    """Strip a ``unix://`` scheme from a socket address."""
    if value.startswith("unix://"):
        return value[len("unix://") :]
    return value


def detect_socket() -> str | None:
    """Auto-detect an available container engine socket.

    Detection order:
    1. ``DOCKWIRE_SOCKET`` env var
    2. Podman rootless: ``$XDG_RUNTIME_DIR/podman/podman.sock``
    3. Podman system: ``/run/podman/podman.sock``
    4. Docker: ``/var/run/docker.sock``

    Returns:
        The path to the first socket found, or ``None``.

    """
    explicit = os.environ.get("DOCKWIRE_SOCKET")
    if explicit:
        explicit = normalize_socket_path(explicit)
        if pathlib.Path(explicit).exists():
            return explicit

    xdg = os.environ.get("XDG_RUNTIME_DIR", f"/run/user/{os.getuid()}")
    candidates = [
        pathlib.Path(xdg) / "podman" / "podman.sock",
        pathlib.Path("/run/podman/podman.sock"),
        pathlib.Path("/var/run/docker.sock"),
    ]
    for candidate in candidates:
        if candidate.exists():
            return str(candidate)
    return None


# ---------------------------------------------------------------------------
# Unix socket transport
# ---------------------------------------------------------------------------


class UnixSocketTransport:
    """Send formatted requests over a Unix domain socket."""

    def __init__(self, socket_path: str, timeout: float = 60.0) -> None:
        self.socket_path = normalize_socket_path(socket_path)
        self.timeout = timeout

    def __repr__(self) -> str:
        return f"UnixSocketTransport({self.socket_path!r})"

    def send(self, request: bytes) -> bytes | None:
        """Write *request* and read the response until EOF.

        Returns ``None`` when the socket cannot be reached, the exchange fails
        mid-way, or the daemon closes the connection without answering.
        """
        try:
            with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as sock:
                sock.settimeout(self.timeout)
                sock.connect(self.socket_path)
                sock.sendall(request)
                raw = _read_until_eof(sock)
        except OSError:
            return None
        if not raw:
            return None
        return unchunk_response(raw)


def _read_until_eof(sock: socket.socket) -> bytes:
    """Read from *sock* until the peer closes its side."""
    parts: list[bytes] = []
    while True:
        chunk = sock.recv(_READ_SIZE)
        if not chunk:
            break
        parts.append(chunk)
    return b"".join(parts)


# ---------------------------------------------------------------------------
# Chunked transfer-encoding
# ---------------------------------------------------------------------------


def unchunk_response(raw: bytes) -> bytes:
    """Re-frame a chunked response with a plain ``Content-Length`` body.

    Responses that are not chunked, or whose chunk framing cannot be read,
    are returned untouched.
    """
    head, sep, body = raw.partition(b"\r\n\r\n")
    if not sep:
        return raw

    lines = head.split(b"\r\n")
    kept = [lines[0]]
    chunked = False
    for line in lines[1:]:
        name, _, value = line.partition(b":")
        key = name.strip().lower()
        if key == b"transfer-encoding" and value.strip().lower() == b"chunked":
            chunked = True
            continue
        if key == b"content-length":
            continue
        kept.append(line)
    if not chunked:
        return raw

    try:
        decoded = decode_chunked(body)
    except ValueError:
        return raw
    kept.append(b"Content-Length: " + str(len(decoded)).encode("ascii"))
    return b"\r\n".join(kept) + sep + decoded


def decode_chunked(data: bytes) -> bytes:
    """Decode a chunked transfer-encoded body.

    Raises:
        ValueError: if a chunk-size line is missing or not hexadecimal.

    """
    parts: list[bytes] = []
    pos = 0
    while True:
        end = data.find(b"\r\n", pos)
        if end < 0:
            msg = "truncated chunk-size line"
            raise ValueError(msg)
        size_str = data[pos:end].split(b";", 1)[0].strip()
        pos = end + 2
        if not size_str:
            continue
        chunk_size = int(size_str, 16)
        if chunk_size == 0:
            break
        parts.append(data[pos : pos + chunk_size])
        pos += chunk_size + 2  # trailing \r\n after chunk
    return b"".join(parts)
