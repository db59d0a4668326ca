"""Shared fixtures for dockwire tests."""

from __future__ import annotations

import json
import os
import pathlib
from typing import Any

import pytest
from dockwire.client import DockerClient


def _path_exists(path: pathlib.Path) -> bool:
    """Check if *path* exists, returning ``False`` on ``PermissionError``."""
    try:
        return path.exists()
    except PermissionError:
        return False


def _find_socket() -> str | None:
    """Detect an available container engine socket."""
    explicit = os.environ.get("DOCKWIRE_SOCKET")
    if explicit and _path_exists(pathlib.Path(explicit)):
        return explicit

    xdg = os.environ.get("XDG_RUNTIME_DIR", f"/run/user/{os.getuid()}")
    candidates = [
        pathlib.Path(xdg) / "podman" / "podman.sock",
        pathlib.Path("/run/podman/podman.sock"),
        pathlib.Path("/var/run/docker.sock"),
    ]
    for candidate in candidates:
        if _path_exists(candidate):
            return str(candidate)
    return None


SOCKET_PATH = _find_socket()
HAS_ENGINE = SOCKET_PATH is not None

requires_engine = pytest.mark.skipif(
    not HAS_ENGINE,
    reason="No container engine socket found (Docker or Podman)",
)


@pytest.fixture
def socket_path() -> str:
    """Return the detected socket path, or skip the test."""
    if SOCKET_PATH is None:
        pytest.skip("No container engine socket found")
    return SOCKET_PATH


# --- Scripted transport ---


def http_response(body: str, status: int = 200, reason: str = "OK") -> bytes:
    """Build a raw HTTP/1.1 response carrying *body*."""
    payload = body.encode("utf-8")
    head = (
        f"HTTP/1.1 {status} {reason}\r\n"
        "Content-Type: application/json\r\n"
        f"Content-Length: {len(payload)}\r\n"
        "\r\n"
    )
    return head.encode("ascii") + payload


class FakeTransport:
    """Records every request and replays canned raw responses in order."""

    def __init__(self, *responses: bytes | None) -> None:
        self.responses = list(responses)
        self.requests: list[bytes] = []

    def send(self, request: bytes) -> bytes | None:
        self.requests.append(request)
        if not self.responses:
            return None
        return self.responses.pop(0)

    @property
    def request_line(self) -> str:
        """The request line of the most recent request."""
        return self.requests[-1].split(b"\r\n", 1)[0].decode("ascii")

    @property
    def request_body(self) -> str:
        """The body of the most recent request."""
        return self.requests[-1].split(b"\r\n\r\n", 1)[1].decode("utf-8")


def container_payload(**overrides: Any) -> dict[str, Any]:
    """A realistic ``/containers/json`` entry."""
    data: dict[str, Any] = {
        "Id": "8dfafdbc3a40f7b8d2c3e0a1b9f5e6d7c8b9a0f1e2d3c4b5a6978695a4b3c2d1",
        "Names": ["/boring_feynman"],
        "Image": "ubuntu:latest",
        "ImageID": "sha256:d74508fb6632491cea586a1fd7d748dfc5274cd6fdfedee309ecdcbc2bf5cb82",
        "Command": "echo 1",
        "Created": 1367854155,
        "State": "running",
        "Status": "Up 2 hours",
        "Ports": [{"PrivatePort": 2222, "PublicPort": 3333, "Type": "tcp"}],
        "Labels": {"com.example.vendor": "Acme"},
        "SizeRw": 12288,
        "SizeRootFs": 0,
        "HostConfig": {"NetworkMode": "default"},
        "Mounts": [
            {
                "Name": "fac362...80535",
                "Source": "/data",
                "Destination": "/data",
                "Driver": "local",
                "Mode": "ro,Z",
                "RW": False,
                "Propagation": "",
            }
        ],
    }
    data.update(overrides)
    return data


@pytest.fixture
def containers_body() -> str:
    return json.dumps([container_payload()])


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def client(fake_transport: FakeTransport) -> DockerClient:
    return DockerClient(fake_transport)
