"""Tests for the Unix socket transport against a throwaway local server."""

from __future__ import annotations

import os
import shutil
import socketserver
import tempfile
import threading
from collections.abc import Iterator
from unittest.mock import patch

import pytest
from dockwire._http import format_request
from dockwire._transport import (
    UnixSocketTransport,
    decode_chunked,
    detect_socket,
    normalize_socket_path,
    unchunk_response,
)
from dockwire.client import DockerClient
from dockwire.errors import NoResponseError, SocketNotFound

from .conftest import container_payload, http_response


class _Server(socketserver.ThreadingMixIn, socketserver.UnixStreamServer):
    daemon_threads = True

    def __init__(self, path: str, reply: bytes) -> None:
        self.reply = reply
        self.received: list[bytes] = []
        super().__init__(path, _Handler)


class _Handler(socketserver.BaseRequestHandler):
    def handle(self) -> None:
        server: _Server = self.server  # type: ignore[assignment]
        data = b""
        while b"\r\n\r\n" not in data:
            chunk = self.request.recv(4096)
            if not chunk:
                break
            data += chunk
        head, _, body = data.partition(b"\r\n\r\n")
        for line in head.split(b"\r\n"):
            if line.lower().startswith(b"content-length:"):
                length = int(line.split(b":", 1)[1])
                while len(body) < length:
                    body += self.request.recv(4096)
        server.received.append(head + b"\r\n\r\n" + body)
        if server.reply:
            self.request.sendall(server.reply)


@pytest.fixture
def sock_dir() -> Iterator[str]:
    # AF_UNIX paths are length-limited; keep it short
    path = tempfile.mkdtemp(prefix="dw")
    yield path
    shutil.rmtree(path, ignore_errors=True)


def _serve(path: str, reply: bytes) -> _Server:
    server = _Server(path, reply)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    return server


# -- UnixSocketTransport --


def test_send_returns_raw_response(sock_dir: str) -> None:
    path = os.path.join(sock_dir, "d.sock")
    reply = http_response('{"Version":"24.0.7"}')
    server = _serve(path, reply)
    try:
        raw = UnixSocketTransport(path, timeout=5).send(format_request("/version", "GET"))
    finally:
        server.shutdown()
        server.server_close()
    assert raw == reply
    assert server.received[0].startswith(b"GET /version HTTP/1.1\r\n")


def test_send_writes_whole_body(sock_dir: str) -> None:
    path = os.path.join(sock_dir, "d.sock")
    server = _serve(path, http_response('{"Id":"abc"}'))
    body = '{"Image":"alpine","Env":["' + "X" * 100_000 + '"]}'
    try:
        UnixSocketTransport(path, timeout=5).send(format_request("/containers/create?name=a", "POST", body))
    finally:
        server.shutdown()
        server.server_close()
    assert server.received[0].endswith(body.encode())


def test_send_missing_socket_returns_none(sock_dir: str) -> None:
    transport = UnixSocketTransport(os.path.join(sock_dir, "missing.sock"), timeout=1)
    assert transport.send(b"GET / HTTP/1.1\r\n\r\n") is None


def test_send_closed_without_reply_returns_none(sock_dir: str) -> None:
    path = os.path.join(sock_dir, "d.sock")
    server = _serve(path, b"")
    try:
        raw = UnixSocketTransport(path, timeout=5).send(format_request("/version", "GET"))
    finally:
        server.shutdown()
        server.server_close()
    assert raw is None


def test_client_end_to_end(sock_dir: str) -> None:
    import json

    path = os.path.join(sock_dir, "d.sock")
    server = _serve(path, http_response(json.dumps([container_payload()])))
    try:
        containers = DockerClient.connect(f"unix://{path}", timeout=5).list_all_containers(1)
    finally:
        server.shutdown()
        server.server_close()
    assert containers[0].name == "boring_feynman"
    assert server.received[0].startswith(b"GET /containers/json?all=true&size=true&limit=1 HTTP/1.1\r\n")


def test_client_missing_socket_is_no_response(sock_dir: str) -> None:
    client = DockerClient.connect(os.path.join(sock_dir, "missing.sock"), timeout=1)
    with pytest.raises(NoResponseError):
        client.ping()


def test_unix_prefix_stripped() -> None:
    assert UnixSocketTransport("unix:///var/run/docker.sock").socket_path == "/var/run/docker.sock"
    assert normalize_socket_path("/run/podman/podman.sock") == "/run/podman/podman.sock"


# -- chunked transfer-encoding --


def test_decode_chunked_multiple_chunks() -> None:
    assert decode_chunked(b"3\r\nabc\r\n4\r\ndefg\r\n0\r\n\r\n") == b"abcdefg"


def test_decode_chunked_with_extension() -> None:
    assert decode_chunked(b"5;name=v\r\nhello\r\n0\r\n\r\n") == b"hello"


def test_decode_chunked_bad_size() -> None:
    with pytest.raises(ValueError):
        decode_chunked(b"zz\r\nabc\r\n0\r\n\r\n")


def test_unchunk_response_reframes() -> None:
    raw = (
        b"HTTP/1.1 200 OK\r\n"
        b"Content-Type: application/json\r\n"
        b"Transfer-Encoding: chunked\r\n"
        b"\r\n"
        b"2\r\n[]\r\n0\r\n\r\n"
    )
    assert unchunk_response(raw) == (
        b"HTTP/1.1 200 OK\r\nContent-Type: application/json\r\nContent-Length: 2\r\n\r\n[]"
    )


def test_unchunk_response_leaves_plain_response() -> None:
    raw = http_response("[]")
    assert unchunk_response(raw) is raw


def test_unchunk_response_leaves_broken_chunks() -> None:
    raw = b"HTTP/1.1 200 OK\r\nTransfer-Encoding: chunked\r\n\r\nnot-hex\r\n"
    assert unchunk_response(raw) is raw


# -- detect_socket --


def test_detect_socket_with_env_var(sock_dir: str) -> None:
    sock = os.path.join(sock_dir, "test.sock")
    open(sock, "w").close()  # noqa: SIM115
    with patch.dict(os.environ, {"DOCKWIRE_SOCKET": f"unix://{sock}"}):
        assert detect_socket() == sock


def test_detect_socket_no_env_no_candidates() -> None:
    with (
        patch.dict(os.environ, {"DOCKWIRE_SOCKET": "", "XDG_RUNTIME_DIR": "/tmp/fake_xdg"}),
        patch("dockwire._transport.pathlib.Path.exists", return_value=False),
    ):
        assert detect_socket() is None


def test_connect_without_socket_raises() -> None:
    with (
        patch("dockwire.client.detect_socket", return_value=None),
        pytest.raises(SocketNotFound),
    ):
        DockerClient.connect()
