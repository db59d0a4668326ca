# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Hand-built HTTP/1.1 request formatting and response framing.

Both halves are pure functions over locally owned data: nothing here touches a
socket, so they are safe to call from any number of threads at once.
"""

from __future__ import annotations

import dataclasses

from dockwire.errors import (
    MalformedResponseError,
    NoResponseError,
    RequestPreparationError,
)

METHODS = frozenset({"GET", "HEAD", "POST", "PUT", "DELETE"})
SEPARATOR = "\r\n\r\n"

_BODY_METHODS = frozenset({"POST", "PUT"})


# ---------------------------------------------------------------------------
# Request formatting
# ---------------------------------------------------------------------------


def format_request(path: str, method: str, body: str = "") -> bytes:
    """Build a complete, transport-ready HTTP/1.1 request.

    Raises:
        RequestPreparationError: if *path* or *method* cannot form a valid
            request line.

    """
    if not isinstance(path, str) or not path:
        msg = "endpoint path is empty"
        raise RequestPreparationError(msg)
    if not path.startswith("/"):
        msg = f"endpoint path must start with '/': {path!r}"
        raise RequestPreparationError(msg)
    if any(ch.isspace() or ord(ch) < 0x20 or ord(ch) == 0x7F for ch in path):
        msg = f"endpoint path contains whitespace or control characters: {path!r}"
        raise RequestPreparationError(msg)
    if method not in METHODS:
        msg = f"unsupported method: {method!r}"
        raise RequestPreparationError(msg)
    if not isinstance(body, str):
        msg = f"body must be text, got {type(body).__name__}"
        raise RequestPreparationError(msg)

    try:
        body_bytes = body.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise RequestPreparationError(str(exc)) from exc

    lines = [
        f"{method} {path} HTTP/1.1",
        "Host: localhost",
    ]
    if body_bytes or method in _BODY_METHODS:
        lines.append("Content-Type: application/json")
        lines.append(f"Content-Length: {len(body_bytes)}")
    lines.append("Connection: close")
    lines.append("")
    lines.append("")

    return "\r\n".join(lines).encode("ascii") + body_bytes


# ---------------------------------------------------------------------------
# Response parsing
# ---------------------------------------------------------------------------


@dataclasses.dataclass(frozen=True)
class HttpResponse:
    """A framed HTTP response: status line, headers and the raw body text."""

    status: int
    reason: str
    headers: dict[str, str]
    body: str


def parse_response(raw: bytes | str | None) -> HttpResponse:
    """Split a raw HTTP response into status, headers and body.

    The body is everything after the first blank-line separator, exactly as
    received.
    """
    if not raw:
        msg = "empty response"
        raise NoResponseError(msg)

    if isinstance(raw, bytes):
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedResponseError(str(exc)) from exc
    else:
        text = raw

    head, sep, body = text.partition(SEPARATOR)
    if not sep:
        msg = "no header/body separator found"
        raise MalformedResponseError(msg)

    status_line, *header_lines = head.split("\r\n")
    status, reason = _parse_status_line(status_line)
    return HttpResponse(
        status=status,
        reason=reason,
        headers=_parse_headers(header_lines),
        body=body,
    )


def parse_response_body(raw: bytes | str | None) -> str:
    """Return only the body of a raw HTTP response."""
    return parse_response(raw).body


def _parse_status_line(line: str) -> tuple[int, str]:
    """Parse ``HTTP/1.1 200 OK`` into ``(200, "OK")``."""
    parts = line.split(None, 2)
    if len(parts) < 2 or not parts[0].startswith("HTTP/"):  # noqa: PLR2004
        msg = f"malformed status line: {line!r}"
        raise MalformedResponseError(msg)
    code = parts[1]
    if len(code) != 3 or not code.isdigit():  # noqa: PLR2004
        msg = f"malformed status code: {code!r}"
        raise MalformedResponseError(msg)
    reason = parts[2] if len(parts) > 2 else ""  # noqa: PLR2004
    return int(code), reason


def _parse_headers(lines: list[str]) -> dict[str, str]:
    """Parse header lines into a dict with lower-cased names."""
    headers: dict[str, str] = {}
    for line in lines:
        if not line.strip():
            continue
        if ":" not in line:
            msg = f"malformed header line: {line!r}"
            raise MalformedResponseError(msg)
        key, value = line.split(":", 1)
        headers[key.strip().lower()] = value.strip()
    return headers
