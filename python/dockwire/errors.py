# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

from __future__ import annotations

import enum


class ErrorKind(enum.Enum):
    """Why a daemon call failed."""

    REQUEST_PREPARATION = "request_preparation"
    NO_RESPONSE = "no_response"
    MALFORMED_RESPONSE = "malformed_response"
    DECODE = "decode"
    ENCODE = "encode"


class DockwireError(Exception):
    """Base exception for all dockwire errors."""


class SocketNotFound(DockwireError):
    """No container engine socket found."""

    def __init__(self) -> None:
        super().__init__(
            "No container engine socket found. "
            "Is Docker or Podman running? "
            "Set DOCKWIRE_SOCKET or pass --socket."
        )


class ApiCallError(DockwireError):
    """A daemon call failed; ``kind`` says at which stage."""

    kind: ErrorKind
    summary: str = ""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        msg = self.summary
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


class RequestPreparationError(ApiCallError):
    """Endpoint, method or body could not be assembled into a request."""

    kind = ErrorKind.REQUEST_PREPARATION
    summary = "Error while preparing request"


class NoResponseError(ApiCallError):
    """The transport returned nothing."""

    kind = ErrorKind.NO_RESPONSE
    summary = "Got no response from docker host"


class MalformedResponseError(ApiCallError):
    """A response arrived but its body could not be extracted."""

    kind = ErrorKind.MALFORMED_RESPONSE
    summary = "Response body was not valid"


class DecodeError(ApiCallError):
    """The response body did not match the expected JSON shape."""

    kind = ErrorKind.DECODE
    summary = "Error while deserializing JSON response"


class EncodeError(ApiCallError):
    """A configuration object could not be serialized for sending."""

    kind = ErrorKind.ENCODE
    summary = "Error while serializing container config"
