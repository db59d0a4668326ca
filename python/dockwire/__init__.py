# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

from __future__ import annotations

from importlib.metadata import version as _pkg_version

from dockwire._api import ApiClient
from dockwire._config import DockwireConfig, load_config
from dockwire._http import HttpResponse, format_request, parse_response, parse_response_body
from dockwire._logger import RequestLogger
from dockwire._transport import Transport, UnixSocketTransport, detect_socket
from dockwire.client import DockerClient
from dockwire.containers import Containers, build_list_query
from dockwire.errors import (
    ApiCallError,
    DecodeError,
    DockwireError,
    EncodeError,
    ErrorKind,
    MalformedResponseError,
    NoResponseError,
    RequestPreparationError,
    SocketNotFound,
)
from dockwire.types import (
    Container,
    ContainerConfig,
    CreateContainerResponse,
    HostConfig,
    Mount,
    Port,
)
from dockwire.version import Version

__version__ = _pkg_version("dockwire")


def get_version() -> str:
    """Return the dockwire package version string."""
    return __version__


__all__ = [
    "ApiCallError",
    "ApiClient",
    "Container",
    "ContainerConfig",
    "Containers",
    "CreateContainerResponse",
    "DecodeError",
    "DockerClient",
    "DockwireConfig",
    "DockwireError",
    "EncodeError",
    "ErrorKind",
    "HostConfig",
    "HttpResponse",
    "MalformedResponseError",
    "Mount",
    "NoResponseError",
    "Port",
    "RequestLogger",
    "RequestPreparationError",
    "SocketNotFound",
    "Transport",
    "UnixSocketTransport",
    "Version",
    "__version__",
    "build_list_query",
    "detect_socket",
    "format_request",
    "get_version",
    "load_config",
    "parse_response",
    "parse_response_body",
]
