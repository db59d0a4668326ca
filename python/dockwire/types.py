# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Typed payloads exchanged with the daemon's container endpoints."""

from __future__ import annotations

import dataclasses
import json
from typing import Any

from dockwire.errors import DecodeError, EncodeError

_MISSING = object()


def _field(data: dict[str, Any], name: str, kind: type | tuple[type, ...], default: Any = _MISSING) -> Any:
    """Fetch *name* from *data* and check its JSON type.

    A key that is absent (or ``null``) falls back to *default*; without one
    it is reported as missing.
    """
    value = data.get(name)
    if value is None:
        if default is _MISSING:
            msg = f"missing field `{name}`"
            raise DecodeError(msg)
        return default
    # bool is an int subclass; JSON true/false must not pass as a number
    if isinstance(value, bool) and kind is not bool:
        msg = f"invalid type for `{name}`: expected {_kind_name(kind)}, got boolean"
        raise DecodeError(msg)
    if not isinstance(value, kind):
        msg = f"invalid type for `{name}`: expected {_kind_name(kind)}, got {type(value).__name__}"
        raise DecodeError(msg)
    return value


def _kind_name(kind: type | tuple[type, ...]) -> str:
    if isinstance(kind, tuple):
        return " or ".join(k.__name__ for k in kind)
    return kind.__name__


def _object(value: Any, what: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        msg = f"invalid type for {what}: expected object, got {type(value).__name__}"
        raise DecodeError(msg)
    return value


def _str_list(data: dict[str, Any], name: str) -> tuple[str, ...]:
    items = _field(data, name, list)
    if not all(isinstance(item, str) for item in items):
        msg = f"invalid type for `{name}`: expected a list of strings"
        raise DecodeError(msg)
    return tuple(items)


def _str_map(data: dict[str, Any], name: str) -> dict[str, str] | None:
    labels = _field(data, name, dict, default=None)
    if labels is not None and not all(isinstance(v, str) for v in labels.values()):
        msg = f"invalid type for `{name}`: expected a map of strings"
        raise DecodeError(msg)
    return labels


# ---------------------------------------------------------------------------
# Container listing records
# ---------------------------------------------------------------------------


@dataclasses.dataclass(frozen=True)
class Port:
    """A port mapping reported for a container."""

    private_port: int
    type: str
    public_port: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> Port:
        data = _object(data, "port")
        return cls(
            private_port=_field(data, "PrivatePort", int),
            type=_field(data, "Type", str),
            public_port=_field(data, "PublicPort", int, default=0),
        )


@dataclasses.dataclass(frozen=True)
class HostConfig:
    """Subset of a container's host configuration."""

    network_mode: str

    @classmethod
    def from_dict(cls, data: Any) -> HostConfig:
        data = _object(data, "`HostConfig`")
        return cls(network_mode=_field(data, "NetworkMode", str))


@dataclasses.dataclass(frozen=True)
class Mount:
    """A mount point attached to a container."""

    source: str
    destination: str
    mode: str
    rw: bool
    propagation: str
    name: str = ""
    driver: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> Mount:
        data = _object(data, "mount")
        return cls(
            source=_field(data, "Source", str),
            destination=_field(data, "Destination", str),
            mode=_field(data, "Mode", str),
            rw=_field(data, "RW", bool),
            propagation=_field(data, "Propagation", str),
            # bind mounts carry neither a volume name nor a driver
            name=_field(data, "Name", str, default=""),
            driver=_field(data, "Driver", str, default=""),
        )


@dataclasses.dataclass(frozen=True)
class Container:
    """One entry of ``GET /containers/json``."""

    id: str
    names: tuple[str, ...]
    image: str
    image_id: str
    command: str
    state: str
    status: str
    ports: tuple[Port, ...]
    host_config: HostConfig
    mounts: tuple[Mount, ...]
    labels: dict[str, str] | None = None
    size_rw: int | None = None
    size_root_fs: int = 0

    @property
    def name(self) -> str:
        """Primary name without the leading slash."""
        return self.names[0].lstrip("/") if self.names else ""

    @classmethod
    def from_dict(cls, data: Any) -> Container:
        data = _object(data, "container")
        return cls(
            id=_field(data, "Id", str),
            names=_str_list(data, "Names"),
            image=_field(data, "Image", str),
            image_id=_field(data, "ImageID", str),
            command=_field(data, "Command", str),
            state=_field(data, "State", str),
            status=_field(data, "Status", str),
            ports=tuple(Port.from_dict(p) for p in _field(data, "Ports", list)),
            host_config=HostConfig.from_dict(_field(data, "HostConfig", dict)),
            mounts=tuple(Mount.from_dict(m) for m in _field(data, "Mounts", list)),
            labels=_str_map(data, "Labels"),
            size_rw=_field(data, "SizeRw", int, default=None),
            size_root_fs=_field(data, "SizeRootFs", int, default=0),
        )


def decode_containers(body: str) -> list[Container]:
    """Decode a container listing body into ``Container`` records."""
    try:
        data = json.loads(body)
    except json.JSONDecodeError as exc:
        raise DecodeError(str(exc)) from exc
    if not isinstance(data, list):
        msg = f"invalid type: expected a sequence, got {type(data).__name__}"
        raise DecodeError(msg)
    return [Container.from_dict(item) for item in data]


# ---------------------------------------------------------------------------
# Container creation
# ---------------------------------------------------------------------------


@dataclasses.dataclass(frozen=True)
class CreateContainerResponse:
    """Acknowledgment of ``POST /containers/create``."""

    id: str
    warnings: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> CreateContainerResponse:
        data = _object(data, "create response")
        warnings = _field(data, "Warnings", list, default=[])
        return cls(
            id=_field(data, "Id", str),
            warnings=tuple(str(w) for w in warnings),
        )

    @classmethod
    def from_json(cls, body: str) -> CreateContainerResponse:
        try:
            data = json.loads(body)
        except json.JSONDecodeError as exc:
            raise DecodeError(str(exc)) from exc
        return cls.from_dict(data)


# Python field name -> daemon field name, in the order the daemon documents them
_CONFIG_KEYS = {
    "image": "Image",
    "cmd": "Cmd",
    "hostname": "Hostname",
    "domainname": "Domainname",
    "user": "User",
    "attach_stdin": "AttachStdin",
    "attach_stdout": "AttachStdout",
    "attach_stderr": "AttachStderr",
    "tty": "Tty",
    "open_stdin": "OpenStdin",
    "stdin_once": "StdinOnce",
    "env": "Env",
    "entrypoint": "Entrypoint",
    "labels": "Labels",
    "working_dir": "WorkingDir",
}


@dataclasses.dataclass(frozen=True)
class ContainerConfig:
    """Configuration for a new container.

    Every field has a safe default, so a usable config needs only an image
    and a command::

        config = ContainerConfig.minimal("debian:bookworm", ["ls"])
        config = config.with_overrides(tty=True, env=("A=1",))
    """

    image: str = ""
    cmd: tuple[str, ...] = ()
    hostname: str = ""
    domainname: str = ""
    user: str = ""
    attach_stdin: bool = False
    attach_stdout: bool = False
    attach_stderr: bool = False
    tty: bool = False
    open_stdin: bool = False
    stdin_once: bool = False
    env: tuple[str, ...] = ()
    entrypoint: tuple[str, ...] = ()
    labels: dict[str, str] | None = None
    working_dir: str = ""

    @classmethod
    def minimal(cls, image: str, cmd: list[str] | tuple[str, ...]) -> ContainerConfig:
        """Config with only *image* and *cmd* set."""
        return cls(image=image, cmd=tuple(cmd))

    def with_overrides(self, **overrides: Any) -> ContainerConfig:
        """Return a copy with *overrides* applied.

        Raises:
            TypeError: if an override names a field that does not exist.

        """
        for key in ("cmd", "env", "entrypoint"):
            if key in overrides and isinstance(overrides[key], list):
                overrides[key] = tuple(overrides[key])
        return dataclasses.replace(self, **overrides)

    def validate(self) -> None:
        """Check the config can be sent to the daemon.

        Raises:
            EncodeError: on an empty image or a wrongly typed field.

        """
        if not isinstance(self.image, str) or not self.image:
            msg = "image must be a non-empty string"
            raise EncodeError(msg)
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            if f.name in ("cmd", "env", "entrypoint"):
                if not isinstance(value, (tuple, list)) or not all(isinstance(v, str) for v in value):
                    msg = f"{f.name} must be a sequence of strings"
                    raise EncodeError(msg)
            elif f.name == "labels":
                if value is not None and (
                    not isinstance(value, dict)
                    or not all(isinstance(k, str) and isinstance(v, str) for k, v in value.items())
                ):
                    msg = "labels must map strings to strings"
                    raise EncodeError(msg)
            elif f.type == "bool" and not isinstance(value, bool):
                msg = f"{f.name} must be a boolean"
                raise EncodeError(msg)
            elif f.type == "str" and not isinstance(value, str):
                msg = f"{f.name} must be a string"
                raise EncodeError(msg)

    def to_dict(self) -> dict[str, Any]:
        """Return the daemon's JSON representation."""
        out: dict[str, Any] = {}
        for attr, key in _CONFIG_KEYS.items():
            value = getattr(self, attr)
            if isinstance(value, tuple):
                value = list(value)
            out[key] = value
        return out

    def to_json(self) -> str:
        """Validate and serialize the config.

        Raises:
            EncodeError: if the config is invalid or not JSON-serializable.

        """
        self.validate()
        try:
            return json.dumps(self.to_dict())
        except (TypeError, ValueError) as exc:
            raise EncodeError(str(exc)) from exc
