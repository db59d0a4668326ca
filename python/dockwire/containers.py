# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Container endpoints: listing and creation."""

from __future__ import annotations

import urllib.parse

from dockwire._api import ApiClient
from dockwire.errors import RequestPreparationError
from dockwire.types import (
    Container,
    ContainerConfig,
    CreateContainerResponse,
    decode_containers,
)

LIST_ENDPOINT = "/containers/json"
CREATE_ENDPOINT = "/containers/create"


def build_list_query(
    *,
    all_containers: bool = False,
    limit: int | None = None,
    filter_expr: str | None = None,
) -> str:
    """Build the query string for ``GET /containers/json``.

    Parameters appear in the fixed order ``all``, ``size``, ``limit``,
    ``filter``; ``size=true`` is always present.
    """
    params = []
    if all_containers:
        params.append("all=true")
    params.append("size=true")
    if limit is not None:
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
            msg = f"limit must be a non-negative integer, got {limit!r}"
            raise RequestPreparationError(msg)
        params.append(f"limit={limit}")
    if filter_expr is not None:
        params.append(f"filter={urllib.parse.quote(filter_expr, safe='')}")
    return "?" + "&".join(params)


class Containers(ApiClient):
    """Container operations, available on any :class:`ApiClient`."""

    def get_containers(self, endpoint: str, method: str, query: str) -> list[Container]:
        """Fetch and decode a container listing."""
        body = self.call(endpoint + query, method)
        return decode_containers(body)

    def list_running_containers(self, limit: int | None = None) -> list[Container]:
        """List running containers, at most *limit* of them."""
        query = build_list_query(limit=limit)
        return self.get_containers(LIST_ENDPOINT, "GET", query)

    def list_all_containers(self, limit: int | None = None) -> list[Container]:
        """List all containers whether running or stopped."""
        query = build_list_query(all_containers=True, limit=limit)
        return self.get_containers(LIST_ENDPOINT, "GET", query)

    def get_container_details_with_filter(
        self,
        filter_expr: str,
        limit: int | None = None,
    ) -> list[Container]:
        """List containers matching *filter_expr*.

        The filter grammar is the daemon's; see the Engine API ``ContainerList``
        operation.
        """
        query = build_list_query(all_containers=True, limit=limit, filter_expr=filter_expr)
        return self.get_containers(LIST_ENDPOINT, "GET", query)

    def create_container(self, name: str, config: ContainerConfig) -> CreateContainerResponse:
        """Create a container called *name* from *config*.

        Returns:
            The daemon's acknowledgment, holding the new container's ID.

        """
        body = config.to_json()
        if not name:
            msg = "container name is empty"
            raise RequestPreparationError(msg)
        endpoint = f"{CREATE_ENDPOINT}?name={urllib.parse.quote(name, safe='')}"
        resp = self.call(endpoint, "POST", body)
        return CreateContainerResponse.from_json(resp)

    def create_container_minimal(
        self,
        name: str,
        image: str,
        cmd: list[str] | tuple[str, ...],
    ) -> CreateContainerResponse:
        """Create a container from just an image and a command."""
        return self.create_container(name, ContainerConfig.minimal(image, cmd))
