# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Daemon identity endpoints."""

from __future__ import annotations

from dockwire._api import ApiClient


class Version(ApiClient):
    """Version and system information, returned as opaque JSON text."""

    def get_version_info(self) -> str:
        """Return the body of ``GET /version``.

        Daemon-wide system information (``GET /info``) is
        :meth:`get_system_info`.
        """
        return self.call("/version", "GET")

    def get_system_info(self) -> str:
        """Return the body of ``GET /info``."""
        return self.call("/info", "GET")

    def ping(self) -> str:
        """Ping the daemon.

        Returns:
            ``"OK"`` on success.

        """
        return self.call("/_ping", "GET").strip()
