# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""The one round trip every resource operation is built on."""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from dockwire._http import format_request, parse_response_body
from dockwire.errors import ApiCallError, NoResponseError

if TYPE_CHECKING:
    from dockwire._logger import RequestLogger


class ApiClient:
    """Base for anything that can reach the daemon.

    Subclasses supply :meth:`request`; resource mixins (``Containers``,
    ``Version``) only ever go through :meth:`call`.
    """

    logger: RequestLogger | None = None

    def request(self, formatted: bytes) -> bytes | None:
        """Send a formatted request, returning the raw response or ``None``."""
        raise NotImplementedError

    def call(self, path: str, method: str, body: str = "") -> str:
        """Format, send, and extract the body of one request.

        Raises:
            RequestPreparationError: the request could not be built.
            NoResponseError: nothing came back from the daemon.
            MalformedResponseError: the response framing was invalid.

        """
        started_at = datetime.now(tz=timezone.utc)
        start = time.monotonic()
        try:
            formatted = format_request(path, method, body)
            raw = self.request(formatted)
            if raw is None:
                raise NoResponseError
            result = parse_response_body(raw)
        except ApiCallError as exc:
            self._log(method, path, exc.kind.value, start, started_at, exc.detail)
            raise
        self._log(method, path, "ok", start, started_at)
        return result

    def _log(
        self,
        method: str,
        path: str,
        outcome: str,
        start: float,
        started_at: datetime,
        detail: str = "",
    ) -> None:
        if self.logger is None:
            return
        self.logger.log_call(
            method,
            path,
            outcome=outcome,
            duration_ms=(time.monotonic() - start) * 1000,
            detail=detail,
            started_at=started_at,
        )
