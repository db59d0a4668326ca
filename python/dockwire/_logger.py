# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Fire-and-forget request history on disk.

All I/O is synchronous filesystem writes — simple, one JSONL line per call.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

_HISTORY_FILENAME = "history.jsonl"


class RequestLogger:
    """Appends one line per daemon call to ``<log_dir>/history.jsonl``."""

    def __init__(self, log_dir: Path | str, *, enabled: bool = True) -> None:
        self._log_dir = Path(log_dir)
        self._history_path = self._log_dir / _HISTORY_FILENAME
        self._enabled = enabled

    @property
    def enabled(self) -> bool:
        """Whether logging is active."""
        return self._enabled

    @property
    def history_path(self) -> Path:
        return self._history_path

    def log_call(
        self,
        method: str,
        path: str,
        *,
        outcome: str,
        duration_ms: float,
        detail: str = "",
        started_at: datetime | None = None,
    ) -> None:
        """Record one completed (or failed) call."""
        if not self._enabled:
            return
        if started_at is None:
            started_at = datetime.now(tz=timezone.utc)
        entry: dict[str, object] = {
            "method": method,
            "path": path,
            "outcome": outcome,
            "duration_ms": round(duration_ms, 1),
            "timestamp": started_at.isoformat(),
        }
        if detail:
            entry["detail"] = detail
        self.append_history(entry)

    def append_history(self, entry: dict[str, object]) -> None:
        """Append one JSONL line to ``history.jsonl``."""
        if not self._enabled:
            return
        try:
            self._log_dir.mkdir(parents=True, exist_ok=True)
            with self._history_path.open("a") as f:
                f.write(json.dumps(entry, default=str) + "\n")
        except OSError:
            # a full disk or read-only log dir must not fail the call
            return
