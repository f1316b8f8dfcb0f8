# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Request counters reported by the health endpoint.

A :class:`RequestMetrics` instance is created by whoever builds the app
and handed to :func:`cooling_tco.api.server.create_app`; nothing here is
module-level state.
"""

from __future__ import annotations

import threading
import time
from typing import Callable


class RequestMetrics:
    """Thread-safe request and error counters."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._started = clock()
        self._lock = threading.Lock()
        self._requests = 0
        self._errors = 0

    def record_request(self) -> None:
        with self._lock:
            self._requests += 1

    def record_error(self) -> None:
        with self._lock:
            self._errors += 1

    @property
    def request_count(self) -> int:
        with self._lock:
            return self._requests

    @property
    def error_count(self) -> int:
        with self._lock:
            return self._errors

    @property
    def uptime_seconds(self) -> float:
        return max(0.0, self._clock() - self._started)
