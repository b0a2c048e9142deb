from __future__ import annotations

import threading


class CompletionGuard:
    """Hands out a token per in-flight call so stale results can be dropped.

    Issuing a new token or calling `cancel()` makes every older token stale.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._current = 0

    def issue(self) -> int:
        with self._lock:
            self._current += 1
            return self._current

    def is_current(self, token: int) -> bool:
        with self._lock:
            return token == self._current

    def cancel(self) -> None:
        with self._lock:
            self._current += 1
