import asyncio
from typing import Any, Callable


class Debouncer:
    """Owns at most one pending timer; scheduling a new one supersedes the old.

    Must be used from within a running event loop.
    """

    def __init__(self, delay: float):
        self.delay = delay
        self._handle: asyncio.TimerHandle | None = None

    def replace(self, callback: Callable[..., Any], *args) -> None:
        """Cancel the current timer and schedule ``callback`` after the delay."""
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire, callback, args)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def _fire(self, callback: Callable[..., Any], args: tuple) -> None:
        self._handle = None
        callback(*args)
