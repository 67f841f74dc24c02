"""
Delay-and-coalesce gate for rapid repeated calls (e.g. keystroke search).
"""
from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Any, Callable, Optional, Tuple


logger = logging.getLogger(__name__)


class DebounceState(str, Enum):
    IDLE = "idle"
    SCHEDULED = "scheduled"
    FIRED = "fired"


class Debouncer:
    """Run `fn` once `delay_ms` have passed without another call.

    Each call cancels the pending one and reschedules with the newest
    arguments, so at most one call is outstanding. Scheduling uses the running
    asyncio loop (or the one passed in); the wrapped function's return value is
    discarded.
    """

    def __init__(self, fn: Callable[..., Any], delay_ms: float, loop: Optional[asyncio.AbstractEventLoop] = None):
        if delay_ms < 0:
            raise ValueError("delay_ms must be >= 0")
        self.fn = fn
        self.delay_ms = delay_ms
        self._loop = loop
        self._handle: Optional[asyncio.TimerHandle] = None
        self._pending: Optional[Tuple[tuple, dict]] = None
        self.state = DebounceState.IDLE
        self.fire_count = 0

    @property
    def pending(self) -> bool:
        return self.state is DebounceState.SCHEDULED

    def event_loop(self) -> Optional[asyncio.AbstractEventLoop]:
        """The injected loop, else the running one, else None."""
        if self._loop is not None:
            return self._loop
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            return None

    def call(self, *args: Any, **kwargs: Any) -> None:
        loop = self.event_loop()
        if loop is None:
            raise RuntimeError("Debouncer.call needs a running event loop or an explicit loop")
        if self._handle is not None:
            self._handle.cancel()
        self._pending = (args, kwargs)
        self._handle = loop.call_later(self.delay_ms / 1000.0, self._fire)
        self.state = DebounceState.SCHEDULED

    __call__ = call

    def cancel(self) -> None:
        """Drop the pending call, if any."""
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._pending = None
        if self.state is DebounceState.SCHEDULED:
            self.state = DebounceState.IDLE

    def flush(self) -> None:
        """Run the pending call now instead of waiting for the delay."""
        if self.state is DebounceState.SCHEDULED:
            if self._handle is not None:
                self._handle.cancel()
            self._fire()

    def _fire(self) -> None:
        pending = self._pending
        self._handle = None
        self._pending = None
        self.state = DebounceState.FIRED
        if pending is None:
            return
        args, kwargs = pending
        self.fire_count += 1
        try:
            self.fn(*args, **kwargs)
        except Exception:
            # Timer callbacks have no caller to propagate to
            logger.exception("Debounced call failed")
