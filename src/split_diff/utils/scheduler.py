"""Debounced recomputation for live diffing.

A single-slot timer: every trigger cancels whatever is armed and arms a new
delayed callback, so bursts of edits collapse into one recomputation against
the latest content. There is no queue and no partial result.

The timer itself is injectable. The default arms a callback on the running
asyncio loop (the loop Textual runs on), which keeps everything on one
thread; tests pass a fake clock instead.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Any, Callable, Optional, Protocol

from .config import config
from .error_handling import log_generic_error
from .logger import log


class Cancellable(Protocol):
    def cancel(self) -> Any: ...


TimerFactory = Callable[[float, Callable[[], None]], Cancellable]


def asyncio_timer(delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
    """Arm ``callback`` on the running event loop after ``delay`` seconds."""
    return asyncio.get_running_loop().call_later(delay, callback)


class SchedulerState(Enum):
    IDLE = "idle"
    PENDING = "pending"


class RecomputeScheduler:
    """Debounce edits into a single deferred call of ``on_ready``."""

    def __init__(
        self,
        on_ready: Callable[[], None],
        debounce_ms: Optional[int] = None,
        *,
        timer: Optional[TimerFactory] = None,
    ) -> None:
        if debounce_ms is None:
            debounce_ms = config.debounce_ms
        if debounce_ms < 0:
            raise ValueError(f"debounce_ms must be non-negative, got {debounce_ms}")
        self._on_ready = on_ready
        self.debounce_ms = debounce_ms
        self._timer = timer or asyncio_timer
        self._handle: Optional[Cancellable] = None

    @property
    def state(self) -> SchedulerState:
        return SchedulerState.PENDING if self._handle is not None else SchedulerState.IDLE

    @property
    def pending(self) -> bool:
        """True while a recompute is armed and has not fired yet."""
        return self._handle is not None

    def trigger(self) -> None:
        """Call on every edit: drops the armed timer and re-arms it."""
        self.cancel()
        self._handle = self._timer(self.debounce_ms / 1000.0, self._fire)
        log.debug(f"[SCHED] Armed recompute in {self.debounce_ms}ms")

    def cancel(self) -> bool:
        """Discard the armed timer, if any. Returns True when something was cancelled."""
        handle, self._handle = self._handle, None
        if handle is None:
            return False
        handle.cancel()
        return True

    def flush(self) -> bool:
        """Run a pending recompute right away instead of waiting for the timer."""
        if not self.cancel():
            return False
        self._fire()
        return True

    def _fire(self) -> None:
        self._handle = None
        try:
            self._on_ready()
        except Exception as e:
            log_generic_error("recompute scheduler", "running recompute", e, prefix="SCHED")


def schedule_recompute(
    on_ready: Callable[[], None], debounce_ms: int, *, timer: Optional[TimerFactory] = None
) -> RecomputeScheduler:
    """Create a scheduler handle; call ``trigger()`` on every edit and ``cancel()`` to drop it."""
    return RecomputeScheduler(on_ready, debounce_ms, timer=timer)
