from __future__ import annotations

import os
import threading
from typing import Callable

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .error_handling import log_watchdog_error
from .logger import log


class _DebouncedFileHandler(FileSystemEventHandler):
    """Fires ``callback`` once a burst of events on one file has settled."""

    def __init__(self, target: str, callback: Callable[[], None], debounce_ms: int = 100) -> None:
        self._target = os.path.abspath(target)
        self._callback = callback
        self._debounce = max(0, int(debounce_ms)) / 1000.0
        self._timer: threading.Timer | None = None
        self._lock = threading.Lock()

    def _schedule(self) -> None:
        def fire() -> None:
            try:
                self._callback()
            except (RuntimeError, OSError) as e:
                log_watchdog_error(self._target, "running change callback", e)

        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(self._debounce, fire)
            self._timer.daemon = True
            self._timer.start()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def _touches_target(self, event: FileSystemEvent) -> bool:
        paths = [getattr(event, "src_path", ""), getattr(event, "dest_path", "")]
        return any(p and os.path.abspath(os.fsdecode(p)) == self._target for p in paths)

    # Watchdog hooks
    def on_any_event(self, event: FileSystemEvent):  # type: ignore[override]
        # Editors often save via rename, so moves and creations count too
        et = getattr(event, "event_type", "")
        if et not in ("modified", "created", "moved") or not self._touches_target(event):
            return
        log.debug(f"[WATCHDOG] Event: {et} on {self._target}")
        self._schedule()


def watch_file(
    path: str, on_change: Callable[[], None], *, debounce_ms: int = 100
) -> tuple[object, Callable[[], None]]:
    """
    Watch a single file and return (observer, stop_fn).

    The observer watches the file's directory and filters events down to the
    file itself. ``on_change`` runs on a timer thread; callers that touch UI
    state must marshal it back to their own loop.

    stop_fn() is idempotent and cancels any pending debounced callbacks.
    """
    abs_path = os.path.abspath(path)
    log(f"[WATCHDOG] Watching file: {abs_path}")
    handler = _DebouncedFileHandler(abs_path, on_change, debounce_ms=debounce_ms)
    observer = Observer()
    observer.schedule(handler, os.path.dirname(abs_path), recursive=False)
    observer.start()

    _stopped = False
    _lock = threading.Lock()

    def stop() -> None:
        nonlocal _stopped
        with _lock:
            if _stopped:
                return
            _stopped = True
        handler.cancel()
        try:
            observer.stop()
            observer.join(timeout=0.5)
        except (RuntimeError, OSError) as e:
            log_watchdog_error(abs_path, "stopping observer", e)

    return observer, stop
