"""Shared task state: quitting, and pausing or suspending on application hooks."""

from __future__ import annotations

import enum
import threading
from typing import Optional


class AptHook(enum.IntEnum):
    ON_SUSPEND = 0
    ON_RESTORE = 1
    ON_SLEEP = 2
    ON_WAKEUP = 3
    ON_EXIT = 4


class TaskState:
    """Tracks whether background tasks should quit, pause or treat themselves as suspended."""

    def __init__(self) -> None:
        self._quit = False
        self._running = threading.Event()
        self._foreground = threading.Event()
        self._running.set()
        self._foreground.set()

    def handle_hook(self, hook: AptHook) -> None:
        """React to an application lifecycle hook."""
        if hook == AptHook.ON_RESTORE:
            self._foreground.set()
            self._running.set()
        elif hook == AptHook.ON_WAKEUP:
            self._running.set()
        elif hook == AptHook.ON_SUSPEND:
            self._foreground.clear()
            self._running.clear()
        elif hook == AptHook.ON_SLEEP:
            self._running.clear()

    def exit(self) -> None:
        """Ask every task to quit and release any that are waiting."""
        self._quit = True
        self._running.set()

    def is_quit_all(self) -> bool:
        return self._quit

    def is_paused(self) -> bool:
        return not self._running.is_set()

    def is_suspended(self) -> bool:
        return not self._foreground.is_set()

    def wait_unpaused(self, timeout: Optional[float] = None) -> bool:
        """Block until tasks may run; return False if the timeout ran out first."""
        return self._running.wait(timeout)