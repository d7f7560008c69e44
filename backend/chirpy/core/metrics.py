"""Process-local hit counter for the static file server."""

from __future__ import annotations

import threading

from flask import Flask, current_app

EXTENSION_KEY = "hit_counter"


class HitCounter:
    """Thread-safe counter owned by the application instance.

    The factory creates exactly one per app and stores it on
    ``app.extensions``; handlers look it up through :func:`get_hit_counter`
    instead of sharing a module-level global.
    """

    def __init__(self) -> None:
        self._value = 0
        self._lock = threading.Lock()

    @property
    def value(self) -> int:
        with self._lock:
            return self._value

    def increment(self) -> int:
        """Add one hit and return the new total."""
        with self._lock:
            self._value += 1
            return self._value

    def reset(self) -> None:
        with self._lock:
            self._value = 0


def init_app(app: Flask) -> HitCounter:
    """Attach a fresh :class:`HitCounter` to ``app`` and return it."""
    counter = HitCounter()
    app.extensions[EXTENSION_KEY] = counter
    return counter


def get_hit_counter() -> HitCounter:
    """Return the counter owned by the current application."""
    counter = current_app.extensions.get(EXTENSION_KEY)
    if counter is None:
        raise RuntimeError("Hit counter is not initialized. Call metrics.init_app() first.")
    return counter
