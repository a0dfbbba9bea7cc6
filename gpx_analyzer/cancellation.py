"""Cooperative cancellation checks for long-running loops."""

from __future__ import annotations

import threading

from .errors import CancellationRequested


def raise_if_cancelled(cancel_event: threading.Event | None) -> None:
    """Raise :class:`CancellationRequested` once ``cancel_event`` is set."""

    if cancel_event is not None and cancel_event.is_set():
        raise CancellationRequested("Operation cancelled by caller")


__all__ = ["raise_if_cancelled"]
