"""Cooperative cancellation signal threaded through the pipeline."""

from __future__ import annotations

import asyncio
import threading

from shared_kernel.mediator.exceptions import OperationCancelledError


class CancellationToken:
    """A one-shot cancellation flag.

    Cancellation is cooperative: stages call ``raise_if_cancelled()`` at
    their entry points and the token never interrupts work already running.
    Backed by a ``threading.Event`` so it can be triggered from any thread.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation. Idempotent."""
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        """Whether cancellation has been requested."""
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        """Raise OperationCancelledError if cancellation has been requested."""
        if self._event.is_set():
            raise OperationCancelledError("Operation was cancelled")

    async def sleep(self, seconds: float) -> None:
        """Sleep, then honour any cancellation requested in the meantime.

        Used as the sleep strategy between retry attempts.
        """
        self.raise_if_cancelled()
        await asyncio.sleep(seconds)
        self.raise_if_cancelled()
