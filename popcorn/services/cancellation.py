"""Latest-request-wins execution of lookups."""

import asyncio
from typing import Any, Awaitable, Optional


class Superseded(Exception):
    """The run was cancelled or replaced by a newer one; discard its outcome."""


class LatestOnly:
    """Runs at most one lookup at a time.

    Starting a new run cancels the previous one. Each run acts as a
    cancellation token: a run that was replaced, or cancelled through
    ``cancel()``, raises ``Superseded`` instead of returning, even when
    its request had already finished.
    """

    def __init__(self) -> None:
        self._task: Optional[asyncio.Task] = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def cancel(self) -> None:
        """Cancel the in-flight run, if any."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def run(self, awaitable: Awaitable[Any]) -> Any:
        self.cancel()
        task = asyncio.ensure_future(awaitable)
        self._task = task
        try:
            result = await task
        except asyncio.CancelledError:
            if self._task is task:
                # The caller itself was cancelled, not superseded.
                self._task = None
                raise
            raise Superseded() from None
        except Exception:
            if self._task is not task:
                raise Superseded() from None
            self._task = None
            raise

        if self._task is not task:
            raise Superseded()
        self._task = None
        return result
