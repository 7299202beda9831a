import asyncio
from typing import Awaitable, Optional, TypeVar

T = TypeVar("T")


class OperationCancelled(Exception):
    """Raised when the owner of an operation went away before it finished."""
    pass


class CancellationToken:
    """
    Cooperative cancellation handle passed through every async call.

    Usage:
        token = CancellationToken()
        ...
        token.cancel()          # e.g. when the view is torn down
        await token.guard(coro) # raises OperationCancelled, aborting coro
    """

    def __init__(self):
        self._event = asyncio.Event()
        self.reason: Optional[str] = None

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self, reason: str = "cancelled"):
        if not self._event.is_set():
            self.reason = reason
            self._event.set()

    def raise_if_cancelled(self):
        if self._event.is_set():
            raise OperationCancelled(self.reason or "cancelled")

    async def guard(self, awaitable: Awaitable[T]) -> T:
        """Await ``awaitable`` unless the token fires first, in which case it is aborted."""
        self.raise_if_cancelled()
        task = asyncio.ensure_future(awaitable)
        waiter = asyncio.ensure_future(self._event.wait())
        try:
            done, _ = await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            task.cancel()
            raise
        finally:
            waiter.cancel()

        if task in done:
            return task.result()

        task.cancel()
        # drain the aborted request so it does not outlive the operation
        await asyncio.gather(task, return_exceptions=True)
        raise OperationCancelled(self.reason or "cancelled")


async def guarded(awaitable: Awaitable[T], cancel: Optional[CancellationToken]) -> T:
    if cancel is None:
        return await awaitable
    return await cancel.guard(awaitable)


def check(cancel: Optional[CancellationToken]):
    if cancel is not None:
        cancel.raise_if_cancelled()
