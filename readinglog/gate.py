"""Lock serializing every mutating operation.

``global`` granularity uses one lock for the whole workbook: simple, and
plenty for a handful of concurrent users. ``table`` granularity keeps one
lock per sheet so writes to unrelated sheets proceed in parallel; a
multi-sheet operation takes its locks in sorted name order.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from enum import StrEnum

from readinglog.config import LOCK_GRANULARITY, LOCK_TIMEOUT
from readinglog.errors import LockTimeoutError

logger = logging.getLogger(__name__)

_GLOBAL = "*"


def _release(held: list[asyncio.Lock]) -> None:
    for lock in reversed(held):
        lock.release()


class LockGranularity(StrEnum):
    GLOBAL = "global"
    TABLE = "table"


class MutationGate:
    def __init__(
        self,
        granularity: LockGranularity | str = LOCK_GRANULARITY,
        timeout: float = LOCK_TIMEOUT,
    ) -> None:
        self.granularity = LockGranularity(granularity)
        self.timeout = timeout
        self._locks: dict[str, asyncio.Lock] = {}

    def _lock(self, name: str) -> asyncio.Lock:
        lock = self._locks.get(name)
        if lock is None:
            lock = self._locks[name] = asyncio.Lock()
        return lock

    def _names(self, tables) -> list[str]:
        if self.granularity is LockGranularity.GLOBAL or not tables:
            return [_GLOBAL]
        return sorted({str(t) for t in tables})

    def locked(self, *tables) -> bool:
        return any(self._lock(name).locked() for name in self._names(tables))

    async def _acquire_all(self, names: list[str], held: list[asyncio.Lock]) -> None:
        for name in names:
            lock = self._lock(name)
            await lock.acquire()
            held.append(lock)

    @asynccontextmanager
    async def hold(self, *tables, timeout: float | None = None):
        """Hold the lock(s) guarding ``tables`` for the duration of the block.

        Raises LockTimeoutError when the locks are not all acquired within
        ``timeout`` seconds. Locks are released on exit, including on error.
        """
        timeout = self.timeout if timeout is None else timeout
        names = self._names(tables)
        held: list[asyncio.Lock] = []
        try:
            try:
                await asyncio.wait_for(self._acquire_all(names, held), timeout)
            except BaseException:
                # Timeout or cancellation part way through: give back what was taken
                _release(held)
                raise
        except TimeoutError:
            logger.warning("Timed out after %.1fs waiting for lock(s) %s", timeout, ", ".join(names))
            raise LockTimeoutError(
                f"Could not obtain the write lock within {timeout:g} seconds. "
                "Another change is in progress; please try again."
            ) from None
        try:
            yield
        finally:
            _release(held)
