"""
Reader/writer lock for asyncio tasks.

Any number of readers may hold the lock together; a writer holds it alone.
Waiting writers block new readers so a steady stream of reads cannot starve
a write.
"""
import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator


class ReadWriteLock:

    def __init__(self):
        self._cond = asyncio.Condition()
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @property
    def readers(self) -> int:
        return self._readers

    @property
    def writer_active(self) -> bool:
        return self._writer

    async def _notify_all(self) -> None:
        """
        Wake every waiter. Callers update the counters before awaiting this,
        so a cancellation here can only delay the wakeup, never lose it.
        """
        cancelled = False
        while True:
            try:
                await self._cond.acquire()
                break
            except asyncio.CancelledError:
                cancelled = True
        try:
            self._cond.notify_all()
        finally:
            self._cond.release()
        if cancelled:
            raise asyncio.CancelledError

    @asynccontextmanager
    async def read(self) -> AsyncIterator[None]:
        async with self._cond:
            await self._cond.wait_for(lambda: not self._writer and self._writers_waiting == 0)
            self._readers += 1
        try:
            yield
        finally:
            self._readers -= 1
            if self._readers == 0:
                await self._notify_all()

    @asynccontextmanager
    async def write(self) -> AsyncIterator[None]:
        async with self._cond:
            self._writers_waiting += 1
            try:
                await self._cond.wait_for(lambda: not self._writer and self._readers == 0)
            finally:
                self._writers_waiting -= 1
                # wake readers parked behind this writer if it was cancelled
                self._cond.notify_all()
            self._writer = True
        try:
            yield
        finally:
            self._writer = False
            await self._notify_all()
