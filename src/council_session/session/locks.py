"""Per-session serialization.

Two calls carrying the same session id must not interleave their
read-modify-write steps. The registry hands out one asyncio.Lock per session
id; calls for different sessions never wait on each other.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class SessionLockRegistry:
    """Lazily created asyncio locks keyed by session id."""

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}

    def get(self, session_id: str) -> asyncio.Lock:
        lock = self._locks.get(session_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[session_id] = lock
        return lock

    @asynccontextmanager
    async def hold(self, session_id: str | None) -> AsyncIterator[None]:
        """Hold the lock for ``session_id`` for the duration of the block.

        A None id (a session that does not exist yet) needs no lock.
        """
        if session_id is None:
            yield
            return
        async with self.get(session_id):
            yield

    def discard(self, session_id: str) -> None:
        lock = self._locks.get(session_id)
        if lock is not None and not lock.locked():
            del self._locks[session_id]

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._locks

    def __len__(self) -> int:
        return len(self._locks)
