"""
In-process DecisionRepository backed by a dict keyed by the ordered pair.

Nothing is persisted across restarts. Construct one instance and inject it
wherever a repository is needed; every instance is isolated.
"""
import heapq
import itertools
from dataclasses import dataclass, replace
from typing import Iterator, Optional

from domain.entities import Decision, Liker
from domain.interfaces import DecisionRepository
from infrastructure.memory.rwlock import ReadWriteLock


@dataclass
class _StoredDecision:
    decision: Decision
    # assigned on first insert and kept on overwrite, like a surrogate key
    sequence: int

    @property
    def sort_key(self) -> tuple[int, int]:
        return (self.decision.timestamp, self.sequence)


class InMemoryDecisionRepository(DecisionRepository):
    """Concurrent map implementation of DecisionRepository."""

    def __init__(self):
        self._rows: dict[tuple[str, str], _StoredDecision] = {}
        self._sequence = itertools.count(1)
        self._lock = ReadWriteLock()

    def __len__(self) -> int:
        return len(self._rows)

    async def upsert(self, actor_id: str, recipient_id: str, liked: bool, timestamp: int) -> Decision:
        async with self._lock.write():
            stored = self._rows.get((actor_id, recipient_id))
            if stored is None:
                stored = _StoredDecision(
                    decision=Decision.create(actor_id=actor_id, recipient_id=recipient_id, liked=liked, timestamp=timestamp),
                    sequence=next(self._sequence),
                )
                self._rows[(actor_id, recipient_id)] = stored
            else:
                stored.decision.set_liked(liked, timestamp)
            return replace(stored.decision)

    async def exists_reciprocal(self, actor_id: str, recipient_id: str) -> bool:
        async with self._lock.read():
            return self._liked(recipient_id, actor_id)

    def _liked(self, actor_id: str, recipient_id: str) -> bool:
        stored = self._rows.get((actor_id, recipient_id))
        return stored is not None and stored.decision.liked

    def _page(self, rows: Iterator[_StoredDecision], limit: int, offset: int) -> list[_StoredDecision]:
        # keeps only offset + limit rows in memory while scanning
        if limit <= 0:
            return []
        return heapq.nlargest(offset + limit, rows, key=lambda s: s.sort_key)[offset:]

    async def list_likers(self, recipient_id: str, exclude_reciprocated: bool, limit: int, offset: int) -> list[Liker]:
        async with self._lock.read():
            matches = (
                s for s in self._rows.values()
                if s.decision.recipient_id == recipient_id
                and s.decision.liked
                and not (exclude_reciprocated and self._liked(recipient_id, s.decision.actor_id))
            )
            return [
                Liker(actor_id=s.decision.actor_id, unix_timestamp=s.decision.timestamp)
                for s in self._page(matches, limit, offset)
            ]

    async def count_likers(self, recipient_id: str) -> int:
        async with self._lock.read():
            return sum(
                1 for s in self._rows.values()
                if s.decision.recipient_id == recipient_id and s.decision.liked
            )

    async def delete(self, actor_id: str, recipient_id: str) -> bool:
        async with self._lock.write():
            return self._rows.pop((actor_id, recipient_id), None) is not None

    async def get_decision(self, actor_id: str, recipient_id: str) -> Optional[Decision]:
        async with self._lock.read():
            stored = self._rows.get((actor_id, recipient_id))
            return replace(stored.decision) if stored else None

    async def list_decisions(self, actor_id: str, limit: int, offset: int) -> list[Decision]:
        async with self._lock.read():
            matches = (s for s in self._rows.values() if s.decision.actor_id == actor_id)
            return [replace(s.decision) for s in self._page(matches, limit, offset)]
