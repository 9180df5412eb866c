from typing_extensions import Protocol
from domain.entities import Decision, Liker
from typing import Optional


class DecisionRepository(Protocol):
    """
    Storage contract for like/pass decisions.

    At most one decision exists per ordered (actor_id, recipient_id) pair.
    Range scans return rows most recent first, ordered by (timestamp, insertion
    sequence) descending. Failures are raised as RepositoryError.
    """

    async def upsert(self, actor_id: str, recipient_id: str, liked: bool, timestamp: int) -> Decision: ...
    async def exists_reciprocal(self, actor_id: str, recipient_id: str) -> bool: ...
    async def list_likers(self, recipient_id: str, exclude_reciprocated: bool, limit: int, offset: int) -> list[Liker]: ...
    async def count_likers(self, recipient_id: str) -> int: ...
    async def delete(self, actor_id: str, recipient_id: str) -> bool: ...
    async def get_decision(self, actor_id: str, recipient_id: str) -> Optional[Decision]: ...
    async def list_decisions(self, actor_id: str, limit: int, offset: int) -> list[Decision]: ...
