from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, func
from sqlalchemy.dialects.mysql import insert as mysql_insert
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import aliased
from domain.entities import Decision, Liker
from domain.exceptions import RepositoryError
from domain.interfaces import DecisionRepository
from infrastructure.db.models import DecisionModel


class DecisionRepoSqlalchemy(DecisionRepository):
    """
    SQLAlchemy implementation of DecisionRepository.

    The session is opened and closed by the caller. Each write commits on its
    own; the unique constraint on (actor_id, recipient_id) is what keeps one row
    per pair, so upsert and the reciprocal check run as independent statements.
    """
    
    def __init__(self, db: AsyncSession):
        self.db = db

    def _upsert_statement(self, values: dict):
        dialect = self.db.get_bind().dialect.name
        if dialect == "postgresql":
            stmt = pg_insert(DecisionModel).values(**values)
            return stmt.on_conflict_do_update(
                index_elements=[DecisionModel.actor_id, DecisionModel.recipient_id],
                set_={"liked": stmt.excluded.liked, "timestamp": stmt.excluded.timestamp},
            )
        if dialect == "sqlite":
            stmt = sqlite_insert(DecisionModel).values(**values)
            return stmt.on_conflict_do_update(
                index_elements=[DecisionModel.actor_id, DecisionModel.recipient_id],
                set_={"liked": stmt.excluded.liked, "timestamp": stmt.excluded.timestamp},
            )
        if dialect in ("mysql", "mariadb"):
            stmt = mysql_insert(DecisionModel).values(**values)
            return stmt.on_duplicate_key_update(
                liked=stmt.inserted.liked,
                timestamp=stmt.inserted.timestamp,
            )
        raise RepositoryError(f"unsupported database dialect: {dialect}")

    async def upsert(self, actor_id: str, recipient_id: str, liked: bool, timestamp: int) -> Decision:
        """
        Insert the decision or overwrite liked/timestamp of the existing row for the pair.
        
        Args:
            actor_id: User making the decision
            recipient_id: User being decided about
            liked: True for like, False for pass
            timestamp: Unix seconds of the write
            
        Returns:
            The stored Decision
        """
        decision = Decision.create(actor_id=actor_id, recipient_id=recipient_id, liked=liked, timestamp=timestamp)
        stmt = self._upsert_statement({
            "actor_id": actor_id,
            "recipient_id": recipient_id,
            "liked": liked,
            "timestamp": timestamp,
        })
        try:
            await self.db.execute(stmt)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise RepositoryError("failed to put decision") from e
        return decision
    
    async def exists_reciprocal(self, actor_id: str, recipient_id: str) -> bool:
        """True if recipient_id has liked actor_id."""
        stmt = (
            select(DecisionModel.id)
            .where(
                DecisionModel.actor_id == recipient_id,
                DecisionModel.recipient_id == actor_id,
                DecisionModel.liked.is_(True),
            )
            .limit(1)
        )
        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            raise RepositoryError("failed to check mutual like") from e
        return result.first() is not None

    async def list_likers(self, recipient_id: str, exclude_reciprocated: bool, limit: int, offset: int) -> list[Liker]:
        """
        Actors who liked recipient_id, most recent first.

        With exclude_reciprocated the reciprocal pair is filtered by a correlated
        NOT EXISTS, so the anti-join runs inside the database.
        """
        stmt = select(DecisionModel.actor_id, DecisionModel.timestamp).where(
            DecisionModel.recipient_id == recipient_id,
            DecisionModel.liked.is_(True),
        )
        if exclude_reciprocated:
            liked_back = aliased(DecisionModel)
            stmt = stmt.where(
                ~select(liked_back.id)
                .where(
                    liked_back.actor_id == recipient_id,
                    liked_back.recipient_id == DecisionModel.actor_id,
                    liked_back.liked.is_(True),
                )
                .exists()
            )
        stmt = (
            stmt.order_by(DecisionModel.timestamp.desc(), DecisionModel.id.desc())
            .limit(limit)
            .offset(offset)
        )
        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            raise RepositoryError("failed to query liked decisions") from e
        return [Liker(actor_id=row.actor_id, unix_timestamp=row.timestamp or 0) for row in result.all()]

    async def count_likers(self, recipient_id: str) -> int:
        stmt = (
            select(func.count())
            .select_from(DecisionModel)
            .where(DecisionModel.recipient_id == recipient_id, DecisionModel.liked.is_(True))
        )
        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            raise RepositoryError("failed to count liked decisions") from e
        return int(result.scalar_one())

    async def delete(self, actor_id: str, recipient_id: str) -> bool:
        """Delete the decision for the pair. Returns whether a row existed."""
        stmt = delete(DecisionModel).where(
            DecisionModel.actor_id == actor_id,
            DecisionModel.recipient_id == recipient_id,
        )
        try:
            result = await self.db.execute(stmt)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise RepositoryError("failed to delete decision") from e
        return result.rowcount > 0

    async def get_decision(self, actor_id: str, recipient_id: str) -> Optional[Decision]:
        """Get the decision for a pair."""
        stmt = select(DecisionModel).where(
            DecisionModel.actor_id == actor_id,
            DecisionModel.recipient_id == recipient_id,
        ).execution_options(populate_existing=True)
        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            raise RepositoryError("failed to get decision") from e
        decision_model = result.scalar_one_or_none()
        return decision_model.to_domain() if decision_model else None
    
    async def list_decisions(self, actor_id: str, limit: int, offset: int) -> list[Decision]:
        """Decisions made by actor_id, most recent first."""
        stmt = (
            select(DecisionModel)
            .where(DecisionModel.actor_id == actor_id)
            .order_by(DecisionModel.timestamp.desc(), DecisionModel.id.desc())
            .limit(limit)
            .offset(offset)
            .execution_options(populate_existing=True)
        )
        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            raise RepositoryError("failed to list decisions") from e
        return [dm.to_domain() for dm in result.scalars().all()]
