from sqlalchemy import Column, String, Boolean, BigInteger, Integer, UniqueConstraint, Index
from sqlalchemy.orm import Mapped
from domain.entities.decision import Decision
from infrastructure.db.models.base import Base


class DecisionModel(Base):
    __tablename__ = "decisions"
    __table_args__ = (
        # One row per ordered pair; upserts resolve against this constraint
        UniqueConstraint("actor_id", "recipient_id"),
        Index("ix_decisions_recipient_liked_ts", "recipient_id", "liked", "timestamp"),
    )

    # Surrogate key doubles as the insertion sequence; an upsert keeps it
    id: Mapped[int] = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    actor_id: Mapped[str] = Column(String(255), nullable=False)
    recipient_id: Mapped[str] = Column(String(255), nullable=False)
    liked: Mapped[bool] = Column(Boolean, nullable=False, default=False)
    timestamp: Mapped[int] = Column(BigInteger, nullable=False, default=0)

    def to_domain(self) -> Decision:
        return Decision(
            actor_id=self.actor_id,
            recipient_id=self.recipient_id,
            liked=self.liked,
            timestamp=self.timestamp or 0,
        )

