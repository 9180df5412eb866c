from dataclasses import dataclass, field


@dataclass
class Liker:
    actor_id: str
    unix_timestamp: int = 0


@dataclass
class LikersPage:
    """One page of likers plus the token for the next page ("" when exhausted)."""
    likers: list[Liker] = field(default_factory=list)
    next_pagination_token: str = ""
