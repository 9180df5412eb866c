from dataclasses import dataclass
import time


@dataclass
class Decision:
    actor_id: str
    recipient_id: str
    liked: bool
    timestamp: int = 0

    @staticmethod
    def create(actor_id: str, recipient_id: str, liked: bool, timestamp: int = None) -> 'Decision':
        return Decision(
            actor_id=actor_id,
            recipient_id=recipient_id,
            liked=liked,
            timestamp=int(time.time()) if timestamp is None else timestamp,
        )

    def set_liked(self, liked: bool, timestamp: int) -> 'Decision':
        self.liked = liked
        self.timestamp = timestamp
        return self

