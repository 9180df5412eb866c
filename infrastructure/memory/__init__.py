from .decision_repo_memory import InMemoryDecisionRepository
from .rwlock import ReadWriteLock

__all__ = ["InMemoryDecisionRepository", "ReadWriteLock"]
