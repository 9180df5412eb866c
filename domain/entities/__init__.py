# import
from .decision import Decision
from .liker import Liker, LikersPage

__all__ = ["Decision", "Liker", "LikersPage"]
