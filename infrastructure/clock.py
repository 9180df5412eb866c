import time

from domain.interfaces import ClockPort


class SystemClock(ClockPort):
    """Wall-clock unix seconds."""

    def now(self) -> int:
        return int(time.time())


class FixedClock(ClockPort):
    """Clock that returns a settable value; handy for tests and replays."""

    def __init__(self, value: int = 0):
        self.value = value

    def now(self) -> int:
        return self.value

    def advance(self, seconds: int = 1) -> int:
        self.value += seconds
        return self.value
