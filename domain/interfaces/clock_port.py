from typing_extensions import Protocol


class ClockPort(Protocol):
    """Source of timestamps for decision writes."""

    def now(self) -> int:
        """Return the current time as unix seconds."""
        ...
