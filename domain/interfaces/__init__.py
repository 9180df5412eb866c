from .decision_repo import DecisionRepository
from .clock_port import ClockPort
from .metrics_port import MetricsPort
from .logging_port import LoggingPort, BoundLogger, NoOpLogger

__all__ = ["DecisionRepository", "ClockPort", "MetricsPort", "LoggingPort", "BoundLogger", "NoOpLogger"]
