"""
Logging adapter that implements LoggingPort protocol.

Application services only see LoggingPort/BoundLogger; structlog stays here.
"""
from typing import Any
from domain.interfaces import LoggingPort, BoundLogger
from infrastructure.logging.structlog_logs import logger as structlog_logger


class StructlogBoundLogger:
    """Wrapper for a structlog bound logger that implements BoundLogger."""
    
    def __init__(self, bound_logger):
        self._logger = bound_logger
    
    def info(self, event: str, **kwargs: Any) -> None:
        self._logger.info(event, **kwargs)
    
    def warning(self, event: str, **kwargs: Any) -> None:
        self._logger.warning(event, **kwargs)
    
    def error(self, event: str, exc_info: bool = False, **kwargs: Any) -> None:
        self._logger.error(event, exc_info=exc_info, **kwargs)


class LoggingAdapter(LoggingPort):
    """
    Structured JSON logging for the explore services.

    Fields passed to the constructor (e.g. backend="memory") are bound to
    every logger this adapter hands out.
    """

    def __init__(self, **base_context: Any):
        self._base = structlog_logger.bind(**base_context) if base_context else structlog_logger
    
    def bind(self, **kwargs: Any) -> BoundLogger:
        """
        Create a bound logger with context.
        
        Args:
            **kwargs: Context fields to bind to all log messages
            
        Returns:
            A bound logger with the specified context
        """
        return StructlogBoundLogger(self._base.bind(**kwargs))
