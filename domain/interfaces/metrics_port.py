from typing_extensions import Protocol


class MetricsPort(Protocol):
    """Protocol for metrics operations."""
    
    def increment_decision_total(self, kind: str) -> None:
        """
        Increment the explore_decision_total counter.
        
        Args:
            kind: One of "like" or "pass"
        """
        ...
    
    def increment_mutual_match(self) -> None:
        """Increment the explore_mutual_match_total counter."""
        ...

    def increment_repository_error(self, operation: str) -> None:
        """
        Increment the explore_repository_errors_total counter.
        
        Args:
            operation: Repository operation that failed (e.g. "upsert")
        """
        ...

    def observe_repository_latency(self, operation: str, seconds: float) -> None:
        """
        Record the latency of a repository call.
        
        Args:
            operation: Repository operation name
            seconds: Elapsed wall time in seconds
        """
        ...
