"""
Metrics adapter that implements MetricsPort protocol.

This adapter wraps the Prometheus metrics to provide a clean interface
for the application layer.
"""
from domain.interfaces import MetricsPort
from infrastructure.metrics.metrics import (
    explore_decision_total,
    explore_mutual_match_total,
    explore_repository_errors_total,
    explore_repository_latency_seconds,
)

class MetricsAdapter(MetricsPort):
    """Adapter that implements MetricsPort by incrementing Prometheus metrics (served at /metrics)."""
    
    def increment_decision_total(self, kind: str) -> None:
        """
        Increment the explore_decision_total counter.
        
        Args:
            kind: One of "like" or "pass"
        """
        explore_decision_total.labels(kind=kind).inc()
    
    def increment_mutual_match(self) -> None:
        explore_mutual_match_total.inc()

    def increment_repository_error(self, operation: str) -> None:
        explore_repository_errors_total.labels(operation=operation).inc()

    def observe_repository_latency(self, operation: str, seconds: float) -> None:
        explore_repository_latency_seconds.labels(operation=operation).observe(seconds)
