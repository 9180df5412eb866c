# infrastructure/metrics/metrics.py
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

explore_decision_total = Counter(
    "explore_decision_total",
    "Total like/pass decisions recorded",
    ["kind"]  # like|pass
)

explore_mutual_match_total = Counter(
    "explore_mutual_match_total",
    "Likes that completed a mutual match"
)

explore_repository_errors_total = Counter(
    "explore_repository_errors_total",
    "Failed decision repository calls",
    ["operation"]
)

explore_repository_latency_seconds = Histogram(
    "explore_repository_latency_seconds",
    "Decision repository latency in seconds",
    ["operation"],
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5]
)

def metrics_endpoint():
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
