"""Prometheus metrics for debt health outcomes, strategy picks and finance API failures"""

from prometheus_client import Counter

# Analysis metrics
debt_analysis_counter = Counter(
    "debt_analysis_total",
    "Debt analyses computed",
    ["health_status"],  # Excellent | Good | Fair | Poor
)

strategy_recommendation_counter = Counter(
    "debt_strategy_recommendation_total",
    "Payment strategies recommended",
    ["strategy"],  # Avalanche | Snowball | NoDebt
)

# Finance service metrics
finance_fetch_failures_counter = Counter(
    "finance_fetch_failures_total",
    "Failed finance service calls",
    ["operation"],  # loans | summary
)


def record_analysis(health_status: str) -> None:
    debt_analysis_counter.labels(health_status=health_status).inc()


def record_strategy(strategy_type: str) -> None:
    strategy_recommendation_counter.labels(strategy=strategy_type).inc()


def record_fetch_failure(operation: str) -> None:
    finance_fetch_failures_counter.labels(operation=operation).inc()
