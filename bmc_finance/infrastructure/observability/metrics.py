"""Prometheus metrics for monitoring finance calculations and HTTP latency"""

from prometheus_client import Counter, Histogram

# Calculation metrics
evaluation_counter = Counter(
    "bmc_finance_evaluation_total",
    "Plan evaluations performed",
    ["outcome"],  # available | unavailable
)

unavailable_counter = Counter(
    "bmc_finance_unavailable_total",
    "Calculations that returned an explicit cannot-compute result",
    ["calculation", "reason"],
)

invalid_data_counter = Counter(
    "bmc_finance_invalid_data_total",
    "Computations rejected because of invalid financial data",
    ["error"],  # InvalidCostItemError | UnknownCategoryError | DuplicatePlanError
)

snapshot_cost_total_histogram = Histogram(
    "bmc_finance_monthly_costs",
    "Monthly cost base of built snapshots",
    buckets=[0, 10_000, 50_000, 100_000, 250_000, 500_000, 1_000_000],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_evaluation(available: bool) -> None:
    """Record plan evaluation outcome"""
    outcome = "available" if available else "unavailable"
    evaluation_counter.labels(outcome=outcome).inc()


def record_unavailable(calculation: str, reason: str) -> None:
    """Record a calculation that could not produce a value"""
    unavailable_counter.labels(calculation=calculation, reason=reason).inc()


def record_invalid_data(error: Exception) -> None:
    """Record a rejected computation by exception type"""
    invalid_data_counter.labels(error=type(error).__name__).inc()


def record_snapshot(monthly_costs: float) -> None:
    """Record the monthly cost base of a built snapshot"""
    snapshot_cost_total_histogram.observe(monthly_costs)
