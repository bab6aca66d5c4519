"""
Prometheus metrics for the activation service.

Custom metrics for business logic and performance monitoring.
"""

from prometheus_client import Counter, Histogram

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
)

# License metrics
licenses_issued_total = Counter(
    "licenses_issued_total",
    "Total licenses issued",
    ["app_name", "activation_type"],
)

license_status_changes_total = Counter(
    "license_status_changes_total",
    "Total license status changes",
    ["status"],
)

# Activation protocol metrics; result is "ok" or an error code
activation_attempts_total = Counter(
    "activation_attempts_total",
    "Total activation attempts",
    ["result"],
)

validations_total = Counter(
    "validations_total",
    "Total activation token validations",
    ["result"],
)

deactivations_total = Counter(
    "deactivations_total",
    "Total activation deactivations",
    ["result"],
)

activation_status_changes_total = Counter(
    "activation_status_changes_total",
    "Total activation status changes",
    ["status"],
)

rate_limited_total = Counter(
    "rate_limited_total",
    "Requests rejected by the public rate limiter",
    ["endpoint"],
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)
