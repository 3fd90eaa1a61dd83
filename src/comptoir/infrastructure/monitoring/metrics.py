"""
Prometheus metrics collection.
"""

from prometheus_client import Counter, Gauge, Histogram

# ============================================================
# HTTP Metrics
# ============================================================

http_requests_total = Counter(
    "comptoir_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)

http_request_duration_seconds = Histogram(
    "comptoir_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0, 180.0),
)

# ============================================================
# Blockchain Metrics
# ============================================================

blockchain_requests_total = Counter(
    "comptoir_blockchain_requests_total",
    "Total blockchain requests",
    ["operation"],
)

blockchain_errors_total = Counter(
    "comptoir_blockchain_errors_total",
    "Total blockchain errors",
    ["operation", "error_type"],
)

blockchain_request_duration_seconds = Histogram(
    "comptoir_blockchain_request_duration_seconds",
    "Blockchain request duration in seconds",
    ["operation"],
    buckets=(0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0, 180.0),
)

# ============================================================
# Business Metrics
# ============================================================

purchases_total = Counter(
    "comptoir_purchases_total",
    "Purchases by outcome",
    ["outcome", "reason"],
)

treasury_balance = Gauge(
    "comptoir_treasury_balance",
    "Last observed payout token balance of the treasury",
)

keep_alive_pings_total = Counter(
    "comptoir_keep_alive_pings_total",
    "Keep-alive self pings",
    ["result"],
)
