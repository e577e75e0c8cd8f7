"""Prometheus metrics definitions for the deals server.

Exposes metrics for:
1. HTTP API metrics (requests, latency, errors)
2. Upstream deals feed client metrics (calls, latency, errors)
3. Snapshot cache metrics (hits, misses, dataset size)
4. Deal query metrics (active deals returned, peak window size)
5. Background job metrics (runs, duration, errors)
"""
from prometheus_client import Counter, Histogram, Gauge, Info

# =============================================================================
# HTTP API METRICS
# =============================================================================

# Request counter with method, endpoint, and status labels
HTTP_REQUESTS_TOTAL = Counter(
    "http_requests_total",
    "Total number of HTTP requests",
    ["method", "endpoint", "status_code"],
)

# Request latency histogram
HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

# Active requests gauge
HTTP_REQUESTS_IN_PROGRESS = Gauge(
    "http_requests_in_progress",
    "Number of HTTP requests currently being processed",
    ["method", "endpoint"],
)

# Response size histogram
HTTP_RESPONSE_SIZE_BYTES = Histogram(
    "http_response_size_bytes",
    "HTTP response body size in bytes",
    ["method", "endpoint"],
    buckets=(100, 500, 1000, 5000, 10000, 50000, 100000, 500000),
)

# =============================================================================
# UPSTREAM DEALS FEED CLIENT METRICS
# =============================================================================

DEALS_API_CALLS_TOTAL = Counter(
    "deals_api_calls_total",
    "Total number of upstream deals feed calls",
    ["status"],  # status: success, error
)

DEALS_API_CALL_DURATION_SECONDS = Histogram(
    "deals_api_call_duration_seconds",
    "Upstream deals feed call latency in seconds",
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
)

DEALS_API_ERRORS_TOTAL = Counter(
    "deals_api_errors_total",
    "Total number of upstream deals feed errors",
    ["error_type"],  # error_type: http_error, timeout, connection_error, invalid_payload
)

# =============================================================================
# SNAPSHOT CACHE METRICS
# =============================================================================

SNAPSHOT_REQUESTS_TOTAL = Counter(
    "snapshot_requests_total",
    "Snapshot lookups by cache result",
    ["result"],  # result: hit, miss
)

SNAPSHOT_RESTAURANTS = Gauge(
    "snapshot_restaurants",
    "Number of restaurants in the current snapshot",
)

SNAPSHOT_DEALS = Gauge(
    "snapshot_deals",
    "Number of deals in the current snapshot",
)

SNAPSHOT_LAST_REFRESH_TIMESTAMP = Gauge(
    "snapshot_last_refresh_timestamp_seconds",
    "Unix timestamp of the last successful snapshot refresh",
)

# =============================================================================
# DEAL QUERY METRICS
# =============================================================================

ACTIVE_DEALS_RETURNED = Histogram(
    "active_deals_returned",
    "Number of deals returned per active-deals query",
    buckets=(0, 1, 2, 5, 10, 20, 50, 100, 250),
)

PEAK_WINDOW_DEAL_COUNT = Gauge(
    "peak_window_deal_count",
    "Deal count at the most recently computed peak window",
)

# =============================================================================
# BACKGROUND JOB METRICS
# =============================================================================

BACKGROUND_JOB_RUNS_TOTAL = Counter(
    "background_job_runs_total",
    "Total number of background job runs",
    ["job_name", "status"],  # status: success, error
)

BACKGROUND_JOB_DURATION_SECONDS = Histogram(
    "background_job_duration_seconds",
    "Background job execution duration in seconds",
    ["job_name"],
    buckets=(0.1, 0.5, 1.0, 5.0, 10.0, 30.0, 60.0),
)

BACKGROUND_JOB_LAST_RUN_TIMESTAMP = Gauge(
    "background_job_last_run_timestamp_seconds",
    "Unix timestamp of the last successful job run",
    ["job_name"],
)

# =============================================================================
# APPLICATION INFO
# =============================================================================

APP_INFO = Info(
    "dealsserver",
    "Deals server application information",
)

# Set application info at module load
APP_INFO.info({
    "version": "1.0.0",
    "description": "Restaurant deals availability service",
})
