"""
Prometheus metrics for monitoring.

Metrics collected:
- HTTP request duration and count (middleware)
- External API calls by service and outcome
- Business events (waste entries, recycling processes, reports)
"""

from prometheus_client import Counter, Gauge, Histogram, Info

# Application info
app_info = Info("wastetrack_app", "WasteTrack application information")

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
    buckets=(0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0),
)

http_requests_in_progress = Gauge(
    "http_requests_in_progress",
    "Number of HTTP requests in progress",
    ["method"],
)

# External integrations
external_calls_total = Counter(
    "external_calls_total",
    "Calls to third-party APIs",
    ["service", "outcome"],
)

external_call_duration_seconds = Histogram(
    "external_call_duration_seconds",
    "Third-party API call duration in seconds",
    ["service"],
    buckets=(0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
)

global_data_cache_total = Counter(
    "global_data_cache_total",
    "Global sustainability cache lookups",
    ["result"],
)

# Business metrics
waste_entries_created_total = Counter(
    "waste_entries_created_total",
    "Waste entries recorded",
    ["unit"],
)

recycling_processes_total = Counter(
    "recycling_processes_total",
    "Recycling process submissions",
    ["outcome"],
)

reports_generated_total = Counter(
    "reports_generated_total",
    "Carbon reports generated",
)
