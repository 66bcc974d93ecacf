"""Shared OTel metrics instruments for the client."""

from opentelemetry import metrics

METER_NAME = "blog_admin_client"

meter = metrics.get_meter(METER_NAME)

# Request pipeline
api_requests_total = meter.create_counter(
    name="api_requests_total",
    description="Backend calls by method and outcome",
    unit="1",
)

api_request_retries_total = meter.create_counter(
    name="api_request_retries_total",
    description="Automatic retries of transient read failures",
    unit="1",
)

api_request_duration = meter.create_histogram(
    name="api_request_duration_seconds",
    description="Duration of a backend call including retries",
    unit="s",
)

session_expired_total = meter.create_counter(
    name="session_expired_total",
    description="Sessions torn down after a 401",
    unit="1",
)

# Console
notifications_total = meter.create_counter(
    name="notifications_total",
    description="Notifications pushed by kind",
    unit="1",
)

uploads_total = meter.create_counter(
    name="uploads_total",
    description="Image uploads by outcome",
    unit="1",
)
