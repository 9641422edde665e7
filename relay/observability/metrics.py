"""Prometheus metrics for the relay service."""

from prometheus_client import Counter, Histogram

INBOUND_MESSAGES = Counter(
    "relay_inbound_messages_total",
    "Inbound messages accepted by the webhook",
    labelnames=["channel"],
)

COMPLETION_LATENCY = Histogram(
    "relay_completion_latency_seconds",
    "Round trip to the completion endpoint",
    labelnames=["model", "outcome"],
    buckets=(0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 20.0, 40.0, 60.0),
)

COMPLETION_FALLBACKS = Counter(
    "relay_completion_fallbacks_total",
    "Completions answered with the fallback text",
    labelnames=["model"],
)

CHUNKS_SENT = Counter(
    "relay_chunks_sent_total",
    "Outbound message chunks accepted by the channel",
    labelnames=["channel"],
)

SESSION_STORE_LATENCY = Histogram(
    "relay_session_store_latency_seconds",
    "Latency of session store operations",
    labelnames=["backend", "operation"],
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
)

ERRORS = Counter(
    "relay_errors_total",
    "Errors by type",
    labelnames=["error_type"],
)
