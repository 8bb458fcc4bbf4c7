"""Prometheus metrics for intents, snapshot risk and language model calls"""

from prometheus_client import Counter, Histogram
from liquidity_gateway.domain.models import FinancialSnapshot, IntentResult

# Chat metrics
chat_intent_counter = Counter(
    "liquidity_chat_intent_total",
    "Questions routed, by resolved intent",
    ["intent"],
)

classifier_second_pass_counter = Counter(
    "liquidity_classifier_second_pass_total",
    "Questions that needed the permissive classifier pass",
)

# Snapshot metrics
snapshot_counter = Counter(
    "liquidity_snapshot_total",
    "Snapshots built, by risk outcome",
    ["outcome"],  # at_risk | healthy
)

# Language model metrics
llm_latency_histogram = Histogram(
    "llm_request_latency_seconds",
    "Language model response time",
    ["operation"],  # classify | explain | briefing
    buckets=[0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 20.0],
)

llm_failure_counter = Counter(
    "llm_failures_total",
    "Failed requests because the language model call failed",
    ["endpoint"],  # briefing | chat
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_intent(intent_result: IntentResult) -> None:
    """Record routing metrics for monitoring classifier quality"""
    chat_intent_counter.labels(intent=intent_result.intent.value).inc()
    if intent_result.passes > 1:
        classifier_second_pass_counter.inc()


def record_snapshot(snapshot: FinancialSnapshot) -> None:
    snapshot_counter.labels(outcome="at_risk" if snapshot.risk_flag else "healthy").inc()
