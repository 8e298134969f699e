"""
Lightweight metrics collection for Live Picks.
Wraps prometheus_client with async-safe patterns.
"""
from __future__ import annotations

import time
from contextlib import asynccontextmanager
from typing import AsyncIterator

from prometheus_client import Counter, Gauge, Histogram, start_http_server

from shared.config import get_settings
from shared.utils.logging import get_logger

logger = get_logger(__name__)

# ── Counters ────────────────────────────────────────────────────────────
PREDICTION_SOURCE_FETCHES = Counter(
    "lp_prediction_source_fetches_total",
    "Prediction source fetches by outcome",
    ["league", "status"],
)
ENRICHED_GAMES = Counter(
    "lp_enriched_games_total",
    "Live games passed through enrichment",
    ["league", "matched"],
)

# ── Histograms ──────────────────────────────────────────────────────────
PREDICTION_SOURCE_LATENCY = Histogram(
    "lp_prediction_source_latency_seconds",
    "Prediction source fetch latency in seconds",
    ["league"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)
ENRICHMENT_DURATION = Histogram(
    "lp_enrichment_seconds",
    "Duration of one full enrichment pass",
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

# ── Gauges ──────────────────────────────────────────────────────────────
PREDICTION_RECORDS = Gauge(
    "lp_prediction_records",
    "Prediction records returned by the last fetch per league",
    ["league"],
)


@asynccontextmanager
async def atrack_latency(histogram: Histogram, **labels: str) -> AsyncIterator[None]:
    """Async context manager to track operation latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        if labels:
            histogram.labels(**labels).observe(elapsed)
        else:
            histogram.observe(elapsed)


def start_metrics_server(port: int | None = None) -> None:
    """Start the Prometheus metrics HTTP server."""
    settings = get_settings()
    if not settings.metrics_enabled:
        return
    metrics_port = port or settings.metrics_port
    try:
        start_http_server(metrics_port)
        logger.info("metrics_server_started", port=metrics_port)
    except OSError as exc:
        logger.warning("metrics_server_failed", error=str(exc), port=metrics_port)
