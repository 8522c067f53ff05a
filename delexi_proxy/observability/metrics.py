from __future__ import annotations

from flask import Blueprint, Response
from prometheus_client import Counter, Histogram, generate_latest

metrics_blueprint = Blueprint("metrics_bp", __name__)

CONTENT_TYPE_LATEST = "text/plain; version=0.0.4; charset=utf-8"

TOKEN_EXCHANGES = Counter(
    "delexi_token_exchanges_total",
    "Client-credentials token exchanges performed against the Spotify accounts service.",
    ["result"],
)
TOKEN_CACHE_HITS = Counter(
    "delexi_token_cache_hits_total",
    "Token requests served from the in-process credential cache.",
)
PLAYLIST_FETCHES = Counter(
    "delexi_playlist_fetches_total",
    "Playlist requests handled by the proxy, by outcome.",
    ["outcome"],
)
UPSTREAM_LATENCY = Histogram(
    "delexi_upstream_playlist_seconds",
    "Latency of upstream playlist requests.",
    buckets=(0.05, 0.1, 0.25, 0.5, 1, 2, 5, 10, float("inf")),
)


def record_token_cache_hit() -> None:
    TOKEN_CACHE_HITS.inc()


def record_token_exchange(success: bool) -> None:
    TOKEN_EXCHANGES.labels(result="success" if success else "failure").inc()


def record_playlist_fetch(outcome: str) -> None:
    PLAYLIST_FETCHES.labels(outcome=outcome).inc()


def observe_upstream_latency(duration_seconds: float) -> None:
    UPSTREAM_LATENCY.observe(duration_seconds)


@metrics_blueprint.route("/metrics")
def metrics_endpoint() -> Response:
    return Response(generate_latest(), mimetype=CONTENT_TYPE_LATEST)
