"""Metrics façade for external provider calls."""

import logging
from typing import Literal

logger = logging.getLogger(__name__)

ProviderErrorKind = Literal["network", "timeout", "http_status", "payload", "empty"]


def record_provider_call(
    provider: str,
    latency_ms: int,
    ok: bool,
    error_kind: ProviderErrorKind | None = None,
    result_count: int | None = None,
) -> None:
    """Record metrics for a provider call.

    Emits one structured log record per call; log shippers turn these into
    latency and error-rate series.

    Args:
        provider: Name of the external provider that was called.
        latency_ms: Latency in milliseconds.
        ok: Whether the call succeeded.
        error_kind: Type of error if call failed, None if succeeded.
        result_count: Number of records returned, when meaningful.
    """
    logger.info(
        "provider_call_metric",
        extra={
            "provider": provider,
            "latency_ms": latency_ms,
            "ok": ok,
            "error_kind": error_kind,
            "result_count": result_count,
        },
    )
