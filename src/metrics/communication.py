"""Communication service (Namf_Communication) counters."""
from __future__ import annotations

from .registry import MetricsRegistry


def incr_ue_context_transfer(reg: MetricsRegistry, status_code: int | str) -> None:
    reg.ue_context_transfer.labels(StatusCode=str(status_code)).inc()  # type: ignore[attr-defined]


__all__ = ["incr_ue_context_transfer"]
