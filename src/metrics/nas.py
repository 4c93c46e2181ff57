"""NAS message counters.

The 5GMM cause code is rendered through the registry's
``nas_cause_formatter``. An explicit cause string takes precedence over the
code; a zero code with no explicit cause leaves the label empty.
"""
from __future__ import annotations

from .registry import MetricsRegistry
from .status import metric_status


def _nas_cause_label(reg: MetricsRegistry, cause_5gmm: int, cause: str | None) -> str:
    if cause:
        return cause
    if cause_5gmm:
        return reg.nas_cause_formatter(cause_5gmm)
    return ""


def incr_rcv_nas_msg(reg: MetricsRegistry, msg_type: str, success: bool | None,
                     cause_5gmm: int = 0, cause: str | None = None) -> None:
    reg.nas_msg_rcv.labels(name=msg_type, status=metric_status(success),  # type: ignore[attr-defined]
                           cause=_nas_cause_label(reg, cause_5gmm, cause)).inc()


def incr_sent_nas_msg(reg: MetricsRegistry, msg_type: str, success: bool | None,
                      cause_5gmm: int = 0, other_cause: str | None = None) -> None:
    # Sent path: the protocol cause code wins over other_cause
    label = reg.nas_cause_formatter(cause_5gmm) if cause_5gmm else (other_cause or "")
    reg.nas_msg_sent.labels(name=msg_type, status=metric_status(success),  # type: ignore[attr-defined]
                            cause=label).inc()


__all__ = ["incr_rcv_nas_msg", "incr_sent_nas_msg"]
