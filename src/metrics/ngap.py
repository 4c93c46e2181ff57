"""NGAP message and handover counters.

The cause label of the message counters is produced by the registry's
``cause_formatter``, normally the ``get_cause_error_str`` function emitted by
``scripts/gen_cause_strings.py`` for the ngapType ``Cause`` union. A cause
whose discriminant (``Present``) is zero means "no cause" and yields an
empty label.
"""
from __future__ import annotations

from typing import Any

from .registry import MetricsRegistry
from .status import metric_status

CAUSE_DISCRIMINANT_ATTR = "Present"


def _cause_label(reg: MetricsRegistry, cause: Any) -> str:
    if cause is None or not getattr(cause, CAUSE_DISCRIMINANT_ATTR, 0):
        return ""
    return reg.cause_formatter(cause)


def incr_rcv_ngap_msg(reg: MetricsRegistry, msg_type: str, success: bool | None, cause: Any = None) -> None:
    reg.ngap_msg_rcv.labels(name=msg_type, status=metric_status(success),  # type: ignore[attr-defined]
                            cause=_cause_label(reg, cause)).inc()


def incr_sent_ngap_msg(reg: MetricsRegistry, msg_type: str, success: bool | None,
                       cause: Any = None, other_cause: str | None = None) -> None:
    """Count a sent NGAP message; a protocol cause wins over ``other_cause``."""
    label = _cause_label(reg, cause)
    if not label and other_cause:
        label = other_cause
    reg.ngap_msg_sent.labels(name=msg_type, status=metric_status(success),  # type: ignore[attr-defined]
                             cause=label).inc()


def incr_path_switch_request(reg: MetricsRegistry) -> None:
    reg.path_switch_request.inc()  # type: ignore[attr-defined]


def incr_path_switch_request_ack(reg: MetricsRegistry) -> None:
    reg.path_switch_request_ack.inc()  # type: ignore[attr-defined]


def incr_path_switch_request_failure(reg: MetricsRegistry) -> None:
    reg.path_switch_request_failure.inc()  # type: ignore[attr-defined]


__all__ = [
    "incr_rcv_ngap_msg",
    "incr_sent_ngap_msg",
    "incr_path_switch_request",
    "incr_path_switch_request_ack",
    "incr_path_switch_request_failure",
]
