"""Status label values shared by the message counters."""
from __future__ import annotations

SUCCESS_METRIC = "Success"
FAILURE_METRIC = "Failure"


def metric_status(success: bool | None) -> str:
    # None (unknown outcome) counts as a failure
    return SUCCESS_METRIC if success else FAILURE_METRIC


__all__ = ["SUCCESS_METRIC", "FAILURE_METRIC", "metric_status"]
