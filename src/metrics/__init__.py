"""Metrics package public interface.

Stable import surfaces:
	from src.metrics import MetricsRegistry, init_metrics, setup_metrics_server
	from src.metrics.ngap import incr_rcv_ngap_msg
	from src.metrics.nas import incr_sent_nas_msg

Counters live on a `MetricsRegistry` instance created once at startup and
passed to every increment helper; nothing is stored in module globals.
"""
from __future__ import annotations

from .registry import CauseFormatter, MetricsRegistry
from .server import init_metrics, maybe_start_metrics_server, resolve_cause_formatter, setup_metrics_server
from .status import FAILURE_METRIC, SUCCESS_METRIC, metric_status

__all__ = [
	"CauseFormatter",
	"MetricsRegistry",
	"init_metrics",
	"maybe_start_metrics_server",
	"resolve_cause_formatter",
	"setup_metrics_server",
	"SUCCESS_METRIC",
	"FAILURE_METRIC",
	"metric_status",
]
