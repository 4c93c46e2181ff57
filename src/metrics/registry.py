"""Metrics registry object.

One `MetricsRegistry` is constructed at process start and handed to every
call site that increments a counter; there is no module-level singleton.
It owns its own `prometheus_client.CollectorRegistry` so tests (and several
registries in one process) never collide on the global default registry.

    reg = MetricsRegistry(namespace="free5gc", cause_formatter=get_cause_error_str)
    incr_rcv_ngap_msg(reg, NG_SETUP_REQUEST, success=True)
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from prometheus_client import CollectorRegistry

from .spec import METRIC_SPECS, MetricDef

logger = logging.getLogger(__name__)

CauseFormatter = Callable[[Any], str]


def _default_ngap_cause_formatter(cause: Any) -> str:
    # Used until a generated formatter is wired in.
    return f"present {getattr(cause, 'Present', '?')}"


def _default_nas_cause_formatter(code: int) -> str:
    return str(code)


class MetricsRegistry:
    """Holder for all AMF counters plus the cause formatters their labels use."""

    def __init__(self, namespace: str = "", *, registry: CollectorRegistry | None = None,
                 specs: Iterable[MetricDef] | None = None,
                 families: Iterable[str] | None = None,
                 cause_formatter: CauseFormatter | None = None,
                 nas_cause_formatter: Callable[[int], str] | None = None) -> None:
        self.namespace = namespace
        self.registry = registry if registry is not None else CollectorRegistry(auto_describe=True)
        self.cause_formatter: CauseFormatter = cause_formatter or _default_ngap_cause_formatter
        self.nas_cause_formatter: Callable[[int], str] = nas_cause_formatter or _default_nas_cause_formatter
        self._metric_names: dict[str, str] = {}
        self._families: dict[str, list[str]] = {}
        wanted = None if families is None else frozenset(families)
        for spec in (METRIC_SPECS if specs is None else specs):
            if wanted is not None and spec.family not in wanted:
                continue
            if spec.register(self) is not None:
                self._families.setdefault(spec.family, []).append(spec.attr)
        logger.debug("metrics registry initialized namespace=%s metrics=%d", namespace, len(self._metric_names))

    def get_metric_names(self, family: str | None = None) -> dict[str, str]:
        """attr -> fully qualified Prometheus name, optionally for one family."""
        if family is None:
            return dict(self._metric_names)
        return {attr: self._metric_names[attr] for attr in self._families.get(family, ())}

    def get_families(self) -> list[str]:
        return sorted(self._families)

    def sample(self, name: str, labels: dict[str, str] | None = None) -> float | None:
        """Current value of a sample on this registry (thin test/debug accessor)."""
        return self.registry.get_sample_value(name, labels or {})


__all__ = ["CauseFormatter", "MetricsRegistry"]
