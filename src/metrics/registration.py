"""Centralized metric registration helper used by `MetricsRegistry`.

core_register(...) -> idempotent creation of a collector bound to the
registry's own CollectorRegistry. A duplicate name ValueError (the same
collector already registered on that CollectorRegistry) is recovered by
returning the existing collector. Unexpected exceptions are logged and
re-raised when CAUSEGEN_METRICS_STRICT_EXCEPTIONS is set (fail-fast mode).
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from src.utils.env_flags import is_truthy_env

logger = logging.getLogger(__name__)


def _lookup_existing(collector_registry: Any, full_name: str) -> Any:
    names_map = getattr(collector_registry, '_names_to_collectors', {})
    return names_map.get(full_name) or names_map.get(f"{full_name}_total")


def core_register(registry: Any, attr: str, ctor: Callable, name: str, doc: str,
                  labels: Sequence[str] | None = None, **ctor_kwargs) -> Any:
    if hasattr(registry, attr):  # idempotent fast path
        return getattr(registry, attr)
    namespace = registry.namespace
    full_name = f"{namespace}_{name}" if namespace else name
    collector = None
    try:
        collector = ctor(name, doc, list(labels or ()), namespace=namespace,
                         registry=registry.registry, **ctor_kwargs)
    except ValueError:
        # Duplicate: recover existing collector from this registry
        collector = _lookup_existing(registry.registry, full_name)
        if collector is None:
            raise
    except Exception as e:  # unexpected
        logger.error("core_register unexpected error creating %s (%s): %s", attr, full_name, e, exc_info=True)
        if is_truthy_env('CAUSEGEN_METRICS_STRICT_EXCEPTIONS'):
            raise
        return None
    setattr(registry, attr, collector)
    registry._metric_names[attr] = full_name  # type: ignore[attr-defined]
    return collector


__all__ = ["core_register"]
