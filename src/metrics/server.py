"""Metrics bootstrap.

Public API:
  init_metrics(settings, ...) -> MetricsRegistry
  resolve_cause_formatter("pkg.module:function") -> callable
  setup_metrics_server(registry, port, host) -> shutdown_callable

The registry is created once by the caller at process start and passed
explicitly to counter helpers; this module keeps no module-level state.
"""
from __future__ import annotations

import importlib
import logging
from collections.abc import Callable

from prometheus_client import start_http_server

from src.config.loader import MetricsSettings
from src.utils.exceptions import MetricsError

from .registry import CauseFormatter, MetricsRegistry

logger = logging.getLogger(__name__)


def resolve_cause_formatter(ref: str) -> CauseFormatter:
    """Import ``"package.module:function"`` (typically the generated dispatcher)."""
    module_name, sep, attr = ref.partition(":")
    if not sep or not module_name or not attr:
        raise MetricsError(f"cause formatter reference must look like module:function, got {ref!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise MetricsError(f"cannot import cause formatter module {module_name}: {e}") from e
    func = getattr(module, attr, None)
    if not callable(func):
        raise MetricsError(f"{ref} is not a callable cause formatter")
    return func


def init_metrics(settings: MetricsSettings, *, cause_formatter: CauseFormatter | None = None,
                 nas_cause_formatter: Callable[[int], str] | None = None) -> MetricsRegistry:
    if cause_formatter is None and settings.cause_formatter:
        cause_formatter = resolve_cause_formatter(settings.cause_formatter)
    reg = MetricsRegistry(settings.namespace, families=settings.families or None,
                          cause_formatter=cause_formatter, nas_cause_formatter=nas_cause_formatter)
    logger.info("metrics initialized namespace=%s collectors=%d", settings.namespace, len(reg.get_metric_names()))
    return reg


def setup_metrics_server(registry: MetricsRegistry, port: int = 9091, host: str = "0.0.0.0") -> Callable[[], None]:
    """Expose ``registry`` over HTTP; return a callable that stops the server."""
    try:
        server, thread = start_http_server(port, addr=host, registry=registry.registry)
    except OSError as e:
        raise MetricsError(f"cannot start metrics server on {host}:{port}: {e}") from e
    logger.info("metrics server listening on %s:%s", host, server.server_port)

    def _shutdown() -> None:
        server.shutdown()
        server.server_close()
        thread.join(timeout=5)

    return _shutdown


def maybe_start_metrics_server(registry: MetricsRegistry, settings: MetricsSettings) -> Callable[[], None] | None:
    if not settings.enabled:
        logger.info("metrics endpoint disabled by configuration")
        return None
    return setup_metrics_server(registry, settings.port, settings.addr)


__all__ = ["init_metrics", "maybe_start_metrics_server", "resolve_cause_formatter", "setup_metrics_server"]
