"""AMF metrics tooling exception hierarchy.

Define a small, clear exception tree for categorizing failures across the
code generator and the metrics layer. Use these to communicate intent up the
stack and enable targeted user-facing messages.
"""
from __future__ import annotations


class AMFException(Exception):
    """Base class for all AMF metrics tooling exceptions."""


class ConfigError(AMFException):
    """Configuration-related issues (missing/invalid keys, schema errors)."""


class MetricsError(AMFException):
    """Metric registration or exposition failures."""


__all__ = [
    "AMFException",
    "ConfigError",
    "MetricsError",
]
