"""
Configuration module for the AMF metrics tooling.
"""
from .loader import AppConfig, CodegenSettings, MetricsSettings, load_config
from .validation import ConfigValidationError

__all__ = [
    "AppConfig",
    "CodegenSettings",
    "MetricsSettings",
    "ConfigValidationError",
    "load_config",
]
