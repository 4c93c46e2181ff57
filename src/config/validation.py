"""Configuration validation utilities.

Loads the bundled `causegen_schema.json` and validates a configuration
object against it (jsonschema draft-07). Structural violations are hard
errors; there is no soft mode.

Usage:
    from src.config.validation import validate_config
    validate_config({"codegen": {...}, "metrics": {...}})
"""
from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema

from src.utils.exceptions import ConfigError

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).parent / "causegen_schema.json"


class ConfigValidationError(ConfigError):
    """Raised when configuration fails schema validation."""


@lru_cache(maxsize=1)
def _load_schema() -> dict[str, Any]:
    with SCHEMA_PATH.open(encoding="utf-8") as fh:
        return json.load(fh)


def validate_config(cfg: dict[str, Any]) -> dict[str, Any]:
    """Validate ``cfg`` in place; return it unchanged when valid."""
    validator = jsonschema.Draft7Validator(_load_schema())
    errors = sorted(validator.iter_errors(cfg), key=lambda e: list(e.absolute_path))
    if errors:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err.absolute_path) or '<root>'}: {err.message}" for err in errors
        )
        logger.debug("config validation failed: %s", details)
        raise ConfigValidationError(f"Config schema validation failed: {details}")
    return cfg


__all__ = ["ConfigValidationError", "SCHEMA_PATH", "validate_config"]
