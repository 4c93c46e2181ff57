"""Boolean environment flag parsing shared by config overrides and the metrics layer.

Lenient checks (`is_truthy_env`) treat anything outside {"1","true","yes","on"}
as false; `parse_bool` is the strict variant used for CAUSEGEN_* overrides,
where a typo must surface as a configuration error:

    from src.utils.env_flags import is_truthy_env
    if is_truthy_env('CAUSEGEN_METRICS_STRICT_EXCEPTIONS'):
        ...
"""
from __future__ import annotations

import os
from collections.abc import Mapping

TRUTHY_SET: set[str] = {"1","true","yes","on"}
FALSY_SET: set[str] = {"0","false","no","off"}


def is_truthy(value: str | None) -> bool:
    if not value:
        return False
    return value.strip().lower() in TRUTHY_SET


def is_truthy_env(name: str, default: str | None = None, env: Mapping[str, str] | None = None) -> bool:
    source = os.environ if env is None else env
    return is_truthy(source.get(name, default or ''))


def parse_bool(value: str) -> bool:
    """Strict boolean parse for config overrides; raises ValueError on junk."""
    v = value.strip().lower()
    if v in TRUTHY_SET:
        return True
    if v in FALSY_SET:
        return False
    raise ValueError(f"not a boolean flag: {value!r}")


__all__ = [
    'TRUTHY_SET',
    'FALSY_SET',
    'is_truthy',
    'is_truthy_env',
    'parse_bool',
]
