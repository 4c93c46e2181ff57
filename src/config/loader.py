"""Config loading & normalization entrypoint.

Responsibilities:
  * Start from built-in defaults (mirroring the free5gc ngapType layout).
  * Merge an optional YAML file on top.
  * Apply CAUSEGEN_* environment overrides.
  * Validate the merged result against the bundled JSON schema.

Environment Flags:
  CAUSEGEN_CONFIG                -> YAML path used when no explicit path is given.
  CAUSEGEN_IMPORT_PATH, CAUSEGEN_PACKAGE_NAME, CAUSEGEN_STRUCT_NAME,
  CAUSEGEN_OUTPUT, CAUSEGEN_SEARCH_PATHS (os.pathsep separated),
  CAUSEGEN_DISCRIMINANT_ATTR, CAUSEGEN_VALUE_ATTR, CAUSEGEN_MARKER,
  CAUSEGEN_DISCRIMINANT_PREFIX, CAUSEGEN_STRICT_MARKER
                                 -> codegen section overrides.
  CAUSEGEN_METRICS_ENABLED, CAUSEGEN_METRICS_NAMESPACE,
  CAUSEGEN_METRICS_PORT, CAUSEGEN_METRICS_ADDR, CAUSEGEN_METRICS_CAUSE_FORMATTER,
  CAUSEGEN_METRICS_FAMILIES (comma separated)
                                 -> metrics section overrides.

Public API:
  load_config(path=None, *, env=None) -> AppConfig
"""
from __future__ import annotations

import copy
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from src.utils.env_flags import parse_bool

from .validation import ConfigValidationError, validate_config

logger = logging.getLogger(__name__)

DEFAULTS: dict[str, Any] = {
    'codegen': {
        'import_path': 'free5gc.ngap',
        'package_name': 'ngapType',
        'struct_name': 'Cause',
        'output': 'error_message_gen.py',
        'search_paths': [],
        'discriminant_attr': 'Present',
        'value_attr': 'Value',
        'marker': 'Present',
        'discriminant_prefix': 'CausePresent',
        'strict_marker': False,
    },
    'metrics': {
        'enabled': True,
        'namespace': 'free5gc',
        'port': 9091,
        'addr': '0.0.0.0',
        'cause_formatter': '',
        'families': [],
    },
}

# env var -> (section, key, kind)
ENV_OVERRIDES: dict[str, tuple[str, str, str]] = {
    'CAUSEGEN_IMPORT_PATH': ('codegen', 'import_path', 'str'),
    'CAUSEGEN_PACKAGE_NAME': ('codegen', 'package_name', 'str'),
    'CAUSEGEN_STRUCT_NAME': ('codegen', 'struct_name', 'str'),
    'CAUSEGEN_OUTPUT': ('codegen', 'output', 'str'),
    'CAUSEGEN_SEARCH_PATHS': ('codegen', 'search_paths', 'paths'),
    'CAUSEGEN_DISCRIMINANT_ATTR': ('codegen', 'discriminant_attr', 'str'),
    'CAUSEGEN_VALUE_ATTR': ('codegen', 'value_attr', 'str'),
    'CAUSEGEN_MARKER': ('codegen', 'marker', 'str'),
    'CAUSEGEN_DISCRIMINANT_PREFIX': ('codegen', 'discriminant_prefix', 'str'),
    'CAUSEGEN_STRICT_MARKER': ('codegen', 'strict_marker', 'bool'),
    'CAUSEGEN_METRICS_ENABLED': ('metrics', 'enabled', 'bool'),
    'CAUSEGEN_METRICS_NAMESPACE': ('metrics', 'namespace', 'str'),
    'CAUSEGEN_METRICS_PORT': ('metrics', 'port', 'int'),
    'CAUSEGEN_METRICS_ADDR': ('metrics', 'addr', 'str'),
    'CAUSEGEN_METRICS_CAUSE_FORMATTER': ('metrics', 'cause_formatter', 'str'),
    'CAUSEGEN_METRICS_FAMILIES': ('metrics', 'families', 'list'),
}


@dataclass(frozen=True)
class CodegenSettings:
    import_path: str
    package_name: str
    struct_name: str
    output: str
    search_paths: tuple[str, ...] = ()
    discriminant_attr: str = 'Present'
    value_attr: str = 'Value'
    marker: str = 'Present'
    discriminant_prefix: str = 'CausePresent'
    strict_marker: bool = False


@dataclass(frozen=True)
class MetricsSettings:
    enabled: bool = True
    namespace: str = 'free5gc'
    port: int = 9091
    addr: str = '0.0.0.0'
    cause_formatter: str = ''   # "module:function" of the generated dispatcher
    families: tuple[str, ...] = ()   # empty: every metric family


@dataclass(frozen=True)
class AppConfig:
    codegen: CodegenSettings
    metrics: MetricsSettings = field(default_factory=MetricsSettings)
    source: str | None = None   # YAML path the config came from, if any


def _merge(base: dict[str, Any], extra: Mapping[str, Any]) -> dict[str, Any]:
    out = copy.deepcopy(base)
    for key, value in extra.items():
        if isinstance(value, Mapping) and isinstance(out.get(key), dict):
            out[key] = _merge(out[key], value)
        else:
            out[key] = copy.deepcopy(value)
    return out


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with path.open(encoding='utf-8') as fh:
            data = yaml.safe_load(fh)
    except OSError as e:
        raise ConfigValidationError(f"cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigValidationError(f"invalid YAML in {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigValidationError(f"config file {path} must contain a mapping at top level")
    return data


def _coerce(name: str, raw: str, kind: str) -> Any:
    try:
        if kind == 'bool':
            return parse_bool(raw)
        if kind == 'int':
            return int(raw.strip())
    except ValueError as e:
        raise ConfigValidationError(f"{name}: {e}") from e
    if kind == 'paths':
        return [p for p in raw.split(os.pathsep) if p]
    if kind == 'list':
        return [p.strip() for p in raw.split(',') if p.strip()]
    return raw


def apply_env_overrides(cfg: dict[str, Any], env: Mapping[str, str]) -> dict[str, Any]:
    out = copy.deepcopy(cfg)
    for name, (section, key, kind) in ENV_OVERRIDES.items():
        if name not in env:
            continue
        out.setdefault(section, {})[key] = _coerce(name, env[name], kind)
        logger.debug("config override %s -> %s.%s", name, section, key)
    return out


def load_config(path: str | os.PathLike[str] | None = None, *, env: Mapping[str, str] | None = None) -> AppConfig:
    env = os.environ if env is None else env
    cfg = copy.deepcopy(DEFAULTS)
    source: str | None = None
    if path is None and env.get('CAUSEGEN_CONFIG'):
        path = env['CAUSEGEN_CONFIG']
    if path is not None:
        cfg = _merge(cfg, _read_yaml(Path(path)))
        source = str(path)
    cfg = apply_env_overrides(cfg, env)
    validate_config(cfg)

    cg = cfg['codegen']
    mt = cfg['metrics']
    return AppConfig(
        codegen=CodegenSettings(
            import_path=cg['import_path'],
            package_name=cg['package_name'],
            struct_name=cg['struct_name'],
            output=cg['output'],
            search_paths=tuple(cg.get('search_paths') or ()),
            discriminant_attr=cg['discriminant_attr'],
            value_attr=cg['value_attr'],
            marker=cg['marker'],
            discriminant_prefix=cg['discriminant_prefix'],
            strict_marker=bool(cg['strict_marker']),
        ),
        metrics=MetricsSettings(
            enabled=bool(mt['enabled']),
            namespace=mt['namespace'],
            port=int(mt['port']),
            addr=mt['addr'],
            cause_formatter=mt['cause_formatter'],
            families=tuple(mt.get('families') or ()),
        ),
        source=source,
    )


__all__ = [
    "DEFAULTS",
    "ENV_OVERRIDES",
    "AppConfig",
    "CodegenSettings",
    "MetricsSettings",
    "apply_env_overrides",
    "load_config",
]
