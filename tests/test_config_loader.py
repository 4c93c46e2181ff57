from __future__ import annotations

import os
from pathlib import Path

import pytest

from src.config.loader import DEFAULTS, load_config
from src.config.validation import ConfigValidationError, validate_config
from src.utils.exceptions import ConfigError


def test_defaults_without_file():
    cfg = load_config(env={})
    assert cfg.source is None
    assert cfg.codegen.import_path == "free5gc.ngap"
    assert cfg.codegen.package_name == "ngapType"
    assert cfg.codegen.struct_name == "Cause"
    assert cfg.codegen.search_paths == ()
    assert cfg.codegen.strict_marker is False
    assert cfg.metrics.namespace == "free5gc"
    assert cfg.metrics.port == 9091
    assert cfg.metrics.cause_formatter == ""


def test_yaml_merges_over_defaults(tmp_path):
    path = tmp_path / "causegen.yml"
    path.write_text(
        "codegen:\n"
        "  struct_name: CauseAlt\n"
        "  search_paths: [vendor, third_party]\n"
        "metrics:\n"
        "  port: 9200\n",
        encoding="utf-8",
    )
    cfg = load_config(path, env={})
    assert cfg.source == str(path)
    assert cfg.codegen.struct_name == "CauseAlt"
    assert cfg.codegen.package_name == "ngapType"
    assert cfg.codegen.search_paths == ("vendor", "third_party")
    assert cfg.metrics.port == 9200
    assert cfg.metrics.enabled is True


def test_config_path_from_env(tmp_path):
    path = tmp_path / "env.yml"
    path.write_text("codegen:\n  output: out/gen.py\n", encoding="utf-8")
    cfg = load_config(env={"CAUSEGEN_CONFIG": str(path)})
    assert cfg.codegen.output == "out/gen.py"
    assert cfg.source == str(path)


def test_env_overrides_win_over_file(tmp_path):
    path = tmp_path / "causegen.yml"
    path.write_text("codegen:\n  struct_name: FromFile\n", encoding="utf-8")
    env = {
        "CAUSEGEN_STRUCT_NAME": "FromEnv",
        "CAUSEGEN_STRICT_MARKER": "yes",
        "CAUSEGEN_SEARCH_PATHS": os.pathsep.join(["a", "b"]),
        "CAUSEGEN_METRICS_ENABLED": "off",
        "CAUSEGEN_METRICS_PORT": " 9300 ",
        "CAUSEGEN_METRICS_CAUSE_FORMATTER": "gen.error_message_gen:get_cause_error_str",
    }
    cfg = load_config(path, env=env)
    assert cfg.codegen.struct_name == "FromEnv"
    assert cfg.codegen.strict_marker is True
    assert cfg.codegen.search_paths == ("a", "b")
    assert cfg.metrics.enabled is False
    assert cfg.metrics.port == 9300
    assert cfg.metrics.cause_formatter == "gen.error_message_gen:get_cause_error_str"


@pytest.mark.parametrize("env", [
    {"CAUSEGEN_STRICT_MARKER": "maybe"},
    {"CAUSEGEN_METRICS_PORT": "ninety"},
    {"CAUSEGEN_METRICS_PORT": "70000"},
    {"CAUSEGEN_PACKAGE_NAME": "ngap-type"},
    {"CAUSEGEN_METRICS_CAUSE_FORMATTER": "no_colon_here"},
])
def test_bad_env_values_rejected(env):
    with pytest.raises(ConfigValidationError):
        load_config(env=env)


def test_unknown_keys_and_bad_yaml_rejected(tmp_path):
    unknown = tmp_path / "unknown.yml"
    unknown.write_text("codegen:\n  struct: Cause\n", encoding="utf-8")
    with pytest.raises(ConfigValidationError) as ei:
        load_config(unknown, env={})
    assert "codegen" in str(ei.value)

    broken = tmp_path / "broken.yml"
    broken.write_text("codegen: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigValidationError):
        load_config(broken, env={})

    scalar = tmp_path / "scalar.yml"
    scalar.write_text("just a string\n", encoding="utf-8")
    with pytest.raises(ConfigValidationError):
        load_config(scalar, env={})


def test_missing_file_is_config_error(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "absent.yml", env={})


def test_empty_file_means_defaults(tmp_path):
    path = tmp_path / "empty.yml"
    path.write_text("", encoding="utf-8")
    assert load_config(path, env={}).codegen == load_config(env={}).codegen


def test_defaults_pass_schema():
    assert validate_config(DEFAULTS) is DEFAULTS


def test_bundled_yaml_loads():
    cfg = load_config(Path(__file__).resolve().parents[1] / "config" / "causegen.yml", env={})
    assert cfg.codegen.output == "error_message_gen.py"


def test_metric_families_from_yaml_and_env(tmp_path):
    path = tmp_path / "families.yml"
    path.write_text("metrics:\n  families: [nas, ngap]\n", encoding="utf-8")
    assert load_config(path, env={}).metrics.families == ("nas", "ngap")
    cfg = load_config(path, env={"CAUSEGEN_METRICS_FAMILIES": " handover , communication "})
    assert cfg.metrics.families == ("handover", "communication")
    assert load_config(env={}).metrics.families == ()
    with pytest.raises(ConfigValidationError):
        load_config(env={"CAUSEGEN_METRICS_FAMILIES": "nas,gtp"})
