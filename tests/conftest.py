"""Pytest configuration & shared fixtures.

Responsibilities:
1. Ensure project root on sys.path.
2. Build throwaway target packages (ngapType style) under tmp_path.
3. Import generated modules against those packages without leaking
   `free5gc.*` modules between tests.
4. Provide an isolated MetricsRegistry per test (own CollectorRegistry).
"""
from __future__ import annotations

import importlib.util
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tests._helpers import NGAP_CAUSE_FILES, write_package  # noqa: E402


@pytest.fixture()
def ngap_root(tmp_path: Path) -> Path:
    """Search root holding free5gc/ngap/ngapType with the Cause example union."""
    root = tmp_path / "pkgroot"
    write_package(root, "free5gc.ngap.ngapType", NGAP_CAUSE_FILES)
    return root


@pytest.fixture()
def package_factory(tmp_path: Path):
    """Return a helper writing ``{file: source}`` as a package under a fresh root."""
    counter = {'n': 0}

    def _make(qualified: str, files: dict[str, str]) -> Path:
        counter['n'] += 1
        root = tmp_path / f"root{counter['n']}"
        write_package(root, qualified, files)
        return root

    return _make


@pytest.fixture()
def import_generated(monkeypatch):
    """Load a generated module file with ``search_root`` importable."""

    def _load(path: Path, search_root: Path, name: str = "cause_strings_gen"):
        monkeypatch.syspath_prepend(str(search_root))
        for mod in [m for m in sys.modules if m == 'free5gc' or m.startswith('free5gc.')]:
            monkeypatch.delitem(sys.modules, mod)
        spec = importlib.util.spec_from_file_location(name, path)
        assert spec is not None and spec.loader is not None
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        return module

    return _load


@pytest.fixture()
def metrics_registry():
    from src.metrics.registry import MetricsRegistry
    return MetricsRegistry(namespace="free5gc")
