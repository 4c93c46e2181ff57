"""Package loader: resolve a target package from its import path and parse it.

The target package is never imported. Its directory is resolved by walking
the explicit search paths first and ``sys.path`` second; every top-level
``*.py`` module in that directory is read and parsed with :mod:`ast`.

Modules following the pytest naming rule (``test_*.py`` and ``*_test.py``)
are skipped by default so test fixtures shipped beside the declarations
cannot shadow real types. A target package that keeps declarations in such
files passes ``exclude_tests=False``.

Any failure aborts the load; later stages assume a fully parsed view.
"""
from __future__ import annotations

import ast
import hashlib
import logging
import sys
from collections.abc import Iterable, Sequence
from pathlib import Path

from .errors import PackageLoadError
from .model import PackageHandle, SourceFile

logger = logging.getLogger(__name__)


def _is_test_module(path: Path) -> bool:
    return path.stem.startswith('test_') or path.stem.endswith('_test')


def _candidate_roots(search_paths: Sequence[str | Path] | None) -> Iterable[Path]:
    seen: set[str] = set()
    for entry in list(search_paths or []) + list(sys.path):
        root = Path(entry) if entry else Path.cwd()
        key = str(root)
        if key in seen:
            continue
        seen.add(key)
        if root.is_dir():
            yield root


def resolve_package_dir(qualified_name: str, search_paths: Sequence[str | Path] | None = None) -> Path:
    """Return the directory holding ``qualified_name`` (dotted) without importing it."""
    parts = [p for p in qualified_name.split('.') if p]
    if not parts or any(not p.isidentifier() for p in parts):
        raise PackageLoadError("invalid import path", subject=qualified_name)
    for root in _candidate_roots(search_paths):
        candidate = root.joinpath(*parts)
        if candidate.is_dir() and any(candidate.glob('*.py')):
            logger.debug("resolved %s -> %s", qualified_name, candidate)
            return candidate
    raise PackageLoadError("package could not be resolved on the search path", subject=qualified_name)


def _parse_file(path: Path, module: str) -> tuple[SourceFile, bytes]:
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise PackageLoadError(f"cannot read source file: {e}", subject=str(path)) from e
    try:
        tree = ast.parse(raw, filename=str(path))
    except (SyntaxError, ValueError) as e:
        raise PackageLoadError(f"source file failed to parse: {e}", subject=str(path)) from e
    return SourceFile(path=path, module=module, tree=tree), raw


def load_package(import_path: str, package_name: str,
                 search_paths: Sequence[str | Path] | None = None, *,
                 exclude_tests: bool = True) -> PackageHandle:
    """Load syntax for every module of ``<import_path>.<package_name>``.

    Files are ordered by file name so that type lookup and the source hash are
    stable for a given tree.
    """
    qualified = f"{import_path}.{package_name}" if import_path else package_name
    directory = resolve_package_dir(qualified, search_paths)
    paths = sorted(p for p in directory.glob('*.py')
                   if p.is_file() and not (exclude_tests and _is_test_module(p)))
    if not paths:
        raise PackageLoadError("package contains no loadable modules", subject=qualified)

    digest = hashlib.sha256()
    files: list[SourceFile] = []
    for path in paths:
        module = qualified if path.stem == '__init__' else f"{qualified}.{path.stem}"
        source, raw = _parse_file(path, module)
        digest.update(path.name.encode('utf-8') + b'\0' + raw + b'\0')
        files.append(source)

    logger.info("loaded package %s (%d files) from %s", qualified, len(files), directory)
    return PackageHandle(
        import_path=import_path,
        package_name=package_name,
        directory=directory,
        files=tuple(files),
        source_hash=digest.hexdigest()[:16],
    )


__all__ = ["load_package", "resolve_package_dir"]
