"""Constant harvester: collect module-level constants of a variant type's file."""
from __future__ import annotations

import ast
import logging
from collections.abc import Iterator

from .locator import find_type, iter_type_declarations
from .model import ConstantDeclaration, PackageHandle, SourceFile

logger = logging.getLogger(__name__)


def _target_names(target: ast.expr) -> Iterator[str]:
    if isinstance(target, ast.Name):
        yield target.id
    elif isinstance(target, (ast.Tuple, ast.List)):
        for elt in target.elts:
            yield from _target_names(elt)


def _is_dunder(name: str) -> bool:
    return name.startswith('__') and name.endswith('__')


def iter_constants(source: SourceFile) -> Iterator[ConstantDeclaration]:
    """Yield every module-level constant name of ``source`` in declaration order.

    Values and annotations are not inspected. Module metadata (``__all__``)
    and statements that declare types are not constants.
    """
    type_nodes = {id(decl.node) for decl in iter_type_declarations(source)}
    for stmt in source.tree.body:
        if id(stmt) in type_nodes:
            continue
        if isinstance(stmt, ast.Assign):
            names = [n for target in stmt.targets for n in _target_names(target)]
        elif isinstance(stmt, ast.AnnAssign) and stmt.value is not None:
            names = list(_target_names(stmt.target))
        else:
            continue
        for name in names:
            if not _is_dunder(name):
                yield ConstantDeclaration(name=name, source=source, lineno=stmt.lineno)


def harvest_constants(pkg: PackageHandle, type_name: str) -> tuple[ConstantDeclaration, ...]:
    decl = find_type(pkg, type_name)
    constants = tuple(iter_constants(decl.source))
    logger.debug("harvested %d constant(s) for %s from %s", len(constants), type_name, decl.source.path.name)
    return constants


__all__ = ["harvest_constants", "iter_constants"]
