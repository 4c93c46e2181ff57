"""Type locator: find top-level type declarations across a loaded package."""
from __future__ import annotations

import ast
import logging
from collections.abc import Iterator

from .errors import TypeNotFoundError
from .model import (
    KIND_ALIAS,
    KIND_ENUM,
    KIND_NEWTYPE,
    KIND_STRUCT,
    PackageHandle,
    SourceFile,
    TypeDeclaration,
)

logger = logging.getLogger(__name__)

ENUM_BASES = frozenset({'Enum', 'IntEnum', 'StrEnum', 'Flag', 'IntFlag'})


def _terminal_name(node: ast.expr) -> str | None:
    # Name -> id, typing.X / enum.X -> X
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Attribute):
        return node.attr
    return None


def _class_kind(node: ast.ClassDef) -> str:
    if any(_terminal_name(base) in ENUM_BASES for base in node.bases):
        return KIND_ENUM
    return KIND_STRUCT


def _declaration_of(stmt: ast.stmt) -> tuple[str, str] | None:
    """Return (name, kind) when ``stmt`` declares a type, else None."""
    if isinstance(stmt, ast.ClassDef):
        return stmt.name, _class_kind(stmt)
    if isinstance(stmt, ast.TypeAlias) and isinstance(stmt.name, ast.Name):
        return stmt.name.id, KIND_ALIAS
    if isinstance(stmt, ast.AnnAssign) and isinstance(stmt.target, ast.Name):
        if _terminal_name(stmt.annotation) == 'TypeAlias':
            return stmt.target.id, KIND_ALIAS
        return None
    if isinstance(stmt, ast.Assign) and len(stmt.targets) == 1 and isinstance(stmt.targets[0], ast.Name):
        value = stmt.value
        if isinstance(value, ast.Call) and _terminal_name(value.func) == 'NewType':
            return stmt.targets[0].id, KIND_NEWTYPE
    return None


def iter_type_declarations(source: SourceFile) -> Iterator[TypeDeclaration]:
    """Yield top-level type declarations of one file in source order."""
    for stmt in source.tree.body:
        found = _declaration_of(stmt)
        if found is None:
            continue
        name, kind = found
        yield TypeDeclaration(name=name, source=source, node=stmt, kind=kind)


def find_type(pkg: PackageHandle, name: str) -> TypeDeclaration:
    """Return the first declaration named ``name`` in package file order."""
    for source in pkg.files:
        for decl in iter_type_declarations(source):
            if decl.name == name:
                logger.debug("located type %s in %s", name, source.path.name)
                return decl
    raise TypeNotFoundError(
        f"no type declaration found in package {pkg.qualified_name}",
        subject=name,
    )


__all__ = ["ENUM_BASES", "iter_type_declarations", "find_type"]
