"""Struct field extractor.

A struct field is treated as a union variant when its annotation is a single
level of optionality around a package-local named type::

    Transport: Optional[CauseTransport]
    Nas: CauseNas | None
    Misc: "CauseMisc | None"

Every such field is assumed to be a variant. A plain optional reference to a
package type that is not part of the union would be picked up as well;
nothing here can tell the difference from declarations alone. Optional
builtins (``Optional[str]``, ``int | None``) are never variants; their names
cannot be looked up in the target package. They are skipped like the other
non-variant shapes (plain values, containers, module-qualified types,
``ClassVar``), without notice.
"""
from __future__ import annotations

import ast
import builtins
import logging

from .errors import NoFieldsFoundError, StructCastError
from .model import KIND_STRUCT, Field, StructType, TypeDeclaration, VariantField
from .naming import NamingConvention

logger = logging.getLogger(__name__)

BUILTIN_NAMES = frozenset(dir(builtins))


def _terminal_name(node: ast.expr) -> str | None:
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Attribute):
        return node.attr
    return None


def _is_none(node: ast.expr) -> bool:
    return isinstance(node, ast.Constant) and node.value is None


def _named(node: ast.expr) -> str | None:
    # Bare identifiers and quoted forward references only, never builtins
    name = None
    if isinstance(node, ast.Name):
        name = node.id
    elif isinstance(node, ast.Constant) and isinstance(node.value, str) and node.value.isidentifier():
        name = node.value
    if name is None or name in BUILTIN_NAMES:
        return None
    return name


def _parse_string_annotation(text: str) -> ast.expr | None:
    try:
        return ast.parse(text.strip(), mode='eval').body
    except SyntaxError:
        return None


def referenced_type_name(annotation: ast.expr) -> str | None:
    """Return the named type behind a single-level optional annotation, else None."""
    if isinstance(annotation, ast.Constant) and isinstance(annotation.value, str):
        parsed = _parse_string_annotation(annotation.value)
        return referenced_type_name(parsed) if parsed is not None else None
    if isinstance(annotation, ast.Subscript):
        head = _terminal_name(annotation.value)
        if head == 'Optional':
            return _named(annotation.slice)
        if head == 'Union' and isinstance(annotation.slice, ast.Tuple):
            elts = annotation.slice.elts
            if len(elts) == 2:
                if _is_none(elts[1]):
                    return _named(elts[0])
                if _is_none(elts[0]):
                    return _named(elts[1])
        return None
    if isinstance(annotation, ast.BinOp) and isinstance(annotation.op, ast.BitOr):
        if _is_none(annotation.right):
            return _named(annotation.left)
        if _is_none(annotation.left):
            return _named(annotation.right)
    return None


def _is_classvar(annotation: ast.expr) -> bool:
    target = annotation.value if isinstance(annotation, ast.Subscript) else annotation
    return _terminal_name(target) == 'ClassVar'


def as_struct(decl: TypeDeclaration) -> StructType:
    """Cast a type declaration to a struct view (annotated class attributes in order)."""
    if decl.kind != KIND_STRUCT or not isinstance(decl.node, ast.ClassDef):
        raise StructCastError(f"could not cast {decl.kind} declaration to a struct", subject=decl.name)
    fields: list[Field] = []
    for stmt in decl.node.body:
        if not isinstance(stmt, ast.AnnAssign) or not isinstance(stmt.target, ast.Name):
            continue
        if _is_classvar(stmt.annotation):
            continue
        fields.append(Field(name=stmt.target.id, annotation=stmt.annotation, lineno=stmt.lineno))
    return StructType(declaration=decl, fields=tuple(fields))


def extract_variant_fields(struct: StructType, convention: NamingConvention) -> tuple[VariantField, ...]:
    variants: list[VariantField] = []
    for field in struct.fields:
        type_name = referenced_type_name(field.annotation)
        if type_name is None:
            logger.debug("skipping field %s.%s (not an optional named reference)", struct.name, field.name)
            continue
        variants.append(VariantField(
            name=field.name,
            type_name=type_name,
            present_constant=convention.present_constant(field.name),
        ))
    if not variants:
        raise NoFieldsFoundError("no variant fields found in struct", subject=struct.name)
    logger.info("struct %s: %d variant field(s): %s", struct.name, len(variants), ', '.join(v.name for v in variants))
    return tuple(variants)


__all__ = ["BUILTIN_NAMES", "as_struct", "extract_variant_fields", "referenced_type_name"]
