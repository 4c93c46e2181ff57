"""Declaration graph and generation data model.

All entities are frozen and built fresh for one generation run. Loader,
locator and extractor only read from them; nothing here is cached between
runs.
"""
from __future__ import annotations

import ast
from dataclasses import dataclass
from pathlib import Path

from .errors import NoFieldsFoundError

# TypeDeclaration.kind values
KIND_STRUCT = "struct"
KIND_ENUM = "enum"
KIND_ALIAS = "alias"
KIND_NEWTYPE = "newtype"


@dataclass(frozen=True)
class SourceFile:
    path: Path
    module: str             # dotted module name, e.g. free5gc.ngap.ngapType.cause
    tree: ast.Module


@dataclass(frozen=True)
class PackageHandle:
    """Parsed view of one target package, owned by a single run."""
    import_path: str        # e.g. free5gc.ngap
    package_name: str       # e.g. ngapType
    directory: Path
    files: tuple[SourceFile, ...]
    source_hash: str        # short sha256 over file names + contents

    @property
    def qualified_name(self) -> str:
        if self.import_path:
            return f"{self.import_path}.{self.package_name}"
        return self.package_name


@dataclass(frozen=True)
class TypeDeclaration:
    name: str
    source: SourceFile
    node: ast.AST
    kind: str


@dataclass(frozen=True)
class Field:
    name: str
    annotation: ast.expr
    lineno: int


@dataclass(frozen=True)
class StructType:
    declaration: TypeDeclaration
    fields: tuple[Field, ...]

    @property
    def name(self) -> str:
        return self.declaration.name


@dataclass(frozen=True)
class VariantField:
    """Struct field classified as a union variant (optional reference to a named type)."""
    name: str
    type_name: str
    present_constant: str


@dataclass(frozen=True)
class ConstantDeclaration:
    name: str
    source: SourceFile
    lineno: int


@dataclass(frozen=True)
class EnumMapping:
    const_name: str         # e.g. CauseTransportPresentTransportResourceUnavailable
    label: str              # e.g. "Transport : TransportResourceUnavailable"


@dataclass(frozen=True)
class CauseField:
    field_name: str         # e.g. Transport
    type_name: str          # e.g. CauseTransport
    present_constant: str   # e.g. CausePresentTransport
    mappings: tuple[EnumMapping, ...] = ()


@dataclass(frozen=True)
class GenerationUnit:
    package_import_path: str
    package_name: str
    struct_name: str
    fields: tuple[CauseField, ...]
    discriminant_attr: str = "Present"
    value_attr: str = "Value"
    source_hash: str = ""

    def __post_init__(self) -> None:
        if not self.fields:
            raise NoFieldsFoundError(
                "generation unit requires at least one cause field",
                subject=f"{self.package_name}.{self.struct_name}",
            )

    @property
    def qualified_struct(self) -> str:
        return f"{self.package_name}.{self.struct_name}"


__all__ = [
    "KIND_STRUCT",
    "KIND_ENUM",
    "KIND_ALIAS",
    "KIND_NEWTYPE",
    "SourceFile",
    "PackageHandle",
    "TypeDeclaration",
    "Field",
    "StructType",
    "VariantField",
    "ConstantDeclaration",
    "EnumMapping",
    "CauseField",
    "GenerationUnit",
]
