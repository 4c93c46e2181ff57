"""Mapping synthesizer: assemble the GenerationUnit consumed by the emitter.

Constants whose name lacks the convention's marker cannot be labelled. By
default they are dropped from the mapping with a warning; ``strict=True``
turns the first one into a NamingConventionError instead.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence

from .errors import NamingConventionError
from .extractor import as_struct, extract_variant_fields
from .harvester import harvest_constants
from .locator import find_type
from .model import CauseField, ConstantDeclaration, EnumMapping, GenerationUnit, PackageHandle, VariantField
from .naming import NamingConvention, PresentNamingConvention

logger = logging.getLogger(__name__)


def build_enum_mappings(variant: VariantField, constants: Sequence[ConstantDeclaration],
                        convention: NamingConvention, *, strict: bool = False) -> tuple[EnumMapping, ...]:
    mappings: list[EnumMapping] = []
    for const in constants:
        label = convention.label(variant.name, const.name)
        if label is None:
            if strict:
                raise NamingConventionError(
                    f"constant {const.name} ({const.source.path.name}:{const.lineno}) has no marker",
                    subject=f"{variant.type_name}.{variant.name}",
                )
            logger.warning("dropping constant %s for field %s: naming convention marker missing",
                           const.name, variant.name)
            continue
        mappings.append(EnumMapping(const_name=const.name, label=label))
    return tuple(mappings)


def build_cause_field(pkg: PackageHandle, variant: VariantField, convention: NamingConvention,
                      *, strict: bool = False) -> CauseField:
    constants = harvest_constants(pkg, variant.type_name)
    mappings = build_enum_mappings(variant, constants, convention, strict=strict)
    if not mappings:
        logger.info("field %s (%s) has no enum mappings; emitting unknown-error stub", variant.name, variant.type_name)
    return CauseField(
        field_name=variant.name,
        type_name=variant.type_name,
        present_constant=variant.present_constant,
        mappings=mappings,
    )


def build_generation_unit(pkg: PackageHandle, struct_name: str,
                          convention: NamingConvention | None = None, *,
                          discriminant_attr: str = "Present", value_attr: str = "Value",
                          strict: bool = False) -> GenerationUnit:
    """Locate ``struct_name``, classify its variants and map their constants."""
    convention = convention or PresentNamingConvention()
    struct = as_struct(find_type(pkg, struct_name))
    variants = extract_variant_fields(struct, convention)
    fields = tuple(build_cause_field(pkg, v, convention, strict=strict) for v in variants)
    return GenerationUnit(
        package_import_path=pkg.import_path,
        package_name=pkg.package_name,
        struct_name=struct_name,
        fields=fields,
        discriminant_attr=discriminant_attr,
        value_attr=value_attr,
        source_hash=pkg.source_hash,
    )


__all__ = ["build_enum_mappings", "build_cause_field", "build_generation_unit"]
