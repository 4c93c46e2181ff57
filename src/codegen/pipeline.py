"""Single-pass generation pipeline.

    load_package -> find_type -> as_struct -> extract_variant_fields
        -> harvest_constants (per variant) -> build_enum_mappings -> emit

Strictly linear; the first CauseGenError aborts the run. Nothing is shared
or cached between calls to :func:`generate`.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from src.config.loader import CodegenSettings

from .emitter import emit, render_unit
from .loader import load_package
from .model import GenerationUnit
from .naming import NamingConvention, PresentNamingConvention
from .synthesizer import build_generation_unit

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationResult:
    unit: GenerationUnit
    text: str | None        # rendered module, dry runs only
    output: Path | None     # written file, None for dry runs


def convention_from_settings(settings: CodegenSettings) -> NamingConvention:
    return PresentNamingConvention(marker=settings.marker, discriminant_prefix=settings.discriminant_prefix)


def build_unit(settings: CodegenSettings, convention: NamingConvention | None = None) -> GenerationUnit:
    pkg = load_package(settings.import_path, settings.package_name, settings.search_paths)
    return build_generation_unit(
        pkg,
        settings.struct_name,
        convention or convention_from_settings(settings),
        discriminant_attr=settings.discriminant_attr,
        value_attr=settings.value_attr,
        strict=settings.strict_marker,
    )


def generate(settings: CodegenSettings, *, convention: NamingConvention | None = None,
             dry_run: bool = False) -> GenerationResult:
    logger.info("generating cause strings for %s.%s", settings.package_name, settings.struct_name)
    unit = build_unit(settings, convention)
    if dry_run:
        return GenerationResult(unit=unit, text=render_unit(unit), output=None)
    return GenerationResult(unit=unit, text=None, output=emit(unit, settings.output))


__all__ = ["GenerationResult", "build_unit", "convention_from_settings", "generate"]
