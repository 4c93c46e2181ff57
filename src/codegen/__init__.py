"""Static cause-string generator.

Reads a target package's declarations with :mod:`ast` (never importing it),
finds a discriminated-union struct, pairs each variant field with the
constants declared next to its type, and renders a Python module that turns
runtime values of the union into diagnostic strings.

Public surface:
    from src.codegen import generate, build_generation_unit, load_package
"""
from __future__ import annotations

from .emitter import emit, render_unit, write_output
from .errors import (
    CauseGenError,
    FileCreateError,
    NamingConventionError,
    NoFieldsFoundError,
    PackageLoadError,
    StructCastError,
    TemplateExecError,
    TemplateParseError,
    TypeNotFoundError,
)
from .loader import load_package
from .naming import NamingConvention, PresentNamingConvention
from .pipeline import GenerationResult, generate
from .synthesizer import build_generation_unit

__all__ = [
    "CauseGenError",
    "FileCreateError",
    "GenerationResult",
    "NamingConvention",
    "NamingConventionError",
    "NoFieldsFoundError",
    "PackageLoadError",
    "PresentNamingConvention",
    "StructCastError",
    "TemplateExecError",
    "TemplateParseError",
    "TypeNotFoundError",
    "build_generation_unit",
    "emit",
    "generate",
    "load_package",
    "render_unit",
    "write_output",
]
