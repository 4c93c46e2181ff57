"""Fatal error taxonomy for the cause-string generator.

Every error names the pipeline stage that failed and the offending
type/field/path (``subject``) so the CLI can print a single descriptive
diagnostic before exiting non-zero. None of these are recovered locally.
"""
from __future__ import annotations

from src.utils.exceptions import AMFException


class CauseGenError(AMFException):
    """Base class for generator failures."""

    stage = "generate"

    def __init__(self, message: str, *, subject: str | None = None) -> None:
        super().__init__(message)
        self.subject = subject

    def diagnostic(self) -> str:
        if self.subject:
            return f"[{self.stage}] {self.subject}: {self}"
        return f"[{self.stage}] {self}"


class PackageLoadError(CauseGenError):
    stage = "load"


class TypeNotFoundError(CauseGenError):
    stage = "locate"


class StructCastError(CauseGenError):
    stage = "extract"


class NoFieldsFoundError(CauseGenError):
    stage = "extract"


class NamingConventionError(CauseGenError):
    """Constant name lacks the marker (raised only in strict mode)."""

    stage = "synthesize"


class TemplateParseError(CauseGenError):
    stage = "emit"


class TemplateExecError(CauseGenError):
    stage = "emit"


class FileCreateError(CauseGenError):
    stage = "emit"


__all__ = [
    "CauseGenError",
    "PackageLoadError",
    "TypeNotFoundError",
    "StructCastError",
    "NoFieldsFoundError",
    "NamingConventionError",
    "TemplateParseError",
    "TemplateExecError",
    "FileCreateError",
]
