"""Code emitter: render a GenerationUnit into a Python module and write it.

Rendering happens fully in memory before the output file is opened, so a
template failure never leaves a file behind. The write itself is a single
scoped open/write; a failure midway can still leave a truncated file.

Output is deterministic: same unit in, same bytes out (no timestamps, the
header carries the package source hash only).
"""
from __future__ import annotations

import json
import keyword
import logging
import os
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError, TemplateNotFound, TemplateSyntaxError

from .errors import FileCreateError, TemplateExecError, TemplateParseError
from .model import GenerationUnit
from .naming import snake_case

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / 'templates'
DEFAULT_TEMPLATE = 'cause_strings.py.j2'
GENERATOR_NAME = 'gen_cause_strings.py'

UNKNOWN_CAUSE = "unknown cause"


def _pystr(value: Any) -> str:
    # JSON string escapes are valid Python escapes; keeps double quotes.
    return json.dumps(str(value), ensure_ascii=False)


def build_environment(template_dir: str | os.PathLike[str] | None = None) -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(template_dir or TEMPLATES_DIR)),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        autoescape=False,
    )
    env.filters['pystr'] = _pystr
    env.filters['snake'] = snake_case
    return env


def per_field_function_name(unit: GenerationUnit, field_name: str) -> str:
    return f"get_{snake_case(unit.struct_name)}_{snake_case(field_name)}_error_str"


def dispatch_function_name(unit: GenerationUnit) -> str:
    return f"get_{snake_case(unit.struct_name)}_error_str"


def parameter_name(unit: GenerationUnit) -> str:
    """Name of the generated functions' argument.

    Derived from the struct name, with a trailing underscore when that would be
    a keyword (``Pass`` -> ``pass_``) or would shadow the imported package
    (struct ``Cause`` in package ``cause``).
    """
    name = snake_case(unit.struct_name)
    if keyword.iskeyword(name) or name == unit.package_name:
        name += '_'
    return name


def _template_context(unit: GenerationUnit) -> dict[str, Any]:
    if unit.package_import_path:
        import_line = f"from {unit.package_import_path} import {unit.package_name}"
        qualified = f"{unit.package_import_path}.{unit.package_name}"
    else:
        import_line = f"import {unit.package_name}"
        qualified = unit.package_name
    return {
        'unit': unit,
        'generator': GENERATOR_NAME,
        'qualified_package': qualified,
        'import_line': import_line,
        'struct_var': parameter_name(unit),
        'dispatch_function': dispatch_function_name(unit),
        'unknown_cause': UNKNOWN_CAUSE,
        'unknown_struct': f"unknown {unit.qualified_struct}",
        'fields': [
            {'cause': field, 'function': per_field_function_name(unit, field.field_name)}
            for field in unit.fields
        ],
    }


def render_unit(unit: GenerationUnit, *, template_name: str = DEFAULT_TEMPLATE,
                template_dir: str | os.PathLike[str] | None = None) -> str:
    env = build_environment(template_dir)
    try:
        template = env.get_template(template_name)
    except TemplateSyntaxError as e:
        raise TemplateParseError(f"error parsing template (line {e.lineno}): {e.message}", subject=template_name) from e
    except TemplateNotFound as e:
        raise TemplateParseError("template not found", subject=template_name) from e
    try:
        return template.render(**_template_context(unit))
    except (TemplateError, TypeError, ValueError) as e:
        raise TemplateExecError(f"error executing template: {e}", subject=template_name) from e


def write_output(text: str, path: str | os.PathLike[str]) -> Path:
    out = Path(path)
    try:
        fh = out.open('w', encoding='utf-8', newline='\n')
    except OSError as e:
        raise FileCreateError(f"error creating output file: {e}", subject=str(out)) from e
    with fh:
        try:
            fh.write(text)
        except OSError as e:
            raise FileCreateError(f"error writing output file: {e}", subject=str(out)) from e
    return out


def emit(unit: GenerationUnit, path: str | os.PathLike[str], *, template_name: str = DEFAULT_TEMPLATE,
         template_dir: str | os.PathLike[str] | None = None) -> Path:
    text = render_unit(unit, template_name=template_name, template_dir=template_dir)
    out = write_output(text, path)
    logger.info("generated %s (%d cause field(s))", out, len(unit.fields))
    return out


__all__ = [
    "TEMPLATES_DIR",
    "DEFAULT_TEMPLATE",
    "UNKNOWN_CAUSE",
    "build_environment",
    "per_field_function_name",
    "dispatch_function_name",
    "parameter_name",
    "render_unit",
    "write_output",
    "emit",
]
