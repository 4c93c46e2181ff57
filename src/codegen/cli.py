"""Command line entry point for the cause-string generator.

Usage:
    python scripts/gen_cause_strings.py --config config/causegen.yml
    python -m src.codegen --package ngapType --struct Cause --search-path vendor --dry-run

Exit codes: 0 success, 1 generation failure (stage + subject logged), 2 bad configuration.
"""
from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from collections.abc import Sequence

from rich.console import Console
from rich.table import Table

from src.config.loader import CodegenSettings, load_config
from src.utils.exceptions import ConfigError
from src.utils.logging_utils import setup_logging

from .emitter import dispatch_function_name, per_field_function_name
from .errors import CauseGenError
from .model import GenerationUnit
from .pipeline import generate

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="gen_cause_strings",
        description="Generate <Struct> -> diagnostic string converters from a package's declarations.",
    )
    p.add_argument('--config', help='YAML config file (default: $CAUSEGEN_CONFIG or built-in defaults)')
    p.add_argument('--import-path', dest='import_path', help='Dotted import path of the parent package (may be empty)')
    p.add_argument('--package', dest='package_name', help='Target package name, e.g. ngapType')
    p.add_argument('--struct', dest='struct_name', help='Discriminated union struct name, e.g. Cause')
    p.add_argument('--output', help='Output module path')
    p.add_argument('--search-path', dest='search_paths', action='append', metavar='DIR',
                   help='Extra directory to resolve the package from (repeatable, searched before sys.path)')
    p.add_argument('--strict-marker', dest='strict_marker', action='store_true', default=None,
                   help='Fail when a harvested constant lacks the naming marker instead of dropping it')
    p.add_argument('--dry-run', action='store_true', help='Print generated code to stdout instead of writing')
    p.add_argument('--log-level', default='INFO', help='Logging level (default INFO)')
    p.add_argument('--log-file', help='Optional log file')
    return p


def _apply_args(settings: CodegenSettings, args: argparse.Namespace) -> CodegenSettings:
    changes = {}
    for key in ('import_path', 'package_name', 'struct_name', 'output', 'strict_marker'):
        value = getattr(args, key)
        if value is not None:
            changes[key] = value
    if args.search_paths:
        changes['search_paths'] = tuple(args.search_paths) + settings.search_paths
    return dataclasses.replace(settings, **changes)


def _summary_table(unit: GenerationUnit) -> Table:
    table = Table(title=f"{unit.qualified_struct} cause strings")
    table.add_column("Field")
    table.add_column("Function")
    table.add_column("Present constant")
    table.add_column("Cases", justify="right")
    for field in unit.fields:
        table.add_row(field.field_name, per_field_function_name(unit, field.field_name),
                      field.present_constant, str(len(field.mappings)))
    table.add_row("*", dispatch_function_name(unit), "-", str(len(unit.fields)))
    return table


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, args.log_file)
    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.critical("configuration error: %s", e)
        return 2
    settings = _apply_args(cfg.codegen, args)
    try:
        result = generate(settings, dry_run=args.dry_run)
    except CauseGenError as e:
        logger.critical("generation failed %s", e.diagnostic())
        return 1
    if args.dry_run:
        sys.stdout.write(result.text)
    else:
        Console(stderr=True).print(_summary_table(result.unit))
    return 0


__all__ = ["build_parser", "main"]
