"""Root logging setup for the generator CLI and the metrics bootstrap.

Environment Flags:
  CAUSEGEN_VERBOSE_CONSOLE -> console uses DEFAULT_FORMAT (timestamp + logger name)
  CAUSEGEN_RICH_CONSOLE    -> console goes through rich.logging.RichHandler
"""
from __future__ import annotations

import logging
import os
import sys

from rich.logging import RichHandler

from src.utils.env_flags import is_truthy_env

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
# Terminal output: level + message only
MINIMAL_CONSOLE_FORMAT = '%(levelname)s: %(message)s'

SUPPRESSED_LOGGERS = ('urllib3', 'jinja2')


def _console_handler(fmt: str, rich_console: bool) -> logging.Handler:
    if rich_console:
        # RichHandler renders time and level itself
        handler: logging.Handler = RichHandler(show_path=False, rich_tracebacks=True)
        handler.setFormatter(logging.Formatter('%(message)s'))
        return handler
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def _file_handler(log_file: str) -> logging.Handler | None:
    dirname = os.path.dirname(log_file)
    try:
        if dirname:
            os.makedirs(dirname, exist_ok=True)
        handler = logging.FileHandler(log_file, encoding='utf-8')
    except OSError as e:
        logging.getLogger(__name__).error("cannot open log file %s: %s", log_file, e)
        return None
    handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
    return handler


def setup_logging(level: str = 'INFO', log_file: str | None = None, fmt: str | None = None,
                  rich_console: bool | None = None) -> logging.Logger:
    """(Re)configure the root logger.

    Existing root handlers are closed and replaced so repeated calls (one per
    CLI invocation in tests) never stack handlers. The file handler, when
    requested, always uses DEFAULT_FORMAT.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(log_level)
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()

    if fmt is None:
        fmt = DEFAULT_FORMAT if is_truthy_env('CAUSEGEN_VERBOSE_CONSOLE') else MINIMAL_CONSOLE_FORMAT
    if rich_console is None:
        rich_console = is_truthy_env('CAUSEGEN_RICH_CONSOLE')

    handlers = [_console_handler(fmt, rich_console)]
    if log_file:
        file_handler = _file_handler(log_file)
        if file_handler is not None:
            handlers.append(file_handler)
    for handler in handlers:
        handler.setLevel(log_level)
        root.addHandler(handler)

    for name in SUPPRESSED_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return root


__all__ = ["setup_logging", "DEFAULT_FORMAT", "MINIMAL_CONSOLE_FORMAT"]
