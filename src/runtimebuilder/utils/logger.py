"""
Root logger setup for the `rtb` command.

Console output goes to stderr, coloured by colorlog when stderr is a
terminal and NO_COLOR is unset. Per-module levels come from `--log-levels`
or the RTB_LOG_LEVELS environment variable, e.g. "pipeline=DEBUG,steps=INFO".
"""
import logging
import os
import sys

import colorlog

from .. import constants

PACKAGE = "runtimebuilder"

CONSOLE_FORMAT = "%(levelname)-8s %(name)s | %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s | %(message)s"
LEVEL_COLORS = {
    "DEBUG": "blue",
    "INFO": "white",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}


def _wants_color(stream) -> bool:
    return stream.isatty() and "NO_COLOR" not in os.environ


def _console_handler(stream=None) -> logging.Handler:
    stream = stream or sys.stderr
    handler = logging.StreamHandler(stream)
    if _wants_color(stream):
        handler.setFormatter(colorlog.ColoredFormatter(
            f"%(log_color)s{CONSOLE_FORMAT}",
            log_colors=LEVEL_COLORS,
        ))
    else:
        handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    return handler


def _file_handler(log_file: str) -> logging.Handler | None:
    try:
        handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
    except OSError as e:
        logging.getLogger(__name__).error(f"Cannot open log file '{log_file}': {e}")
        return None
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%H:%M:%S"))
    return handler


def setup_logger(debug: bool = False, module_levels: dict | None = None, log_file: str | None = None):
    """
    Configure the root logger once per process.

    Calling it again only updates the root level and the per-module levels.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if debug else logging.INFO)

    if not root.handlers:
        root.addHandler(_console_handler())
        if log_file:
            handler = _file_handler(log_file)
            if handler is not None:
                root.addHandler(handler)
                root.debug(f"Also logging to '{log_file}'")

    _apply_module_levels(module_levels)


def parse_module_levels(spec: str | None) -> dict:
    """Parse "name=LEVEL,name=LEVEL" into a mapping, skipping malformed pairs."""
    levels = {}
    for pair in (spec or "").split(","):
        name, sep, level = pair.partition("=")
        if sep and name.strip():
            levels[name.strip()] = level.strip().upper()
    return levels


def _apply_module_levels(module_levels: dict | None):
    if module_levels is None:
        module_levels = parse_module_levels(os.environ.get(constants.LOG_LEVELS_ENV))

    for name, level_name in module_levels.items():
        level = logging.getLevelName(level_name.upper())
        if not isinstance(level, int):
            logging.getLogger(__name__).warning(f"Unknown log level '{level_name}' for '{name}', skipped")
            continue
        logging.getLogger(_normalize_module_name(name)).setLevel(level)


def _normalize_module_name(name: str) -> str:
    """Expand an alias, drop a trailing '.*', and qualify known package modules."""
    if name in constants.LOG_ALIAS_MAP:
        return constants.LOG_ALIAS_MAP[name]
    name = name.removesuffix(".*")
    head = name.partition(".")[0]
    if head != PACKAGE and head in constants.KNOWN_TOP_MODULES:
        return f"{PACKAGE}.{name}"
    return name
