"""Centralized logging configuration for flowcut.

Every module logs through ``get_logger(__name__)``. Records propagate to one
``flowcut`` root logger that owns the only handler, so the package can be
silenced or made verbose in one call. Output goes to stderr: the CLI prints
its tables and JSON on stdout.
"""

import logging
import sys
from typing import Optional, Union

ROOT_LOGGER_NAME = "flowcut"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_ROOT_LOGGER_CONFIGURED = False


def _root_logger() -> logging.Logger:
    return logging.getLogger(ROOT_LOGGER_NAME)


def _as_level(level: Union[int, str]) -> int:
    """Accept ``logging.DEBUG`` as well as ``"debug"`` or ``"DEBUG"``."""
    if isinstance(level, str):
        value = logging.getLevelName(level.upper())
        if not isinstance(value, int):
            raise ValueError(f"Unknown log level: {level!r}")
        return value
    return level


def setup_root_logger(
    level: Union[int, str] = logging.INFO,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Attach the package handler to the ``flowcut`` root logger.

    Calling it again is a no-op until ``reset_logging`` runs.

    Args:
        level: Initial level for the root logger.
        format_string: Record format, ``DEFAULT_FORMAT`` if omitted.
        handler: Handler to install instead of a stderr ``StreamHandler``.
    """
    global _ROOT_LOGGER_CONFIGURED

    if _ROOT_LOGGER_CONFIGURED:
        return

    root = _root_logger()
    root.setLevel(_as_level(level))
    root.handlers.clear()

    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    root.addHandler(handler)

    # pytest's caplog hooks the global root logger
    root.propagate = True

    _ROOT_LOGGER_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name``, typically a module's ``__name__``.

    The logger has no handler or level of its own and defers to the
    ``flowcut`` root.
    """
    setup_root_logger()
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: Union[int, str]) -> None:
    """Set the level of the ``flowcut`` root logger and its handlers.

    Args:
        level: ``logging`` level constant or level name such as ``"debug"``.

    Raises:
        ValueError: If ``level`` is an unknown level name.
    """
    value = _as_level(level)
    setup_root_logger()

    root = _root_logger()
    root.setLevel(value)
    for handler in root.handlers:
        handler.setLevel(value)


def enable_debug_logging() -> None:
    """Switch every flowcut logger to DEBUG, e.g. to see per-phase records."""
    set_global_log_level(logging.DEBUG)


def disable_debug_logging() -> None:
    """Return to the INFO default."""
    set_global_log_level(logging.INFO)


def reset_logging() -> None:
    """Drop the package handler and level; mainly for tests."""
    global _ROOT_LOGGER_CONFIGURED
    _ROOT_LOGGER_CONFIGURED = False

    root = _root_logger()
    root.handlers.clear()
    root.setLevel(logging.NOTSET)


setup_root_logger()
