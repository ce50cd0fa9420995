"""
Logging helpers for hledger-sidecar.

All modules obtain their logger through ``get_logger``. Only the package
logger ("hledger_sidecar") carries a handler; module loggers propagate to
it, so ``setup_logging`` can change verbosity for everything at once.

Log output goes to stderr. stdout is reserved for command results such as
``hledger-sidecar path``.
"""

import logging
import sys
from typing import Optional

from .config.env_config import is_verbose

# Default logger name
DEFAULT_LOGGER_NAME = "hledger_sidecar"


def _level(verbose: bool) -> int:
    return logging.DEBUG if verbose else logging.WARNING


def _attach_handler(logger: logging.Logger) -> None:
    handler = logging.StreamHandler(sys.stderr)
    # Simple format, no timestamp for console
    handler.setFormatter(logging.Formatter('%(message)s'))
    logger.addHandler(handler)


def _package_logger() -> logging.Logger:
    """Return the package logger, attaching its handler on first use."""
    logger = logging.getLogger(DEFAULT_LOGGER_NAME)

    # Only configure if not already configured (avoid duplicate handlers)
    if not logger.handlers:
        logger.setLevel(_level(is_verbose()))
        _attach_handler(logger)
        logger.propagate = False

    return logger


def get_logger(name: Optional[str] = None, verbose: Optional[bool] = None) -> logging.Logger:
    """
    Get or create a logger instance.

    Args:
        name: Logger name under "hledger_sidecar" (default: the package logger)
        verbose: Force DEBUG (True) or WARNING (False) for this logger only.
            Defaults to following the package logger.

    Returns:
        Logger instance
    """
    package_logger = _package_logger()
    if not name or name == DEFAULT_LOGGER_NAME:
        logger = package_logger
    else:
        logger = logging.getLogger(name)

    if verbose is not None:
        logger.setLevel(_level(verbose))

    return logger


def setup_logging(verbose: Optional[bool] = None) -> None:
    """
    (Re)apply verbosity to the package logger.

    Call after loading a .env file so ``HLEDGER_SIDECAR_VERBOSE`` from that
    file takes effect. The handler is replaced with one bound to the
    current ``sys.stderr``.

    Args:
        verbose: Enable DEBUG output. Defaults to ``HLEDGER_SIDECAR_VERBOSE``.
    """
    if verbose is None:
        verbose = is_verbose()

    logger = _package_logger()
    logger.setLevel(_level(verbose))
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    _attach_handler(logger)
