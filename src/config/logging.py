"""Loguru setup for the searchables registry.

Library code only ever calls :func:`get_logger`; sinks are installed once by
the entry point through :func:`setup_loguru_logger`. Until then loguru's
default stderr sink is used, which keeps the registry quiet-but-working when
embedded in another process.

Usage::

    from src.config import get_logger

    logger = get_logger(__name__)
    with logger.contextualize(operation="rebuild_searchables"):
        logger.info("Rebuilding")
"""

import functools
from pathlib import Path
import sys
from typing import Any

from loguru import logger

from .settings import settings

SERVICE_NAME = "searchables"

_CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[module]}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def setup_loguru_logger(verbose: bool = False) -> None:
    """Replace loguru's default sink with console and JSON file sinks.

    Args:
        verbose: Log debug output to the console, with full tracebacks
    """
    logger.remove()
    logger.configure(extra={"service": SERVICE_NAME, "module": "root"})

    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else settings.logging.console_level,
        format=_CONSOLE_FORMAT,
        colorize=True,
        backtrace=verbose,
        diagnose=verbose,
    )

    log_file = Path(settings.logging.log_file)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    # One JSON object per line; rotated and compressed
    logger.add(
        str(log_file),
        level=settings.logging.file_level,
        serialize=True,
        rotation="10 MB",
        retention="1 week",
        compression="zip",
        backtrace=True,
        diagnose=True,
        enqueue=not settings.logging.real_time_debug,
        catch=True,
    )


def get_logger(name: str) -> Any:  # loguru has no public Logger type
    """Return the shared logger bound to ``name`` and the service."""
    return logger.bind(module=name, service=SERVICE_NAME)


def log_startup_info() -> None:
    """Log the effective settings, one line per value, at debug level."""
    startup_logger = get_logger(__name__)
    startup_logger.info("Searchables registry starting")

    for section, values in settings.model_dump(mode="json").items():
        if not isinstance(values, dict):
            startup_logger.debug("{} = {}", section, values)
            continue
        for key, value in values.items():
            startup_logger.debug("{}.{} = {}", section, key, value)


def resilient_operation(operation_name=None):
    """Log failures of a boundary operation under its name, then re-raise.

    Example:
        >>> @resilient_operation("manifest_scan")
        ... def refresh(self): ...
    """

    def decorator(func):
        name = operation_name or func.__name__

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                logger.exception(f"{name} failed: {e!s}")
                raise

        return wrapper

    return decorator
