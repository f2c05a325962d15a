"""Settings and logging for the searchables registry.

``settings`` is the process-wide pydantic-settings instance (environment and
``.env`` driven); ``get_logger`` hands out loguru loggers bound to a module.
"""

from .logging import (
    get_logger,
    log_startup_info,
    resilient_operation,
    setup_loguru_logger,
)
from .settings import get_config, settings

__all__ = [
    "get_config",
    "get_logger",
    "log_startup_info",
    "resilient_operation",
    "settings",
    "setup_loguru_logger",
]
