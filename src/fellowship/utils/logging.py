"""Logging helpers.

The SDK only creates loggers; handlers are installed by applications (or by
the CLI through ``configure_logging``).
"""

import logging
from typing import Optional, Union

ROOT_LOGGER_NAME = "fellowship"
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``fellowship`` namespace."""
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_logging(level: Union[int, str] = logging.INFO, fmt: Optional[str] = None) -> logging.Logger:
    """
    Attach a single stream handler to the package root logger.

    Calling this more than once only updates the level.

    Args:
        level: Logging level name or number
        fmt: Optional format string

    Returns:
        The package root logger
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)
    if not any(getattr(h, "_fellowship_handler", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt or LOG_FORMAT))
        handler._fellowship_handler = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    return root


class BestEffortLogger(logging.LoggerAdapter):
    """Adapter whose log calls never raise into the caller."""

    def __init__(self, logger: logging.Logger):
        super().__init__(logger, {})

    def log(self, level: int, msg: object, *args, **kwargs) -> None:
        try:
            super().log(level, msg, *args, **kwargs)
        except Exception:  # noqa: BLE001 - a broken sink must not change fetch results
            pass
