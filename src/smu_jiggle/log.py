from __future__ import annotations

import logging
import os

from rich.logging import RichHandler


PACKAGE_LOGGER = "smu_jiggle"
_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def resolve_log_level(level: str | None = None) -> str:
    """Return a valid level name.

    Level resolution (first match wins):
      1) argument `level`
      2) env var `SMU_JIGGLE_LOG_LEVEL`
      3) default = "INFO"
    """
    if level is None:
        level = os.environ.get("SMU_JIGGLE_LOG_LEVEL", "INFO")

    level = str(level).upper().strip()
    if level not in _LEVELS:
        level = "INFO"
    return level


def setup_logging(level: str | None = None) -> logging.Logger:
    """Attach a RichHandler to the ``smu_jiggle`` logger and set its level.

    Only the package logger is touched; root handlers are left alone.
    Safe to call multiple times.
    """
    level = resolve_log_level(level)

    logger = logging.getLogger(PACKAGE_LOGGER)
    # Avoid duplicated handlers on re-init.
    for h in list(logger.handlers):
        if isinstance(h, RichHandler):
            logger.removeHandler(h)

    handler = RichHandler(
        rich_tracebacks=True,
        tracebacks_show_locals=False,
        show_path=False,
        show_time=True,
        omit_repeated_times=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%H:%M:%S]"))
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
