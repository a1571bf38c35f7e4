# --- src/rlcsim_core/log_config.py ---
import logging
import os
import sys
from typing import Optional, Union

LOG_LEVEL_ENV_VAR = "RLCSIM_LOG_LEVEL"


def _resolve_level(level: Optional[Union[int, str]]) -> int:
    """Explicit argument first, then the environment, then INFO."""
    if level is None:
        level = os.getenv(LOG_LEVEL_ENV_VAR, "INFO")
    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        return resolved if isinstance(resolved, int) else logging.INFO
    return level


def setup_logging(level: Optional[Union[int, str]] = None):
    """
    Configures logging to stdout for the whole process.

    The level can be forced by argument or through the RLCSIM_LOG_LEVEL
    environment variable (e.g. "DEBUG" to trace every integration run).
    """
    log_formatter = logging.Formatter(
        "%(asctime)s [%(levelname)-5.5s] [%(name)s] %(message)s"
    )
    root_logger = logging.getLogger()

    # Clear existing handlers so repeated imports do not duplicate output.
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)
    root_logger.setLevel(_resolve_level(level))
    root_logger.addHandler(console_handler)

    # pint logs every redefinition at INFO; it is noise for this package.
    logging.getLogger("pint").setLevel(logging.WARNING)
    logging.info("Logging configured.")
