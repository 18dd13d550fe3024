import os
import sys
from pathlib import Path
from typing import Optional, Union

from loguru import logger

from gosurgeon.paths import get_paths

# Flag to track if logging has been configured
_logging_configured = False

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").lower() in ("1", "true", "yes")


def setup_logging(
    level: str = "INFO",
    suppress_console: Optional[bool] = None,
    enable_file_logging: Optional[bool] = None,
    force: bool = False,
    project_root: Optional[Union[str, Path]] = None,
) -> Optional[Path]:
    """
    Configures the global logger.

    Console output goes to stderr (stdout carries command results) unless
    machine mode is on. File logging is opt-in via GOSURGEON_FILE_LOGGING=1
    or enable_file_logging=True and writes to the project's
    .gosurgeon/logs/gosurgeon.log.

    Args:
        level: Console logging level (default: INFO)
        suppress_console: If None, check GOSURGEON_MACHINE_MODE env var.
        enable_file_logging: If None, check GOSURGEON_FILE_LOGGING env var.
        force: Reconfigure even if logging was already set up (CLI flags, tests).
        project_root: Project whose data directory holds the log file (default: CWD).

    Returns:
        The log file path when file logging is on, else None.
    """
    global _logging_configured

    if _logging_configured and not force:
        return None
    _logging_configured = True

    logger.remove()

    if suppress_console is None:
        suppress_console = _env_flag("GOSURGEON_MACHINE_MODE")
    if not suppress_console:
        logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=True)

    if enable_file_logging is None:
        enable_file_logging = _env_flag("GOSURGEON_FILE_LOGGING")
    if not enable_file_logging:
        return None

    log_file = get_paths(project_root).log_file
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="INFO",
        rotation="10 MB",
        retention="1 day",
        catch=True,
    )
    return log_file


# Configure the logger on import (checks env vars for machine mode)
setup_logging()
