import sys
import os
from pathlib import Path
from loguru import logger

# Flag to track if logging has been configured
_logging_configured = False


def setup_logging(level="INFO", suppress_console=None, enable_file_logging=None, log_dir=None):
    """
    Configures the global logger.

    Console logging is on unless FEATURESTYLE_MACHINE_MODE is set. File logging
    is opt-in via FEATURESTYLE_FILE_LOGGING=1 or enable_file_logging=True.

    Args:
        level: Logging level (default: INFO)
        suppress_console: If True, suppress console logging. If None, check FEATURESTYLE_MACHINE_MODE env var.
        enable_file_logging: If True, enable file logging. If None, check FEATURESTYLE_FILE_LOGGING env var.
        log_dir: Directory for the log file (default: ./.featurestyle/logs)
    """
    global _logging_configured

    # Only configure once to avoid duplicate handlers
    if _logging_configured:
        return
    _logging_configured = True

    logger.remove()

    if suppress_console is None:
        suppress_console = os.getenv("FEATURESTYLE_MACHINE_MODE", "").lower() in ("1", "true", "yes")

    if not suppress_console:
        logger.add(
            sys.stderr,
            level=level,
            format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
            colorize=True
        )

    if enable_file_logging is None:
        enable_file_logging = os.getenv("FEATURESTYLE_FILE_LOGGING", "").lower() in ("1", "true", "yes")

    if enable_file_logging:
        log_dir = Path(log_dir) if log_dir else Path.cwd() / ".featurestyle" / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_dir / "featurestyle.log",
            level="INFO",
            rotation="10 MB",
            retention="1 day",
            compression="gz",
            catch=True,
            serialize=False
        )


def reset_logging():
    """Allow setup_logging to run again (used by the test suite)."""
    global _logging_configured
    _logging_configured = False


# Configure the logger on import (will check env var for machine mode)
setup_logging()
