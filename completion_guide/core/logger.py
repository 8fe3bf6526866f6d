"""Logger configuration for the completion guide.

Scheduling code logs with keyword context (``logger.debug("...", week_number=2)``);
loguru stores those keywords in ``record["extra"]`` and the formats below
render them after the message.
"""

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>"
VERBOSE_CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def format_extra(extra: dict) -> str:
    """Render bound context as ``key=value`` pairs, sorted by key."""
    return " ".join(f"{key}={extra[key]}" for key in sorted(extra))


def _with_extra(base: str):
    def formatter(record) -> str:
        # Braces in values must survive loguru's second format pass
        context = format_extra(record["extra"]).replace("{", "{{").replace("}", "}}").replace("<", r"\<")
        suffix = f" <dim>{context}</dim>" if context else ""
        return base + suffix + "\n{exception}"

    return formatter


def _plain_with_extra(base: str):
    def formatter(record) -> str:
        context = format_extra(record["extra"]).replace("{", "{{").replace("}", "}}")
        return base + (f" | {context}" if context else "") + "\n{exception}"

    return formatter


def setup_logger(
    level: str = "INFO",
    log_file: str | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """Configure loguru for CLI use.

    DEBUG gets the verbose console format with module, function and line.
    Other levels get a compact one so log lines stay readable next to the
    rendered schedule tables.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to a rotating log file
        rotation: Log rotation size (e.g., "10 MB", "1 day")
        retention: Log retention period (e.g., "7 days", "1 month")
    """
    logger.remove()

    console_format = VERBOSE_CONSOLE_FORMAT if level == "DEBUG" else CONSOLE_FORMAT
    logger.add(sys.stderr, format=_with_extra(console_format), level=level, colorize=True)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            format=_plain_with_extra(FILE_FORMAT),
            level=level,
            rotation=rotation,
            retention=retention,
            encoding="utf-8",
        )

    logger.debug("Logger initialized", level=level, log_file=log_file)
