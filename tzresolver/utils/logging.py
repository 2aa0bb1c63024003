"""Logging configuration and setup utilities."""

import logging
import os
import sys
from typing import TYPE_CHECKING, Any, Optional, TextIO

if TYPE_CHECKING:
    from ..config.settings import TzResolverSettings

# Custom log level between INFO(20) and DEBUG(10)
VERBOSE = 15
logging.addLevelName(VERBOSE, "VERBOSE")

PACKAGE_LOGGER = "tzresolver"

# Level name -> (escape for 256/truecolor terminals, escape for 8-colour terminals)
LEVEL_COLORS: dict[str, tuple[str, str]] = {
    "DEBUG": ("\033[95m", "\033[35m"),
    "VERBOSE": ("\033[92m", "\033[32m"),
    "INFO": ("\033[94m", "\033[34m"),
    "WARNING": ("\033[93m", "\033[33m"),
    "ERROR": ("\033[91m", "\033[31m"),
    "CRITICAL": ("\033[1;91m", "\033[1;31m"),
}
RESET = "\033[0m"


def verbose(self: logging.Logger, message: Any, *args: Any, **kwargs: Any) -> None:
    """Log at the VERBOSE level.

    Example:
        >>> logger = get_logger("timezone.resolver")
        >>> logger.verbose("No timezone found for %r", identifier)
    """
    if self.isEnabledFor(VERBOSE):
        self._log(VERBOSE, message, args, **kwargs)


# Add verbose method to all Logger instances
logging.Logger.verbose = verbose  # type: ignore[attr-defined]


def get_log_level(level_name: str) -> int:
    """Get numeric log level from string name, including custom VERBOSE level.

    Raises:
        AttributeError: If level name is not recognized
    """
    level_name = level_name.upper()
    if level_name == "VERBOSE":
        return VERBOSE
    level: int = getattr(logging, level_name)
    return level


def detect_color_mode(stream: TextIO) -> str:
    """Classify ``stream`` as ``"truecolor"``, ``"basic"`` or ``"none"``.

    Only interactive terminals get colours; ``TERM`` and ``COLORTERM`` decide
    how many.
    """
    isatty = getattr(stream, "isatty", None)
    if isatty is None or not isatty():
        return "none"

    term = os.environ.get("TERM", "").lower()
    if not term or term == "dumb":
        return "none"

    if os.environ.get("COLORTERM", "").lower() in ("truecolor", "24bit") or "256color" in term:
        return "truecolor"
    return "basic" if "color" in term else "none"


class LevelColorFormatter(logging.Formatter):
    """Formatter that colours the level name when the target stream is a terminal."""

    def __init__(
        self,
        fmt: Optional[str] = None,
        datefmt: Optional[str] = None,
        enable_colors: bool = True,
        stream: Optional[TextIO] = None,
    ) -> None:
        super().__init__(fmt, datefmt)
        self.color_mode = detect_color_mode(stream or sys.stderr) if enable_colors else "none"

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)
        colors = LEVEL_COLORS.get(record.levelname)
        if self.color_mode == "none" or colors is None:
            return formatted

        start = colors[0] if self.color_mode == "truecolor" else colors[1]
        return formatted.replace(record.levelname, f"{start}{record.levelname}{RESET}", 1)


def setup_logging(
    settings: Optional["TzResolverSettings"] = None,
    log_level: Optional[str] = None,
) -> logging.Logger:
    """Set up console logging for the ``tzresolver`` logger hierarchy.

    Args:
        settings: Settings supplying level and colour preferences
        log_level: Explicit level overriding the settings

    Returns:
        The configured ``tzresolver`` logger
    """
    level_name = log_level or (settings.log_level if settings is not None else "INFO")
    enable_colors = settings.log_colors if settings is not None else True
    numeric_level = get_log_level(level_name)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(numeric_level)
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(
        LevelColorFormatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
            enable_colors=enable_colors,
            stream=sys.stderr,
        )
    )
    logger.addHandler(console_handler)

    # Set third-party library log levels to reduce noise
    logging.getLogger("dateutil").setLevel(logging.WARNING)

    logger.debug("Logging initialized at %s level", level_name.upper())
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger inside the ``tzresolver`` namespace."""
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")
