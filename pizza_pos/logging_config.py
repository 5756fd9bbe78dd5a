"""
Logging configuration for the pizza POS application.

Usage:
    from pizza_pos.logging_config import setup_logging
    setup_logging()  # Call once at application startup

Environment variables:
    LOG_LEVEL: Application log level (default: INFO)
    ENGINE_LOG_LEVEL: Level for ``pizza_pos.engine`` only (default: LOG_LEVEL).
        Set to DEBUG on a till to trace every refused button press and
        price breakdown without turning on debug output for the API.
"""
import logging
import os
import sys

VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

ENGINE_LOGGER = "pizza_pos.engine"


def _parse_level(level: str | None, default: str = "INFO") -> str:
    level = (level or default).upper()
    return level if level in VALID_LEVELS else default


def setup_logging(level: str = None, engine_level: str = None) -> None:
    """
    Configure logging for the application.

    Args:
        level: Log level string. If not provided, reads from LOG_LEVEL,
               defaults to INFO.
        engine_level: Level for the customization engine. If not provided,
               reads from ENGINE_LOG_LEVEL, defaults to ``level``.
    """
    level = _parse_level(level if level is not None else os.getenv("LOG_LEVEL"))
    engine_level = _parse_level(
        engine_level if engine_level is not None else os.getenv("ENGINE_LOG_LEVEL"),
        default=level,
    )

    numeric_level = getattr(logging, level)

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )

    logging.getLogger("pizza_pos").setLevel(numeric_level)
    logging.getLogger(ENGINE_LOGGER).setLevel(getattr(logging, engine_level))

    # SQL echo and per-request access lines drown out catalog loads and cart lines
    noisy_level = logging.DEBUG if level == "DEBUG" else logging.WARNING
    logging.getLogger("sqlalchemy.engine").setLevel(noisy_level)
    logging.getLogger("uvicorn.access").setLevel(noisy_level)

    logging.getLogger(__name__).debug("Logging configured at %s (engine %s)", level, engine_level)
