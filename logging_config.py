"""
Logging configuration for the API process.
"""
import logging
import sys
from typing import Optional

_APP_LOGGERS = ("main", "routers", "services")


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Attach a console handler (and optionally a file handler) to the
    application's logger namespaces.
    """
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)

    for name in _APP_LOGGERS:
        logger = logging.getLogger(name)
        logger.setLevel(level.upper())

        # Avoid duplicate output when uvicorn reloads the app
        if logger.hasHandlers():
            logger.handlers.clear()

        for handler in handlers:
            logger.addHandler(handler)
        logger.propagate = False

    logging.getLogger("main").info("Logging initialized.")
