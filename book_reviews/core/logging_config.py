# book_reviews/core/logging_config.py
"""Root logger setup, run once when the application is created."""

import logging
import sys

from book_reviews.core.config import settings

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(log_level: str = settings.LOG_LEVEL) -> None:
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level.upper())

    # Avoid duplicate handlers when the app is created more than once (tests, reload)
    for handler in root_logger.handlers[:]:
        if getattr(handler, "_book_reviews_handler", False):
            root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT))
    console_handler._book_reviews_handler = True
    root_logger.addHandler(console_handler)

    logging.getLogger(__name__).info(
        f"Logging configured. Level={logging.getLevelName(root_logger.level)}"
    )
