# gradebook/logging_config.py
import logging
import sys

from gradebook.settings import settings


def setup_logging(level: str = None):
    """
    Set up logging configuration for the application.
    """
    level = (level or settings.LOG_LEVEL).upper()

    # Create a logger
    logger = logging.getLogger()
    logger.setLevel(level)

    # Only attach the console handler once
    if not logger.handlers:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)

        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        console_handler.setFormatter(formatter)

        logger.addHandler(console_handler)

    logging.getLogger("httpx").setLevel(logging.WARNING)

    return logger


# Call the setup function to configure logging
app_logger = setup_logging()
