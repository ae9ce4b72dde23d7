"""Logging setup shared by the API process and the CLI."""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

_NOISY_LIBRARIES = ("urllib3", "httpx", "multipart", "passlib")


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once with a console handler."""
    log_level = getattr(logging, str(level).upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    if not any(getattr(h, "_referhub", False) for h in root_logger.handlers):
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        console_handler._referhub = True
        root_logger.addHandler(console_handler)

    # Reduce noise from external libraries
    for lib in _NOISY_LIBRARIES:
        logging.getLogger(lib).setLevel(logging.WARNING)
