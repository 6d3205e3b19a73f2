import logging
import os
import sys
from pathlib import Path


def setup_logging(debug=False, log_file=None):
    # Set the root logger to WARNING to suppress verbose logs from dependencies
    logging.getLogger().setLevel(logging.WARNING)

    # Set up our application logger
    level_name = os.getenv("TAKEAWAY_LOG_LEVEL", "INFO").upper()
    takeaway_logger = logging.getLogger("takeaway")
    takeaway_logger.setLevel(logging.DEBUG if debug else getattr(logging, level_name, logging.INFO))

    # Console handler - less verbose, stderr keeps stdout for the game itself
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    console_handler.setLevel(logging.DEBUG if debug else logging.WARNING)
    takeaway_logger.addHandler(console_handler)

    # File handler - more detailed
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        )
        file_handler.setLevel(logging.DEBUG if debug else logging.INFO)
        takeaway_logger.addHandler(file_handler)

    return takeaway_logger
