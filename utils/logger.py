import logging
import os
from logging.handlers import RotatingFileHandler
from dotenv import load_dotenv

load_dotenv()


def setup_logging(name="booksearch"):
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()

    logger = logging.getLogger(name)
    logger.setLevel(log_level)
    # importing from several modules must not stack handlers
    if logger.handlers:
        return logger

    ch = logging.StreamHandler()
    ch.setLevel(log_level)

    # Rotate log file after 1MB, keep 5 backup files
    log_file = os.getenv("LOG_FILE", "booksearch.log")
    fh = RotatingFileHandler(log_file, maxBytes=1024*1024, backupCount=5)
    fh.setLevel(log_level)

    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    ch.setFormatter(formatter)
    fh.setFormatter(formatter)

    logger.addHandler(ch)
    logger.addHandler(fh)
    return logger

logger = setup_logging()
