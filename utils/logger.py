import itertools
import logging
import os
from datetime import datetime

from config import LOGS_DIR, DEBUG_MODE

_instance_ids = itertools.count()

class Logger:
    def __init__(self, log_dir="logs", level=logging.INFO):
        self.log_dir = log_dir
        os.makedirs(self.log_dir, exist_ok=True)
        self.log_file = os.path.join(self.log_dir, f"scraper_{datetime.now().strftime('%Y-%m-%d_%H-%M-%S')}.log")

        # One logger per instance
        self._logger = logging.getLogger(f"tiktok_scraper.{next(_instance_ids)}")
        self._logger.setLevel(level)

        formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(message)s')
        for handler in (logging.FileHandler(self.log_file, encoding='utf-8'), logging.StreamHandler()):
            handler.setFormatter(formatter)
            self._logger.addHandler(handler)

    def log(self, message):
        self._logger.info(message)

    def error(self, message, *args, **kwargs):
        self._logger.error(message, *args, **kwargs)

    def warn(self, message):
        self._logger.warning(f"⚠️ {message}")

    def debug(self, message):
        self._logger.debug(message)

    def success(self, message):
        self._logger.info(f"✅ {message}")

def setup_logger(log_dir=LOGS_DIR):
    """
    Builds a Logger writing to a timestamped file in log_dir and to the console.
    """
    level = logging.DEBUG if DEBUG_MODE else logging.INFO
    return Logger(log_dir=log_dir, level=level)

# Initialize a global logger instance
logger = setup_logger()
