import logging
import os
from logging.handlers import TimedRotatingFileHandler
from typing import Optional

from config.settings import LOG_DIR, LOG_LEVEL

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'


def setup_logging(log_dir: Optional[str] = LOG_DIR, level: str = LOG_LEVEL) -> logging.Logger:
    """Configure root logging for the CLI and the dashboard"""
    handlers = [logging.StreamHandler()]

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        log_file = os.path.join(log_dir, "game_price_tracker.log")
        # Rotate at midnight, keep the last 7 days
        handlers.append(
            TimedRotatingFileHandler(log_file, when="midnight", interval=1, backupCount=7, encoding='utf-8')
        )

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
    return logging.getLogger("GamePriceTracker")
