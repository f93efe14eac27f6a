import logging
import os
import sys
from concurrent_log_handler import ConcurrentRotatingFileHandler
from datetime import datetime
from dateutil import tz as dateutil_tz
from campus_newsletter.config.settings import NEWSLETTER_SETTINGS, SYSTEM_SETTINGS

# Log timestamps use the same timezone the newsletter is rendered in
DISPLAY_TZ = dateutil_tz.gettz(NEWSLETTER_SETTINGS['display_timezone'])


class TimeZoneFormatter(logging.Formatter):
    """Formatter that renders record timestamps in the display timezone."""

    def converter(self, timestamp):
        dt = datetime.fromtimestamp(timestamp, dateutil_tz.UTC)
        return dt.astimezone(DISPLAY_TZ)

    def formatTime(self, record, datefmt=None):
        dt = self.converter(record.created)
        if datefmt:
            return dt.strftime(datefmt)
        return dt.strftime('%Y-%m-%d %H:%M:%S,%f %Z')[:-3]


def setup_logger(name='campus_newsletter', level=None):
    """
    Set up and configure the logger with both console and file handlers.

    Args:
        name (str): Logger name
        level (str): Log level (DEBUG, INFO, WARNING, ERROR)

    Returns:
        logging.Logger: Configured logger instance
    """
    logger = logging.getLogger(name)

    # Avoid duplicate handlers if logger was already set up
    if logger.handlers:
        return logger

    if level is None:
        level = SYSTEM_SETTINGS['log_level']
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger.setLevel(level)

    formatter = TimeZoneFormatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    log_dir = SYSTEM_SETTINGS['log_dir']
    os.makedirs(log_dir, exist_ok=True)
    today = datetime.now(DISPLAY_TZ).strftime('%Y%m%d')
    log_filename = os.path.join(log_dir, f'newsletter_{today}.log')

    # Use ConcurrentRotatingFileHandler so CLI runs and tests can share a file
    file_handler = ConcurrentRotatingFileHandler(
        log_filename,
        maxBytes=SYSTEM_SETTINGS['log_max_bytes'],
        backupCount=SYSTEM_SETTINGS['log_backup_count'],
        encoding='utf-8'
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    return logger
