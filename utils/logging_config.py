"""
Logging setup for the giveaway bot
One root configuration shared by our modules, discord.py, SQLAlchemy and werkzeug
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

CONSOLE_FORMAT = '[%(asctime)s] %(levelname)-8s %(message)s'
FILE_FORMAT = '[%(asctime)s] %(levelname)-8s [%(name)s.%(funcName)s:%(lineno)d] %(message)s'

# Libraries that flood INFO with heartbeats and request lines
NOISY_LOGGERS = ('discord.gateway', 'discord.client', 'werkzeug')

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5


def _file_handler(log_file, level):
    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    handler = RotatingFileHandler(
        log_file,
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding='utf-8'
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    return handler


def setup_logging(app_name=None, log_level=None, log_file=None):
    """
    Configure console (and optionally rotating file) logging

    Args:
        app_name: Logger to configure; None means the root logger
        log_level: Level name, defaults to $LOG_LEVEL or INFO
        log_file: Path for a rotating log file, defaults to $LOG_FILE (unset = console only)

    Returns:
        logging.Logger: The configured logger
    """
    level_name = (log_level or os.getenv('LOG_LEVEL', 'INFO')).upper()
    level = getattr(logging, level_name, logging.INFO)
    log_file = log_file or os.getenv('LOG_FILE')

    logger = logging.getLogger(app_name)
    logger.setLevel(level)
    logger.handlers.clear()

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt='%H:%M:%S'))
    logger.addHandler(console)

    if log_file:
        try:
            logger.addHandler(_file_handler(log_file, level))
            logger.info(f"📝 Logging to {log_file}")
        except OSError as e:
            logger.error(f"Failed to setup file logging: {e}")

    if app_name:
        logger.propagate = False

    if level > logging.DEBUG:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    return logger
