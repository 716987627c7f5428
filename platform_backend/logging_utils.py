"""
Logging setup shared by the server and the tests: console output plus an optional rotating log file.
"""
import logging
import os
import sys
from logging.handlers import RotatingFileHandler

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(app=None, log_level='INFO', log_file=None):
    """
    Set up logging for the application.
    Handlers and route modules log through the root logger; Flask's own
    logger shares the same handlers.
    """
    level = getattr(logging, str(log_level).upper(), logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = []  # Clear existing handlers

    # Console handler
    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    root_logger.addHandler(console)

    # File handler, only when a log file is configured
    if log_file:
        log_dir = os.path.dirname(os.path.abspath(log_file))
        os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10*1024*1024,  # 10 MB
            backupCount=5
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    if app:
        app.logger.handlers = []
        app.logger.setLevel(level)
        # propagate to the root handlers instead of duplicating them
        app.logger.propagate = True

    return root_logger
