import logging
from logging.handlers import RotatingFileHandler
import os


def setup_logger(name, log_dir=None, level=logging.INFO):
    """Configure and return a logger instance"""
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Handlers are only attached once, create_app may run many times in tests
    if logger.handlers:
        return logger

    if log_dir:
        # Create logs directory if it doesn't exist
        if not os.path.exists(log_dir):
            os.makedirs(log_dir)

        # File handler
        file_handler = RotatingFileHandler(os.path.join(log_dir, 'app.log'), maxBytes=10240, backupCount=10)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        logger.addHandler(file_handler)

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(
        '%(levelname)s: %(message)s'
    ))
    logger.addHandler(console_handler)

    return logger
