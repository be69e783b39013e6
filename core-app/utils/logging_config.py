import logging
import os
from logging.handlers import RotatingFileHandler

LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s %(message)s'


def configure_logging(app):
    """Apply LOG_LEVEL to the app and service loggers; add a file handler if LOG_FILE is set."""
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    app.logger.setLevel(level)
    logging.getLogger('services').setLevel(level)

    log_file = app.config.get('LOG_FILE')
    if not log_file:
        return

    log_dir = os.path.dirname(log_file)
    try:
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handler = RotatingFileHandler(log_file, maxBytes=5_000_000, backupCount=5)
    except OSError:
        app.logger.warning('Cannot write log file %s, logging to stderr only', log_file)
        return
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.setLevel(level)
    if not any(isinstance(h, RotatingFileHandler) for h in app.logger.handlers):
        app.logger.addHandler(handler)
        logging.getLogger('services').addHandler(handler)
