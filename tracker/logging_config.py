"""
Structured JSON logging configuration.
"""

import json
import logging
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler

from config.settings import get_settings

# Package loggers that receive the configured handlers
APP_LOGGERS = ('tracker', 'core', 'config')


class JSONFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record):
        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        for attr in ('request_id', 'error_id', 'user', 'endpoint', 'method',
                     'status_code', 'duration_ms', 'remote_addr'):
            if hasattr(record, attr):
                log_entry[attr] = getattr(record, attr)

        return json.dumps(log_entry, default=str)


def configure_logging(app=None):
    """Configure structured JSON logging for production.

    Reads LOG_LEVEL, LOG_FORMAT (json|text) and LOG_FILE from settings.

    Args:
        app: Optional Flask app whose logger will be updated.

    Returns:
        The configured 'tracker' logger.
    """
    settings = get_settings()
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    handlers = []

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG)
    if settings.log_format == 'json':
        console_handler.setFormatter(JSONFormatter())
    else:
        console_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))
    handlers.append(console_handler)

    # File handler (if configured)
    if settings.log_file:
        file_handler = RotatingFileHandler(
            settings.log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(JSONFormatter())
        handlers.append(file_handler)

    for name in APP_LOGGERS:
        pkg_logger = logging.getLogger(name)
        pkg_logger.setLevel(level)
        pkg_logger.handlers = list(handlers)

    # Sync Flask's logger
    if app is not None:
        app.logger.handlers = list(handlers)
        app.logger.setLevel(level)

    return logging.getLogger('tracker')
