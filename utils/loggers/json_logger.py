from datetime import datetime
import os
import logging
import json
import sys

# Configure JSON logging


class JsonLogger(logging.Formatter):
    """Formatter that outputs JSON strings after parsing the log record."""

    def format(self, record):
        """
        Format the log record as a JSON string.

        Args:
            record: The log record to format

        Returns:
            str: JSON formatted log string
        """
        log_data = {
            'timestamp': datetime.now().isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'path': record.pathname,
            'line': record.lineno,
            'function': record.funcName
        }

        # Include extra data if available
        if hasattr(record, 'metrics'):
            log_data['metrics'] = record.metrics

        # Include exception info if available
        if record.exc_info:
            log_data['exception'] = {
                'type': str(record.exc_info[0].__name__),
                'message': str(record.exc_info[1]),
                'traceback': self.formatException(record.exc_info)
            }

        # Tokens are arbitrary corpus text, so fall back to repr for anything json can't encode
        return json.dumps(log_data, default=repr)


def setup_log_file(log_file_path):
    """
    Make sure the directory of a log file exists.

    Args:
        log_file_path (str): Path to the log file

    Returns:
        str: Path to the log file, or a /tmp fallback when the directory can't be created
    """
    log_dir = os.path.dirname(log_file_path)
    if log_dir and not os.path.exists(log_dir):
        try:
            os.makedirs(log_dir, exist_ok=True)
        except OSError as e:
            print(f"Error creating log directory {log_dir}: {e}")
            log_file_path = os.path.join(
                '/tmp', os.path.basename(log_file_path))

    return log_file_path


def get_logger(logger_name, log_file=None, clear_existing=True, console_json=True, level="INFO"):
    """
    Get a configured logger instance with JSON formatting.

    Args:
        logger_name (str): Name for the logger
        log_file (str, optional): Path to the log file
        clear_existing (bool): Whether to clear existing handlers
        console_json (bool): Whether to use JSON formatting for console output
        level (str): Level for the console handler

    Returns:
        logging.Logger: Configured logger instance
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(logging.DEBUG)

    if clear_existing and logger.handlers:
        logger.handlers.clear()

    # If logger already has handlers, return it
    if logger.handlers:
        return logger

    # Diagnostics go to stderr so generated sentences on stdout stay clean
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level.upper() if isinstance(level, str) else level)

    if console_json:
        console_handler.setFormatter(JsonLogger())
    else:
        console_formatter = logging.Formatter(
            '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        console_handler.setFormatter(console_formatter)

    logger.addHandler(console_handler)

    # File handler always records everything as JSON
    if log_file is not None:
        log_path = setup_log_file(log_file)
        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(JsonLogger())
        logger.addHandler(file_handler)

    return logger


def logger_from_config(logger_name, config):
    """Build a logger from the `logging` section of a chain config dict."""
    settings = config.get('logging') or {}
    return get_logger(
        logger_name,
        log_file=settings.get('log_file'),
        console_json=settings.get('console_json', True),
        level=settings.get('level', 'INFO'),
    )


def log_json(logger, message, data=None):
    """
    Log a message with optional JSON data.

    Args:
        logger (logging.Logger): Logger instance
        message (str): Log message
        data (dict, optional): Data to include in the log
    """
    if data is None:
        logger.info(message)
    else:
        logger.info(message, extra={"metrics": data})
