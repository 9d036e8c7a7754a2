"""
Logging configuration for the Twilio SMS client

This module provides centralized logging configuration for the library and the
command line tool. Library modules only create loggers; handlers are installed
by setup_logging, which the CLI calls once at startup.
"""

import logging
import logging.handlers
import os
import sys
from datetime import datetime, timezone

DEFAULT_LOG_LEVEL = 'WARNING'
EVENTS_LOGGER = 'twilio_sms.events'


def setup_logging(log_level=None, log_file=None, max_bytes=10*1024*1024, backup_count=5):
    """
    Set up logging configuration for the Twilio SMS client.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file (if None, logs to stderr)
        max_bytes: Maximum size of log file before rotation (default 10MB)
        backup_count: Number of backup log files to keep (default 5)
    """

    # Default log level from environment or WARNING
    if log_level is None:
        log_level = os.environ.get('LOG_LEVEL', DEFAULT_LOG_LEVEL)
    log_level = log_level.upper()

    # Default log file from environment
    if log_file is None:
        log_file = os.environ.get('LOG_FILE')

    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level, logging.WARNING))
    root_logger.handlers.clear()

    if log_file:
        handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count
        )
    else:
        # stdout is reserved for the CLI result
        handler = logging.StreamHandler(sys.stderr)

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    logger = logging.getLogger(__name__)
    logger.debug(f"Logging initialized - Level: {log_level}, Output: {log_file or 'stderr'}")

    return logger


def get_logger(name):
    """
    Get a logger instance for a specific module.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def log_sms_event(event_type, to_number=None, from_number=None, attempt=None,
                  status=None, success=True, error=None):
    """
    Log SMS-related events with structured information.

    Args:
        event_type: Type of SMS event (e.g., 'sms_sent', 'sms_failed')
        to_number: Recipient phone number
        from_number: Sender phone number
        attempt: Attempt number within the retry loop
        status: HTTP status code returned by Twilio
        success: Whether the operation was successful
        error: Error message if applicable
    """
    logger = logging.getLogger(EVENTS_LOGGER)

    log_data = {
        'event_type': event_type,
        'success': success,
        'timestamp': datetime.now(timezone.utc).isoformat(),
    }

    if to_number:
        log_data['to_number'] = to_number
    if from_number:
        log_data['from_number'] = from_number
    if attempt is not None:
        log_data['attempt'] = attempt
    if status is not None:
        log_data['status'] = status
    if error:
        log_data['error'] = error

    # Format as key=value pairs for easy parsing
    log_message = ' '.join([f"{k}={v}" for k, v in log_data.items()])

    if success:
        logger.info(f"SMS: {log_message}")
    else:
        logger.warning(f"SMS: {log_message}")
