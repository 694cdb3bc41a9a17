# 📄 File: recovery_directory/shared/utils/logging.py

# 🧭 Purpose (Layman Explanation):
# Sets up how the directory writes its activity log, so every line can be traced
# back to the web request and the user that caused it.

# 🧪 Purpose (Technical Summary):
# Logging configuration with a JSON formatter (python-json-logger) for production
# and a contextual text formatter for development. Request and user ids travel in
# ContextVars and are stamped onto every record.

# 🔗 Dependencies:
# - python-json-logger: JSON log formatting
# - logging: Python standard logging
# - contextvars: Request context tracking

# 🔄 Connected Modules / Calls From:
# main.py (setup_logging), api.middleware.error_handling (request_id_var),
# api.middleware.authentication (user_id_var)

import logging
import os
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Optional

from pythonjsonlogger.json import JsonFormatter

from recovery_directory.shared.config.settings import get_settings

# Context variables for request tracking
request_id_var: ContextVar[str] = ContextVar('request_id', default='')
user_id_var: ContextVar[str] = ContextVar('user_id', default='')

SERVICE_NAME = 'recovery-directory-api'

_logging_configured = False


class RequestContextFilter(logging.Filter):
    """Stamps request/user ids and service metadata onto each record."""

    def __init__(self):
        super().__init__()
        self.hostname = os.uname().nodename if hasattr(os, 'uname') else 'unknown'

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get('')
        record.user_id = user_id_var.get('')
        record.hostname = self.hostname
        record.service = SERVICE_NAME
        return True


class ContextualFormatter(logging.Formatter):
    """
    Text formatter for development consoles.

    Appends the request id when one is set.
    """

    def format(self, record):
        record.timestamp = datetime.now(timezone.utc).isoformat()
        rid = getattr(record, 'request_id', '')
        record.request_suffix = f" [{rid}]" if rid else ''
        return super().format(record)


def build_json_formatter() -> JsonFormatter:
    return JsonFormatter(
        '%(asctime)s %(levelname)s %(name)s %(message)s %(module)s %(funcName)s %(lineno)d',
        rename_fields={'asctime': 'timestamp', 'levelname': 'level', 'name': 'logger'},
        static_fields={'service': SERVICE_NAME},
        timestamp=False,
    )


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
) -> logging.Logger:
    """
    Configure root logging once per process.

    Args:
        log_level: Overrides LOG_LEVEL from settings
        log_format: 'json' or 'text'; overrides LOG_FORMAT from settings

    Returns:
        The 'startup' logger
    """
    global _logging_configured

    if _logging_configured:
        return logging.getLogger("startup")

    settings = get_settings()
    log_level = log_level or settings.LOG_LEVEL
    log_format = log_format or settings.LOG_FORMAT
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    if log_format.lower() == 'json':
        formatter: logging.Formatter = build_json_formatter()
    else:
        formatter = ContextualFormatter(
            '%(timestamp)s - %(name)s - %(levelname)s%(request_suffix)s - %(message)s'
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(RequestContextFilter())
    root_logger.addHandler(console_handler)

    # Third-party chatter
    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('hpack').setLevel(logging.WARNING)
    logging.getLogger('stripe').setLevel(logging.WARNING)
    logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)

    _logging_configured = True
    return logging.getLogger("startup")
