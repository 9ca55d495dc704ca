"""JSON logging for the lambda handlers

Each record is printed to stdout as one JSON object, which CloudWatch Logs
indexes field by field. Fields passed through `extra=` are emitted next to
the standard ones:

    >>> logger.info('Guestbook entry created. Responding with 200.', extra={'key': entry.key})
    {"timestamp": "2025-12-26T12:00:00.000Z", "level": "INFO", "logger": "personalapi.lambdas.guestbook.app",
     "message": "Guestbook entry created. Responding with 200.", "key": "fefedb65-0d84-4d96-8b52-162799098cc6"}

IMPORTANT: each lambda package calls `initialize_logging()` in its `__init__.py`,
before any handler module logs anything.
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC
from typing import Any

from personalapi.constants import ENV


# Attributes every LogRecord carries; anything else on a record came from `extra=`
RESERVED_ATTRS = frozenset(logging.LogRecord('', logging.NOTSET, '', 0, '', (), None).__dict__) | {'message', 'asctime'}


def utc_timestamp(created: float) -> str:
    """Millisecond-precision ISO 8601 timestamp with a `Z` suffix"""
    return datetime.fromtimestamp(created, tz=UTC).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def record_extras(record: logging.LogRecord) -> dict[str, Any]:
    return {key: value for key, value in vars(record).items() if key not in RESERVED_ATTRS}


class JsonFormatter(logging.Formatter):
    """Render log records as single-line JSON objects"""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            'timestamp': utc_timestamp(record.created),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        # Standard fields win over extras of the same name
        log |= {key: value for key, value in record_extras(record).items() if key not in log}
        return json.dumps(log, default=str)


def logging_config(level: str) -> dict[str, Any]:
    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {'json': {'()': JsonFormatter}},
        'handlers': {
            'stdout': {
                'class': 'logging.StreamHandler',
                'formatter': 'json',
                'stream': 'ext://sys.stdout',
            },
        },
        'root': {'level': level.upper(), 'handlers': ['stdout']},
    }


def initialize_logging() -> None:
    logging.config.dictConfig(logging_config(os.getenv(ENV.App.LOG_LEVEL, 'INFO')))
