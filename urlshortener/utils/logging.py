"""Structured stdout logging for the URL store Lambdas

Each handler package runs `initialize_logging()` on import, so records emitted
while a DAO is being built already reach CloudWatch as one JSON object per line.

Keyword arguments passed through `extra=` become top-level keys next to the
fixed ones:

    logger.info('Saved URL record. Responding with 201.', extra={'alias': 'aBcDeF', 'event': 'ALIAS_SAVED'})

    {"timestamp": "2025-12-26T12:00:00.000Z", "level": "INFO",
     "logger": "urlshortener.lambdas.shorten_url.app",
     "message": "Saved URL record. Responding with 201.",
     "alias": "aBcDeF", "event": "ALIAS_SAVED"}

Values that are not JSON serializable are logged through `str()`.
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC
from typing import Any

from urlshortener.constants import ENV


# Attributes every LogRecord carries; anything else on a record came from `extra=`.
# `message` and `asctime` only appear once a Formatter has touched the record.
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {'message', 'asctime'}


def _utc_timestamp(created: float) -> str:
    return datetime.fromtimestamp(created, tz=UTC).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRS}


class JsonFormatter(logging.Formatter):
    """Render a LogRecord as a single-line JSON document."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            'timestamp': _utc_timestamp(record.created),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            **_extra_fields(record),
        }
        if record.exc_info:
            payload['exc_info'] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def logging_config(level: str) -> dict[str, Any]:
    """dictConfig schema routing the root logger to stdout through JsonFormatter."""
    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {'json': {'()': JsonFormatter}},
        'handlers': {
            'stdout': {
                'class': 'logging.StreamHandler',
                'formatter': 'json',
                'stream': 'ext://sys.stdout',
            }
        },
        'root': {'level': level.upper(), 'handlers': ['stdout']},
    }


def initialize_logging() -> None:
    """Configure the root logger from the LOG_LEVEL environment variable (default INFO)."""
    logging.config.dictConfig(logging_config(os.getenv(ENV.App.LOG_LEVEL, 'INFO')))
