"""Structured JSON logging for the URL shortener Lambdas

Every handler, the store facade and the DAOs log through the standard
`logging` module with an `event` code and request context in `extra`.
`initialize_logging()` routes all of it to stdout as one JSON object per line
(picked up by CloudWatch, or printed by `sam local`), tagged with the
deployment the process belongs to.

IMPORTANT: Call `initialize_logging()` once per process before any other
logging is done (importing `urlshortener.lambdas` does this).

Environment:
    LOG_LEVEL   root level, default INFO
    APP_ENV     reported as "env", default "local"
    APP_NAME    reported as "app" when set

Logging format:
{
    "timestamp": "2025-12-26T12:00:00.000Z",
    "level": "INFO",
    "logger": "urlshortener.store",
    "message": "Store ready.",
    "env": "prod",
    "app": "urlshortener",
    "backend": "logfile"
}
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from urlshortener.constants import ENV
from urlshortener.utils.config import app_env, app_name


# Attributes every LogRecord carries; anything else came in through `extra`
RECORD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {'message', 'asctime'}


class JsonFormatter(logging.Formatter):
    """JSON formatter that includes deployment context and LogRecord extras

    Attributes:
        context (dict[str, str]):
            Fields stamped on every line, read from the environment once.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.context = {'env': app_env()}
        if name := app_name():
            self.context['app'] = name

    def format(self, record: logging.LogRecord) -> str:
        # fmt: off
        timestamp = datetime.fromtimestamp(record.created, tz=UTC) \
                            .isoformat(timespec="milliseconds") \
                            .replace("+00:00", "Z")
        # fmt: on

        log = {
            'timestamp': timestamp,
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            **self.context,
        }
        log.update((key, value) for key, value in record.__dict__.items() if key not in RECORD_ATTRS)

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        # Extras may carry paths, models or exceptions
        return json.dumps(log, default=str)


def initialize_logging() -> None:
    """Send JSON lines to stdout at LOG_LEVEL"""
    logging.config.dictConfig(
        {
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
            'root': {
                'level': os.getenv(ENV.App.LOG_LEVEL, 'INFO').upper(),
                'handlers': ['stdout'],
            },
        }
    )
