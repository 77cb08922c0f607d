import json
import logging
import sys
from collections.abc import Iterator

import pytest
from pytest import MonkeyPatch
from freezegun import freeze_time

from urlshortener.constants import ENV
from urlshortener.utils.logging import JsonFormatter, initialize_logging


@pytest.fixture
def root_logger() -> Iterator[logging.Logger]:
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def make_record(msg: str, level: int = logging.INFO, exc_info=None, **extra) -> logging.LogRecord:
    record = logging.LogRecord('urlshortener.store', level, __file__, 10, msg, (), exc_info)
    record.__dict__.update(extra)
    return record


@freeze_time('2025-12-26 12:00:00')
def test_json_formatter_standard_fields():
    log = json.loads(JsonFormatter().format(make_record('Store ready.')))

    assert log == {
        'timestamp': '2025-12-26T12:00:00.000Z',
        'level': 'INFO',
        'logger': 'urlshortener.store',
        'message': 'Store ready.',
        'env': 'local',
    }


def test_json_formatter_deployment_context(monkeypatch: MonkeyPatch):
    monkeypatch.setenv(ENV.App.APP_ENV, 'PROD')
    monkeypatch.setenv(ENV.App.APP_NAME, 'urlshortener')

    log = json.loads(JsonFormatter().format(make_record('Store ready.')))

    assert log['env'] == 'prod'
    assert log['app'] == 'urlshortener'


def test_json_formatter_includes_extras():
    log = json.loads(JsonFormatter().format(make_record('Store ready.', backend='logfile', records=3)))

    assert log['backend'] == 'logfile'
    assert log['records'] == 3


def test_json_formatter_serializes_unknown_types():
    log = json.loads(JsonFormatter().format(make_record('Replayed.', path=object)))
    assert log['path'] == str(object)


def test_json_formatter_includes_exception():
    try:
        raise RuntimeError('boom')
    except RuntimeError:
        record = make_record('Failed.', level=logging.ERROR, exc_info=sys.exc_info())

    log = json.loads(JsonFormatter().format(record))
    assert 'RuntimeError: boom' in log['exception']


def test_initialize_logging(monkeypatch: MonkeyPatch, root_logger: logging.Logger):
    monkeypatch.setenv(ENV.App.LOG_LEVEL, 'debug')

    initialize_logging()

    assert root_logger.level == logging.DEBUG
    assert any(isinstance(handler.formatter, JsonFormatter) for handler in root_logger.handlers)


def test_initialize_logging_default_level(root_logger: logging.Logger):
    initialize_logging()
    assert root_logger.level == logging.INFO
