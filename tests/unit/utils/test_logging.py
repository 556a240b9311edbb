import sys
import json
import logging

import pytest
from freezegun import freeze_time

from urlshortener.utils.logging import JsonFormatter, initialize_logging, logging_config


@pytest.fixture
def formatter() -> JsonFormatter:
    return JsonFormatter()


def make_record(msg: str, level: int = logging.INFO, exc_info=None, **extra) -> logging.LogRecord:
    logger = logging.getLogger('urlshortener.tests')
    return logger.makeRecord('urlshortener.tests', level, __file__, 1, msg, (), exc_info, extra=extra or None)


@freeze_time('2025-12-26 12:00:00')
def test_json_formatter(formatter):
    record = make_record('Saved URL record. Responding with 201.', alias='aBcDeF', event='ALIAS_SAVED')

    log = json.loads(formatter.format(record))

    assert log == {
        'timestamp': '2025-12-26T12:00:00.000Z',
        'level': 'INFO',
        'logger': 'urlshortener.tests',
        'message': 'Saved URL record. Responding with 201.',
        'alias': 'aBcDeF',
        'event': 'ALIAS_SAVED',
    }


def test_json_formatter_with_exception(formatter):
    try:
        raise RuntimeError('boom')
    except RuntimeError:
        record = make_record('Unhandled exception.', level=logging.ERROR, exc_info=sys.exc_info())

    log = json.loads(formatter.format(record))

    assert log['level'] == 'ERROR'
    assert 'RuntimeError: boom' in log['exc_info']


def test_json_formatter_with_unserializable_extra(formatter):
    record = make_record('Unserializable extra.', payload=object())

    log = json.loads(formatter.format(record))

    assert log['payload'].startswith('<object object at')


@pytest.fixture
def root_logger():
    """Restore the root logger after initialize_logging() reconfigures it."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_initialize_logging(monkeypatch, capsys, root_logger):
    monkeypatch.setenv('LOG_LEVEL', 'debug')

    initialize_logging()
    logging.getLogger('urlshortener.tests').debug('Debug message.', extra={'alias': 'abc123'})

    log = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert root_logger.level == logging.DEBUG
    assert log['message'] == 'Debug message.'
    assert log['alias'] == 'abc123'


def test_logging_config_normalizes_level():
    config = logging_config('warning')

    assert config['root'] == {'level': 'WARNING', 'handlers': ['stdout']}
    assert config['formatters']['json']['()'] is JsonFormatter


def test_json_formatter_ignores_builtin_record_attributes(formatter):
    record = make_record('Plain message.')
    logging.Formatter('%(asctime)s %(message)s').format(record)  # another handler already formatted it

    log = json.loads(formatter.format(record))

    assert set(log) == {'timestamp', 'level', 'logger', 'message'}
