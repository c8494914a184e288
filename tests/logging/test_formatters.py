import json
import logging.handlers

import pytest

from kubemock._cogs.mocks.loggers import MockJsonFormatter, MockLogger, \
                                         MockPrefixingJsonFormatter, MockPrefixingTextFormatter, \
                                         MockTextFormatter


@pytest.fixture()
def record():
    handler = logging.handlers.BufferingHandler(capacity=100)
    logger = MockLogger(logging.getLogger('kubemock.tests'), name="pods.with_name('web')")
    logger.logger.addHandler(handler)
    try:
        logger.info("hello")
    finally:
        logger.logger.removeHandler(handler)
    return handler.buffer[0]


@pytest.fixture()
def plain_record():
    handler = logging.handlers.BufferingHandler(capacity=100)
    logger = logging.getLogger('kubemock.tests')
    logger.addHandler(handler)
    try:
        logger.info("hello")
    finally:
        logger.removeHandler(handler)
    return handler.buffer[0]


def test_text_formatter_has_no_prefixes(record):
    formatter = MockTextFormatter()
    assert formatter.format(record) == 'hello'


def test_prefixing_text_formatter_adds_prefixes(record):
    formatter = MockPrefixingTextFormatter()
    assert formatter.format(record) == "[pods.with_name('web')] hello"


def test_prefixing_text_formatter_keeps_the_record_intact(record):
    formatter = MockPrefixingTextFormatter()
    formatter.format(record)
    assert record.msg == 'hello'


def test_prefixing_text_formatter_ignores_foreign_records(plain_record):
    formatter = MockPrefixingTextFormatter()
    assert formatter.format(plain_record) == 'hello'


def test_json_formatter_has_no_prefixes(record):
    formatter = MockJsonFormatter()
    formatted = json.loads(formatter.format(record))
    assert formatted['message'] == 'hello'


def test_prefixing_json_formatter_adds_prefixes(record):
    formatter = MockPrefixingJsonFormatter()
    formatted = json.loads(formatter.format(record))
    assert formatted['message'] == "[pods.with_name('web')] hello"


def test_json_formatter_adds_the_default_refkey(record):
    formatter = MockJsonFormatter()
    formatted = json.loads(formatter.format(record))
    assert formatted['mock'] == "pods.with_name('web')"
    assert 'mock_name' not in formatted


def test_json_formatter_adds_custom_refkeys(record):
    formatter = MockJsonFormatter(refkey='k8s_mock')
    formatted = json.loads(formatter.format(record))
    assert formatted['k8s_mock'] == "pods.with_name('web')"
    assert 'mock' not in formatted


def test_json_formatter_has_timestamps(record):
    formatter = MockJsonFormatter()
    formatted = json.loads(formatter.format(record))
    assert 'timestamp' in formatted


@pytest.mark.parametrize('level, expected', [
    (logging.DEBUG, 'debug'),
    (logging.INFO, 'info'),
    (logging.WARNING, 'warn'),
    (logging.ERROR, 'error'),
    (logging.CRITICAL, 'fatal'),
])
def test_json_formatter_adds_severities(record, level, expected):
    record.levelno = level
    formatter = MockJsonFormatter()
    formatted = json.loads(formatter.format(record))
    assert formatted['severity'] == expected
