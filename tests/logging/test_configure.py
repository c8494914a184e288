import logging
from typing import Collection

import pytest

from kubemock._cogs.mocks.loggers import LogFormat, MockFormatter, MockJsonFormatter, \
                                         MockPrefixingJsonFormatter, MockPrefixingTextFormatter, \
                                         MockTextFormatter, configure, make_formatter


def _get_own_handlers(logger: logging.Logger) -> Collection[logging.Handler]:
    return [
        handler for handler in logger.handlers
        if isinstance(handler, logging.StreamHandler) and
           isinstance(handler.formatter, MockFormatter)
    ]


def test_own_formatter_is_used():
    configure()
    logger = logging.getLogger('kubemock')
    own_handlers = _get_own_handlers(logger)
    assert len(own_handlers) == 1


def test_root_logger_is_not_touched():
    root_handlers = logging.getLogger().handlers[:]
    configure()
    assert logging.getLogger().handlers == root_handlers


@pytest.mark.parametrize('log_format, log_prefix, expected_cls', [
    (LogFormat.FULL, False, MockTextFormatter),
    (LogFormat.PLAIN, False, MockTextFormatter),
    ('%(message)s', False, MockTextFormatter),
    (LogFormat.FULL, True, MockPrefixingTextFormatter),
    (LogFormat.PLAIN, True, MockPrefixingTextFormatter),
    ('%(message)s', True, MockPrefixingTextFormatter),
    (LogFormat.FULL, None, MockPrefixingTextFormatter),
    (LogFormat.JSON, False, MockJsonFormatter),
    (LogFormat.JSON, True, MockPrefixingJsonFormatter),
    (LogFormat.JSON, None, MockJsonFormatter),
])
def test_formatter_classes(log_format, log_prefix, expected_cls):
    configure(log_format=log_format, log_prefix=log_prefix)
    own_handlers = _get_own_handlers(logging.getLogger('kubemock'))
    assert len(own_handlers) == 1
    assert type(own_handlers[0].formatter) is expected_cls
    assert type(make_formatter(log_format=log_format, log_prefix=log_prefix)) is expected_cls


def test_error_on_unknown_formatter():
    with pytest.raises(ValueError):
        configure(log_format=object())


@pytest.mark.parametrize('verbose, debug, quiet, expected_level', [
    (None, None, None, logging.INFO),
    (True, None, None, logging.DEBUG),
    (None, True, None, logging.DEBUG),
    (True, True, True, logging.DEBUG),
    (None, None, True, logging.WARNING),
])
def test_levels(verbose, debug, quiet, expected_level):
    configure(verbose=verbose, debug=debug, quiet=quiet)
    logger = logging.getLogger('kubemock')
    assert logger.level == expected_level


@pytest.mark.parametrize('debug, expected', [(None, False), (False, False), (True, True)])
def test_propagation(debug, expected):
    configure(debug=debug)
    assert logging.getLogger('kubemock').propagate == expected
