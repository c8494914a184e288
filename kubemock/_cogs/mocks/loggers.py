"""
Logging of the mocks' lifecycle: recording, replaying, verifying.

Every mock logs via its own adapter, which carries the mock's name
(e.g. ``pods.in_namespace('default').with_name('web')``) for formatting.
With the prefixing formatters, the messages look like this::

    [pods.in_namespace('default')] Recorded with_name('web')
    [pods.in_namespace('default')] Unexpected call with_name('db'): no matching expectation.

By default, nothing is configured: the messages go to the standard
logging machinery and are seen as usual (e.g. via pytest's log capturing).
Use `configure` to see the messages outside of such tools.
"""
import copy
import enum
import logging
from typing import Any, MutableMapping, Optional, Tuple

import pythonjsonlogger.core
import pythonjsonlogger.json

from kubemock._cogs.helpers import typedefs

DEFAULT_JSON_REFKEY = 'mock'
""" A key for the mock names in JSON logs, as seen by the log parsers. """

recording_logger = logging.getLogger('kubemock.recording')
replaying_logger = logging.getLogger('kubemock.replaying')
verification_logger = logging.getLogger('kubemock.verification')


class LogFormat(enum.Enum):
    """ Log formats for `configure`. """
    PLAIN = '%(message)s'
    FULL = '[%(asctime)s] %(name)-22.22s [%(levelname)-8.8s] %(message)s'
    JSON = enum.auto()


class MockFormatter(logging.Formatter):
    pass


class MockTextFormatter(MockFormatter, logging.Formatter):
    pass


class MockJsonFormatter(MockFormatter, pythonjsonlogger.json.JsonFormatter):
    def __init__(
            self,
            *args: Any,
            refkey: Optional[str] = None,
            **kwargs: Any,
    ) -> None:
        # Avoid type checking, as the args are not in the parent constructor.
        reserved_attrs = kwargs.pop('reserved_attrs', pythonjsonlogger.core.RESERVED_ATTRS)
        reserved_attrs = set(reserved_attrs)
        reserved_attrs |= {'mock_name'}
        kwargs.update(reserved_attrs=reserved_attrs)
        kwargs.setdefault('timestamp', True)
        super().__init__(*args, **kwargs)
        self._refkey: str = refkey or DEFAULT_JSON_REFKEY

    def add_fields(
            self,
            log_record: MutableMapping[str, Any],
            record: logging.LogRecord,
            message_dict: MutableMapping[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        if self._refkey and hasattr(record, 'mock_name'):
            log_record[self._refkey] = getattr(record, 'mock_name')

        if 'severity' not in log_record:
            log_record['severity'] = (
                "debug" if record.levelno <= logging.DEBUG else
                "info" if record.levelno <= logging.INFO else
                "warn" if record.levelno <= logging.WARNING else
                "error" if record.levelno <= logging.ERROR else
                "fatal")


class MockPrefixingMixin(MockFormatter):
    def format(self, record: logging.LogRecord) -> str:
        if hasattr(record, 'mock_name'):
            name = getattr(record, 'mock_name')
            record = copy.copy(record)  # shallow
            record.msg = f"[{name}] {record.msg}"
        return super().format(record)


class MockPrefixingTextFormatter(MockPrefixingMixin, MockTextFormatter):
    pass


class MockPrefixingJsonFormatter(MockPrefixingMixin, MockJsonFormatter):
    pass


class MockLogger(typedefs.LoggerAdapter):
    """
    A logger/adapter to carry the mock's name for formatting.

    Constructed once per mock (more precisely, per recording control)
    for each of the lifecycle loggers.
    """

    def __init__(self, logger: logging.Logger, *, name: str) -> None:
        super().__init__(logger, dict(mock_name=name))

    def process(
            self,
            msg: str,
            kwargs: MutableMapping[str, Any],
    ) -> Tuple[str, MutableMapping[str, Any]]:
        # Native logging overwrites the message's extra with the adapter's extra.
        # We merge them, so that both message's & adapter's extras are available.
        kwargs["extra"] = dict(self.extra or {}, **kwargs.get('extra', {}))
        return msg, kwargs


def configure(
        debug: Optional[bool] = None,
        verbose: Optional[bool] = None,
        quiet: Optional[bool] = None,
        log_format: LogFormat = LogFormat.FULL,
        log_prefix: Optional[bool] = True,
        log_refkey: Optional[str] = None,
) -> None:
    log_level = 'DEBUG' if debug or verbose else 'WARNING' if quiet else 'INFO'
    formatter = make_formatter(log_format=log_format, log_prefix=log_prefix, log_refkey=log_refkey)
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    logger = logging.getLogger('kubemock')
    logger.addHandler(handler)
    logger.setLevel(log_level)

    # Only our own messages are printed by our handler; the rest goes wherever configured.
    logger.propagate = bool(debug)


def make_formatter(
        log_format: LogFormat = LogFormat.FULL,
        log_prefix: Optional[bool] = True,
        log_refkey: Optional[str] = None,
) -> MockFormatter:
    log_prefix = log_prefix if log_prefix is not None else bool(log_format is not LogFormat.JSON)
    if log_format is LogFormat.JSON:
        if log_prefix:
            return MockPrefixingJsonFormatter(refkey=log_refkey)
        else:
            return MockJsonFormatter(refkey=log_refkey)
    elif isinstance(log_format, LogFormat):
        if log_prefix:
            return MockPrefixingTextFormatter(log_format.value)
        else:
            return MockTextFormatter(log_format.value)
    elif isinstance(log_format, str):
        if log_prefix:
            return MockPrefixingTextFormatter(log_format)
        else:
            return MockTextFormatter(log_format)
    else:
        raise ValueError(f"Unsupported log format: {log_format!r}")
