import logging

import pytest

from kubemock._cogs.mocks.errors import UnexpectedCallError, UnfulfilledExpectationError
from kubemock._cogs.mocks.loggers import MockLogger
from kubemock._cogs.mocks.recorders import RecordReplayMock, expect
from kubemock._core.lifecycles import replay, verify


def test_adapter_carries_the_mock_name(caplog):
    logger = MockLogger(logging.getLogger('kubemock.tests'), name='pods')
    logger.info("hello")
    assert caplog.records[0].mock_name == 'pods'


def test_adapter_merges_the_extras(caplog):
    logger = MockLogger(logging.getLogger('kubemock.tests'), name='pods')
    logger.info("hello", extra={'other': 123})
    assert caplog.records[0].mock_name == 'pods'
    assert caplog.records[0].other == 123


def test_lifecycle_is_logged(settings, caplog):
    mock = RecordReplayMock(name='pods', settings=settings)
    expect(mock.get()).and_return(None)
    mock_calls = [record for record in caplog.records if record.name.startswith('kubemock.')]
    assert [record.getMessage() for record in mock_calls] == ["Recorded get()"]
    assert mock_calls[0].name == 'kubemock.recording'
    assert mock_calls[0].levelno == logging.DEBUG
    assert mock_calls[0].mock_name == 'pods'


def test_replays_and_verifications_are_logged(settings, caplog):
    mock = RecordReplayMock(name='pods', settings=settings)
    expect(mock.get()).and_return(None)
    replay(mock)
    mock.get()
    verify(mock)
    names = {record.name for record in caplog.records}
    assert {'kubemock.recording', 'kubemock.replaying', 'kubemock.verification'} <= names


def test_custom_levels(settings, caplog):
    settings.logging.level = logging.INFO
    mock = RecordReplayMock(name='pods', settings=settings)
    mock.get()
    assert caplog.records[0].levelno == logging.INFO


def test_immediate_failures_are_errors(settings, caplog):
    mock = RecordReplayMock(name='pods', settings=settings)
    replay(mock)
    caplog.clear()
    with pytest.raises(UnexpectedCallError):
        mock.get()
    assert caplog.records[-1].levelno == logging.ERROR
    assert caplog.records[-1].getMessage() == "Unexpected call pods.get(): no matching expectation."


def test_deferred_failures_are_warnings(settings, caplog):
    settings.replaying.fail_fast = False
    mock = RecordReplayMock(name='pods', settings=settings)
    replay(mock)
    caplog.clear()
    mock.get()
    assert caplog.records[-1].levelno == logging.WARNING


def test_unfulfilled_expectations_are_errors(settings, caplog):
    mock = RecordReplayMock(name='pods', settings=settings)
    mock.get()
    replay(mock)
    caplog.clear()
    with pytest.raises(UnfulfilledExpectationError):
        verify(mock)
    assert caplog.records[-1].name == 'kubemock.verification'
    assert caplog.records[-1].levelno == logging.ERROR
