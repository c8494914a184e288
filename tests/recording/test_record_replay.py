import pytest

from kubemock._cogs.mocks.errors import LifecycleError, UnexpectedCallError, \
                                        UnfulfilledExpectationError, VerificationError
from kubemock._cogs.mocks.matchers import Anything, Contains, Regex
from kubemock._cogs.mocks.recorders import MockState, RecordReplayMock, control_of, expect


@pytest.fixture()
def mock(settings):
    return RecordReplayMock(name='mock', settings=settings)


def test_new_mock_is_in_record_state(mock):
    assert control_of(mock).state is MockState.RECORD


def test_replaying_a_recorded_call(mock):
    expect(mock.get('web')).and_return({'kind': 'Pod'})
    control_of(mock).replay()
    assert control_of(mock).state is MockState.REPLAY
    assert mock.get('web') == {'kind': 'Pod'}
    control_of(mock).verify()


def test_replaying_with_matchers(mock):
    expect(mock.get(Regex('^web-'))).and_return(1).any_times()
    expect(mock.get(Anything())).and_return(2).any_times()
    control_of(mock).replay()
    assert mock.get('web-1') == 1
    assert mock.get('db-1') == 2
    assert mock.get('web-2') == 1
    control_of(mock).verify()


def test_recorded_calls_without_answers_return_none_once(mock):
    mock.delete()
    control_of(mock).replay()
    assert mock.delete() is None
    with pytest.raises(UnexpectedCallError):
        mock.delete()


def test_unexpected_call_fails_immediately(mock):
    control_of(mock).replay()
    with pytest.raises(UnexpectedCallError) as e:
        mock.get('web')
    assert str(e.value) == "Unexpected call mock.get('web'): no matching expectation."


def test_call_beyond_expected_count_fails(mock):
    expect(mock.get()).and_return(1).times(2)
    control_of(mock).replay()
    mock.get()
    mock.get()
    with pytest.raises(UnexpectedCallError) as e:
        mock.get()
    assert str(e.value) == "Unexpected call mock.get(): expected 2, actual 3."


def test_verification_fails_for_missing_calls(mock):
    expect(mock.get()).and_return(1).times(2)
    expect(mock.list()).and_return([]).any_times()
    control_of(mock).replay()
    mock.get()
    with pytest.raises(UnfulfilledExpectationError) as e:
        control_of(mock).verify()
    assert str(e.value) == "Expectations are not fulfilled:\nmock.get(): expected 2, actual 1."


def test_verification_errors_are_assertion_errors(mock):
    expect(mock.get()).and_return(1)
    control_of(mock).replay()
    with pytest.raises(AssertionError):
        control_of(mock).verify()
    with pytest.raises(VerificationError):
        control_of(mock).verify()


def test_answers_with_errors(mock):
    expect(mock.get()).and_raise(LookupError('not found'))
    control_of(mock).replay()
    with pytest.raises(LookupError, match='not found'):
        mock.get()
    control_of(mock).verify()


def test_reset_returns_to_record_state(mock):
    expect(mock.get()).and_return(1)
    control_of(mock).replay()
    control_of(mock).reset()
    assert control_of(mock).state is MockState.RECORD
    assert control_of(mock).expectations == []
    expect(mock.get()).and_return(2)
    control_of(mock).replay()
    assert mock.get() == 2


def test_replaying_twice_fails(mock):
    control_of(mock).replay()
    with pytest.raises(LifecycleError):
        control_of(mock).replay()


def test_verifying_in_record_state_fails(mock):
    with pytest.raises(LifecycleError):
        control_of(mock).verify()


def test_expecting_a_replayed_call_fails(mock):
    expect(mock.get()).and_return(1)
    control_of(mock).replay()
    with pytest.raises(LifecycleError):
        expect(mock.get())


def test_expecting_a_non_call_fails():
    with pytest.raises(LifecycleError):
        expect(None)


def test_private_names_are_not_mocked(mock):
    with pytest.raises(AttributeError):
        mock._something
    with pytest.raises(AttributeError):
        mock.__something__


def test_control_of_a_non_mock_fails():
    with pytest.raises(TypeError):
        control_of(object())


def test_default_names():

    class Spec:
        def get(self): ...

    assert control_of(RecordReplayMock()).name == 'mock'
    assert control_of(RecordReplayMock(Spec)).name == 'Spec'
    assert control_of(RecordReplayMock(Spec, name='x')).name == 'x'


def test_repr(mock):
    assert repr(mock) == "<RecordReplayMock 'mock' in record state>"
    assert repr(mock.get) == "<MockMethod mock.get>"


@pytest.mark.parametrize('value', ['abc', {'app': 'web'}, 123])
def test_incomparable_arguments_are_unexpected_calls(mock, value):
    expect(mock.create(Contains(5))).and_return(1)
    control_of(mock).replay()
    with pytest.raises(UnexpectedCallError):
        mock.create(value)
