"""
Record/replay mocks and their recording controls.

A mock is a dynamic object, on which any public method can be called.
In the record state, the calls are recorded as expectations, and their
outcomes are set via the returned `ExpectationSetters`. In the replay
state, the calls are matched against the recorded expectations and
answered accordingly. Finally, the mock is verified to ensure that all
expected calls were actually made::

    mock = RecordReplayMock(name='pods')
    expect(mock.get()).and_return({'kind': 'Pod'})
    replay(mock)
    assert mock.get() == {'kind': 'Pod'}
    verify(mock)

The mock object itself has no public attributes other than the mocked
methods, so that any method name of the mocked interface can be used.
All the state is kept in the mock's control (see `control_of`).
"""
import enum
import inspect
from typing import Any, List, Optional, Type

from kubemock._cogs.configs import configuration
from kubemock._cogs.mocks import errors, expectations, loggers


class MockState(enum.Enum):
    RECORD = 'record'
    REPLAY = 'replay'


class MockControl:
    """
    The state & the expectations of a single record/replay mock.
    """

    def __init__(
            self,
            *,
            name: str,
            spec: Optional[Type[Any]] = None,
            settings: Optional[configuration.MockSettings] = None,
    ) -> None:
        super().__init__()
        self.name = name
        self.spec = spec
        self.settings = settings if settings is not None else configuration.MockSettings()
        self.state = MockState.RECORD
        self.expectations: List[expectations.Expectation] = []
        self.unexpected: List[errors.UnexpectedCallError] = []
        self._cursor = 0  # for strict mocks only
        self._recording_logger = loggers.MockLogger(loggers.recording_logger, name=name)
        self._replaying_logger = loggers.MockLogger(loggers.replaying_logger, name=name)
        self._verification_logger = loggers.MockLogger(loggers.verification_logger, name=name)

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} {self.name!r} in {self.state.value} state>'

    def check_method(self, name: str) -> None:
        if self.spec is None or not self.settings.recording.check_signatures:
            return
        if not callable(getattr(self.spec, name, None)):
            raise AttributeError(f"{self.name} has no method {name!r} in {self.spec.__name__}.")

    def bind(self, invocation: expectations.Invocation) -> expectations.Invocation:
        """
        Bring the call to its canonical form as per the spec's signature.

        The keyword arguments of positional parameters become positional,
        and the omitted defaults are filled in, so that e.g. ``get('web')``,
        ``get(name='web')``, and ``get('web', None)`` are the same call.
        Without a spec, or for methods not in it, the calls are used as made.
        """
        if self.spec is None or not callable(getattr(self.spec, invocation.method, None)):
            return invocation
        method = getattr(self.spec, invocation.method)
        signature = inspect.signature(method)
        try:
            bound = signature.bind(None, *invocation.args, **invocation.kwargs)  # None is for `self`.
        except TypeError as e:
            if not self.settings.recording.check_signatures:
                return invocation
            raise TypeError(f"Wrong arguments in {self.name}.{invocation}: {e}") from e
        bound.apply_defaults()
        return expectations.Invocation(invocation.method, bound.args[1:], bound.kwargs)

    def record(self, invocation: expectations.Invocation) -> expectations.ExpectationSetters:
        if self.state is not MockState.RECORD:
            raise errors.LifecycleError(f"Cannot record {invocation} on {self.name}: "
                                        f"the mock is in the {self.state.value} state.")
        expectation = expectations.Expectation(invocation)
        self.expectations.append(expectation)
        self._recording_logger.log(self.settings.logging.level, "Recorded %s", expectation)
        return expectations.ExpectationSetters(expectation)

    def dispatch(self, invocation: expectations.Invocation) -> Any:
        if self.state is not MockState.REPLAY:
            raise errors.LifecycleError(f"Cannot replay {invocation} on {self.name}: "
                                        f"the mock is in the {self.state.value} state.")
        expectation = self._find(invocation)
        if expectation is None:
            return None
        self._replaying_logger.log(self.settings.logging.level, "Replayed %s", invocation)
        return expectation.answer(invocation)

    def _find(self, invocation: expectations.Invocation) -> Optional[expectations.Expectation]:
        strict = self.settings.recording.strict
        exhausted: Optional[expectations.Expectation] = None
        for index in range(self._cursor if strict else 0, len(self.expectations)):
            expectation = self.expectations[index]
            if expectation.matches(invocation):
                if expectation.has_capacity:
                    if strict:
                        self._cursor = index
                    return expectation
                exhausted = exhausted or expectation
            elif strict and not expectation.is_satisfied:
                break  # the calls cannot skip over the unsatisfied expectations.

        if exhausted is not None:
            message = (f"Unexpected call {self.name}.{invocation}: "
                       f"expected {exhausted.describe()}, actual {exhausted.calls + 1}.")
        else:
            message = f"Unexpected call {self.name}.{invocation}: no matching expectation."

        error = errors.UnexpectedCallError(message)
        if self.settings.replaying.fail_fast:
            self._replaying_logger.error(message)
            raise error
        else:
            self._replaying_logger.warning(message)
            self.unexpected.append(error)
            return None

    def replay(self) -> None:
        if self.state is MockState.REPLAY:
            raise errors.LifecycleError(f"{self.name} is already in the replay state.")
        for expectation in self.expectations:
            expectation.ensure_outcome()
        self.state = MockState.REPLAY
        self._cursor = 0
        self._replaying_logger.log(self.settings.logging.level,
                                   "Replaying %d expectation(s).", len(self.expectations))

    def verify(self) -> None:
        if self.state is not MockState.REPLAY:
            raise errors.LifecycleError(f"Cannot verify {self.name}: "
                                        f"the mock is in the {self.state.value} state.")

        if self.unexpected:
            raise errors.UnexpectedCallError('\n'.join(str(error) for error in self.unexpected))

        unmet = [expectation for expectation in self.expectations if not expectation.is_satisfied]
        if unmet:
            lines = [f"{self.name}.{expectation}: expected {expectation.describe()}, "
                     f"actual {expectation.calls}." for expectation in unmet]
            message = "Expectations are not fulfilled:\n" + "\n".join(lines)
            self._verification_logger.error(message)
            raise errors.UnfulfilledExpectationError(message)

        self._verification_logger.log(self.settings.logging.level, "Verified.")

    def reset(self) -> None:
        self.state = MockState.RECORD
        self.expectations.clear()
        self.unexpected.clear()
        self._cursor = 0
        self._recording_logger.log(self.settings.logging.level, "Reset to the record state.")


class MockMethod:
    """ A method of a record/replay mock: records or replays depending on the state. """

    def __init__(self, control: MockControl, name: str) -> None:
        super().__init__()
        self._control = control
        self._name = name

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} {self._control.name}.{self._name}>'

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        invocation = expectations.Invocation(self._name, args, kwargs)
        invocation = self._control.bind(invocation)
        if self._control.state is MockState.RECORD:
            return self._control.record(invocation)
        else:
            return self._control.dispatch(invocation)


class RecordReplayMock:
    """
    A mock with every public method mocked, optionally restricted to a spec class.
    """

    def __init__(
            self,
            spec: Optional[Type[Any]] = None,
            *,
            name: Optional[str] = None,
            settings: Optional[configuration.MockSettings] = None,
    ) -> None:
        super().__init__()
        name = name if name is not None else spec.__name__ if spec is not None else 'mock'
        self._control = MockControl(name=name, spec=spec, settings=settings)

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} {self._control.name!r} in {self._control.state.value} state>'

    def __getattr__(self, name: str) -> MockMethod:
        # Private & magic names are never mocked; this also prevents recursion before `_control` is set.
        if name.startswith('_'):
            raise AttributeError(name)
        self._control.check_method(name)
        return MockMethod(self._control, name)


def control_of(mock: RecordReplayMock) -> MockControl:
    if not isinstance(mock, RecordReplayMock):
        raise TypeError(f"Not a record/replay mock: {mock!r}")
    return mock._control


def expect(recorded: Any) -> expectations.ExpectationSetters:
    """
    Get the expectation setters of a call just recorded on a mock.

    The call itself already returns them in the record state. This function
    only makes the tests more readable and ensures that the call was recorded,
    not replayed (e.g. if the mock was switched to the replay state too early).
    """
    if not isinstance(recorded, expectations.ExpectationSetters):
        raise errors.LifecycleError(f"Only calls recorded on mocks in the record state "
                                    f"can be expected, got {recorded!r}.")
    return recorded
