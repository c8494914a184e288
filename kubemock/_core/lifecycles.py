"""
The lifecycle of composite mocks: the DSL mocks with the nested mocks in them.

A DSL mock (an operation, an editor, or a client) consists of its own
record/replay delegate and all the nested DSL mocks it has spawned.
Replaying, verifying, and resetting such a mock cascades to all the nested
mocks first, and only then to the mock's own delegate.

The same functions also accept the plain record/replay mocks, so that
the tests could use one vocabulary for all kinds of mocks.
"""
import logging
from typing import Iterable, Protocol, Union

from kubemock._cogs.mocks import errors, recorders

logger = logging.getLogger(__name__)


class Mockable(Protocol):
    def replay(self) -> None: ...
    def verify(self) -> None: ...
    def reset(self) -> None: ...


AnyMock = Union[Mockable, recorders.RecordReplayMock]


def replay_all(mocks: Iterable[AnyMock]) -> None:
    for mock in mocks:
        if isinstance(mock, recorders.RecordReplayMock):
            recorders.control_of(mock).replay()
        else:
            mock.replay()


def reset_all(mocks: Iterable[AnyMock]) -> None:
    for mock in mocks:
        if isinstance(mock, recorders.RecordReplayMock):
            recorders.control_of(mock).reset()
        else:
            mock.reset()


def verify_all(mocks: Iterable[AnyMock]) -> None:
    """
    Verify all the mocks, and fail with the first failure, if any.

    All the mocks are verified even if some of them fail, so that all the
    failures are seen in the logs, not only the first one. Only the first one
    is raised, since the nested mocks usually fail for the same reason.
    """
    failures: list[errors.VerificationError] = []
    for mock in mocks:
        try:
            if isinstance(mock, recorders.RecordReplayMock):
                recorders.control_of(mock).verify()
            else:
                mock.verify()
        except errors.VerificationError as e:
            failures.append(e)

    for failure in failures[1:]:
        logger.debug("Also failed: %s", failure)
    if failures:
        raise failures[0]


def replay(*mocks: AnyMock) -> None:
    replay_all(mocks)


def verify(*mocks: AnyMock) -> None:
    verify_all(mocks)


def reset(*mocks: AnyMock) -> None:
    reset_all(mocks)


def ensure_recording(mock: recorders.RecordReplayMock, name: str) -> None:
    """
    Prevent recording on the DSL mocks that are already replayed.

    The DSL mocks can return their cached nested mocks without touching
    their delegates, so the delegates' own checks are not sufficient.
    """
    control = recorders.control_of(mock)
    if control.state is not recorders.MockState.RECORD:
        raise errors.LifecycleError(f"Cannot record on {name}: "
                                    f"the mock is in the {control.state.value} state.")
