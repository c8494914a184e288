"""
Recorded expectations and their outcomes.

An expectation is a method name with the matchers of its arguments,
and a sequence of outcomes: what to do when the call is made, and how many
times. The outcomes are served in the order they were added: the next
outcome is used only when the previous one has reached its maximum.
E.g.::

    expect(mock.get()).and_return(a).times(2).and_raise(Error()).and_return(b).any_times()

returns ``a`` twice, then raises once, then returns ``b`` forever.
"""
import dataclasses
import enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from kubemock._cogs.mocks import matchers

Answer = Callable[..., Any]


class CountToken(enum.Enum):
    """ Tokens for the call counts that are not numbers. """
    EXACTLY = enum.auto()


EXACTLY = CountToken.EXACTLY


@dataclasses.dataclass(frozen=True)
class Invocation:
    """ A single call of a mocked method: either recorded or actually made. """
    method: str
    args: Tuple[Any, ...] = ()
    kwargs: Mapping[str, Any] = dataclasses.field(default_factory=dict)

    def __str__(self) -> str:
        args_strs = [repr(arg) for arg in self.args]
        kwargs_strs = [f'{key}={val!r}' for key, val in self.kwargs.items()]
        return f'{self.method}({", ".join(args_strs + kwargs_strs)})'


@dataclasses.dataclass
class Outcome:
    answer: Answer
    min_calls: int = 1
    max_calls: Optional[int] = 1  # None means unlimited.
    calls: int = 0

    @property
    def has_capacity(self) -> bool:
        return self.max_calls is None or self.calls < self.max_calls

    @property
    def is_satisfied(self) -> bool:
        return self.calls >= self.min_calls

    def describe(self) -> str:
        if self.max_calls is None:
            return f'at least {self.min_calls}'
        elif self.min_calls == self.max_calls:
            return f'{self.min_calls}'
        else:
            return f'between {self.min_calls} and {self.max_calls}'


def returning(value: Any) -> Answer:
    def answer(*_: Any, **__: Any) -> Any:
        return value
    return answer


def raising(exc: BaseException) -> Answer:
    def answer(*_: Any, **__: Any) -> Any:
        raise exc
    return answer


class Expectation:
    """
    A recorded call with the matchers of its arguments and its outcomes.
    """

    def __init__(self, invocation: Invocation) -> None:
        super().__init__()
        self.method = invocation.method
        self.args = tuple(matchers.as_matcher(arg) for arg in invocation.args)
        self.kwargs: Dict[str, matchers.ArgumentMatcher] = {
            key: matchers.as_matcher(val) for key, val in invocation.kwargs.items()
        }
        self.outcomes: List[Outcome] = []

    def __str__(self) -> str:
        return str(Invocation(self.method, self.args, self.kwargs))

    @property
    def calls(self) -> int:
        return sum(outcome.calls for outcome in self.outcomes)

    @property
    def has_capacity(self) -> bool:
        return any(outcome.has_capacity for outcome in self.outcomes)

    @property
    def is_satisfied(self) -> bool:
        return all(outcome.is_satisfied for outcome in self.outcomes)

    def describe(self) -> str:
        return ' then '.join(outcome.describe() for outcome in self.outcomes)

    def ensure_outcome(self) -> Outcome:
        """ Get the last outcome; a call without outcomes returns ``None`` once. """
        if not self.outcomes:
            self.outcomes.append(Outcome(answer=returning(None)))
        return self.outcomes[-1]

    def matches(self, invocation: Invocation) -> bool:
        if invocation.method != self.method:
            return False
        if len(invocation.args) != len(self.args):
            return False
        if set(invocation.kwargs) != set(self.kwargs):
            return False
        args_ok = all(matcher.matches(arg) for matcher, arg in zip(self.args, invocation.args))
        kwargs_ok = all(self.kwargs[key].matches(val) for key, val in invocation.kwargs.items())
        return args_ok and kwargs_ok

    def answer(self, invocation: Invocation) -> Any:
        for outcome in self.outcomes:
            if outcome.has_capacity:
                outcome.calls += 1
                return outcome.answer(*invocation.args, **invocation.kwargs)
        raise RuntimeError(f"No capacity left in {self}; it should have been checked before.")


class ExpectationSetters:
    """
    The fluent interface to define the outcomes of a recorded call.

    The answers (``and_...()``) add new outcomes, each expected once
    by default. The counts (``times()``, ``once()``, etc) change the count
    of the last added outcome, or of the implicit ``None``-returning outcome
    if no answers were added yet (e.g. for the calls with no results).
    """

    def __init__(self, expectation: Expectation) -> None:
        super().__init__()
        self.expectation = expectation

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} for {self.expectation}>'

    def and_return(self, value: Any) -> 'ExpectationSetters':
        self.expectation.outcomes.append(Outcome(answer=returning(value)))
        return self

    def and_raise(self, exc: BaseException) -> 'ExpectationSetters':
        self.expectation.outcomes.append(Outcome(answer=raising(exc)))
        return self

    def and_answer(self, fn: Answer) -> 'ExpectationSetters':
        """ Call a function with the actual arguments of the call, and return its result. """
        self.expectation.outcomes.append(Outcome(answer=fn))
        return self

    def times(
            self,
            min_calls: int,
            max_calls: Union[None, int, CountToken] = EXACTLY,
    ) -> 'ExpectationSetters':
        """
        Expect the call exactly ``min_calls`` times, or in a range if ``max_calls`` is set.

        ``max_calls=None`` means no upper limit. By default, the range is
        not used, and the exact number of calls is expected.
        """
        max_calls = min_calls if max_calls is EXACTLY else max_calls
        assert not isinstance(max_calls, CountToken)  # for type-checkers
        if min_calls < 0:
            raise ValueError(f"The number of calls cannot be negative: {min_calls!r}")
        if max_calls is not None and max_calls < min_calls:
            raise ValueError(f"The maximum number of calls {max_calls!r} "
                             f"is below the minimum {min_calls!r}.")
        if max_calls == 0:
            raise ValueError("A call cannot be expected zero times; do not record it instead.")
        outcome = self.expectation.ensure_outcome()
        outcome.min_calls = min_calls
        outcome.max_calls = max_calls
        return self

    def once(self) -> 'ExpectationSetters':
        return self.times(1)

    def at_least_once(self) -> 'ExpectationSetters':
        return self.times(1, None)

    def any_times(self) -> 'ExpectationSetters':
        return self.times(0, None)
