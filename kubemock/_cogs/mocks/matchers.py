"""
Argument matchers: predicates to decide which recorded expectation a call matches.

Every argument of a recorded call is turned into a matcher: either it is
a matcher already (e.g. ``Anything()``), or it is wrapped into `Equals`.

The matchers are also used as cache keys for the nested mocks:
two calls with equivalent matchers must lead to the same nested mock.
For that, the matchers are hashable and comparable by their identity
(their type and parameters), not by the values they would match.
E.g., ``Equals({'a': 'b'}) == Equals({'a': 'b'})``, but also
``Anything() == Anything()``, though not ``Anything() == Equals(...)``.
"""
import abc
import collections.abc
import re
from typing import Any, Callable, Hashable, Pattern, Tuple, Type, Union


class ArgumentMatcher(metaclass=abc.ABCMeta):

    @abc.abstractmethod
    def matches(self, value: Any) -> bool:
        raise NotImplementedError

    @abc.abstractmethod
    def _identity(self) -> Tuple[Any, ...]:
        """ Parameters that make two matchers of the same type equivalent. """
        raise NotImplementedError

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        assert isinstance(other, ArgumentMatcher)  # for type-checkers
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        return hash((type(self), _hash(self._identity())))

    def __and__(self, other: object) -> 'And':
        return And(self, other)

    def __or__(self, other: object) -> 'Or':
        return Or(self, other)

    def __invert__(self) -> 'Not':
        return Not(self)


class Equals(ArgumentMatcher):
    def __init__(self, value: Any) -> None:
        super().__init__()
        self.value = value

    def __repr__(self) -> str:
        return repr(self.value)

    def _identity(self) -> Tuple[Any, ...]:
        return (self.value,)

    def matches(self, value: Any) -> bool:
        return bool(value == self.value)


class Anything(ArgumentMatcher):
    def __repr__(self) -> str:
        return '<any>'

    def _identity(self) -> Tuple[Any, ...]:
        return ()

    def matches(self, value: Any) -> bool:
        return True


class IsInstance(ArgumentMatcher):
    def __init__(self, *types: Type[Any]) -> None:
        super().__init__()
        self.types = types

    def __repr__(self) -> str:
        names = ' or '.join(cls.__name__ for cls in self.types)
        return f'<instance of {names}>'

    def _identity(self) -> Tuple[Any, ...]:
        return self.types

    def matches(self, value: Any) -> bool:
        return isinstance(value, self.types)


class Regex(ArgumentMatcher):
    def __init__(self, pattern: Union[str, Pattern[str]]) -> None:
        super().__init__()
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern

    def __repr__(self) -> str:
        return f'<matching {self.pattern.pattern!r}>'

    def _identity(self) -> Tuple[Any, ...]:
        return (self.pattern.pattern, self.pattern.flags)

    def matches(self, value: Any) -> bool:
        return isinstance(value, str) and self.pattern.search(value) is not None


class Contains(ArgumentMatcher):
    def __init__(self, item: Any) -> None:
        super().__init__()
        self.item = item

    def __repr__(self) -> str:
        return f'<containing {self.item!r}>'

    def _identity(self) -> Tuple[Any, ...]:
        return (self.item,)

    def matches(self, value: Any) -> bool:
        # Only the containers can contain; all other values simply do not match.
        if not isinstance(value, collections.abc.Container):
            return False
        try:
            return self.item in value
        except TypeError:  # e.g. `5 in "abc"`, or an unhashable item in a dict or set.
            return False


class Predicate(ArgumentMatcher):
    def __init__(self, fn: Callable[[Any], bool]) -> None:
        super().__init__()
        self.fn = fn

    def __repr__(self) -> str:
        name = getattr(self.fn, '__qualname__', repr(self.fn))
        return f'<satisfying {name}>'

    def _identity(self) -> Tuple[Any, ...]:
        return (self.fn,)

    def matches(self, value: Any) -> bool:
        return bool(self.fn(value))


class And(ArgumentMatcher):
    def __init__(self, *matchers: Any) -> None:
        super().__init__()
        self.matchers = tuple(as_matcher(matcher) for matcher in matchers)

    def __repr__(self) -> str:
        return '(' + ' & '.join(repr(matcher) for matcher in self.matchers) + ')'

    def _identity(self) -> Tuple[Any, ...]:
        return self.matchers

    def matches(self, value: Any) -> bool:
        return all(matcher.matches(value) for matcher in self.matchers)


class Or(ArgumentMatcher):
    def __init__(self, *matchers: Any) -> None:
        super().__init__()
        self.matchers = tuple(as_matcher(matcher) for matcher in matchers)

    def __repr__(self) -> str:
        return '(' + ' | '.join(repr(matcher) for matcher in self.matchers) + ')'

    def _identity(self) -> Tuple[Any, ...]:
        return self.matchers

    def matches(self, value: Any) -> bool:
        return any(matcher.matches(value) for matcher in self.matchers)


class Not(ArgumentMatcher):
    def __init__(self, matcher: Any) -> None:
        super().__init__()
        self.matcher = as_matcher(matcher)

    def __repr__(self) -> str:
        return f'~{self.matcher!r}'

    def _identity(self) -> Tuple[Any, ...]:
        return (self.matcher,)

    def matches(self, value: Any) -> bool:
        return not self.matcher.matches(value)


def as_matcher(value: Any) -> ArgumentMatcher:
    """
    Convert a recorded argument to a matcher, unless it is a matcher already.
    """
    if isinstance(value, ArgumentMatcher):
        return value
    return Equals(value)


def _freeze(value: Any) -> Hashable:
    """
    Make a hashable structural copy of the value: e.g. of dicts, lists, sets.
    """
    if isinstance(value, ArgumentMatcher):
        return value
    elif isinstance(value, collections.abc.Mapping):
        return frozenset((_freeze(key), _freeze(val)) for key, val in value.items())
    elif isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    elif isinstance(value, (set, frozenset)):
        return frozenset(_freeze(item) for item in value)
    else:
        return value


def _hash(value: Any) -> int:
    # Unhashable values still hash consistently (by type), and are compared with `==` anyway.
    try:
        return hash(_freeze(value))
    except TypeError:
        return hash(type(value).__qualname__)
