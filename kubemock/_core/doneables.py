"""
Mocks of the resource editors, as returned by ``create_new()`` and ``edit()``.

The editor's modifying methods are recorded to be called at least once
with the recorded arguments, and return the editor's delegate for chaining.
Only ``done()`` has an outcome to be set by the test::

    editor = pods.in_namespace('ns').with_name('web').edit()
    editor.add_to_labels('app', 'web').done().and_return(patched_pod)

Recording the same modification twice records it only once, since
the second expectation would never be reached by the replayed calls.
"""
from typing import Any, Hashable, Mapping, Optional, Set, Tuple

from kubemock._cogs.configs import configuration
from kubemock._cogs.mocks import expectations, matchers, recorders
from kubemock._cogs.structs import bodies, dsl
from kubemock._core import lifecycles


class MockDoneable:

    def __init__(
            self,
            delegate: Optional[recorders.RecordReplayMock] = None,
            *,
            name: str = 'editor',
            settings: Optional[configuration.MockSettings] = None,
    ) -> None:
        super().__init__()
        self.name = name
        self.settings = settings if settings is not None else configuration.MockSettings()
        self.delegate = delegate if delegate is not None else recorders.RecordReplayMock(
            dsl.ResourceEditor, name=name, settings=self.settings)
        self._recorded: Set[Tuple[Hashable, ...]] = set()

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} {self.name}>'

    def replay(self) -> None:
        recorders.control_of(self.delegate).replay()

    def verify(self) -> None:
        recorders.control_of(self.delegate).verify()

    def reset(self) -> None:
        recorders.control_of(self.delegate).reset()
        self._recorded.clear()

    def _modify(self, method: str, *args: Any) -> 'MockDoneable':
        lifecycles.ensure_recording(self.delegate, self.name)
        key = (method, *(matchers.as_matcher(arg) for arg in args))
        if key not in self._recorded:
            recorded = getattr(self.delegate, method)(*args)
            recorders.expect(recorded).and_return(self.delegate).at_least_once()
            self._recorded.add(key)
        return self

    def with_name(self, name: str) -> 'MockDoneable':
        return self._modify('with_name', name)

    def with_namespace(self, namespace: str) -> 'MockDoneable':
        return self._modify('with_namespace', namespace)

    def with_labels(self, labels: bodies.Labels) -> 'MockDoneable':
        return self._modify('with_labels', labels)

    def add_to_labels(self, key: str, value: str) -> 'MockDoneable':
        return self._modify('add_to_labels', key, value)

    def remove_from_labels(self, key: str) -> 'MockDoneable':
        return self._modify('remove_from_labels', key)

    def with_annotations(self, annotations: bodies.Annotations) -> 'MockDoneable':
        return self._modify('with_annotations', annotations)

    def add_to_annotations(self, key: str, value: str) -> 'MockDoneable':
        return self._modify('add_to_annotations', key, value)

    def remove_from_annotations(self, key: str) -> 'MockDoneable':
        return self._modify('remove_from_annotations', key)

    def with_spec(self, spec: Mapping[str, Any]) -> 'MockDoneable':
        return self._modify('with_spec', spec)

    def patch(self, body: Mapping[str, Any]) -> 'MockDoneable':
        return self._modify('patch', body)

    def done(self) -> expectations.ExpectationSetters:
        lifecycles.ensure_recording(self.delegate, self.name)
        return recorders.expect(self.delegate.done())
