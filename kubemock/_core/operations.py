"""
Mocks of the client's resource operations, i.e. of its fluent DSL.

An operation mock mirrors the client's DSL, but instead of performing
the requests, it records the expectations on its delegate: a record/replay
mock with the same DSL, which is then given to the code under test.

The narrowing calls (``with_name()``, ``in_namespace()``, etc) return
the nested operation mocks: their delegates are returned by the same calls
on this mock's delegate, any number of times. The nested mocks are cached
by the argument matchers, so that the same narrowing leads to the same
nested mock, and all the expectations are recorded into one place::

    pods = PodOperationMock()
    pods.in_namespace('ns').with_name('web').get().and_return(pod)
    pods.in_namespace('ns').with_name('web').delete().and_return(True)
    pods.replay()

    api = pods.delegate  # to be used by the code under test, e.g.:
    api.in_namespace('ns').with_name('web').get()  # returns the pod

The terminal calls (``get()``, ``list()``, ``create()``, etc) return
the expectation setters of the same calls on the delegate.

The editors (``create_new()``, ``edit()``) are new mocks every time,
expected to be requested once per recorded call. Their class is taken
from the type parameters of the operation mock's class.
"""
import dataclasses
import functools
import typing
import weakref
from typing import Any, Callable, ClassVar, Dict, Generic, List, Mapping, Optional, Type, TypeVar

import yaml

from kubemock._cogs.configs import configuration
from kubemock._cogs.mocks import errors, expectations, matchers, recorders
from kubemock._cogs.structs import bodies, dsl, references
from kubemock._core import doneables, lifecycles

T = TypeVar('T')  # the resource's body type
L = TypeVar('L')  # the resource list's body type
B = TypeVar('B', bound=doneables.MockDoneable)  # the editor's mock class

Cache = Dict[matchers.ArgumentMatcher, 'BaseMockOperation[Any, Any, Any]']


class Document(matchers.ArgumentMatcher):
    """
    Match the document sources by the documents in them, not by the sources.

    The document is loaded from the actual argument the same way as it was
    loaded from the recorded one. The already parsed documents are compared
    as is. Sources that cannot be loaded do not match.

    The streams that cannot be rewound (e.g. pipes) are read only once,
    and their documents are shared by all the matchers, since the stream
    is usually checked against several recorded documents in a row.
    """

    _unrewindable: ClassVar['weakref.WeakKeyDictionary[Any, Optional[Mapping[str, Any]]]'] = \
        weakref.WeakKeyDictionary()

    def __init__(self, document: Mapping[str, Any]) -> None:
        super().__init__()
        self.document = document

    def __repr__(self) -> str:
        kind = self.document.get('kind')
        name = self.document.get('metadata', {}).get('name')
        return f'<document {kind}/{name}>'

    def _identity(self) -> typing.Tuple[Any, ...]:
        return (self.document,)

    def matches(self, value: Any) -> bool:
        if isinstance(value, Mapping):
            return value == self.document
        return self._load(value) == self.document

    @classmethod
    def _load(cls, value: Any) -> Optional[Mapping[str, Any]]:
        unrewindable = hasattr(value, 'read') and not bodies.is_rewindable(value)
        if unrewindable and value in cls._unrewindable:
            return cls._unrewindable[value]

        document: Optional[Mapping[str, Any]]
        try:
            document = bodies.parse_document(value)
        except (TypeError, ValueError, OSError, yaml.YAMLError):
            document = None

        if unrewindable:
            try:
                cls._unrewindable[value] = document
            except TypeError:
                pass  # not weak-referenceable: such streams are read by the first matcher only.
        return document


class BaseMockOperation(Generic[T, L, B]):

    resource: ClassVar[Optional[references.Resource]] = None

    def __init__(
            self,
            delegate: Optional[recorders.RecordReplayMock] = None,
            *,
            name: Optional[str] = None,
            settings: Optional[configuration.MockSettings] = None,
    ) -> None:
        super().__init__()
        self.settings = settings if settings is not None else configuration.MockSettings()
        self.name = name if name is not None else self.resource.plural if self.resource else 'resources'
        spec = dsl.NamespacedResourceOperation if self.namespaced else dsl.ResourceOperation
        self.delegate = delegate if delegate is not None else recorders.RecordReplayMock(
            spec, name=self.name, settings=self.settings)
        self.doneable_class = resolve_doneable_class(type(self))
        self.nested: List[lifecycles.Mockable] = []

        self._any_namespace: Optional[BaseMockOperation[T, L, B]] = None
        self._namespaces: Cache = {}
        self._names: Cache = {}
        self._cascades: Cache = {}
        self._loads: Cache = {}
        self._label: Cache = {}
        self._label_not: Cache = {}
        self._labels: Cache = {}
        self._labels_not: Cache = {}
        self._label_in: Cache = {}
        self._label_not_in: Cache = {}
        self._field: Cache = {}
        self._fields: Cache = {}

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} {self.name}>'

    @property
    def namespaced(self) -> bool:
        return self.resource.namespaced if self.resource is not None else True

    #
    # Lifecycle: cascades to the nested mocks first, then to the own delegate.
    #

    def replay(self) -> None:
        lifecycles.replay_all(self.nested)
        recorders.control_of(self.delegate).replay()

    def verify(self) -> None:
        lifecycles.verify_all([*self.nested, self.delegate])

    def reset(self) -> None:
        lifecycles.reset_all(self.nested)
        recorders.control_of(self.delegate).reset()
        self.nested.clear()
        self._any_namespace = None
        for cache in [self._namespaces, self._names, self._cascades, self._loads,
                      self._label, self._label_not, self._labels, self._labels_not,
                      self._label_in, self._label_not_in, self._field, self._fields]:
            cache.clear()

    #
    # Nested mocks: spawning & caching.
    #

    def new_instance(self, name: str) -> 'BaseMockOperation[T, L, B]':
        try:
            return type(self)(name=name, settings=self.settings)
        except Exception as e:
            raise errors.MockInstantiationError(f"Cannot create a nested mock {name}.") from e

    def _narrow(
            self,
            cache: Cache,
            key: matchers.ArgumentMatcher,
            method: str,
            *args: Any,
    ) -> 'BaseMockOperation[T, L, B]':
        lifecycles.ensure_recording(self.delegate, self.name)
        op = cache.get(key)
        if op is None:
            label = expectations.Invocation(method, args)
            op = self.new_instance(f'{self.name}.{label}')
            recorded = getattr(self.delegate, method)(*args)
            recorders.expect(recorded).and_return(op.delegate).any_times()
            self.nested.append(op)
            cache[key] = op
        return op

    def _edit(self, method: str) -> B:
        lifecycles.ensure_recording(self.delegate, self.name)
        name = f'{self.name}.{method}()'
        try:
            mock = typing.cast(B, self.doneable_class(name=name, settings=self.settings))
        except Exception as e:
            raise errors.MockInstantiationError(f"Cannot create an editor mock {name}.") from e
        recorded = getattr(self.delegate, method)()
        recorders.expect(recorded).and_return(mock.delegate).once()
        self.nested.append(mock)
        return mock

    def _expect(self, method: str, *args: Any) -> expectations.ExpectationSetters:
        lifecycles.ensure_recording(self.delegate, self.name)
        return recorders.expect(getattr(self.delegate, method)(*args))

    #
    # Narrowing operations.
    #

    def in_namespace(self, namespace: str) -> 'BaseMockOperation[T, L, B]':
        self._check_namespaced('in_namespace')
        key = matchers.as_matcher(namespace)
        return self._narrow(self._namespaces, key, 'in_namespace', namespace)

    def in_any_namespace(self) -> 'BaseMockOperation[T, L, B]':
        self._check_namespaced('in_any_namespace')
        lifecycles.ensure_recording(self.delegate, self.name)
        if self._any_namespace is None:
            op = self.new_instance(f'{self.name}.in_any_namespace()')
            recorders.expect(self.delegate.in_any_namespace()).and_return(op.delegate).any_times()
            self.nested.append(op)
            self._any_namespace = op
        return self._any_namespace

    def with_name(self, name: str) -> 'BaseMockOperation[T, L, B]':
        key = matchers.as_matcher(name)
        return self._narrow(self._names, key, 'with_name', name)

    def cascading(self, enabled: bool) -> 'BaseMockOperation[T, L, B]':
        key = matchers.as_matcher(enabled)
        return self._narrow(self._cascades, key, 'cascading', enabled)

    def with_label(self, key: str, value: Optional[str] = None) -> 'BaseMockOperation[T, L, B]':
        args = (key,) if value is None else (key, value)
        return self._narrow(self._label, matchers.And(key, value), 'with_label', *args)

    def without_label(self, key: str, value: Optional[str] = None) -> 'BaseMockOperation[T, L, B]':
        args = (key,) if value is None else (key, value)
        return self._narrow(self._label_not, matchers.And(key, value), 'without_label', *args)

    def with_labels(self, labels: bodies.Labels) -> 'BaseMockOperation[T, L, B]':
        key = matchers.as_matcher(labels)
        return self._narrow(self._labels, key, 'with_labels', labels)

    def without_labels(self, labels: bodies.Labels) -> 'BaseMockOperation[T, L, B]':
        key = matchers.as_matcher(labels)
        return self._narrow(self._labels_not, key, 'without_labels', labels)

    def with_label_in(self, key: str, *values: str) -> 'BaseMockOperation[T, L, B]':
        matcher = matchers.And(key, values)
        return self._narrow(self._label_in, matcher, 'with_label_in', key, *values)

    def with_label_not_in(self, key: str, *values: str) -> 'BaseMockOperation[T, L, B]':
        matcher = matchers.And(key, values)
        return self._narrow(self._label_not_in, matcher, 'with_label_not_in', key, *values)

    def with_field(self, key: str, value: str) -> 'BaseMockOperation[T, L, B]':
        return self._narrow(self._field, matchers.And(key, value), 'with_field', key, value)

    def with_fields(self, fields: Mapping[str, str]) -> 'BaseMockOperation[T, L, B]':
        key = matchers.as_matcher(fields)
        return self._narrow(self._fields, key, 'with_fields', fields)

    def load(self, source: Any) -> 'BaseMockOperation[T, L, B]':
        """
        Expect a resource to be loaded from a document (YAML or JSON).

        The source can be the document's text, a path, a stream, or a matcher.
        The code under test can load the same document from any other source.
        """
        if isinstance(source, matchers.ArgumentMatcher):
            matcher = source
        else:
            matcher = Document(bodies.parse_document(source))
        return self._narrow(self._loads, matcher, 'load', matcher)

    #
    # Terminal operations.
    #

    def create(self, *items: T) -> expectations.ExpectationSetters:
        return self._expect('create', *items)

    def create_new(self) -> B:
        return self._edit('create_new')

    def edit(self) -> B:
        return self._edit('edit')

    def replace(self, item: T) -> expectations.ExpectationSetters:
        return self._expect('replace', item)

    def update(self, item: T) -> expectations.ExpectationSetters:
        return self._expect('update', item)

    def get(self) -> expectations.ExpectationSetters:
        return self._expect('get')

    def list(self) -> expectations.ExpectationSetters:
        return self._expect('list')

    def delete(self, *items: T) -> expectations.ExpectationSetters:
        return self._expect('delete', *items)

    def watch(self, watcher: Callable[..., Any], resource_version: Optional[str] = None) -> Any:
        raise errors.UnsupportedOperationError(f"Watching cannot be mocked: {self.name}.watch().")

    def _check_namespaced(self, method: str) -> None:
        if not self.namespaced:
            raise errors.UnsupportedOperationError(
                f"{self.name}.{method}() is not possible: {self.resource!r} is cluster-scoped.")


def resolve_doneable_class(cls: Type[Any]) -> Type[doneables.MockDoneable]:
    """
    Find the editor's mock class from the type parameters of the operation's class.

    E.g., for ``class X(BaseMockOperation[RawBody, RawList, MyDoneable])``,
    it is ``MyDoneable``. If the parameter is not specified or is still generic,
    the default `MockDoneable` is used.
    """
    for klass in cls.__mro__:
        for base in klass.__dict__.get('__orig_bases__', ()):
            if typing.get_origin(base) is BaseMockOperation:
                *_, doneable_class = typing.get_args(base)
                if isinstance(doneable_class, type) and issubclass(doneable_class, doneables.MockDoneable):
                    return doneable_class
    return doneables.MockDoneable


class ResourceOperationMock(BaseMockOperation[bodies.RawBody, bodies.RawList, doneables.MockDoneable]):
    pass


class PodOperationMock(ResourceOperationMock):
    resource = references.PODS


class ServiceOperationMock(ResourceOperationMock):
    resource = references.SERVICES


class EndpointsOperationMock(ResourceOperationMock):
    resource = references.ENDPOINTS


class EventOperationMock(ResourceOperationMock):
    resource = references.EVENTS


class ConfigMapOperationMock(ResourceOperationMock):
    resource = references.CONFIG_MAPS


class SecretOperationMock(ResourceOperationMock):
    resource = references.SECRETS


class ServiceAccountOperationMock(ResourceOperationMock):
    resource = references.SERVICE_ACCOUNTS


class ReplicationControllerOperationMock(ResourceOperationMock):
    resource = references.REPLICATION_CONTROLLERS


class ResourceQuotaOperationMock(ResourceOperationMock):
    resource = references.RESOURCE_QUOTAS


class PersistentVolumeClaimOperationMock(ResourceOperationMock):
    resource = references.PERSISTENT_VOLUME_CLAIMS


class PersistentVolumeOperationMock(ResourceOperationMock):
    resource = references.PERSISTENT_VOLUMES


class NamespaceOperationMock(ResourceOperationMock):
    resource = references.NAMESPACES


class NodeOperationMock(ResourceOperationMock):
    resource = references.NODES


BUILTIN_OPERATIONS: Mapping[references.Resource, Type[ResourceOperationMock]] = {
    cls.resource: cls
    for cls in ResourceOperationMock.__subclasses__()
    if cls.resource is not None
}


def operation_class_for(resource: references.Resource) -> Type[ResourceOperationMock]:
    """
    Get the operation mock's class for a resource: built-in or derived ad-hoc.

    The derived classes are cached, so that the same resource gets the same class.
    Unlike the resources' own equality, all the fields are considered here:
    the same API endpoint with a different scope or kind is a different class.
    """
    return _operation_class_for(dataclasses.astuple(resource))


@functools.lru_cache(maxsize=None)
def _operation_class_for(fields: typing.Tuple[Any, ...]) -> Type[ResourceOperationMock]:
    resource = references.Resource(*fields)
    builtin = BUILTIN_OPERATIONS.get(resource)
    if builtin is not None and builtin.resource is not None:
        same_scope = builtin.resource.namespaced == resource.namespaced
        same_kind = resource.kind is None or resource.kind == builtin.resource.kind
        if same_scope and same_kind:
            return builtin
    name = f'{resource.kind or resource.plural.capitalize()}OperationMock'
    return type(name, (ResourceOperationMock,), {'resource': resource, '__module__': __name__})
