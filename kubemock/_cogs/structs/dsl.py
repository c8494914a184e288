"""
The shapes of the mocked client's fluent DSL.

The client builds its requests by chaining calls: the narrowing calls
(names, namespaces, labels, fields) return new operations, while the
terminal calls (get, list, create, delete, etc) perform the request.
For example::

    client.pods().in_namespace('default').with_label('app', 'web').list()

These protocols are used as the specs of the record/replay mocks:
only the methods declared here can be called on the mocks' delegates,
and only with the signatures declared here.
"""
from typing import Any, Callable, Mapping, Optional, Protocol

from kubemock._cogs.structs import bodies, references


class ResourceEditor(Protocol):
    """
    An editor of a single resource, as returned by ``create_new()`` & ``edit()``.

    All the methods except ``done()`` modify the resource and return the same
    editor; ``done()`` submits the modified resource and returns the result.
    """

    def with_name(self, name: str) -> 'ResourceEditor': ...
    def with_namespace(self, namespace: str) -> 'ResourceEditor': ...
    def with_labels(self, labels: bodies.Labels) -> 'ResourceEditor': ...
    def add_to_labels(self, key: str, value: str) -> 'ResourceEditor': ...
    def remove_from_labels(self, key: str) -> 'ResourceEditor': ...
    def with_annotations(self, annotations: bodies.Annotations) -> 'ResourceEditor': ...
    def add_to_annotations(self, key: str, value: str) -> 'ResourceEditor': ...
    def remove_from_annotations(self, key: str) -> 'ResourceEditor': ...
    def with_spec(self, spec: Mapping[str, Any]) -> 'ResourceEditor': ...
    def patch(self, body: Mapping[str, Any]) -> 'ResourceEditor': ...
    def done(self) -> bodies.RawBody: ...


class ResourceOperation(Protocol):
    """
    Operations on a cluster-scoped resource kind, or on an already selected namespace.
    """

    # Narrowing: each returns a narrower operation.
    def with_name(self, name: str) -> 'ResourceOperation': ...
    def with_label(self, key: str, value: Optional[str] = None) -> 'ResourceOperation': ...
    def without_label(self, key: str, value: Optional[str] = None) -> 'ResourceOperation': ...
    def with_labels(self, labels: bodies.Labels) -> 'ResourceOperation': ...
    def without_labels(self, labels: bodies.Labels) -> 'ResourceOperation': ...
    def with_label_in(self, key: str, *values: str) -> 'ResourceOperation': ...
    def with_label_not_in(self, key: str, *values: str) -> 'ResourceOperation': ...
    def with_field(self, key: str, value: str) -> 'ResourceOperation': ...
    def with_fields(self, fields: Mapping[str, str]) -> 'ResourceOperation': ...
    def cascading(self, enabled: bool) -> 'ResourceOperation': ...
    def load(self, source: bodies.DocumentSource) -> 'ResourceOperation': ...

    # Terminal: each performs the request.
    def create(self, *items: bodies.RawBody) -> bodies.RawBody: ...
    def create_new(self) -> ResourceEditor: ...
    def edit(self) -> ResourceEditor: ...
    def replace(self, item: bodies.RawBody) -> bodies.RawBody: ...
    def update(self, item: bodies.RawBody) -> bodies.RawBody: ...
    def get(self) -> Optional[bodies.RawBody]: ...
    def list(self) -> bodies.RawList: ...
    def delete(self, *items: bodies.RawBody) -> bool: ...
    def watch(self, watcher: Callable[..., Any], resource_version: Optional[str] = None) -> Any: ...


class NamespacedResourceOperation(ResourceOperation, Protocol):
    """
    Operations on a namespaced resource kind, before the namespace is selected.
    """

    def in_namespace(self, namespace: str) -> ResourceOperation: ...
    def in_any_namespace(self) -> ResourceOperation: ...


class KubernetesClient(Protocol):
    """
    The client's entry point: one accessor per resource kind.
    """

    def pods(self) -> NamespacedResourceOperation: ...
    def services(self) -> NamespacedResourceOperation: ...
    def endpoints(self) -> NamespacedResourceOperation: ...
    def events(self) -> NamespacedResourceOperation: ...
    def config_maps(self) -> NamespacedResourceOperation: ...
    def secrets(self) -> NamespacedResourceOperation: ...
    def service_accounts(self) -> NamespacedResourceOperation: ...
    def replication_controllers(self) -> NamespacedResourceOperation: ...
    def resource_quotas(self) -> NamespacedResourceOperation: ...
    def persistent_volume_claims(self) -> NamespacedResourceOperation: ...
    def persistent_volumes(self) -> ResourceOperation: ...
    def namespaces(self) -> ResourceOperation: ...
    def nodes(self) -> ResourceOperation: ...
    def resources(self, resource: references.Resource) -> ResourceOperation: ...
