"""
The mock of the client's entry point: one operation mock per resource kind.

The test records the expectations via the client mock, and gives its
delegate to the code under test::

    client = MockKubernetesClient()
    client.pods().in_namespace('ns').list().and_return(pods_list)
    client.replay()

    code_under_test(client.delegate)

    client.verify()

The operation mocks are created on the first access and cached,
so every access of the same kind records into the same operation mock.
The client's delegate returns the same operation's delegate on every
access, any number of times (including none at all).
"""
from typing import Any, Dict, List, Optional

from kubemock._cogs.configs import configuration
from kubemock._cogs.mocks import errors, recorders
from kubemock._cogs.structs import dsl, references
from kubemock._core import lifecycles, operations


class MockKubernetesClient:

    def __init__(
            self,
            delegate: Optional[recorders.RecordReplayMock] = None,
            *,
            name: str = 'client',
            settings: Optional[configuration.MockSettings] = None,
    ) -> None:
        super().__init__()
        self.name = name
        self.settings = settings if settings is not None else configuration.MockSettings()
        self.delegate = delegate if delegate is not None else recorders.RecordReplayMock(
            dsl.KubernetesClient, name=name, settings=self.settings)
        self.nested: List[lifecycles.Mockable] = []
        self._accessors: Dict[str, operations.ResourceOperationMock] = {}
        self._resources: Dict[references.Resource, operations.ResourceOperationMock] = {}

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} {self.name}>'

    def replay(self) -> None:
        lifecycles.replay_all(self.nested)
        recorders.control_of(self.delegate).replay()

    def verify(self) -> None:
        lifecycles.verify_all([*self.nested, self.delegate])

    def reset(self) -> None:
        lifecycles.reset_all(self.nested)
        recorders.control_of(self.delegate).reset()
        self.nested.clear()
        self._accessors.clear()
        self._resources.clear()

    def _spawn(self, resource: references.Resource, name: str) -> operations.ResourceOperationMock:
        cls = operations.operation_class_for(resource)
        try:
            return cls(name=name, settings=self.settings)
        except Exception as e:
            raise errors.MockInstantiationError(f"Cannot create an operation mock {name}.") from e

    def _access(self, accessor: str, resource: references.Resource) -> operations.ResourceOperationMock:
        lifecycles.ensure_recording(self.delegate, self.name)
        op = self._accessors.get(accessor)
        if op is None:
            op = self._spawn(resource, name=resource.plural)
            recorders.expect(getattr(self.delegate, accessor)()).and_return(op.delegate).any_times()
            self.nested.append(op)
            self._accessors[accessor] = op
        return op

    def pods(self) -> operations.ResourceOperationMock:
        return self._access('pods', references.PODS)

    def services(self) -> operations.ResourceOperationMock:
        return self._access('services', references.SERVICES)

    def endpoints(self) -> operations.ResourceOperationMock:
        return self._access('endpoints', references.ENDPOINTS)

    def events(self) -> operations.ResourceOperationMock:
        return self._access('events', references.EVENTS)

    def config_maps(self) -> operations.ResourceOperationMock:
        return self._access('config_maps', references.CONFIG_MAPS)

    def secrets(self) -> operations.ResourceOperationMock:
        return self._access('secrets', references.SECRETS)

    def service_accounts(self) -> operations.ResourceOperationMock:
        return self._access('service_accounts', references.SERVICE_ACCOUNTS)

    def replication_controllers(self) -> operations.ResourceOperationMock:
        return self._access('replication_controllers', references.REPLICATION_CONTROLLERS)

    def resource_quotas(self) -> operations.ResourceOperationMock:
        return self._access('resource_quotas', references.RESOURCE_QUOTAS)

    def persistent_volume_claims(self) -> operations.ResourceOperationMock:
        return self._access('persistent_volume_claims', references.PERSISTENT_VOLUME_CLAIMS)

    def persistent_volumes(self) -> operations.ResourceOperationMock:
        return self._access('persistent_volumes', references.PERSISTENT_VOLUMES)

    def namespaces(self) -> operations.ResourceOperationMock:
        return self._access('namespaces', references.NAMESPACES)

    def nodes(self) -> operations.ResourceOperationMock:
        return self._access('nodes', references.NODES)

    def resources(self, resource: references.Resource) -> operations.ResourceOperationMock:
        """
        Access the operations of an arbitrary resource, e.g. of a custom one.

        The resources are identified by their group, version, and plural name.
        The built-in resources accessed this way are not the same operation
        mocks as those of the dedicated accessors (e.g. ``pods()``): the code
        under test must access them the same way as the test recorded them.
        """
        lifecycles.ensure_recording(self.delegate, self.name)
        op = self._resources.get(resource)
        if op is None:
            op = self._spawn(resource, name=repr(resource))
            recorded: Any = self.delegate.resources(resource)
            recorders.expect(recorded).and_return(op.delegate).any_times()
            self.nested.append(op)
            self._resources[resource] = op
        return op
