import dataclasses
from typing import Iterator, Optional


@dataclasses.dataclass(frozen=True, eq=False, repr=False)
class Resource:
    """
    A reference to a very specific custom or built-in resource kind.

    Only the API group, the API version, and the plural name identify
    the resource. All other names are remembered for naming the mocks,
    for logging, and for informational purposes.
    """

    group: str
    """
    The resource's API group; e.g. ``"kopf.dev"``, ``"apps"``, ``"batch"``.
    For Core v1 API resources, an empty string: ``""``.
    """

    version: str
    """
    The resource's API version; e.g. ``"v1"``, ``"v1beta1"``, etc.
    """

    plural: str
    """
    The resource's plural name; e.g. ``"pods"``, ``"kopfexamples"``.
    It is also used as the name of the root mock of this resource.
    """

    kind: Optional[str] = None
    """
    The resource's kind (as in YAML files); e.g. ``"Pod"``, ``"KopfExample"``.
    """

    singular: Optional[str] = None
    """
    The resource's singular name; e.g. ``"pod"``, ``"widget"``.
    """

    namespaced: bool = True
    """
    Whether the resource is namespaced (``True``) or cluster-scoped (``False``).
    Cluster-scoped resources cannot be narrowed down to namespaces.
    """

    def __hash__(self) -> int:
        return hash((self.group, self.version, self.plural))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Resource):
            self_tuple = (self.group, self.version, self.plural)
            other_tuple = (other.group, other.version, other.plural)
            return self_tuple == other_tuple
        else:
            return NotImplemented

    def __repr__(self) -> str:
        return f'{self.plural}.{self.version}.{self.group}'.strip('.')

    # Mostly for tests, to be used as `Resource(*resource)`.
    def __iter__(self) -> Iterator[str]:
        return iter((self.group, self.version, self.plural))

    @property
    def api_version(self) -> str:
        # Strip heading/trailing slashes if group is absent (e.g. for pods).
        return f'{self.group}/{self.version}'.strip('/')


# Built-in resources, each served by a same-named accessor of the client mock.
PODS = Resource('', 'v1', 'pods', kind='Pod', singular='pod')
SERVICES = Resource('', 'v1', 'services', kind='Service', singular='service')
ENDPOINTS = Resource('', 'v1', 'endpoints', kind='Endpoints', singular='endpoints')
EVENTS = Resource('', 'v1', 'events', kind='Event', singular='event')
CONFIG_MAPS = Resource('', 'v1', 'configmaps', kind='ConfigMap', singular='configmap')
SECRETS = Resource('', 'v1', 'secrets', kind='Secret', singular='secret')
SERVICE_ACCOUNTS = Resource('', 'v1', 'serviceaccounts', kind='ServiceAccount', singular='serviceaccount')
REPLICATION_CONTROLLERS = Resource('', 'v1', 'replicationcontrollers',
                                   kind='ReplicationController', singular='replicationcontroller')
RESOURCE_QUOTAS = Resource('', 'v1', 'resourcequotas', kind='ResourceQuota', singular='resourcequota')
PERSISTENT_VOLUME_CLAIMS = Resource('', 'v1', 'persistentvolumeclaims',
                                    kind='PersistentVolumeClaim', singular='persistentvolumeclaim')
PERSISTENT_VOLUMES = Resource('', 'v1', 'persistentvolumes', namespaced=False,
                              kind='PersistentVolume', singular='persistentvolume')
NAMESPACES = Resource('', 'v1', 'namespaces', kind='Namespace', singular='namespace', namespaced=False)
NODES = Resource('', 'v1', 'nodes', kind='Node', singular='node', namespaced=False)
