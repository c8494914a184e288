"""
The main kubemock module for all the exported functions & classes.
"""
# isort: skip_file

# Unlike all other places, where we import other modules and refer
# the functions via the modules, this is the package's top-level interface,
# as it is seen by the users. So, we export the individual functions.

from kubemock._cogs.configs.configuration import (
    MockSettings,
    RecordingSettings,
    ReplayingSettings,
    LoggingSettings,
)
from kubemock._cogs.helpers.typedefs import (
    Logger,
)
from kubemock._cogs.helpers.versions import (
    version as __version__,
)
from kubemock._cogs.mocks.errors import (
    MockError,
    LifecycleError,
    MockInstantiationError,
    UnsupportedOperationError,
    VerificationError,
    UnexpectedCallError,
    UnfulfilledExpectationError,
)
from kubemock._cogs.mocks.expectations import (
    Invocation,
    Expectation,
    ExpectationSetters,
)
from kubemock._cogs.mocks.loggers import (
    LogFormat,
    configure,
)
from kubemock._cogs.mocks.matchers import (
    ArgumentMatcher,
    Equals,
    Anything,
    IsInstance,
    Regex,
    Contains,
    Predicate,
    And,
    Or,
    Not,
    as_matcher,
)
from kubemock._cogs.mocks.recorders import (
    MockState,
    MockControl,
    RecordReplayMock,
    control_of,
    expect,
)
from kubemock._cogs.structs.bodies import (
    Labels,
    Annotations,
    RawMeta,
    RawBody,
    RawList,
    build_list,
    parse_document,
)
from kubemock._cogs.structs.dsl import (
    KubernetesClient,
    ResourceOperation,
    NamespacedResourceOperation,
    ResourceEditor,
)
from kubemock._cogs.structs.references import (
    Resource,
    PODS,
    SERVICES,
    ENDPOINTS,
    EVENTS,
    CONFIG_MAPS,
    SECRETS,
    SERVICE_ACCOUNTS,
    REPLICATION_CONTROLLERS,
    RESOURCE_QUOTAS,
    PERSISTENT_VOLUME_CLAIMS,
    PERSISTENT_VOLUMES,
    NAMESPACES,
    NODES,
)
from kubemock._core.clients import (
    MockKubernetesClient,
)
from kubemock._core.doneables import (
    MockDoneable,
)
from kubemock._core.lifecycles import (
    Mockable,
    replay,
    verify,
    reset,
)
from kubemock._core.operations import (
    BaseMockOperation,
    ResourceOperationMock,
    Document,
    operation_class_for,
)

__all__ = [
    'MockSettings', 'RecordingSettings', 'ReplayingSettings', 'LoggingSettings',
    'Logger',
    'MockError', 'LifecycleError', 'MockInstantiationError', 'UnsupportedOperationError',
    'VerificationError', 'UnexpectedCallError', 'UnfulfilledExpectationError',
    'Invocation', 'Expectation', 'ExpectationSetters',
    'LogFormat', 'configure',
    'ArgumentMatcher', 'Equals', 'Anything', 'IsInstance', 'Regex', 'Contains', 'Predicate',
    'And', 'Or', 'Not', 'as_matcher',
    'MockState', 'MockControl', 'RecordReplayMock', 'control_of', 'expect',
    'Labels', 'Annotations', 'RawMeta', 'RawBody', 'RawList', 'build_list', 'parse_document',
    'KubernetesClient', 'ResourceOperation', 'NamespacedResourceOperation', 'ResourceEditor',
    'Resource', 'PODS', 'SERVICES', 'ENDPOINTS', 'EVENTS', 'CONFIG_MAPS', 'SECRETS',
    'SERVICE_ACCOUNTS', 'REPLICATION_CONTROLLERS', 'RESOURCE_QUOTAS',
    'PERSISTENT_VOLUME_CLAIMS', 'PERSISTENT_VOLUMES', 'NAMESPACES', 'NODES',
    'MockKubernetesClient',
    'MockDoneable',
    'Mockable', 'replay', 'verify', 'reset',
    'BaseMockOperation', 'ResourceOperationMock', 'Document', 'operation_class_for',
]
