import pytest

from kubemock._cogs.configs.configuration import MockSettings
from kubemock._cogs.structs.references import Resource
from kubemock._core.clients import MockKubernetesClient
from kubemock._core.operations import NodeOperationMock, PodOperationMock

pytest_plugins = ['kubemock.testing', 'pytester']


@pytest.fixture()
def settings():
    return MockSettings()


@pytest.fixture()
def client(settings):
    return MockKubernetesClient(settings=settings)


@pytest.fixture()
def pods(settings):
    """ A namespaced operation mock, as used in most of the tests. """
    return PodOperationMock(settings=settings)


@pytest.fixture()
def nodes(settings):
    """ A cluster-scoped operation mock. """
    return NodeOperationMock(settings=settings)


@pytest.fixture()
def custom_resource():
    return Resource('kopf.dev', 'v1', 'kopfexamples', kind='KopfExample', namespaced=True)


@pytest.fixture()
def pod():
    return {
        'apiVersion': 'v1',
        'kind': 'Pod',
        'metadata': {'name': 'web', 'namespace': 'default', 'labels': {'app': 'web'}},
        'spec': {'containers': [{'name': 'main', 'image': 'nginx'}]},
    }


@pytest.fixture()
def pod_yaml():
    return (
        "apiVersion: v1\n"
        "kind: Pod\n"
        "metadata:\n"
        "  name: web\n"
        "  namespace: default\n"
        "  labels:\n"
        "    app: web\n"
        "spec:\n"
        "  containers:\n"
        "  - name: main\n"
        "    image: nginx\n"
    )
