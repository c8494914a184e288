"""
Helper tools to test the code that uses the Kubernetes client: pytest fixtures.

This module is a part of the package's public interface.
It is a pytest plugin, which should be enabled explicitly in ``conftest.py``::

    pytest_plugins = ['kubemock.testing']

    def test_it(kubemock):
        kubemock.pods().in_namespace('ns').with_name('web').get().and_return(pod)
        kubemock.replay()
        assert fetch_web_pod(kubemock.delegate, 'ns') is not None

The client mock is verified automatically at the test's teardown, but only
if it was switched to the replay state, and only if the test has passed
(otherwise, the verification failure would only obscure the real failure).
"""
from typing import Any, Iterator

import pytest

from kubemock._cogs.configs import configuration
from kubemock._cogs.mocks import recorders
from kubemock._core import clients

__all__ = [
    'kubemock',
    'kubemock_settings',
    'pytest_runtest_makereport',
]


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item: pytest.Item, call: Any) -> Iterator[None]:
    # Remember the test's outcome for the fixture's teardown (which goes after the call).
    outcome = yield
    report = outcome.get_result()
    setattr(item, f'kubemock_report_{report.when}', report)


@pytest.fixture()
def kubemock_settings() -> configuration.MockSettings:
    """ The settings of the client mock; override the fixture to change them. """
    return configuration.MockSettings()


@pytest.fixture()
def kubemock(
        request: pytest.FixtureRequest,
        kubemock_settings: configuration.MockSettings,
) -> Iterator[clients.MockKubernetesClient]:
    client = clients.MockKubernetesClient(settings=kubemock_settings)
    yield client

    report = getattr(request.node, 'kubemock_report_call', None)
    passed = report is not None and report.passed
    replayed = recorders.control_of(client.delegate).state is recorders.MockState.REPLAY
    if passed and replayed:
        client.verify()
