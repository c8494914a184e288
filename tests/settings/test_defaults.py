import logging

import kubemock


def test_declared_public_interface_and_promised_defaults():
    settings = kubemock.MockSettings()
    assert settings.recording.strict == False
    assert settings.recording.check_signatures == True
    assert settings.replaying.fail_fast == True
    assert settings.logging.level == logging.DEBUG


def test_settings_are_not_shared_between_instances():
    settings1 = kubemock.MockSettings()
    settings2 = kubemock.MockSettings()
    settings1.recording.strict = True
    assert settings2.recording.strict == False


def test_settings_are_shared_by_spawned_mocks():
    client = kubemock.MockKubernetesClient()
    op = client.pods().in_namespace('default').with_name('web')
    editor = op.edit()
    assert op.settings is client.settings
    assert editor.settings is client.settings
    assert kubemock.control_of(editor.delegate).settings is client.settings


def test_default_settings_are_created_per_mock():
    client1 = kubemock.MockKubernetesClient()
    client2 = kubemock.MockKubernetesClient()
    assert client1.settings is not client2.settings
