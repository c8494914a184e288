import io
import json

import pytest

from kubemock._cogs.structs.bodies import build_list, parse_document
from kubemock._cogs.structs.references import PODS, Resource


def test_parsing_yaml_text(pod_yaml, pod):
    assert parse_document(pod_yaml) == pod


def test_parsing_json_text(pod):
    assert parse_document(json.dumps(pod)) == pod


def test_parsing_bytes(pod_yaml, pod):
    assert parse_document(pod_yaml.encode('utf-8')) == pod


def test_parsing_paths(tmp_path, pod_yaml, pod):
    path = tmp_path / 'pod.yaml'
    path.write_text(pod_yaml, encoding='utf-8')
    assert parse_document(path) == pod


def test_parsing_streams_rewinds_them(pod_yaml, pod):
    stream = io.StringIO(pod_yaml)
    assert parse_document(stream) == pod
    assert stream.tell() == 0
    assert parse_document(stream) == pod


def test_parsing_binary_streams(pod_yaml, pod):
    stream = io.BytesIO(pod_yaml.encode('utf-8'))
    assert parse_document(stream) == pod


@pytest.mark.parametrize('text', ['- a\n- b\n', 'just text', ''])
def test_non_mapping_documents_fail(text):
    with pytest.raises(ValueError):
        parse_document(text)


def test_unsupported_sources_fail():
    with pytest.raises(TypeError):
        parse_document(123)


def test_building_lists_of_builtins(pod):
    result = build_list(PODS, [pod], resource_version='100')
    assert result == {
        'apiVersion': 'v1',
        'kind': 'PodList',
        'metadata': {'resourceVersion': '100'},
        'items': [pod],
    }


def test_building_lists_of_kindless_resources():
    result = build_list(Resource('kopf.dev', 'v1', 'kopfexamples'), [])
    assert result['apiVersion'] == 'kopf.dev/v1'
    assert result['kind'] == 'List'
    assert result['items'] == []
