"""
All the structures coming from/to the mocked Kubernetes client.

The mocks never interpret the bodies: whatever is recorded is returned
as is. The typed dicts below only document what the tests usually pass
to ``and_return()`` and what the client's DSL is expected to return.

The only place where the bodies are parsed is loading of the resources
from YAML/JSON documents, as the client's ``load()`` operation does.
The documents are compared by their parsed content, not by the source
objects, so that a stream in the test and a file in the code under test
are considered the same if they contain the same resource.
"""
import io
import os
from typing import Any, Iterable, List, Mapping, Union

import yaml
from typing_extensions import TypedDict

from kubemock._cogs.structs import references

Labels = Mapping[str, str]
Annotations = Mapping[str, str]

# Anything that can be loaded as a document: YAML/JSON text, raw bytes, a path, or a readable stream.
DocumentSource = Union[str, bytes, 'os.PathLike[str]', io.IOBase]


class RawMeta(TypedDict, total=False):
    uid: str
    name: str
    namespace: str
    labels: Labels
    annotations: Annotations
    finalizers: List[str]
    resourceVersion: str


class RawBody(TypedDict, total=False):
    apiVersion: str
    kind: str
    metadata: RawMeta
    spec: Mapping[str, Any]
    status: Mapping[str, Any]


class RawListMeta(TypedDict, total=False):
    resourceVersion: str


class RawList(TypedDict, total=False):
    apiVersion: str
    kind: str
    metadata: RawListMeta
    items: List[RawBody]


def is_rewindable(source: Any) -> bool:
    """ Can the stream be read again after it is read to the end (e.g. not a pipe)? """
    seekable = getattr(source, 'seekable', None)
    try:
        return seekable is not None and bool(seekable())
    except (ValueError, OSError):  # e.g. closed streams
        return False


def parse_document(source: DocumentSource) -> Mapping[str, Any]:
    """
    Load a single resource document from any supported source.

    Strings are treated as the document's text, not as file names;
    use ``pathlib.Path`` for files. Streams are read to the end and rewound
    (if possible), so that the same stream can be read by other parties.
    """
    if isinstance(source, os.PathLike):
        with open(source, encoding='utf-8') as f:
            text: Union[str, bytes] = f.read()
    elif isinstance(source, (str, bytes)):
        text = source
    elif hasattr(source, 'read'):
        position = source.tell() if is_rewindable(source) else None
        text = source.read()
        if position is not None:
            source.seek(position)
    else:
        raise TypeError(f"Unsupported document source: {source!r}")

    document = yaml.safe_load(text)
    if not isinstance(document, Mapping):
        raise ValueError(f"The document is not a resource mapping: {document!r}")
    return document


def build_list(
        resource: references.Resource,
        items: Iterable[RawBody],
        *,
        resource_version: str = '',
) -> RawList:
    """
    Build a list body as the API would return it for the ``list()`` call.
    """
    kind = f'{resource.kind}List' if resource.kind else 'List'
    return RawList(
        apiVersion=resource.api_version,
        kind=kind,
        metadata=RawListMeta(resourceVersion=resource_version),
        items=list(items),
    )
