import pytest

from gcstore.object import Object
from gcstore.requests_model import (
    ComposeRequest,
    ListRequest,
    ObjectList,
    ObjectPrecondition,
    Projection,
    RewriteResponse,
    SourceObject,
)


def _object_data(name="file1", bucket="my_bucket"):
    return {
        "kind": "storage#object",
        "id": f"{bucket}/{name}/1",
        "selfLink": f"https://example.com/{bucket}/{name}",
        "name": name,
        "bucket": bucket,
        "generation": "1",
        "metageneration": "1",
        "timeCreated": "2020-01-01T00:00:00Z",
        "updated": "2020-01-01T00:00:00Z",
        "storageClass": "STANDARD",
        "timeStorageClassUpdated": "2020-01-01T00:00:00Z",
        "size": "2",
        "mediaLink": f"https://example.com/media/{name}",
        "crc32c": "AAAAAA==",
        "etag": "etag",
    }


def test_source_object_without_options():
    source = SourceObject(name="file1")
    assert source.to_dict() == {
        "name": "file1",
        "generation": None,
        "objectPreconditions": None,
    }


def test_source_object_with_precondition():
    source = SourceObject(
        name="file2", generation=7, object_preconditions=ObjectPrecondition(7)
    )
    result = source.to_dict()
    assert result["generation"] == 7
    assert result["objectPreconditions"] == {"ifGenerationMatch": 7}


def test_compose_request_default_kind_and_sources():
    request = ComposeRequest(
        source_objects=[SourceObject(name="file1"), SourceObject(name="file2")]
    )
    result = request.to_dict()
    assert result["kind"] == "storage#composeRequest"
    assert [s["name"] for s in result["sourceObjects"]] == ["file1", "file2"]
    assert result["destination"] is None


def test_compose_request_with_destination():
    destination = Object.from_dict(_object_data(name="test-concatted-file"))
    request = ComposeRequest(source_objects=[], destination=destination)
    assert request.to_dict()["destination"] == destination.to_dict()


def test_empty_list_request_has_empty_query():
    assert ListRequest().to_query() == {}


def test_prefix_only_query():
    request = ListRequest(prefix="test-list-prefix/")
    assert request.to_query() == {"prefix": "test-list-prefix/"}


def test_full_query_uses_wire_names_in_order():
    request = ListRequest(
        delimiter="/",
        end_offset="z",
        include_trailing_delimiter=True,
        max_results=1000,
        page_token="token",
        prefix="test-list-prefix/",
        projection=Projection.NO_ACL,
        start_offset="a",
        versions=False,
    )
    query = request.to_query()
    assert list(query) == [
        "delimiter",
        "endOffset",
        "includeTrailingDelimiter",
        "maxResults",
        "pageToken",
        "prefix",
        "projection",
        "startOffset",
        "versions",
    ]
    assert query["includeTrailingDelimiter"] == "true"
    assert query["versions"] == "false"
    assert query["maxResults"] == "1000"
    assert query["projection"] == "noAcl"
    assert query["pageToken"] == "token"


def test_projection_full_wire_value():
    assert ListRequest(projection=Projection.FULL).to_query() == {"projection": "full"}


def test_negative_max_results_rejected():
    with pytest.raises(ValueError):
        ListRequest(max_results=-1).to_query()


def test_object_list_defaults():
    page = ObjectList.from_dict({"kind": "storage#objects"})
    assert page.kind == "storage#objects"
    assert page.items == []
    assert page.prefixes == []
    assert page.next_page_token is None


def test_object_list_with_items_and_prefixes():
    data = {
        "kind": "storage#objects",
        "items": [
            _object_data(name="test-list-prefix/1"),
            _object_data(name="test-list-prefix/2"),
        ],
        "prefixes": ["test-list-prefix/sub/"],
        "nextPageToken": "token",
    }
    page = ObjectList.from_dict(data)
    assert [item.name for item in page.items] == [
        "test-list-prefix/1",
        "test-list-prefix/2",
    ]
    assert page.prefixes == ["test-list-prefix/sub/"]
    assert page.next_page_token == "token"


def test_object_list_missing_kind():
    with pytest.raises(ValueError):
        ObjectList.from_dict({"items": []})


def test_object_list_bad_items():
    with pytest.raises(ValueError):
        ObjectList.from_dict({"kind": "storage#objects", "items": "nope"})


def test_rewrite_response_parses_resource():
    data = {
        "kind": "storage#rewriteResponse",
        "totalBytesRewritten": "2",
        "objectSize": "2",
        "done": True,
        "resource": _object_data(name="test-rewritten"),
    }
    response = RewriteResponse.from_dict(data)
    assert response.done is True
    assert response.total_bytes_rewritten == "2"
    assert response.resource.name == "test-rewritten"
    assert response.resource == Object.from_dict(_object_data(name="test-rewritten"))


def test_rewrite_response_missing_done():
    data = {
        "kind": "storage#rewriteResponse",
        "totalBytesRewritten": "2",
        "objectSize": "2",
        "resource": _object_data(),
    }
    with pytest.raises(ValueError):
        RewriteResponse.from_dict(data)


def test_rewrite_response_done_must_be_bool():
    data = {
        "kind": "storage#rewriteResponse",
        "totalBytesRewritten": "2",
        "objectSize": "2",
        "done": "yes",
        "resource": _object_data(),
    }
    with pytest.raises(ValueError):
        RewriteResponse.from_dict(data)