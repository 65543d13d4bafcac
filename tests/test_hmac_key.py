from datetime import datetime, timedelta, timezone

import pytest

from gcstore.hmac_key import (
    HmacKey,
    HmacMeta,
    HmacState,
    parse_hmac_list,
    update_request_body,
)


def _meta(**overrides):
    data = {
        "kind": "storage#hmacKeyMetadata",
        "id": "demo-project/GOOG1EXAMPLE",
        "selfLink": "https://storage.example.com/hmacKeys/GOOG1EXAMPLE",
        "accessId": "GOOG1EXAMPLE",
        "projectId": "demo-project",
        "serviceAccountEmail": "robot@example.com",
        "state": "ACTIVE",
        "timeCreated": "2020-01-02T03:04:05Z",
        "updated": "2020-01-02T03:04:05.5Z",
        "etag": "etag-1",
    }
    data.update(overrides)
    return data


def test_meta_from_dict():
    meta = HmacMeta.from_dict(_meta())
    assert meta.access_id == "GOOG1EXAMPLE"
    assert meta.state is HmacState.ACTIVE
    assert meta.time_created == datetime(2020, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    assert meta.updated == datetime(2020, 1, 2, 3, 4, 5, 500000, tzinfo=timezone.utc)


def test_meta_round_trip():
    data = _meta()
    assert HmacMeta.from_dict(data).to_dict() == data


def test_meta_offset_timestamp():
    meta = HmacMeta.from_dict(_meta(timeCreated="2020-01-02T05:04:05+02:00"))
    assert meta.time_created.utcoffset() == timedelta(hours=2)
    assert meta.time_created == datetime(2020, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    assert meta.to_dict()["timeCreated"] == "2020-01-02T05:04:05+02:00"


@pytest.mark.parametrize("state", ["ACTIVE", "INACTIVE", "DELETED"])
def test_state_values(state):
    assert HmacMeta.from_dict(_meta(state=state)).state.value == state


def test_unknown_state_rejected():
    with pytest.raises(ValueError):
        HmacMeta.from_dict(_meta(state="active"))


def test_bad_timestamp_rejected():
    with pytest.raises(ValueError):
        HmacMeta.from_dict(_meta(updated="yesterday"))


def test_missing_field_rejected():
    data = _meta()
    del data["etag"]
    with pytest.raises(ValueError, match="etag"):
        HmacMeta.from_dict(data)


def test_key_round_trip():
    data = {"kind": "storage#hmacKey", "metadata": _meta(), "secret": "secret"}
    key = HmacKey.from_dict(data)
    assert key.secret == "secret"
    assert key.metadata.project_id == "demo-project"
    assert key.to_dict() == data


def test_parse_list():
    data = {"items": [_meta(), _meta(accessId="GOOG1OTHER", state="INACTIVE")]}
    keys = parse_hmac_list(data)
    assert [k.access_id for k in keys] == ["GOOG1EXAMPLE", "GOOG1OTHER"]
    assert keys[1].state is HmacState.INACTIVE


def test_parse_list_requires_items():
    with pytest.raises(ValueError):
        parse_hmac_list({})


def test_update_request_body():
    assert update_request_body(HmacState.INACTIVE) == {"state": "INACTIVE"}
    assert update_request_body("ACTIVE") == {"state": "ACTIVE"}


def test_update_request_body_rejects_unknown():
    with pytest.raises(ValueError):
        update_request_body("PAUSED")