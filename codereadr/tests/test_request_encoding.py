from __future__ import annotations

import pytest

from codereadr.catalog import Action, Section
from codereadr.protocol.encoding import FilePayload, Scalar, encode_request, from_marked_parameters


def _post_form(echo_client, body: bytes, content_type: str) -> dict:
    r = echo_client.post("/api/form", content=body, headers={"Content-Type": content_type})
    assert r.status_code == 200
    return r.json()


def test_fixed_fields_come_first_and_scalars_follow(echo_client):
    params = {"user_id": 7, "limit": "10", "active": True}
    body, content_type = encode_request("key-123", Section.USERS, Action.RETRIEVE, params)

    seen = _post_form(echo_client, body, content_type)

    assert seen["files"] == []
    assert len(seen["fields"]) == 3 + len(params)
    assert seen["fields"][:3] == [
        ["api_key", "key-123"],
        ["section", "users"],
        ["action", "retrieve"],
    ]
    assert ["user_id", "7"] in seen["fields"]
    assert ["limit", "10"] in seen["fields"]
    assert ["active", "true"] in seen["fields"]


def test_empty_parameters_send_only_fixed_fields(echo_client):
    for params in (None, {}):
        body, content_type = encode_request("k", "scans", "retrieve", params)
        seen = _post_form(echo_client, body, content_type)
        assert [name for name, _ in seen["fields"]] == ["api_key", "section", "action"]
        assert seen["files"] == []


def test_file_payload_becomes_named_file_part(echo_client):
    params = {
        "database_id": 12,
        "database_file": FilePayload("value1,response1\nvalue2,response2"),
    }
    body, content_type = encode_request("k", Section.DATABASES, Action.UPLOAD, params)

    seen = _post_form(echo_client, body, content_type)

    assert seen["files"] == [
        ["database_file", "database_file", "value1,response1\nvalue2,response2"]
    ]
    assert "database_file" not in [name for name, _ in seen["fields"]]
    assert ["database_id", "12"] in seen["fields"]


def test_file_payload_accepts_bytes_and_non_string_values(echo_client):
    params = {"a": FilePayload(b"raw-bytes"), "b": FilePayload(42)}
    body, content_type = encode_request("k", "databases", "upload", params)

    seen = _post_form(echo_client, body, content_type)

    assert sorted(seen["files"]) == [["a", "a", "raw-bytes"], ["b", "b", "42"]]


def test_explicit_scalar_wrapper_is_a_plain_field(echo_client):
    body, content_type = encode_request("k", "users", "create", {"username": Scalar("alice")})

    seen = _post_form(echo_client, body, content_type)

    assert ["username", "alice"] in seen["fields"]
    assert seen["files"] == []


def test_marked_keys_convert_to_file_payloads(echo_client):
    converted = from_marked_parameters({"@database_file": "x,y", "database_id": 3})
    assert converted == {"database_file": FilePayload("x,y"), "database_id": 3}

    body, content_type = encode_request("k", "databases", "upload", converted)
    seen = _post_form(echo_client, body, content_type)

    assert seen["files"] == [["database_file", "database_file", "x,y"]]
    assert "@database_file" not in [name for name, _ in seen["fields"]]
    assert "database_file" not in [name for name, _ in seen["fields"]]


def test_content_type_carries_the_body_boundary():
    body, content_type = encode_request("k", "users", "retrieve", {"x": "1"})

    assert content_type.startswith("multipart/form-data; boundary=")
    boundary = content_type.split("boundary=", 1)[1]
    assert body.startswith(f"--{boundary}\r\n".encode())
    assert body.endswith(f"--{boundary}--\r\n".encode())
    assert body.count(f"--{boundary}\r\n".encode()) == 4


def test_each_call_uses_a_fresh_boundary():
    _, ct1 = encode_request("k", "users", "retrieve")
    _, ct2 = encode_request("k", "users", "retrieve")
    assert ct1 != ct2


def test_file_payload_from_path_enforces_cap(tmp_path):
    p = tmp_path / "values.csv"
    p.write_bytes(b"a,b\n")
    assert FilePayload.from_path(str(p)).content == b"a,b\n"

    with pytest.raises(ValueError, match="too large"):
        FilePayload.from_path(str(p), max_bytes=2)


def test_marked_and_plain_key_for_same_name_is_rejected():
    with pytest.raises(ValueError, match="database_file"):
        from_marked_parameters({"@database_file": "x,y", "database_file": "z"})
    with pytest.raises(ValueError, match="database_file"):
        from_marked_parameters({"database_file": "z", "@database_file": "x,y"})
