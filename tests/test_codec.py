import json

import pytest

from core.errors import MalformedInput
from users import codec
from users.schemas import INT64_MAX, User


def test_decode_full_body():
    user = codec.decode_user(b'{"name": "Ann", "email": "ann@x.com", "age": 30}')

    assert user == User(id=0, name="Ann", email="ann@x.com", age=30)


def test_decode_ignores_id_and_unknown_keys():
    user = codec.decode_user(b'{"id": 9, "name": "Ann", "nickname": "A"}')

    assert user.id == 0
    assert user.name == "Ann"


def test_decode_merges_onto_existing_record():
    stored = User(id=3, name="Ann", email="ann@x.com", age=30)

    merged = codec.decode_user(b'{"age": 31, "email": null}', into=stored)

    assert merged == User(id=3, name="Ann", email="ann@x.com", age=31)
    # the original value is not mutated
    assert stored.age == 30


def test_decode_accepts_empty_string_name():
    assert codec.decode_user(b'{"name": ""}').name == ""


@pytest.mark.parametrize(
    "raw",
    [
        b"",
        b"{",
        b"null",
        b'"Ann"',
        b'{"age": true}',
        b'{"age": "30"}',
        b'{"age": 30.0}',
        b'{"email": ["a@x.com"]}',
        json.dumps({"age": INT64_MAX + 1}).encode(),
    ],
)
def test_decode_rejects_malformed(raw):
    with pytest.raises(MalformedInput):
        codec.decode_user(raw)


def test_encode_uses_wire_field_names():
    payload = json.loads(codec.encode_user(User(id=1, name="Ann", email="ann@x.com", age=30)))

    assert payload == {"id": 1, "name": "Ann", "email": "ann@x.com", "age": 30}


def test_encode_then_decode_preserves_fields():
    original = User(id=5, name="Bo", email="bo@x.com", age=41)

    decoded = codec.decode_user(codec.encode_user(original), into=User(id=5))

    assert decoded == original


def test_encode_list():
    users = [User(id=1, name="a"), User(id=2, name="b")]

    assert [u["id"] for u in json.loads(codec.encode_user_list(users))] == [1, 2]
    assert json.loads(codec.encode_user_list([])) == []


def test_json_response_sets_status_and_media_type():
    resp = codec.json_response(b"{}", status_code=201)

    assert resp.status_code == 201
    assert resp.media_type == "application/json"
    assert resp.body == b"{}"
