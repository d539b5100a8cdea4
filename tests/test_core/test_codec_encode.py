from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone

import pytest
from pydantic import BaseModel

from boundjson.core.codec import JSON_CONTENT_TYPE, error_json, success_json, to_json_bytes, write_json
from boundjson.core.errors import SerializationFailedError, TooLargeError


class User(BaseModel):
    id: int
    email: str
    active: bool = True


@dataclass
class Point:
    x: int
    y: int


def test_write_json_with_headers():
    response = write_json(201, {"id": 5}, {"X-Foo": "bar"})
    assert response.status_code == 201
    assert response.headers["x-foo"] == "bar"
    assert response.headers["content-type"] == JSON_CONTENT_TYPE
    assert response.body == b'{"id":5}'


def test_content_type_cannot_be_overridden():
    response = write_json(200, [1, 2], {"Content-Type": "text/plain"}, {"content-type": "text/html"})
    assert response.headers.getlist("content-type") == [JSON_CONTENT_TYPE]


def test_later_header_sets_win_per_key():
    response = write_json(
        200,
        {},
        {"X-Trace": "first", "X-Keep": "kept"},
        {"x-trace": "second"},
    )
    assert response.headers.getlist("x-trace") == ["second"]
    assert response.headers["x-keep"] == "kept"


def test_multi_value_headers():
    response = write_json(200, {}, {"Vary": "Cookie"}, {"Vary": ["Accept", "Origin"]})
    assert response.headers.getlist("vary") == ["Accept", "Origin"]


def test_no_headers_still_sets_content_type():
    response = write_json(200, None)
    assert response.headers["content-type"] == JSON_CONTENT_TYPE
    assert response.body == b"null"


def test_round_trip_preserves_structure():
    value = {
        "name": "Zoë",
        "tags": ["a", "b"],
        "nested": {"count": 3, "ratio": 0.5, "ok": True, "missing": None},
    }
    response = write_json(200, value)
    assert json.loads(response.body) == value


def test_models_and_dataclasses_are_serialized():
    stamp = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    body = to_json_bytes({"user": User(id=1, email="a@b.c"), "point": Point(1, 2), "at": stamp})
    assert json.loads(body) == {
        "user": {"id": 1, "email": "a@b.c", "active": True},
        "point": {"x": 1, "y": 2},
        "at": "2024-01-02T03:04:05Z",
    }


def test_unserializable_value_fails():
    with pytest.raises(SerializationFailedError):
        write_json(200, {"handle": object()})


def test_cycles_fail():
    loop: dict = {}
    loop["self"] = loop
    with pytest.raises(SerializationFailedError):
        write_json(200, loop)


def test_nan_fails():
    with pytest.raises(SerializationFailedError):
        write_json(200, {"value": float("nan")})


def test_error_json_defaults_to_bad_request():
    response = error_json(Exception("bad input"))
    assert response.status_code == 400
    assert response.body == b'{"error":true,"message":"bad input"}'
    assert response.headers["content-type"] == JSON_CONTENT_TYPE


def test_error_json_status_override():
    response = error_json(TooLargeError(), 413)
    assert response.status_code == 413
    assert json.loads(response.body) == {
        "error": True,
        "message": "JSON data is too large and exceeds the maximum buffer size (1MB)",
    }


def test_error_json_accepts_plain_text():
    response = error_json("Not Found", 404, {"X-Reason": "route"})
    assert response.status_code == 404
    assert response.headers["x-reason"] == "route"
    assert json.loads(response.body) == {"error": True, "message": "Not Found"}


def test_success_json_carries_data():
    response = success_json("logged in", {"id": 7}, 202)
    assert response.status_code == 202
    assert json.loads(response.body) == {"error": False, "message": "logged in", "data": {"id": 7}}


def test_success_json_omits_missing_data():
    response = success_json("done")
    assert json.loads(response.body) == {"error": False, "message": "done"}
