import json
import time
from dataclasses import dataclass
import pathlib
import sys

import pytest
import requests

sys.path.insert(0, str(pathlib.Path(__file__).resolve().parents[1]))

from openlane_gql_helper.client import execute
from openlane_gql_helper.errors import OpenlaneGQLError
from openlane_gql_helper.session import OpenlaneSession
from openlane_gql_helper.transport import Transport

FIXTURES = pathlib.Path(__file__).parent / "fixtures"


@dataclass
class DummyResponse:
    status_code: int
    _json: dict
    text: str = ""

    def json(self):
        return self._json


class ListTransport(Transport):
    def __init__(self, responses):
        self.responses = responses
        self.calls = []

    def post(self, url, headers, json, timeout):
        self.calls.append({"url": url, "headers": dict(headers), "json": json, "timeout": timeout})
        resp = self.responses.pop(0)
        if isinstance(resp, Exception):
            raise resp
        return resp


def make_session(transport):
    return OpenlaneSession("tola_token", "https://api.example.test/", transport=transport)


def load(name):
    return json.loads((FIXTURES / name).read_text())


def test_execute_success_sends_bearer_token():
    transport = ListTransport([DummyResponse(200, load("controls_page1.json"))])
    session = make_session(transport)
    data = execute(session, "query", {"first": 2}, timeout=5)
    assert data["data"]["controls"]["edges"][0]["node"]["refCode"] == "CC1.1"
    call = transport.calls[0]
    assert call["url"] == "https://api.example.test/query"
    assert call["headers"]["Authorization"] == "Bearer tola_token"
    assert call["json"] == {"query": "query", "variables": {"first": 2}}
    assert call["timeout"] == 5


def test_execute_retries_on_5xx(monkeypatch):
    transport = ListTransport([DummyResponse(500, {}, text="err"), DummyResponse(200, load("controls_page2.json"))])
    session = make_session(transport)
    slept = []
    monkeypatch.setattr(time, "sleep", lambda s: slept.append(s))
    data = execute(session, "query")
    assert len(transport.calls) == 2
    assert slept == [1]
    assert data["data"]["controls"]


def test_execute_gives_up_after_retries(monkeypatch):
    transport = ListTransport([DummyResponse(503, {}, text="unavailable") for _ in range(3)])
    session = make_session(transport)
    monkeypatch.setattr(time, "sleep", lambda s: None)
    with pytest.raises(OpenlaneGQLError) as exc:
        execute(session, "query", retries=2)
    assert exc.value.status_code == 503
    assert len(transport.calls) == 3


def test_execute_raises_on_non_200():
    transport = ListTransport([DummyResponse(401, {}, text="unauthorized")])
    session = make_session(transport)
    with pytest.raises(OpenlaneGQLError) as exc:
        execute(session, "query")
    assert "HTTP 401" in str(exc.value)
    assert exc.value.status_code == 401


def test_execute_raises_on_graphql_errors():
    transport = ListTransport([DummyResponse(200, {"errors": [{"message": "bad"}, {"message": "worse"}]})])
    session = make_session(transport)
    with pytest.raises(OpenlaneGQLError) as exc:
        execute(session, "query")
    assert "bad; worse" in str(exc.value)


def test_execute_ignores_empty_errors_array():
    transport = ListTransport([DummyResponse(200, {"data": {}, "errors": []})])
    session = make_session(transport)
    assert execute(session, "query") == {"data": {}, "errors": []}


def test_execute_raises_on_invalid_json():
    class BadJsonResponse(DummyResponse):
        def json(self):  # type: ignore[override]
            raise ValueError("no json")

    transport = ListTransport([BadJsonResponse(200, {}, text="oops")])
    session = make_session(transport)
    with pytest.raises(OpenlaneGQLError) as exc:
        execute(session, "query")
    assert "oops" in str(exc.value)


def test_execute_wraps_transport_errors():
    transport = ListTransport([requests.exceptions.ConnectionError("boom")])
    session = make_session(transport)
    with pytest.raises(OpenlaneGQLError) as exc:
        execute(session, "query")
    assert "boom" in str(exc.value)
    assert isinstance(exc.value.__cause__, requests.exceptions.ConnectionError)


def test_error_message_is_truncated():
    err = OpenlaneGQLError("x" * 1000, 500)
    assert str(err) == "HTTP 500: " + "x" * 300
