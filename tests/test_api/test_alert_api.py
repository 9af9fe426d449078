"""FastAPI TestClient tests for the alert endpoints.

The app is built with ``create_app(settings)`` so dependencies resolve to
the test settings; Zabbix is the in-memory fake served through respx.

Covers:
  - create -> query -> delete round trip, /alert/get as a query alias through the HTTP surface
  - Basic auth (missing / wrong credentials)
  - Error envelope and status mapping (404, 409, 422, 500)
  - The legacy ``/alert/creat`` route
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from logalert.api.main import create_app

AUTH = ("admin", "admin-pass")

CREATE_PARAMS = {"name": "err-5xx", "index": "nginx-*", "query_string": "status:5*"}
CREATE_BODY = {"delay": "3m", "threshold": ">=10", "description": "5xx burst"}


# -------------------------------------------------------------------------
# Fixtures
# -------------------------------------------------------------------------
@pytest.fixture
def client(settings, fake_zabbix):
    return TestClient(create_app(settings))


def _create(client, **params):
    return client.post(
        "/api/v1/alert/create",
        params={**CREATE_PARAMS, **params},
        json=CREATE_BODY,
        auth=AUTH,
    )


# -------------------------------------------------------------------------
# Happy path
# -------------------------------------------------------------------------
def test_create_returns_ids(client, fake_zabbix):
    resp = _create(client)

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "success"
    assert body["error"] == ""
    assert body["data"]["itemID"] in fake_zabbix.items
    assert body["data"]["triggerID"] in fake_zabbix.triggers


def test_query_after_create(client):
    _create(client)

    resp = client.get("/api/v1/alert/query", auth=AUTH)

    assert resp.status_code == 200
    alerts = resp.json()["data"]
    assert len(alerts) == 1
    alert = alerts[0]
    assert alert["name"] == "err-5xx"
    assert alert["query_string"] == "status:5*"
    assert alert["index"] == "nginx-*"
    assert alert["threshold"] == ">=10"
    assert alert["elasticsearch"] == "http://es.test:9200"
    assert alert["delay"] == "3m"


def test_query_filtered_by_index(client):
    _create(client, name="a", index="nginx-*")
    _create(client, name="b", index="app-*")

    resp = client.get("/api/v1/alert/query", params={"index": "nginx-*"}, auth=AUTH)

    assert [a["name"] for a in resp.json()["data"]] == ["a"]


def test_query_empty_list(client):
    resp = client.get("/api/v1/alert/query", auth=AUTH)
    assert resp.status_code == 200
    assert resp.json()["data"] == []


def test_get_is_query_alias(client):
    _create(client, name="a", index="nginx-*")
    _create(client, name="b", index="app-*")

    resp = client.get("/api/v1/alert/get", params={"index": "nginx-*"}, auth=AUTH)

    assert resp.status_code == 200
    alerts = resp.json()["data"]
    assert [a["name"] for a in alerts] == ["a"]
    assert alerts[0]["threshold"] == ">=10"


def test_get_without_filters_lists_all(client):
    _create(client, name="a", index="nginx-*")
    _create(client, name="b", index="app-*")

    resp = client.get("/api/v1/alert/get", auth=AUTH)

    assert resp.status_code == 200
    assert sorted(a["name"] for a in resp.json()["data"]) == ["a", "b"]


def test_query_by_name(client):
    _create(client, name="a")
    _create(client, name="b")

    resp = client.get("/api/v1/alert/query", params={"name": "b"}, auth=AUTH)

    assert [a["name"] for a in resp.json()["data"]] == ["b"]


def test_delete(client, fake_zabbix):
    item_id = _create(client).json()["data"]["itemID"]

    resp = client.delete("/api/v1/alert/delete", params={"name": "err-5xx"}, auth=AUTH)

    assert resp.status_code == 200
    assert resp.json()["data"] == {"itemID": item_id, "itemName": "err-5xx"}
    assert fake_zabbix.items == {}
    assert client.get("/api/v1/alert/query", auth=AUTH).json()["data"] == []


def test_legacy_create_route(client, fake_zabbix):
    resp = client.post(
        "/api/v1/alert/creat", params=CREATE_PARAMS, json=CREATE_BODY, auth=AUTH
    )

    assert resp.status_code == 200
    assert len(fake_zabbix.items) == 1


def test_description_is_optional(client, fake_zabbix):
    resp = client.post(
        "/api/v1/alert/create",
        params=CREATE_PARAMS,
        json={"delay": "1m", "threshold": ">0"},
        auth=AUTH,
    )

    assert resp.status_code == 200
    assert next(iter(fake_zabbix.items.values()))["description"] == ""


# -------------------------------------------------------------------------
# Auth
# -------------------------------------------------------------------------
def test_missing_credentials_rejected(client, fake_zabbix):
    resp = client.get("/api/v1/alert/query")

    assert resp.status_code == 401
    assert resp.headers["WWW-Authenticate"] == "Basic"
    assert resp.json()["status"] == "failure"
    assert fake_zabbix.calls == []


def test_wrong_password_rejected(client, fake_zabbix):
    resp = client.post(
        "/api/v1/alert/create",
        params=CREATE_PARAMS,
        json=CREATE_BODY,
        auth=("admin", "nope"),
    )

    assert resp.status_code == 401
    assert fake_zabbix.items == {}


# -------------------------------------------------------------------------
# Errors
# -------------------------------------------------------------------------
def test_missing_query_parameter_is_422(client, fake_zabbix):
    resp = client.post(
        "/api/v1/alert/create",
        params={"name": "err-5xx", "index": "nginx-*"},
        json=CREATE_BODY,
        auth=AUTH,
    )

    assert resp.status_code == 422
    body = resp.json()
    assert body["status"] == "failure"
    assert "query_string" in body["error"]
    assert fake_zabbix.calls == []


def test_invalid_threshold_is_422(client, fake_zabbix):
    resp = client.post(
        "/api/v1/alert/create",
        params=CREATE_PARAMS,
        json={"delay": "3m", "threshold": "lots"},
        auth=AUTH,
    )

    assert resp.status_code == 422
    assert "threshold" in resp.json()["error"]
    assert fake_zabbix.calls == []


def test_trailing_newline_in_delay_is_422(client, fake_zabbix):
    resp = client.post(
        "/api/v1/alert/create",
        params=CREATE_PARAMS,
        json={"delay": "3m\n", "threshold": ">=10"},
        auth=AUTH,
    )

    assert resp.status_code == 422
    assert "delay" in resp.json()["error"]
    assert fake_zabbix.calls == []


def test_duplicate_name_is_409(client):
    _create(client)

    resp = _create(client, index="other-*")

    assert resp.status_code == 409
    assert resp.json()["status"] == "failure"


def test_zabbix_error_is_500_with_message(client, fake_zabbix):
    fake_zabbix.fail("item.create", data="Item exists.")

    resp = _create(client)

    assert resp.status_code == 500
    body = resp.json()
    assert body["status"] == "failure"
    assert "Item exists." in body["error"]
    assert body["data"] == {}


def test_delete_missing_is_404(client, fake_zabbix):
    resp = client.delete("/api/v1/alert/delete", params={"name": "nope"}, auth=AUTH)

    assert resp.status_code == 404
    assert "nope" in resp.json()["error"]
    assert "item.delete" not in fake_zabbix.methods()


def test_query_unknown_index_is_404(client):
    resp = client.get("/api/v1/alert/query", params={"index": "missing-*"}, auth=AUTH)
    assert resp.status_code == 404


def test_get_unknown_index_is_404(client):
    resp = client.get("/api/v1/alert/get", params={"index": "missing-*"}, auth=AUTH)
    assert resp.status_code == 404


def test_query_unknown_name_is_empty(client):
    resp = client.get("/api/v1/alert/query", params={"name": "nope"}, auth=AUTH)
    assert resp.status_code == 200
    assert resp.json()["data"] == []


def test_app_title_from_settings(settings):
    assert create_app(settings).title == settings.project_name
