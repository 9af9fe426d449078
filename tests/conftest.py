"""Root pytest configuration and shared fixtures.

Provides common test fixtures used across all test modules:
- load_fixture: callable to load JSON fixtures from tests/fixtures/
- settings: Settings pointing at the fake Zabbix / Elasticsearch URLs
- fake_zabbix: in-memory Zabbix JSON-RPC API served through respx
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

import httpx
import pytest
import respx

from logalert.core.config import (
    BasicAuthSettings,
    ElasticsearchSettings,
    Settings,
    ZabbixSettings,
)

FIXTURES_DIR = Path(__file__).parent / "fixtures"

ZABBIX_URL = "http://zabbix.test/api_jsonrpc.php"
ZABBIX_TOKEN = "test-token"
ES_URL = "http://es.test:9200"

_FUNCTION_RE = re.compile(r"^last\(/[^/]+/[^,]+,#3\)")


@pytest.fixture
def load_fixture() -> Any:
    """Return a callable that loads JSON fixtures from tests/fixtures/.

    Usage::

        def test_something(load_fixture):
            data = load_fixture("zabbix_item_get.json")
    """
    def _load(filename: str) -> Any:
        filepath = FIXTURES_DIR / filename
        with filepath.open("r", encoding="utf-8") as f:
            return json.load(f)
    return _load


@pytest.fixture
def settings() -> Settings:
    """Settings wired to the fake remote systems."""
    return Settings(
        basic=BasicAuthSettings(username="admin", password="admin-pass"),
        zabbix=ZabbixSettings(url=ZABBIX_URL, token=ZABBIX_TOKEN),
        elasticsearch=ElasticsearchSettings(
            url=ES_URL, username="elastic", password="es-pass"
        ),
    )


# ---------------------------------------------------------------------------
# Fake Zabbix
# ---------------------------------------------------------------------------
class _RPCFault(Exception):
    def __init__(self, message: str, data: str = "") -> None:
        super().__init__(message)
        self.error = {"code": -32602, "message": message, "data": data}


class FakeZabbix:
    """Just enough of the Zabbix API to run the alert workflows.

    Triggers are stored the way Zabbix stores them: the ``last(...)``
    function is replaced by ``{<functionid>}``. Deleting an item removes the
    triggers built on it. ``fail(method)`` makes a method answer with an
    error envelope.
    """

    def __init__(self) -> None:
        self.hosts: dict[str, dict[str, Any]] = {}
        self.items: dict[str, dict[str, Any]] = {}
        self.triggers: dict[str, dict[str, Any]] = {}
        self.calls: list[dict[str, Any]] = []
        self._failures: dict[str, _RPCFault] = {}
        self._next_id = 10000

    # -- helpers ----------------------------------------------------------
    def _new_id(self) -> str:
        self._next_id += 1
        return str(self._next_id)

    def fail(self, method: str, message: str = "Invalid params.", data: str = "") -> None:
        self._failures[method] = _RPCFault(message, data)

    def methods(self) -> list[str]:
        return [c["method"] for c in self.calls]

    def handler(self, request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        self.calls.append(payload)
        method = payload["method"]
        try:
            if method in self._failures:
                raise self._failures[method]
            result = getattr(self, "_" + method.replace(".", "_"))(payload["params"])
        except _RPCFault as fault:
            return httpx.Response(200, json={"jsonrpc": "2.0", "error": fault.error, "id": 1})
        return httpx.Response(200, json={"jsonrpc": "2.0", "result": result, "id": 1})

    # -- API methods ------------------------------------------------------
    def _apiinfo_version(self, params: Any) -> str:
        return "6.0.25"

    def _host_get(self, params: dict[str, Any]) -> list[dict[str, Any]]:
        names = params.get("filter", {}).get("host", [])
        return [h for h in self.hosts.values() if h["host"] in names]

    def _host_create(self, params: dict[str, Any]) -> dict[str, Any]:
        hostid = self._new_id()
        self.hosts[hostid] = {"hostid": hostid, "host": params["host"], "name": params["host"]}
        return {"hostids": [hostid]}

    def _item_create(self, params: dict[str, Any]) -> dict[str, Any]:
        for item in self.items.values():
            if item["hostid"] == params["hostid"] and item["key_"] == params["key_"]:
                raise _RPCFault(
                    "Invalid params.",
                    f'An item with key "{params["key_"]}" already exists.',
                )
        itemid = self._new_id()
        self.items[itemid] = {
            "itemid": itemid,
            "hostid": params["hostid"],
            "name": params["name"],
            "key_": params["key_"],
            "delay": params["delay"],
            "url": params["url"],
            "posts": params["posts"],
            "description": params.get("description", ""),
            "type": str(params["type"]),
            "value_type": str(params["value_type"]),
        }
        return {"itemids": [itemid]}

    def _item_get(self, params: dict[str, Any]) -> list[dict[str, Any]]:
        items = list(self.items.values())
        names = (params.get("filter") or {}).get("name")
        if names is not None:
            items = [i for i in items if i["name"] in names]
        hostids = params.get("hostids")
        if hostids is not None:
            items = [i for i in items if i["hostid"] in hostids]
        return items

    def _item_delete(self, params: list[str]) -> dict[str, Any]:
        for itemid in params:
            if itemid not in self.items:
                raise _RPCFault(
                    "Invalid params.",
                    "No permissions to referred object or it does not exist!",
                )
        for itemid in params:
            item = self.items.pop(itemid)
            for triggerid in [
                t["triggerid"] for t in self.triggers.values() if t["itemid"] == itemid
            ]:
                del self.triggers[triggerid]
        return {"itemids": list(params)}

    def _trigger_create(self, params: dict[str, Any]) -> dict[str, Any]:
        host, key = params["expression"][len("last(/"):].split(",", 1)[0].split("/", 1)
        item = next(
            (
                i
                for i in self.items.values()
                if i["key_"] == key and self.hosts.get(i["hostid"], {}).get("host") == host
            ),
            None,
        )
        if item is None:
            raise _RPCFault(
                "Invalid params.",
                f'Incorrect item key "{key}" provided for trigger expression on "{host}".',
            )
        triggerid = self._new_id()
        functionid = self._new_id()
        self.triggers[triggerid] = {
            "triggerid": triggerid,
            "itemid": item["itemid"],
            "expression": _FUNCTION_RE.sub("{" + functionid + "}", params["expression"]),
            "description": params["description"],
            "priority": params["priority"],
        }
        return {"triggerids": [triggerid]}

    def _trigger_get(self, params: dict[str, Any]) -> list[dict[str, Any]]:
        triggers = list(self.triggers.values())
        descriptions = (params.get("filter") or {}).get("description")
        if descriptions is not None:
            triggers = [t for t in triggers if t["description"] in descriptions]
        return triggers


@pytest.fixture
def fake_zabbix():
    """Serve a fresh FakeZabbix at ZABBIX_URL for the duration of a test."""
    fake = FakeZabbix()
    with respx.mock(assert_all_called=False) as mock:
        mock.post(ZABBIX_URL).mock(side_effect=fake.handler)
        fake.router = mock
        yield fake
