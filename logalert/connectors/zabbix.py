"""Zabbix JSON-RPC connector.

Every call is a single POST to the Zabbix API endpoint carrying the envelope
``{"jsonrpc": "2.0", "method": ..., "params": ..., "id": 1, "auth": <token>}``.
Transport failures raise TransportError; an envelope with a non-empty
``error.message`` raises ApiError. Typed wrappers build validated params
models from ``logalert.core.models.zabbix`` and parse results back into
Host / Item / Trigger objects. Lookups that match nothing return ``None``.
"""

from __future__ import annotations

from typing import Any, Optional, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from logalert.connectors.base import (
    ApiError,
    BaseConnector,
    DataParsingError,
)
from logalert.core.models.zabbix import (
    Host,
    HostCreateParams,
    HostGetParams,
    HostGroupRef,
    HostInterface,
    Item,
    ItemCreateParams,
    ItemGetParams,
    RPCParams,
    TagFilter,
    Trigger,
    TriggerCreateParams,
    TriggerGetParams,
)

JSONRPC_VERSION = "2.0"
REQUEST_ID = 1

ModelT = TypeVar("ModelT", bound=BaseModel)


class ZabbixConnector(BaseConnector):
    """Connector for the Zabbix JSON-RPC API.

    Usage::

        async with ZabbixConnector(settings.zabbix.url, settings.zabbix.token) as zbx:
            item_id = await zbx.create_item(params)
    """

    SOURCE_NAME: str = "ZABBIX"

    def __init__(self, url: str, token: str, *, timeout: float | None = None) -> None:
        super().__init__(url, timeout=timeout)
        self.token = token

    # -----------------------------------------------------------------------
    # Transport
    # -----------------------------------------------------------------------
    def _envelope(
        self, method: str, params: Any, authenticated: bool = True
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "jsonrpc": JSONRPC_VERSION,
            "method": method,
            "params": params,
            "id": REQUEST_ID,
        }
        if authenticated:
            payload["auth"] = self.token
        return payload

    async def call(
        self,
        method: str,
        params: RPCParams | dict[str, Any] | list[Any],
        *,
        authenticated: bool = True,
    ) -> Any:
        """Invoke one JSON-RPC method and return its ``result`` member.

        Args:
            method: Zabbix API method, e.g. ``"item.create"``.
            params: A params model or an already-serialized params value.
            authenticated: Attach the API token (``apiinfo.version`` must not).

        Raises:
            TransportError: The HTTP exchange failed.
            DataParsingError: The body is not a JSON-RPC envelope.
            ApiError: Zabbix reported an error.
        """
        if isinstance(params, RPCParams):
            params = params.to_params()

        self.log.debug("zabbix_call", method=method)
        response = await self._request(
            "POST",
            json=self._envelope(method, params, authenticated),
            headers={"Content-Type": "application/json-rpc"},
        )

        try:
            envelope = response.json()
        except ValueError as exc:
            raise DataParsingError(
                f"{self.SOURCE_NAME}: {method} returned a non-JSON body"
            ) from exc
        if not isinstance(envelope, dict):
            raise DataParsingError(
                f"{self.SOURCE_NAME}: {method} returned an unexpected envelope"
            )

        error = envelope.get("error") or {}
        if not isinstance(error, dict):
            error = {"message": str(error)}
        if error.get("message"):
            self.log.warning(
                "zabbix_api_error",
                method=method,
                code=error.get("code"),
                message=error.get("message"),
                data=error.get("data"),
            )
            raise ApiError(
                code=int(error.get("code") or 0),
                message=str(error["message"]),
                data=str(error.get("data") or ""),
            )

        if "result" not in envelope:
            raise DataParsingError(
                f"{self.SOURCE_NAME}: {method} response has no result"
            )
        return envelope["result"]

    # -----------------------------------------------------------------------
    # Result helpers
    # -----------------------------------------------------------------------
    @staticmethod
    def _parse_list(method: str, result: Any, model: type[ModelT]) -> list[ModelT]:
        if not isinstance(result, list):
            raise DataParsingError(f"{method}: expected a list result")
        try:
            return [model.model_validate(row) for row in result]
        except PydanticValidationError as exc:
            raise DataParsingError(f"{method}: {exc}") from exc

    @staticmethod
    def _first_id(method: str, result: Any, field: str) -> str:
        ids = result.get(field) if isinstance(result, dict) else None
        if not ids:
            raise DataParsingError(f"{method}: response carries no {field}")
        return str(ids[0])

    # -----------------------------------------------------------------------
    # Hosts
    # -----------------------------------------------------------------------
    async def get_host_by_name(self, name: str) -> Optional[Host]:
        result = await self.call(
            "host.get", HostGetParams(filter={"host": [name]})
        )
        hosts = self._parse_list("host.get", result, Host)
        return hosts[0] if hosts else None

    async def create_host(self, name: str, port: str, group_id: str) -> str:
        """Create a host with one agent interface and return its hostid."""
        params = HostCreateParams(
            host=name,
            interfaces=[HostInterface(port=port)],
            groups=[HostGroupRef(groupid=group_id)],
        )
        result = await self.call("host.create", params)
        return self._first_id("host.create", result, "hostids")

    # -----------------------------------------------------------------------
    # Items
    # -----------------------------------------------------------------------
    async def create_item(self, params: ItemCreateParams) -> str:
        result = await self.call("item.create", params)
        return self._first_id("item.create", result, "itemids")

    async def get_item_by_name(
        self, name: str, host_id: str | None = None
    ) -> Optional[Item]:
        """Return the alert item named ``name`` (optionally on one host)."""
        params = ItemGetParams(
            filter={"name": [name]},
            hostids=[host_id] if host_id else None,
        )
        items = self._parse_list("item.get", await self.call("item.get", params), Item)
        return items[0] if items else None

    async def get_items(self, host_id: str | None = None) -> list[Item]:
        """Return every alert-tagged item, or only those on ``host_id``."""
        params = ItemGetParams(hostids=[host_id] if host_id else None)
        return self._parse_list("item.get", await self.call("item.get", params), Item)

    async def delete_items(self, item_ids: list[str]) -> list[str]:
        result = await self.call("item.delete", list(item_ids))
        deleted = result.get("itemids") if isinstance(result, dict) else None
        if deleted is None:
            raise DataParsingError("item.delete: response carries no itemids")
        return [str(i) for i in deleted]

    # -----------------------------------------------------------------------
    # Triggers
    # -----------------------------------------------------------------------
    async def create_trigger(self, params: TriggerCreateParams) -> str:
        result = await self.call("trigger.create", params)
        return self._first_id("trigger.create", result, "triggerids")

    async def get_trigger_by_name(self, name: str) -> Optional[Trigger]:
        params = TriggerGetParams(
            filter={"description": [name]},
            tags=[TagFilter()],
        )
        triggers = self._parse_list(
            "trigger.get", await self.call("trigger.get", params), Trigger
        )
        return triggers[0] if triggers else None

    # -----------------------------------------------------------------------
    # Health
    # -----------------------------------------------------------------------
    async def api_version(self) -> str:
        return str(await self.call("apiinfo.version", [], authenticated=False))

    async def check(self) -> dict[str, Any]:
        return {"url": self.base_url, "version": await self.api_version()}
