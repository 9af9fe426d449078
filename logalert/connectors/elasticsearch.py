"""Elasticsearch connector.

The service never searches Elasticsearch itself (Zabbix polls the generated
``_search`` URLs); this connector only probes the cluster for the health
check, using the same credentials that are handed to Zabbix items.
"""

from __future__ import annotations

from typing import Any

from logalert.connectors.base import BaseConnector, DataParsingError


class ElasticsearchConnector(BaseConnector):
    """Reachability probe for the log-search backend."""

    SOURCE_NAME: str = "ELASTICSEARCH"

    def __init__(
        self,
        url: str,
        username: str = "",
        password: str = "",
        *,
        timeout: float | None = None,
    ) -> None:
        auth = (username, password) if username else None
        super().__init__(url, timeout=timeout, auth=auth)

    async def check(self) -> dict[str, Any]:
        """GET the cluster root and report its name and version."""
        response = await self._request("GET")
        try:
            info = response.json()
        except ValueError as exc:
            raise DataParsingError(
                f"{self.SOURCE_NAME}: cluster info is not JSON"
            ) from exc
        if not isinstance(info, dict):
            info = {}
        return {
            "url": self.base_url,
            "cluster_name": info.get("cluster_name", ""),
            "version": (info.get("version") or {}).get("number", ""),
        }
