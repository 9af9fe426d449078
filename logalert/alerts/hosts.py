"""Index pattern to Zabbix host mapping.

Each index pattern gets its own host, named after the pattern with the
wildcards removed (``nginx-*`` -> ``nginx-``). Hosts are created on first
use and never deleted. Lookup-then-create is not atomic: two concurrent
creates for a new pattern can both miss and both create.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from logalert.alerts.errors import ValidationError
from logalert.core.models.zabbix import Host
from logalert.core.utils.logging_config import get_logger

if TYPE_CHECKING:
    from logalert.connectors.zabbix import ZabbixConnector

logger = get_logger(__name__)


def host_name_for(index_pattern: str) -> str:
    return index_pattern.replace("*", "")


class HostResolver:
    def __init__(self, connector: "ZabbixConnector", port: str, group_id: str) -> None:
        self.connector = connector
        self.port = port
        self.group_id = group_id

    @staticmethod
    def _name(index_pattern: str) -> str:
        name = host_name_for(index_pattern)
        if not name:
            raise ValidationError(
                f"index pattern {index_pattern!r} has no characters besides wildcards"
            )
        return name

    async def lookup(self, index_pattern: str) -> Optional[Host]:
        """Return the host for ``index_pattern`` without creating it."""
        return await self.connector.get_host_by_name(self._name(index_pattern))

    async def resolve(self, index_pattern: str) -> str:
        """Return the hostid for ``index_pattern``, creating the host if needed."""
        name = self._name(index_pattern)
        host = await self.connector.get_host_by_name(name)
        if host is not None:
            return host.hostid

        host_id = await self.connector.create_host(name, self.port, self.group_id)
        logger.info("host_created", host=name, hostid=host_id)
        return host_id
