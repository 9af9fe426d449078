"""Alert workflows on top of Zabbix: create, delete and query.

Each workflow is a short linear chain of awaited Zabbix calls. Nothing is
kept between requests; Zabbix is the only record of which alerts exist.

Create:
    1. Reject the name if an alert item with it already exists
    2. Resolve (or create) the host for the index pattern
    3. Encode the alert and create the item
    4. Create the trigger; on failure delete the item again
Delete:
    host lookup (when scoped to an index) -> item by name -> item.delete
Query:
    items (all, of one host, or one by name) -> trigger by name per item -> decode
"""

from __future__ import annotations

import re
from typing import Optional

from logalert.alerts.decoder import AlertDecoder
from logalert.alerts.encoder import AlertEncoder
from logalert.alerts.errors import ConflictError, NotFoundError, ValidationError
from logalert.alerts.hosts import HostResolver
from logalert.connectors.base import ConnectorError
from logalert.connectors.zabbix import ZabbixConnector
from logalert.core.config import Settings
from logalert.core.models.alerts import Alert, CreatedAlert, DeletedAlert, LogicalAlert
from logalert.core.models.zabbix import Item, Trigger
from logalert.core.utils.logging_config import get_logger

logger = get_logger(__name__)

DELAY_RE = re.compile(r"\d+[smhdw]")
THRESHOLD_RE = re.compile(r"(<>|<=|>=|=|<|>)\s*-?\d+(\.\d+)?")


def validate_alert(alert: LogicalAlert) -> None:
    """Reject alert definitions that would not survive the field encoding.

    Raises:
        ValidationError: Describing the first offending field.
    """
    for field in ("name", "index_pattern", "query_string", "delay", "threshold"):
        if not getattr(alert, field).strip():
            raise ValidationError(f"{field} must not be empty")
    if "/" in alert.index_pattern:
        raise ValidationError("index pattern must not contain '/'")
    if not DELAY_RE.fullmatch(alert.delay):
        raise ValidationError(
            f"delay {alert.delay!r} must be a number followed by s, m, h, d or w"
        )
    if not THRESHOLD_RE.fullmatch(alert.threshold):
        raise ValidationError(
            f"threshold {alert.threshold!r} must be a comparison such as '>=10'"
        )


class AlertService:
    """Composes host resolution, encoding and decoding into alert workflows.

    Args:
        connector: An open ZabbixConnector (inside its ``async with`` block).
        settings: Service settings; supplies Elasticsearch endpoint and
            credentials plus the host defaults.
    """

    def __init__(self, connector: ZabbixConnector, settings: Settings) -> None:
        self.connector = connector
        self.hosts = HostResolver(
            connector,
            port=settings.zabbix.agent_port,
            group_id=settings.zabbix.host_group_id,
        )
        self.encoder = AlertEncoder(
            settings.elasticsearch.url,
            username=settings.elasticsearch.username,
            password=settings.elasticsearch.password,
        )
        self.decoder = AlertDecoder()

    # -------------------------------------------------------------------------
    # Create
    # -------------------------------------------------------------------------

    async def create_alert(self, alert: LogicalAlert) -> CreatedAlert:
        validate_alert(alert)

        if await self.connector.get_item_by_name(alert.name) is not None:
            raise ConflictError(f"alert {alert.name!r} already exists")

        host_id = await self.hosts.resolve(alert.index_pattern)
        encoded = self.encoder.encode(alert)

        item_id = await self.connector.create_item(
            self.encoder.item_params(alert, encoded, host_id)
        )
        try:
            trigger_id = await self.connector.create_trigger(
                self.encoder.trigger_params(alert, encoded)
            )
        except ConnectorError:
            await self._discard_item(item_id, alert.name)
            raise

        logger.info(
            "alert_created",
            alert=alert.name,
            index=alert.index_pattern,
            itemid=item_id,
            triggerid=trigger_id,
        )
        return CreatedAlert(item_id=item_id, trigger_id=trigger_id)

    async def _discard_item(self, item_id: str, name: str) -> None:
        """Delete an item whose trigger could not be created."""
        try:
            await self.connector.delete_items([item_id])
        except ConnectorError as exc:
            logger.error("orphaned_item", alert=name, itemid=item_id, error=str(exc))
        else:
            logger.warning("item_rolled_back", alert=name, itemid=item_id)

    # -------------------------------------------------------------------------
    # Delete
    # -------------------------------------------------------------------------

    async def delete_alert(self, name: str, index: Optional[str] = None) -> DeletedAlert:
        if not name:
            raise ValidationError("name must not be empty")

        host_id = None
        if index:
            host = await self.hosts.lookup(index)
            if host is None:
                raise NotFoundError(f"no host for index {index!r}")
            host_id = host.hostid

        item = await self.connector.get_item_by_name(name, host_id)
        if item is None:
            raise NotFoundError(f"alert {name!r} not found")

        await self.connector.delete_items([item.itemid])
        logger.info("alert_deleted", alert=name, itemid=item.itemid)
        return DeletedAlert(item_id=item.itemid, name=name)

    # -------------------------------------------------------------------------
    # Query
    # -------------------------------------------------------------------------

    async def query_alerts(
        self, index: Optional[str] = None, name: Optional[str] = None
    ) -> list[Alert]:
        """Decoded alerts, optionally of one index pattern and/or one name.

        An unknown index is a NotFoundError; an unknown name is an empty list.
        """
        host_id = None
        if index:
            host = await self.hosts.lookup(index)
            if host is None:
                raise NotFoundError(f"no host for index {index!r}")
            host_id = host.hostid

        if name:
            item = await self.connector.get_item_by_name(name, host_id)
            items = [item] if item is not None else []
        else:
            items = await self.connector.get_items(host_id)

        alerts = []
        for item in items:
            trigger = await self._paired_trigger(item)
            alerts.append(self.decoder.decode(item, trigger))
        return alerts

    async def _paired_trigger(self, item: Item) -> Optional[Trigger]:
        """Trigger sharing the item's name; lookup failures count as missing."""
        try:
            return await self.connector.get_trigger_by_name(item.name)
        except ConnectorError as exc:
            logger.warning("trigger_lookup_failed", alert=item.name, error=str(exc))
            return None
