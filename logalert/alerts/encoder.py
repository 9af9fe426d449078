"""Packs a LogicalAlert into Zabbix item and trigger payloads."""

from __future__ import annotations

from logalert.alerts.codecs import (
    ExpressionCodec,
    QueryDocumentCodec,
    SearchURLCodec,
    item_key,
)
from logalert.alerts.hosts import host_name_for
from logalert.core.models.alerts import EncodedAlert, LogicalAlert
from logalert.core.models.zabbix import ItemCreateParams, TriggerCreateParams


class AlertEncoder:
    """Pure transform from a logical alert to Zabbix field values.

    The generated item is an HTTP agent polling ``search_endpoint`` with the
    given Elasticsearch credentials; nothing is sent anywhere from here.
    """

    def __init__(
        self, search_endpoint: str, username: str = "", password: str = ""
    ) -> None:
        self.search_endpoint = search_endpoint
        self.username = username
        self.password = password

    def encode(self, alert: LogicalAlert, host_name: str | None = None) -> EncodedAlert:
        key = item_key(alert.name)
        host = host_name if host_name is not None else host_name_for(alert.index_pattern)
        return EncodedAlert(
            key=key,
            host_name=host,
            posts=QueryDocumentCodec.encode(alert.query_string, alert.delay),
            url=SearchURLCodec.encode(self.search_endpoint, alert.index_pattern),
            expression=ExpressionCodec.encode(host, key, alert.threshold),
        )

    def item_params(
        self, alert: LogicalAlert, encoded: EncodedAlert, host_id: str
    ) -> ItemCreateParams:
        return ItemCreateParams(
            name=alert.name,
            key=encoded.key,
            hostid=host_id,
            delay=alert.delay,
            username=self.username,
            password=self.password,
            url=encoded.url,
            posts=encoded.posts,
            description=alert.description or None,
        )

    def trigger_params(
        self, alert: LogicalAlert, encoded: EncodedAlert
    ) -> TriggerCreateParams:
        return TriggerCreateParams(expression=encoded.expression, description=alert.name)
