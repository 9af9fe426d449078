"""Reconstructs Alert views from stored Zabbix items and triggers.

Decoding never fails as a whole: a field that cannot be recovered is
replaced by a placeholder so one damaged item does not break a listing.
"""

from __future__ import annotations

from typing import Optional

from logalert.alerts.codecs import (
    CodecError,
    ExpressionCodec,
    QueryDocumentCodec,
    SearchURLCodec,
)
from logalert.alerts.hosts import host_name_for
from logalert.core.models.alerts import Alert
from logalert.core.models.zabbix import Item, Trigger
from logalert.core.utils.logging_config import get_logger

UNPARSEABLE_QUERY = "<unparseable query document>"
UNPARSEABLE_URL = "<unparseable url>"

logger = get_logger(__name__)


class AlertDecoder:
    def decode(self, item: Item, trigger: Optional[Trigger]) -> Alert:
        try:
            query_string = QueryDocumentCodec.decode(item.posts).query_string
        except CodecError as exc:
            logger.warning("query_document_undecodable", item=item.name, error=str(exc))
            query_string = UNPARSEABLE_QUERY

        try:
            search_url = SearchURLCodec.decode(item.url)
            endpoint, index = search_url.endpoint, search_url.index
            host_name = host_name_for(index)
        except CodecError as exc:
            logger.warning("search_url_undecodable", item=item.name, error=str(exc))
            endpoint = index = host_name = UNPARSEABLE_URL

        return Alert(
            name=item.name,
            key=item.key,
            host_id=item.hostid,
            host_name=host_name,
            elasticsearch=endpoint,
            index=index,
            query_string=query_string,
            delay=item.delay,
            threshold=self._threshold(trigger),
            description=item.description,
            item_id=item.itemid,
            trigger_id=trigger.triggerid if trigger else "",
        )

    @staticmethod
    def _threshold(trigger: Optional[Trigger]) -> str:
        if trigger is None:
            return ""
        try:
            return ExpressionCodec.decode(trigger.expression)
        except CodecError:
            return ""
