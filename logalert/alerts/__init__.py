"""Alert encode/decode layer and workflows.

Provides:
  - Field codecs: QueryDocumentCodec, SearchURLCodec, ExpressionCodec, item_key
  - AlertEncoder / AlertDecoder: LogicalAlert <-> Zabbix item + trigger
  - HostResolver: index pattern -> Zabbix host
  - AlertService: create / delete / query workflows

Usage:
    from logalert.alerts import AlertService
    from logalert.alerts.codecs import SearchURLCodec
"""

from logalert.alerts.codecs import (
    ExpressionCodec,
    QueryDocumentCodec,
    SearchURLCodec,
    item_key,
)
from logalert.alerts.decoder import AlertDecoder
from logalert.alerts.encoder import AlertEncoder
from logalert.alerts.errors import (
    AlertError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from logalert.alerts.hosts import HostResolver, host_name_for
from logalert.alerts.service import AlertService, validate_alert

__all__ = [
    "AlertDecoder",
    "AlertEncoder",
    "AlertError",
    "AlertService",
    "ConflictError",
    "ExpressionCodec",
    "HostResolver",
    "NotFoundError",
    "QueryDocumentCodec",
    "SearchURLCodec",
    "ValidationError",
    "host_name_for",
    "item_key",
    "validate_alert",
]
