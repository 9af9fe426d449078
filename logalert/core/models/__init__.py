"""Pydantic models for the log alert service.

Re-exports:
  - Zabbix objects: Host, Item, Trigger
  - Zabbix request params: HostGetParams, HostCreateParams, ItemGetParams,
    ItemCreateParams, TriggerGetParams, TriggerCreateParams
  - Alert models: LogicalAlert, EncodedAlert, Alert, CreatedAlert, DeletedAlert
"""

from .alerts import Alert, CreatedAlert, DeletedAlert, EncodedAlert, LogicalAlert
from .zabbix import (
    Host,
    HostCreateParams,
    HostGetParams,
    HostGroupRef,
    HostInterface,
    Item,
    ItemCreateParams,
    ItemGetParams,
    Trigger,
    TriggerCreateParams,
    TriggerGetParams,
)

__all__ = [
    "Alert",
    "CreatedAlert",
    "DeletedAlert",
    "EncodedAlert",
    "LogicalAlert",
    "Host",
    "HostCreateParams",
    "HostGetParams",
    "HostGroupRef",
    "HostInterface",
    "Item",
    "ItemCreateParams",
    "ItemGetParams",
    "Trigger",
    "TriggerCreateParams",
    "TriggerGetParams",
]
