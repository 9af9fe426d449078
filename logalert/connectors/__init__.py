"""Remote system connectors package.

Re-exports the BaseConnector ABC, exception hierarchy, and the two concrete
connectors:
    ZabbixConnector (JSON-RPC API, system of record for alerts)
    ElasticsearchConnector (health probe of the log-search backend)
"""

from .base import (
    ApiError,
    BaseConnector,
    ConnectorError,
    DataParsingError,
    TransportError,
)
from .elasticsearch import ElasticsearchConnector
from .zabbix import ZabbixConnector

__all__ = [
    # Base
    "BaseConnector",
    "ConnectorError",
    "TransportError",
    "DataParsingError",
    "ApiError",
    # Connectors
    "ElasticsearchConnector",
    "ZabbixConnector",
]
