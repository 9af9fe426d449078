"""FastAPI dependency injection for remote connectors and the alert service."""

from collections.abc import AsyncGenerator

from fastapi import Depends

from logalert.alerts.service import AlertService
from logalert.connectors.zabbix import ZabbixConnector
from logalert.core.config import Settings, get_settings


async def get_zabbix(
    settings: Settings = Depends(get_settings),
) -> AsyncGenerator[ZabbixConnector, None]:
    """Yield a Zabbix connector whose HTTP client lives for one request."""
    async with ZabbixConnector(
        settings.zabbix.url,
        settings.zabbix.token,
        timeout=settings.request_timeout_seconds,
    ) as connector:
        yield connector


async def get_alert_service(
    connector: ZabbixConnector = Depends(get_zabbix),
    settings: Settings = Depends(get_settings),
) -> AlertService:
    return AlertService(connector, settings)
