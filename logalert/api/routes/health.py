"""Health-check endpoint (no authentication)."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from logalert.api.schemas.alert_schemas import HealthResponse, envelope, failure
from logalert.connectors.base import ConnectorError
from logalert.connectors.elasticsearch import ElasticsearchConnector
from logalert.connectors.zabbix import ZabbixConnector
from logalert.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/monitor", tags=["Monitor"])


@router.get("/health_check", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings)):
    """Probe Zabbix and Elasticsearch; 500 if either is unreachable."""
    timeout = settings.health_check_timeout_seconds
    components = {
        "zabbix": ZabbixConnector(
            settings.zabbix.url, settings.zabbix.token, timeout=timeout
        ),
        "elasticsearch": ElasticsearchConnector(
            settings.elasticsearch.url,
            settings.elasticsearch.username,
            settings.elasticsearch.password,
            timeout=timeout,
        ),
    }

    data: dict[str, dict] = {}
    for name, connector in components.items():
        try:
            async with connector:
                data[name] = await connector.check()
        except ConnectorError as exc:
            logger.error("Health check failed for %s: %s", name, exc)
            return JSONResponse(status_code=500, content=failure(str(exc)))

    return envelope(data)
