"""Alert management endpoints (Basic auth).

Provides:
- POST   /alert/create  -- create an alert (item + trigger) for an index
- GET    /alert/query   -- list alerts, optionally of one index and/or name
- GET    /alert/get     -- same as /alert/query
- DELETE /alert/delete  -- delete an alert by name (optionally scoped to index)

Workflow errors propagate to the exception handlers registered in
``logalert.api.main``, which map them to 404/409/422/500.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from logalert.alerts.service import AlertService
from logalert.api.auth import verify_basic
from logalert.api.deps import get_alert_service
from logalert.api.schemas.alert_schemas import (
    AlertListResponse,
    CreateAlertBody,
    CreateAlertResponse,
    DeleteAlertResponse,
    envelope,
)
from logalert.core.models.alerts import LogicalAlert

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/alert", tags=["Alert"], dependencies=[Depends(verify_basic)]
)


# ---------------------------------------------------------------------------
# POST /alert/create
# ---------------------------------------------------------------------------
@router.post("/create", response_model=CreateAlertResponse)
@router.post("/creat", response_model=CreateAlertResponse, include_in_schema=False)
async def create_alert(
    body: CreateAlertBody,
    name: str = Query(..., min_length=1, description="Alert name"),
    index: str = Query(..., min_length=1, description="Index pattern, e.g. nginx-*"),
    query_string: str = Query(..., min_length=1, description="Lucene query string"),
    service: AlertService = Depends(get_alert_service),
):
    """Create the Zabbix item and trigger that evaluate this alert."""
    alert = LogicalAlert(
        name=name,
        index_pattern=index,
        query_string=query_string,
        delay=body.delay,
        threshold=body.threshold,
        description=body.description or "",
    )
    created = await service.create_alert(alert)
    return envelope(created.model_dump(by_alias=True))


# ---------------------------------------------------------------------------
# GET /alert/query, /alert/get
# ---------------------------------------------------------------------------
@router.get("/query", response_model=AlertListResponse)
@router.get("/get", response_model=AlertListResponse)
async def query_alerts(
    index: Optional[str] = Query(None, description="Only alerts of this index pattern"),
    name: Optional[str] = Query(None, description="Only the alert with this name"),
    service: AlertService = Depends(get_alert_service),
):
    """Return decoded alerts; fields that cannot be decoded hold placeholders."""
    alerts = await service.query_alerts(index or None, name or None)
    return envelope([a.model_dump() for a in alerts])


# ---------------------------------------------------------------------------
# DELETE /alert/delete
# ---------------------------------------------------------------------------
@router.delete("/delete", response_model=DeleteAlertResponse)
async def delete_alert(
    name: str = Query(..., min_length=1),
    index: Optional[str] = Query(None),
    service: AlertService = Depends(get_alert_service),
):
    """Delete the alert's item; Zabbix drops the dependent trigger with it."""
    deleted = await service.delete_alert(name, index or None)
    return envelope(deleted.model_dump(by_alias=True))
