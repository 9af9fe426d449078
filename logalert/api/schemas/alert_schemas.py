"""Pydantic v2 request/response schemas for the alert API.

Every response is wrapped in the same envelope::

    {"status": "success" | "failure", "error": "<text>", "data": ...}
"""

from __future__ import annotations

from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from logalert.core.models.alerts import Alert

T = TypeVar("T")


class APIEnvelope(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    status: str = "success"
    error: str = ""
    data: T


def envelope(data: Any) -> dict[str, Any]:
    return {"status": "success", "error": "", "data": data}


def failure(error: str) -> dict[str, Any]:
    return {"status": "failure", "error": error, "data": {}}


# =====================================================================
# REQUEST MODELS
# =====================================================================


class CreateAlertBody(BaseModel):
    """Request body for POST /alert/create."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"delay": "3m", "threshold": ">=10", "description": "5xx burst"}
        }
    )

    delay: str = Field(..., min_length=1, description="Evaluation window, e.g. 3m")
    threshold: str = Field(..., min_length=1, description="Comparison, e.g. >=10")
    description: Optional[str] = ""


# =====================================================================
# RESPONSE MODELS
# =====================================================================


class CreatedAlertData(BaseModel):
    itemID: str
    triggerID: str


class DeletedAlertData(BaseModel):
    itemID: str
    itemName: str


class HealthData(BaseModel):
    zabbix: dict[str, Any] = Field(default_factory=dict)
    elasticsearch: dict[str, Any] = Field(default_factory=dict)


CreateAlertResponse = APIEnvelope[CreatedAlertData]
DeleteAlertResponse = APIEnvelope[DeletedAlertData]
AlertListResponse = APIEnvelope[list[Alert]]
HealthResponse = APIEnvelope[HealthData]
