"""Alert-level models: the operator's logical alert and its decoded view."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class LogicalAlert(BaseModel):
    """An alert rule as declared by the operator (never stored locally)."""

    model_config = ConfigDict(frozen=True)

    name: str
    index_pattern: str
    query_string: str
    delay: str
    threshold: str
    description: str = ""


class EncodedAlert(BaseModel):
    """Zabbix field values packed from one LogicalAlert."""

    model_config = ConfigDict(frozen=True)

    key: str
    host_name: str
    posts: str
    url: str
    expression: str


class Alert(BaseModel):
    """Alert reconstructed from a Zabbix item and its paired trigger."""

    name: str
    key: str
    host_id: str
    host_name: str
    elasticsearch: str
    index: str
    query_string: str
    delay: str
    threshold: str
    description: str = ""
    item_id: str = ""
    trigger_id: str = ""


class CreatedAlert(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    item_id: str = Field(..., serialization_alias="itemID")
    trigger_id: str = Field(..., serialization_alias="triggerID")


class DeletedAlert(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    item_id: str = Field(..., serialization_alias="itemID")
    name: str = Field(..., serialization_alias="itemName")
