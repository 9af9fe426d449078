"""Pydantic v2 models for the Zabbix JSON-RPC objects this service touches.

Response models (Host, Item, Trigger) ignore the many fields Zabbix returns
that we do not use. Params models describe exactly what each RPC method is
sent; they are validated on construction and serialized with
``to_params()`` so a malformed payload never reaches the wire.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from logalert.core.enums import (
    HttpAuthType,
    InterfaceType,
    ItemType,
    OutputFormat,
    PostType,
    PreprocessingType,
    RequestMethod,
    TagOperator,
    TriggerPriority,
    ValueType,
)

ALERT_TAG = "logs"
ALERT_TAG_VALUE = "alert"
HITS_TOTAL_JSONPATH = "$.body.hits.total.value"


# ---------------------------------------------------------------------------
# Response objects
# ---------------------------------------------------------------------------


class ZabbixObject(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class Host(ZabbixObject):
    hostid: str
    host: str = ""
    name: str = ""


class Item(ZabbixObject):
    itemid: str
    hostid: str = ""
    name: str = ""
    key: str = Field("", alias="key_")
    delay: str = ""
    url: str = ""
    posts: str = ""
    description: str = ""


class Trigger(ZabbixObject):
    triggerid: str
    expression: str = ""
    description: str = ""


# ---------------------------------------------------------------------------
# Request params
# ---------------------------------------------------------------------------


class RPCParams(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    def to_params(self) -> dict[str, Any]:
        """Serialize for the JSON-RPC ``params`` member."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Tag(BaseModel):
    tag: str = ALERT_TAG
    value: str = ALERT_TAG_VALUE


class TagFilter(BaseModel):
    tag: str = ALERT_TAG
    operator: TagOperator = TagOperator.EXISTS


class HostInterface(BaseModel):
    type: InterfaceType = InterfaceType.AGENT
    main: int = 1
    useip: int = 1
    ip: str = "127.0.0.1"
    dns: str = ""
    port: str


class HostGroupRef(BaseModel):
    groupid: str


class HostGetParams(RPCParams):
    output: str = "extend"
    filter: dict[str, list[str]]


class HostCreateParams(RPCParams):
    host: str = Field(..., min_length=1)
    interfaces: list[HostInterface]
    groups: list[HostGroupRef]


class PreprocessingStep(BaseModel):
    type: PreprocessingType = PreprocessingType.JSONPATH
    params: str = HITS_TOTAL_JSONPATH
    error_handler: str = "0"
    error_handler_params: str = ""


class ItemCreateParams(RPCParams):
    """``item.create`` payload for an HTTP agent item polling Elasticsearch."""

    type: ItemType = ItemType.HTTP_AGENT
    name: str = Field(..., min_length=1)
    key: str = Field(..., alias="key_", min_length=1)
    hostid: str = Field(..., min_length=1)
    delay: str = Field(..., min_length=1)
    value_type: ValueType = ValueType.UNSIGNED
    output_format: OutputFormat = OutputFormat.JSON
    authtype: HttpAuthType = HttpAuthType.BASIC
    username: str = ""
    password: str = ""
    timeout: str = "30s"
    url: str = Field(..., min_length=1)
    posts: str = Field(..., min_length=1)
    post_type: PostType = PostType.JSON
    request_method: RequestMethod = RequestMethod.GET
    headers: dict[str, str] = Field(
        default_factory=lambda: {"Content-Type": "application/json"}
    )
    preprocessing: list[PreprocessingStep] = Field(
        default_factory=lambda: [PreprocessingStep()]
    )
    tags: list[Tag] = Field(default_factory=lambda: [Tag()])
    description: Optional[str] = None


class ItemGetParams(RPCParams):
    output: str = "extend"
    filter: Optional[dict[str, list[str]]] = None
    hostids: Optional[list[str]] = None
    tags: list[TagFilter] = Field(default_factory=lambda: [TagFilter()])


class TriggerCreateParams(RPCParams):
    expression: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    priority: TriggerPriority = TriggerPriority.DISASTER
    tags: list[Tag] = Field(default_factory=lambda: [Tag()])


class TriggerGetParams(RPCParams):
    output: str = "extend"
    filter: Optional[dict[str, list[str]]] = None
    tags: Optional[list[TagFilter]] = None
