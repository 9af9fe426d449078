"""Zabbix API constants used when building items and triggers.

Zabbix expects most of these as integers or numeric strings; the
``(int, Enum)`` / ``(str, Enum)`` mixins keep them JSON-serializable.
"""

from enum import Enum


class ItemType(int, Enum):
    """Zabbix item types (only the ones this service creates)."""

    HTTP_AGENT = 19


class ValueType(int, Enum):
    """Type of information stored by an item."""

    FLOAT = 0
    CHARACTER = 1
    LOG = 2
    UNSIGNED = 3
    TEXT = 4


class OutputFormat(int, Enum):
    """HTTP agent response handling."""

    RAW = 0
    JSON = 1  # response wrapped as {"header": ..., "body": ...}


class HttpAuthType(int, Enum):
    NONE = 0
    BASIC = 1


class PostType(int, Enum):
    """Body format of an HTTP agent request."""

    RAW = 0
    JSON = 2
    XML = 3


class RequestMethod(int, Enum):
    GET = 0
    POST = 1
    PUT = 2
    HEAD = 3


class PreprocessingType(str, Enum):
    """Item value preprocessing step types."""

    JSONPATH = "12"


class TriggerPriority(str, Enum):
    """Trigger severity."""

    NOT_CLASSIFIED = "0"
    INFORMATION = "1"
    WARNING = "2"
    AVERAGE = "3"
    HIGH = "4"
    DISASTER = "5"


class InterfaceType(int, Enum):
    AGENT = 1


class TagOperator(str, Enum):
    """Operators accepted in ``tags`` filters of *.get methods."""

    CONTAINS = "0"
    EQUALS = "1"
    NOT_LIKE = "2"
    NOT_EQUAL = "3"
    EXISTS = "4"
    NOT_EXISTS = "5"
