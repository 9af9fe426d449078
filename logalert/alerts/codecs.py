"""Bidirectional codecs for the alert data packed into Zabbix string fields.

Zabbix has no notion of a search query, a log index or a search backend, so
an alert is spread over three generic fields:

- ``item.posts``       -> Elasticsearch query document (QueryDocumentCodec)
- ``item.url``         -> ``<endpoint>/<index>/_search`` (SearchURLCodec)
- ``trigger.expression`` -> ``last(/<host>/<key>,#3)<threshold>`` (ExpressionCodec)

Each ``decode`` raises a CodecError subclass instead of guessing; callers
that need best-effort behaviour (AlertDecoder) catch it per field.
"""

from __future__ import annotations

import hashlib
import json
import re
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlsplit

TIME_FIELD = "@timestamp"
TIME_FORMAT = "strict_date_optional_time"
SEARCH_SUFFIX = "_search"
EXPRESSION_TEMPLATE = "last(/{host}/{key},#3){threshold}"

_EXPRESSION_RE = re.compile(r"^last\(/[^/]+/[^,]+,#3\)(.*)$", re.DOTALL)


class CodecError(ValueError):
    """Base exception for field encoding/decoding failures."""


class QueryDocumentError(CodecError):
    """The posts field is not a query document of the expected shape."""


class SearchURLError(CodecError):
    """The URL does not have the ``<endpoint>/<index>/_search`` layout."""


class ExpressionError(CodecError):
    """The trigger expression carries no recoverable threshold."""


def item_key(name: str) -> str:
    """Stable Zabbix item key for an alert name (MD5 hex digest)."""
    return hashlib.md5(name.encode("utf-8")).hexdigest()


# ---------------------------------------------------------------------------
# Query document (item.posts)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class QueryDocument:
    query_string: str
    window: str


class QueryDocumentCodec:
    """Count-only Elasticsearch query over the last ``window`` of logs."""

    @staticmethod
    def encode(query_string: str, window: str) -> str:
        document = {
            "query": {
                "bool": {
                    "must": [
                        {"query_string": {"query": query_string}},
                        {
                            "range": {
                                TIME_FIELD: {
                                    "format": TIME_FORMAT,
                                    "gte": f"now-{window}",
                                    "lte": "now",
                                }
                            }
                        },
                    ]
                }
            },
            "size": 0,
        }
        return json.dumps(document, separators=(",", ":"), ensure_ascii=False)

    @staticmethod
    def decode(posts: str) -> QueryDocument:
        try:
            document = json.loads(posts)
        except (TypeError, ValueError) as exc:
            raise QueryDocumentError("posts is not valid JSON") from exc

        try:
            clauses: list[Any] = document["query"]["bool"]["must"]
            query_string = next(
                c["query_string"]["query"] for c in clauses if "query_string" in c
            )
        except (KeyError, TypeError, StopIteration) as exc:
            raise QueryDocumentError("posts has no query_string clause") from exc
        if not isinstance(query_string, str):
            raise QueryDocumentError("query_string clause is not a string")

        return QueryDocument(query_string=query_string, window=_window(clauses))


def _window(clauses: list[Any]) -> str:
    """Relative window of the @timestamp range clause, "" when absent."""
    for clause in clauses:
        try:
            gte = clause["range"][TIME_FIELD]["gte"]
        except (KeyError, TypeError):
            continue
        if isinstance(gte, str) and gte.startswith("now-"):
            return gte[len("now-"):]
    return ""


# ---------------------------------------------------------------------------
# Search URL (item.url)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SearchURL:
    endpoint: str
    index: str


class SearchURLCodec:
    @staticmethod
    def encode(endpoint: str, index: str) -> str:
        if not index or "/" in index:
            raise SearchURLError(f"invalid index pattern: {index!r}")
        return f"{endpoint.rstrip('/')}/{index}/{SEARCH_SUFFIX}"

    @staticmethod
    def decode(url: str) -> SearchURL:
        parts = urlsplit(url)
        if not parts.scheme or not parts.netloc:
            raise SearchURLError(f"not an absolute URL: {url!r}")

        segments = parts.path.lstrip("/").split("/")
        if len(segments) < 2 or not segments[-2]:
            raise SearchURLError(f"no index segment in URL: {url!r}")

        prefix = "/".join(segments[:-2])
        endpoint = f"{parts.scheme}://{parts.netloc}"
        if prefix:
            endpoint = f"{endpoint}/{prefix}"
        return SearchURL(endpoint=endpoint, index=segments[-2])


# ---------------------------------------------------------------------------
# Trigger expression (trigger.expression)
# ---------------------------------------------------------------------------


class ExpressionCodec:
    @staticmethod
    def encode(host: str, key: str, threshold: str) -> str:
        return EXPRESSION_TEMPLATE.format(host=host, key=key, threshold=threshold)

    @staticmethod
    def decode(expression: str) -> str:
        """Return the comparison suffix, e.g. ``">=10"``.

        Zabbix returns stored expressions with the function replaced by its
        ID (``{23661}>=10``); unexpanded template text is accepted as well.
        """
        brace = expression.find("}")
        if brace != -1:
            return expression[brace + 1:]
        match = _EXPRESSION_RE.match(expression)
        if match is None:
            raise ExpressionError(f"unrecognised trigger expression: {expression!r}")
        return match.group(1)
