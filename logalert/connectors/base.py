"""Base connector infrastructure for the remote systems this service talks to.

Provides the BaseConnector abstract class with:
- Async HTTP client via httpx, opened per request scope
- Uniform translation of httpx failures into TransportError
- Structured logging via structlog

Requests are never retried: a failure surfaces immediately with its cause.

Exception hierarchy:
- ConnectorError: base for all connector errors
- TransportError: connection failure, timeout or non-2xx HTTP status
- DataParsingError: response body could not be decoded
- ApiError: the remote system answered with an application-level error
"""

import abc
from typing import Any

import httpx
import structlog


# ---------------------------------------------------------------------------
# Exception hierarchy
# ---------------------------------------------------------------------------
class ConnectorError(Exception):
    """Base exception for all connector errors."""


class TransportError(ConnectorError):
    """Raised when the HTTP exchange itself fails."""


class DataParsingError(ConnectorError):
    """Raised when response data cannot be parsed into the expected format."""


class ApiError(ConnectorError):
    """Raised when the remote API reports an error in its response envelope."""

    def __init__(self, code: int, message: str, data: str = "") -> None:
        self.code = code
        self.message = message
        self.data = data
        detail = f"{message} {data}".strip()
        super().__init__(f"[{code}] {detail}")


# ---------------------------------------------------------------------------
# BaseConnector ABC
# ---------------------------------------------------------------------------
class BaseConnector(abc.ABC):
    """Abstract base class for remote system connectors.

    Subclasses MUST override:
        SOURCE_NAME: str - identifier used in logs and error messages
        check(): reachability probe used by the health endpoint

    Subclasses MAY override:
        TIMEOUT_SECONDS: float - default HTTP timeout per request

    Usage::

        async with ZabbixConnector(url, token) as conn:
            host = await conn.get_host_by_name("nginx-")
    """

    SOURCE_NAME: str = ""
    TIMEOUT_SECONDS: float = 30.0

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float | None = None,
        auth: httpx.Auth | tuple[str, str] | None = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout if timeout is not None else self.TIMEOUT_SECONDS
        self._auth = auth
        self._client: httpx.AsyncClient | None = None
        self.log = structlog.get_logger().bind(connector=self.SOURCE_NAME)

    async def __aenter__(self) -> "BaseConnector":
        """Create and configure the httpx async client."""
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            auth=self._auth,
            limits=httpx.Limits(
                max_connections=10,
                max_keepalive_connections=5,
            ),
        )
        return self

    async def __aexit__(self, *exc: Any) -> None:
        """Close the httpx async client if open."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Return the active httpx client.

        Raises:
            ConnectorError: If the client has not been initialized via __aenter__.
        """
        if self._client is None:
            raise ConnectorError(
                f"{self.SOURCE_NAME}: HTTP client not initialized. "
                "Use 'async with connector:' context manager."
            )
        return self._client

    async def _request(
        self, method: str, url: str | None = None, **kwargs: Any
    ) -> httpx.Response:
        """Send one HTTP request and require a 2xx answer.

        Args:
            method: HTTP method (GET, POST, etc.)
            url: Absolute URL; defaults to the connector's base URL.
            **kwargs: Additional arguments passed to httpx.AsyncClient.request.

        Returns:
            The httpx.Response object.

        Raises:
            TransportError: On connection failure, timeout or non-2xx status.
        """
        target = url or self.base_url
        self.log.debug("http_request", method=method, url=target)
        try:
            response = await self.client.request(method, target, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise TransportError(
                f"{self.SOURCE_NAME}: HTTP {exc.response.status_code} from {target}"
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportError(
                f"{self.SOURCE_NAME}: request to {target} failed: {exc}"
            ) from exc
        return response

    # ---------------------------------------------------------------------------
    # Abstract interface
    # ---------------------------------------------------------------------------
    @abc.abstractmethod
    async def check(self) -> dict[str, Any]:
        """Probe the remote system.

        Returns:
            A small dict describing the remote (version, cluster name, ...).

        Raises:
            ConnectorError: If the remote system is unreachable or unhealthy.
        """
        ...
