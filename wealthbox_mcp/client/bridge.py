"""
Wealthbox HTTP Bridge

Performs a single authenticated call against the Wealthbox API and
normalizes the outcome into parsed JSON, raw text, or an exception.
"""

import json
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Mapping

import anyio
import httpx

from ..core.models import Settings

logger = logging.getLogger(__name__)


class BridgeError(Exception):
    """Base class for failures originating from an upstream call."""
    pass


class APIError(BridgeError):
    """Raised when the API answers with a non-2xx status."""

    def __init__(self, status_code: int, body: str = ""):
        super().__init__(f"Wealthbox API error {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class TransportError(BridgeError):
    """Raised when the API cannot be reached or the call times out."""
    pass


class DecodeError(BridgeError):
    """Raised when a response declared as JSON does not parse."""
    pass


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def build_query_params(query: Mapping[str, Any] | None) -> list[tuple[str, str]]:
    """
    Convert a query mapping into URL parameters.

    None values are dropped rather than serialized. List values become
    repeated parameters.

    Args:
        query: Mapping of parameter names to scalar values

    Returns:
        List of (name, value) string pairs
    """
    params: list[tuple[str, str]] = []
    if not query:
        return params

    for key, value in query.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            params.extend((key, _stringify(item)) for item in value if item is not None)
        else:
            params.append((key, _stringify(value)))
    return params


class WealthboxClient:
    """
    Thin HTTP client for the Wealthbox REST API.

    Features:
    - Token authentication through the ACCESS_TOKEN header
    - JSON body serialization and query string building
    - Wall-clock deadline on every call, with no retries
    - Response classification by status and content type

    Each call runs on its own event loop under ``anyio.fail_after``, so the
    deadline covers connecting, sending and reading the whole response.
    """

    def __init__(
        self,
        settings: Settings,
        http_client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize the client.

        Args:
            settings: Session settings with base URL, token and timeout
            http_client: Optional async httpx client shared by every call
                (a fresh one is opened per call if None)
        """
        self.settings = settings
        self.base_url = settings.base_url.rstrip("/")
        self.timeout_seconds = settings.timeout_seconds
        self.http_client = http_client

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        if self.http_client is not None:
            yield self.http_client
            return
        # pooled connections are bound to the loop that opened them
        async with httpx.AsyncClient(timeout=self.timeout_seconds) as http_client:
            yield http_client

    def _build_url(self, path: str) -> str:
        """
        Build the full URL from the base URL and an API path.

        Args:
            path: API path (e.g., "/v1/contacts")

        Returns:
            Full URL
        """
        return f"{self.base_url}/{path.lstrip('/')}"

    def _build_headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "ACCESS_TOKEN": self.settings.token,
        }

    def execute(
        self,
        method: str,
        path: str,
        body: Any = None,
        query: Mapping[str, Any] | None = None,
    ) -> Any:
        """
        Make one authenticated request and normalize the response.

        Blocks the calling thread until the call completes or its deadline
        passes.

        Args:
            method: HTTP method (GET, POST, PUT, PATCH, DELETE)
            path: API path beginning with /v1
            body: JSON-serializable request body, or None for no body
            query: Query parameters; None values are omitted

        Returns:
            Decoded JSON for JSON responses, raw text otherwise

        Raises:
            APIError: On a non-2xx response
            TransportError: On network failure or timeout
            DecodeError: If a JSON response fails to parse
        """
        return anyio.run(self._execute, method, path, body, query)

    async def _execute(
        self,
        method: str,
        path: str,
        body: Any,
        query: Mapping[str, Any] | None,
    ) -> Any:
        method = method.upper()
        url = self._build_url(path)
        params = build_query_params(query)
        content = json.dumps(body) if body is not None else None

        logger.debug(f"{method} {path} params={params} body={'yes' if content is not None else 'no'}")

        try:
            async with self._session() as http_client:
                with anyio.fail_after(self.timeout_seconds):
                    response = await http_client.request(
                        method=method,
                        url=url,
                        headers=self._build_headers(),
                        params=params or None,
                        content=content,
                        timeout=self.timeout_seconds,
                    )
        except (TimeoutError, httpx.TimeoutException) as e:
            logger.warning(f"{method} {path} timed out after {self.timeout_seconds}s")
            raise TransportError(
                f"Request to {path} timed out after {self.timeout_seconds} seconds"
            ) from e
        except httpx.RequestError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise TransportError(f"Request to {path} failed: {e}") from e

        return self._handle_response(method, path, response)

    def _handle_response(self, method: str, path: str, response: httpx.Response) -> Any:
        if not 200 <= response.status_code < 300:
            try:
                text = response.text
            except Exception:
                text = ""
            logger.warning(f"{method} {path} returned {response.status_code}")
            raise APIError(response.status_code, text)

        if response.status_code == 204:
            return ""

        content_type = response.headers.get("content-type", "")
        if "application/json" in content_type:
            try:
                return response.json()
            except ValueError as e:
                raise DecodeError(f"Invalid JSON in response from {path}: {e}") from e

        return response.text
