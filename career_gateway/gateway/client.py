"""
Upstream HRMS GraphQL client.

Sends every query and mutation as a single JSON POST to the configured
endpoint and decodes the `{data, errors}` envelope. GraphQL-level errors are
logged and handed back alongside `data`; only transport failures, non-200
responses and undecodable bodies raise.

Usage:
    client = HRMSClient(url, api_key="...")
    result = await client.query(GET_JOB_QUERY, {"id": "42"})
    if result.data is None:
        ...
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import httpx

from .queries import HEALTH_QUERY

logger = logging.getLogger(__name__)

# Response headers that describe the upstream hop rather than the payload
HOP_BY_HOP_HEADERS = {
    "connection",
    "content-encoding",
    "content-length",
    "keep-alive",
    "transfer-encoding",
}


class HRMSError(Exception):
    """Base class for upstream failures."""


class HRMSTransportError(HRMSError):
    """Network failure, timeout, or missing endpoint configuration."""


class HRMSStatusError(HRMSError):
    """Upstream answered with a non-200 status."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"Hub-HRMS returned status {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class HRMSDecodeError(HRMSError):
    """Upstream body was not a GraphQL response envelope."""


@dataclass
class GraphQLError:
    message: str
    path: Optional[List[Any]] = None
    extensions: Optional[Dict[str, Any]] = None

    @classmethod
    def from_dict(cls, raw: Any) -> "GraphQLError":
        if not isinstance(raw, dict):
            return cls(message=str(raw))
        return cls(
            message=str(raw.get("message", "")),
            path=raw.get("path"),
            extensions=raw.get("extensions"),
        )


@dataclass
class GraphQLResponse:
    """Decoded upstream envelope. `data` is relayed as-is, even with errors."""

    data: Any = None
    errors: List[GraphQLError] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)


@dataclass
class ProxyResponse:
    """Raw upstream reply mirrored back by the /graphql passthrough."""

    status_code: int
    headers: List[Tuple[str, str]]
    content: bytes


class HRMSClient:
    """
    GraphQL client for the upstream HRMS.

    Holds one pooled httpx.AsyncClient for the life of the process; this is
    the only state shared between concurrent requests.
    """

    def __init__(
        self,
        url: str,
        api_key: Optional[str] = None,
        timeout: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.url = url
        self.api_key = api_key
        self.timeout = timeout
        self._client = http_client or httpx.AsyncClient(
            timeout=timeout,
            limits=httpx.Limits(
                max_connections=100,
                max_keepalive_connections=10,
                keepalive_expiry=90.0,
            ),
        )

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _require_url(self) -> str:
        if not self.url:
            raise HRMSTransportError("HUBHRMS_GRAPHQL_URL is not configured")
        return self.url

    async def query(
        self,
        document: str,
        variables: Optional[Dict[str, Any]] = None,
        operation_name: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> GraphQLResponse:
        """
        Execute a GraphQL document against the upstream.

        Args:
            document: Query or mutation text from the catalog
            variables: Variable mapping (omitted from the envelope when empty)
            operation_name: Optional operationName for multi-operation documents
            timeout: Per-call override of the client timeout

        Returns:
            GraphQLResponse with `data` and any GraphQL `errors`

        Raises:
            HRMSTransportError: network failure or timeout
            HRMSStatusError: upstream answered with a non-200 status
            HRMSDecodeError: body is not a JSON object
        """
        payload: Dict[str, Any] = {"query": document}
        if variables:
            payload["variables"] = variables
        if operation_name:
            payload["operationName"] = operation_name

        url = self._require_url()
        try:
            response = await self._client.post(
                url,
                json=payload,
                headers=self._headers(),
                timeout=timeout if timeout is not None else self.timeout,
            )
        except httpx.TimeoutException as e:
            raise HRMSTransportError(f"Hub-HRMS request timed out: {e}") from e
        except httpx.HTTPError as e:
            raise HRMSTransportError(f"failed to execute request: {e}") from e

        if response.status_code != 200:
            raise HRMSStatusError(response.status_code, response.text)

        try:
            body = response.json()
        except ValueError as e:
            raise HRMSDecodeError(f"failed to decode response: {e}") from e
        if not isinstance(body, dict):
            raise HRMSDecodeError("failed to decode response: expected a JSON object")

        raw_errors = body.get("errors")
        if not isinstance(raw_errors, list):
            raw_errors = [{"message": str(raw_errors)}] if raw_errors else []

        result = GraphQLResponse(
            data=body.get("data"),
            errors=[GraphQLError.from_dict(err) for err in raw_errors],
        )
        if result.has_errors:
            logger.warning(
                f"GraphQL errors: {[err.message for err in result.errors]}"
            )
        return result

    async def mutate(
        self,
        document: str,
        variables: Optional[Dict[str, Any]] = None,
        operation_name: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> GraphQLResponse:
        """Execute a mutation. GraphQL uses the same transport for both."""
        return await self.query(document, variables, operation_name, timeout)

    async def proxy(self, body: bytes, user_authorization: Optional[str] = None) -> ProxyResponse:
        """
        Forward a raw client GraphQL body unmodified.

        The caller's Authorization value travels as X-User-Token so the
        upstream can attribute the end user; the service key stays in
        Authorization.

        Raises:
            HRMSTransportError: the upstream could not be reached
        """
        headers = self._headers()
        if user_authorization:
            headers["X-User-Token"] = user_authorization

        url = self._require_url()
        try:
            response = await self._client.post(url, content=body, headers=headers)
        except httpx.HTTPError as e:
            raise HRMSTransportError(f"Error proxying to Hub-HRMS: {e}") from e

        mirrored = [
            (key, value)
            for key, value in response.headers.multi_items()
            if key.lower() not in HOP_BY_HOP_HEADERS and key.lower() != "content-type"
        ]
        mirrored.append(("content-type", "application/json"))
        return ProxyResponse(
            status_code=response.status_code,
            headers=mirrored,
            content=response.content,
        )

    async def health(self, timeout: Optional[float] = None) -> None:
        """
        Probe upstream connectivity with a minimal introspection query.

        Raises:
            HRMSError: the upstream is unreachable
        """
        await self.query(HEALTH_QUERY, timeout=timeout)

    async def aclose(self) -> None:
        await self._client.aclose()
