"""
Helpers shared by the REST handlers for calling the upstream and relaying
its `data` back to the caller.
"""

import logging
from typing import Any, Dict, Optional

from fastapi.responses import JSONResponse

from .errors import APIError
from .gateway import GraphQLResponse, HRMSClient, HRMSError

logger = logging.getLogger(__name__)


async def execute(
    client: HRMSClient,
    document: str,
    variables: Optional[Dict[str, Any]],
    failure_message: str,
    mutation: bool = False,
) -> GraphQLResponse:
    """
    Run a catalog document, converting upstream failures to a 500.

    GraphQL-level errors alongside data are not failures; the client has
    already logged them.
    """
    send = client.mutate if mutation else client.query
    try:
        return await send(document, variables)
    except HRMSError as e:
        raise APIError(500, failure_message, details=str(e))


def is_missing(data: Any) -> bool:
    """
    True when a by-id lookup found nothing.

    Covers both a null `data` and `{"job": null}` style payloads.
    """
    if data is None:
        return True
    if isinstance(data, dict) and data:
        return all(value is None for value in data.values())
    return False


def relay(data: Any, status_code: int = 200, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    return JSONResponse(content=data, status_code=status_code, headers=headers)
