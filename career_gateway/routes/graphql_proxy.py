"""
GraphQL passthrough.

POST /graphql forwards the raw client body to the upstream HRMS and mirrors
its status, headers and body. The body is only checked for being JSON; it is
never rewritten.
"""

import json
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from ..dependencies import get_hrms_client
from ..errors import APIError
from ..gateway import HRMSClient, HRMSError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["graphql"])


@router.post("/graphql")
async def graphql_proxy(request: Request, client: HRMSClient = Depends(get_hrms_client)):
    body = await request.body()
    try:
        json.loads(body)
    except ValueError:
        raise APIError(400, "Invalid GraphQL request")

    try:
        upstream = await client.proxy(body, user_authorization=request.headers.get("authorization"))
    except HRMSError as e:
        logger.error(f"GraphQL proxy failed: {e}")
        raise APIError(502, "Failed to execute request", details=str(e))

    # Hop-by-hop headers are already stripped; Response sets content-length
    response = Response(content=upstream.content, status_code=upstream.status_code)
    for key, value in upstream.headers:
        response.headers.append(key, value)
    return response
