"""
Candidate Routes

Endpoints:
    GET /api/v1/candidates/{candidate_id}  - Get a candidate profile
    PUT /api/v1/candidates/{candidate_id}  - Update a candidate profile
"""

from fastapi import APIRouter, Depends, Request

from ..auth import require_auth
from ..dependencies import get_hrms_client
from ..errors import APIError
from ..filters import read_json_object, require_path_id
from ..gateway import HRMSClient
from ..gateway import queries
from ..relay import execute, is_missing, relay

router = APIRouter(
    prefix="/api/v1/candidates",
    tags=["candidates"],
    dependencies=[Depends(require_auth)],
)


@router.get("/{candidate_id}")
async def get_candidate(candidate_id: str, client: HRMSClient = Depends(get_hrms_client)):
    candidate_id = require_path_id(candidate_id, "Candidate")
    result = await execute(
        client, queries.GET_CANDIDATE_QUERY, {"id": candidate_id}, "Failed to fetch candidate"
    )
    if is_missing(result.data):
        raise APIError(404, "Candidate not found")
    return relay(result.data)


@router.put("/{candidate_id}")
async def update_candidate(
    candidate_id: str,
    request: Request,
    client: HRMSClient = Depends(get_hrms_client),
):
    candidate_id = require_path_id(candidate_id, "Candidate")
    body = await read_json_object(request)

    result = await execute(
        client,
        queries.UPDATE_CANDIDATE_PROFILE_MUTATION,
        {"id": candidate_id, "input": body},
        "Failed to update candidate",
        mutation=True,
    )
    return relay(result.data)
