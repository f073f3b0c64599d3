"""
Job Routes

Public job board reads plus recruiter job management, all relayed to the
upstream HRMS.

Endpoints:
    GET    /api/v1/jobs                       - List jobs (public, PUBLISHED by default)
    GET    /api/v1/jobs/{job_id}              - Get a single job (public)
    POST   /api/v1/jobs/{job_id}/view         - Count a view (public, best-effort)
    POST   /api/v1/jobs                       - Create a job
    PUT    /api/v1/jobs/{job_id}              - Update a job
    POST   /api/v1/jobs/{job_id}/publish      - Publish a job
    POST   /api/v1/jobs/{job_id}/close        - Close a job
    DELETE /api/v1/jobs/{job_id}              - Delete a job
    POST   /api/v1/jobs/generate-description  - AI-drafted job description
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..auth import require_auth
from ..dependencies import get_hrms_client
from ..errors import APIError
from ..filters import job_list_variables, read_json_object, require_fields, require_path_id
from ..gateway import HRMSClient, HRMSError
from ..gateway import queries
from ..relay import execute, is_missing, relay

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["jobs"])

CREATE_JOB_REQUIRED_FIELDS = [
    "title",
    "department",
    "location",
    "employmentType",
    "experienceLevel",
    "description",
    "requirements",
    "skills",
]

GENERATE_DESCRIPTION_REQUIRED_FIELDS = ["title", "department", "experienceLevel", "keySkills"]


# =============================================================================
# Public endpoints
# =============================================================================

@router.get("/jobs")
async def list_jobs(request: Request, client: HRMSClient = Depends(get_hrms_client)):
    """
    List jobs for the board.

    Recognized query keys: q, department, location, type/employmentType,
    experienceLevel, remote, status, limit, offset. Status defaults to
    PUBLISHED; internal callers must ask for other statuses explicitly.

    X-Total-Count reports the size of the returned page.
    """
    variables = job_list_variables(request.query_params)
    result = await execute(client, queries.GET_JOBS_QUERY, variables, "Failed to fetch jobs")

    jobs = result.data.get("jobs") if isinstance(result.data, dict) else None
    count = len(jobs) if isinstance(jobs, list) else 0
    return relay(result.data, headers={"X-Total-Count": str(count)})


@router.get("/jobs/{job_id}")
async def get_job(job_id: str, client: HRMSClient = Depends(get_hrms_client)):
    """Get a job by id; 404 when the upstream returns nothing."""
    job_id = require_path_id(job_id, "Job")
    result = await execute(client, queries.GET_JOB_QUERY, {"id": job_id}, "Failed to fetch job")
    if is_missing(result.data):
        raise APIError(404, "Job not found")
    return relay(result.data)


@router.post("/jobs/{job_id}/view")
async def increment_view(job_id: str, client: HRMSClient = Depends(get_hrms_client)):
    """
    Count a job view.

    Best-effort: an upstream failure still answers 200 with success=false so
    view counting never blocks page rendering.
    """
    job_id = require_path_id(job_id, "Job")
    try:
        result = await client.mutate(queries.INCREMENT_JOB_VIEW_MUTATION, {"id": job_id})
    except HRMSError as e:
        logger.warning(f"View count update failed for job {job_id}: {e}")
        return JSONResponse({"success": False, "message": "View count update failed"})
    return relay(result.data)


# =============================================================================
# Recruiter endpoints
# =============================================================================

@router.post("/jobs", status_code=201, dependencies=[Depends(require_auth)])
async def create_job(request: Request, client: HRMSClient = Depends(get_hrms_client)):
    body = await read_json_object(request)
    require_fields(body, CREATE_JOB_REQUIRED_FIELDS)

    result = await execute(
        client, queries.CREATE_JOB_MUTATION, {"input": body}, "Failed to create job", mutation=True
    )
    return relay(result.data, status_code=201)


@router.post("/jobs/generate-description", dependencies=[Depends(require_auth)])
async def generate_description(request: Request, client: HRMSClient = Depends(get_hrms_client)):
    """Ask the upstream AI to draft a description from a few key facts."""
    body = await read_json_object(request)
    require_fields(body, GENERATE_DESCRIPTION_REQUIRED_FIELDS)

    result = await execute(
        client,
        queries.GENERATE_JOB_DESCRIPTION_MUTATION,
        {"input": body},
        "Failed to generate job description",
        mutation=True,
    )
    return relay(result.data)


@router.put("/jobs/{job_id}", dependencies=[Depends(require_auth)])
async def update_job(job_id: str, request: Request, client: HRMSClient = Depends(get_hrms_client)):
    job_id = require_path_id(job_id, "Job")
    body = await read_json_object(request)

    result = await execute(
        client,
        queries.UPDATE_JOB_MUTATION,
        {"id": job_id, "input": body},
        "Failed to update job",
        mutation=True,
    )
    return relay(result.data)


@router.post("/jobs/{job_id}/publish", dependencies=[Depends(require_auth)])
async def publish_job(job_id: str, client: HRMSClient = Depends(get_hrms_client)):
    job_id = require_path_id(job_id, "Job")
    result = await execute(
        client, queries.PUBLISH_JOB_MUTATION, {"id": job_id}, "Failed to publish job", mutation=True
    )
    return relay(result.data)


@router.post("/jobs/{job_id}/close", dependencies=[Depends(require_auth)])
async def close_job(job_id: str, client: HRMSClient = Depends(get_hrms_client)):
    job_id = require_path_id(job_id, "Job")
    result = await execute(
        client, queries.CLOSE_JOB_MUTATION, {"id": job_id}, "Failed to close job", mutation=True
    )
    return relay(result.data)


@router.delete("/jobs/{job_id}", dependencies=[Depends(require_auth)])
async def delete_job(job_id: str, client: HRMSClient = Depends(get_hrms_client)):
    job_id = require_path_id(job_id, "Job")
    result = await execute(
        client, queries.DELETE_JOB_MUTATION, {"id": job_id}, "Failed to delete job", mutation=True
    )
    return {
        "success": True,
        "message": "Job deleted successfully",
        "data": result.data,
    }
