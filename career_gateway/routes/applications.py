"""
Application Routes

Public application submission and recruiter application management.

Endpoints:
    POST /api/v1/applications                    - Submit an application (public)
    GET  /api/v1/applications                    - List applications
    GET  /api/v1/applications/{app_id}           - Get one application
    PUT  /api/v1/applications/{app_id}/status    - Change status
    POST /api/v1/applications/{app_id}/notes     - Add a note
    POST /api/v1/applications/{app_id}/score     - Trigger AI scoring
    POST /api/v1/applications/bulk-update        - Change status of many

Status strings are forwarded verbatim; the upstream decides which
transitions are legal.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request

from ..auth import require_auth
from ..dependencies import get_dispatcher, get_email_service, get_hrms_client
from ..errors import APIError
from ..filters import application_list_variables, read_json_object, require_fields, require_path_id
from ..gateway import HRMSClient
from ..gateway import queries
from ..models import BulkStatusUpdateRequest, NoteRequest, StatusUpdateRequest
from ..relay import execute, is_missing, relay
from ..services import EmailService, NotificationDispatcher

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/applications", tags=["applications"])

SUBMIT_REQUIRED_FIELDS = [
    "jobId",
    "firstName",
    "lastName",
    "email",
    "phone",
    "resumeUrl",
    "currentLocation",
    "availability",
]


@router.post("", status_code=201)
async def submit_application(
    request: Request,
    client: HRMSClient = Depends(get_hrms_client),
    email_service: EmailService = Depends(get_email_service),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    """
    Submit a candidate application.

    On success a confirmation email is dispatched in the background; the
    response neither waits for nor reports its outcome.
    """
    body = await read_json_object(request)
    require_fields(body, SUBMIT_REQUIRED_FIELDS)
    body.setdefault("willingToRelocate", False)

    result = await execute(
        client,
        queries.SUBMIT_APPLICATION_MUTATION,
        {"input": body},
        "Failed to submit application",
        mutation=True,
    )

    email = body["email"]
    if isinstance(email, str) and email.strip():
        dispatcher.dispatch(
            email_service.send_application_confirmation,
            email,
            str(body["firstName"]),
            str(body["jobId"]),
        )
    else:
        logger.warning("Application submitted without an email address, confirmation skipped")
    return relay(result.data, status_code=201)


@router.get("", dependencies=[Depends(require_auth)])
async def list_applications(request: Request, client: HRMSClient = Depends(get_hrms_client)):
    """
    List applications.

    Recognized query keys: jobId, status, dateFrom, dateTo, minScore, limit,
    offset. An unparsable minScore is ignored.
    """
    variables = application_list_variables(request.query_params)
    result = await execute(
        client, queries.GET_APPLICATIONS_QUERY, variables, "Failed to fetch applications"
    )
    return relay(result.data)


@router.post("/bulk-update", dependencies=[Depends(require_auth)])
async def bulk_update_status(
    payload: BulkStatusUpdateRequest,
    client: HRMSClient = Depends(get_hrms_client),
):
    if not payload.ids:
        raise APIError(400, "Application IDs are required")
    if not payload.status:
        raise APIError(400, "Status is required")

    result = await execute(
        client,
        queries.BULK_UPDATE_APPLICATION_STATUS_MUTATION,
        {"ids": payload.ids, "status": payload.status},
        "Failed to update application statuses",
        mutation=True,
    )
    return relay(result.data)


@router.get("/{app_id}", dependencies=[Depends(require_auth)])
async def get_application(app_id: str, client: HRMSClient = Depends(get_hrms_client)):
    app_id = require_path_id(app_id, "Application")
    result = await execute(
        client, queries.GET_APPLICATION_QUERY, {"id": app_id}, "Failed to fetch application"
    )
    if is_missing(result.data):
        raise APIError(404, "Application not found")
    return relay(result.data)


@router.put("/{app_id}/status", dependencies=[Depends(require_auth)])
async def update_status(
    app_id: str,
    payload: StatusUpdateRequest,
    client: HRMSClient = Depends(get_hrms_client),
    email_service: EmailService = Depends(get_email_service),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    app_id = require_path_id(app_id, "Application")
    if not payload.status:
        raise APIError(400, "Status is required")

    variables: Dict[str, Any] = {"id": app_id, "status": payload.status}
    if payload.note:
        variables["note"] = payload.note

    result = await execute(
        client,
        queries.UPDATE_APPLICATION_STATUS_MUTATION,
        variables,
        "Failed to update application status",
        mutation=True,
    )

    dispatcher.dispatch(email_service.send_status_update, app_id, payload.status)
    return relay(result.data)


@router.post("/{app_id}/notes", status_code=201, dependencies=[Depends(require_auth)])
async def add_note(
    app_id: str,
    payload: NoteRequest,
    client: HRMSClient = Depends(get_hrms_client),
):
    app_id = require_path_id(app_id, "Application")
    if not payload.content:
        raise APIError(400, "Note content is required")

    result = await execute(
        client,
        queries.ADD_APPLICATION_NOTE_MUTATION,
        {
            "applicationId": app_id,
            "content": payload.content,
            "isInternal": payload.is_internal,
        },
        "Failed to add note",
        mutation=True,
    )
    return relay(result.data, status_code=201)


@router.post("/{app_id}/score", dependencies=[Depends(require_auth)])
async def score_application(app_id: str, client: HRMSClient = Depends(get_hrms_client)):
    app_id = require_path_id(app_id, "Application")
    result = await execute(
        client,
        queries.SCORE_APPLICATION_MUTATION,
        {"applicationId": app_id},
        "Failed to score application",
        mutation=True,
    )
    return relay(result.data)
