"""
Upload Routes

Public resume upload endpoints used by the application form.

Endpoints:
    POST /api/v1/upload/resume         - Multipart upload (field `file`)
    POST /api/v1/upload/presigned-url  - Pre-signed PUT URL for direct upload

S3 calls are blocking boto3 calls and run in a worker thread.
"""

import asyncio
import logging
import os
from typing import AsyncGenerator

from fastapi import APIRouter, Depends, Request
from starlette.datastructures import FormData, UploadFile
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException, MultiPartParser

from ..dependencies import get_upload_service
from ..errors import APIError
from ..models import PresignedURLRequest, PresignedURLResponse, UploadResponse
from ..services import MAX_UPLOAD_BYTES, StorageError, UploadService, UploadValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/upload", tags=["upload"])

# Allowance for multipart boundaries and part headers on top of the file cap
MULTIPART_OVERHEAD_BYTES = 64 * 1024
MAX_BODY_BYTES = MAX_UPLOAD_BYTES + MULTIPART_OVERHEAD_BYTES

FILE_TOO_LARGE = "File too large. Maximum size is 10MB"


def _check_declared_length(request: Request) -> None:
    """Reject an oversized body from its Content-Length before reading it."""
    declared = request.headers.get("content-length")
    if declared is None:
        return
    try:
        length = int(declared)
    except ValueError:
        raise APIError(400, "Invalid Content-Length header")
    if length > MAX_BODY_BYTES:
        raise APIError(400, FILE_TOO_LARGE)


async def _bounded_stream(request: Request) -> AsyncGenerator[bytes, None]:
    """Yield body chunks, failing as soon as the body outgrows the cap."""
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > MAX_BODY_BYTES:
            raise APIError(400, FILE_TOO_LARGE)
        yield chunk


async def _read_form(request: Request) -> FormData:
    """
    Parse the form, counting multipart bytes as they arrive.

    A chunked body carries no Content-Length, so the cap is applied to
    the stream itself.
    """
    if not request.headers.get("content-type", "").startswith("multipart/form-data"):
        return await request.form()
    return await MultiPartParser(request.headers, _bounded_stream(request)).parse()


def _stream_size(upload: UploadFile) -> int:
    upload.file.seek(0, os.SEEK_END)
    size = upload.file.tell()
    upload.file.seek(0)
    return size


@router.post("/resume", response_model=UploadResponse)
async def upload_resume(
    request: Request,
    service: UploadService = Depends(get_upload_service),
):
    """
    Upload a resume through the gateway.

    Returns:
        {success, url, filename, originalFilename, size, contentType} where
        `filename` is the generated object key
    """
    _check_declared_length(request)

    try:
        form = await _read_form(request)
    except (MultiPartException, HTTPException) as e:
        raise APIError(400, "Failed to parse form", details=str(getattr(e, "detail", e)))

    try:
        upload = form.get("file")
        if not isinstance(upload, UploadFile):
            raise APIError(400, "Failed to get file from form")

        size = _stream_size(upload)
        try:
            stored = await asyncio.to_thread(
                service.upload_resume, upload.file, upload.filename or "", size
            )
        except UploadValidationError as e:
            raise APIError(400, str(e))
        except StorageError as e:
            raise APIError(500, "Failed to upload file", details=str(e))
    finally:
        await form.close()

    return stored.to_response()


@router.post("/presigned-url", response_model=PresignedURLResponse)
async def create_presigned_url(
    payload: PresignedURLRequest,
    service: UploadService = Depends(get_upload_service),
):
    """Issue a pre-signed PUT URL valid for 15 minutes."""
    try:
        return await asyncio.to_thread(
            service.create_presigned_upload,
            payload.filename,
            payload.content_type,
            payload.size,
        )
    except UploadValidationError as e:
        raise APIError(400, str(e))
    except StorageError as e:
        raise APIError(500, "Failed to generate presigned URL", details=str(e))
