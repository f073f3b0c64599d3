"""
Process-wide collaborators, exposed as FastAPI dependencies.

Each getter builds its object on first use from the validated settings.
Tests replace them through `app.dependency_overrides`.
"""

import logging
from typing import Optional

from .config import get_settings
from .gateway import HRMSClient
from .services import EmailService, NotificationDispatcher, UploadService

logger = logging.getLogger(__name__)

_hrms_client: Optional[HRMSClient] = None
_upload_service: Optional[UploadService] = None
_email_service: Optional[EmailService] = None
_dispatcher: Optional[NotificationDispatcher] = None


def get_hrms_client() -> HRMSClient:
    """Shared upstream client (owns the pooled HTTP connections)."""
    global _hrms_client
    if _hrms_client is None:
        settings = get_settings()
        _hrms_client = HRMSClient(
            url=settings.hubhrms_graphql_url,
            api_key=settings.hubhrms_api_key,
            timeout=settings.hrms_timeout_seconds,
        )
    return _hrms_client


def get_upload_service() -> UploadService:
    global _upload_service
    if _upload_service is None:
        settings = get_settings()
        _upload_service = UploadService(bucket=settings.aws_s3_bucket, region=settings.aws_region)
    return _upload_service


def get_email_service() -> EmailService:
    global _email_service
    if _email_service is None:
        settings = get_settings()
        _email_service = EmailService(
            api_key=settings.sendgrid_api_key,
            from_email=settings.email_from,
            from_name=settings.email_from_name,
        )
    return _email_service


def get_dispatcher() -> NotificationDispatcher:
    global _dispatcher
    if _dispatcher is None:
        _dispatcher = NotificationDispatcher()
    return _dispatcher


async def shutdown_resources(drain_timeout: float = 5.0) -> None:
    """Let pending notifications finish, then close the upstream pool."""
    global _hrms_client
    if _dispatcher is not None:
        await _dispatcher.drain(timeout=drain_timeout)
    if _hrms_client is not None:
        await _hrms_client.aclose()
        _hrms_client = None
        logger.info("Upstream HTTP client closed")
