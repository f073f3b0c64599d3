"""
HTTP client for the career portal gateway.

Used by the job board and application form to talk to the gateway's public
REST endpoints.

Usage:
    api = PortalAPI("http://localhost:8080/api/v1")
    jobs = api.list_jobs(department="Engineering")
    url = api.upload_file("cv.pdf", open("cv.pdf", "rb"), "application/pdf")
"""

import logging
import os
from typing import Any, BinaryIO, Dict, List, Optional

import requests
from pydantic import ValidationError

from .models import Application, Job

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = os.getenv("CAREER_PORTAL_API_URL", "http://localhost:8080/api/v1")
REQUEST_TIMEOUT = 30  # seconds
UPLOAD_TIMEOUT = 120  # seconds for the direct storage PUT


class PortalAPIError(Exception):
    """Gateway answered with an error, or could not be reached."""

    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = status
        self.message = message


class PortalAPI:
    """Thin wrapper over the gateway's public REST surface."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(self, method: str, endpoint: str, **kwargs) -> Any:
        url = f"{self.base_url}{endpoint}"
        headers = {"Content-Type": "application/json", **kwargs.pop("headers", {})}

        try:
            response = self.session.request(
                method, url, headers=headers, timeout=self.timeout, **kwargs
            )
        except requests.exceptions.Timeout:
            raise PortalAPIError(504, "Gateway request timed out")
        except requests.exceptions.ConnectionError:
            raise PortalAPIError(503, "Cannot connect to gateway")

        if not response.ok:
            raise PortalAPIError(response.status_code, _error_message(response))

        try:
            return response.json()
        except ValueError:
            raise PortalAPIError(502, "Invalid response from gateway")

    # === Jobs ===

    def list_jobs(
        self,
        department: Optional[str] = None,
        type: Optional[str] = None,
        location: Optional[str] = None,
        q: Optional[str] = None,
        remote: Optional[bool] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[Job]:
        """List published jobs, optionally filtered."""
        params: Dict[str, Any] = {}
        if department:
            params["department"] = department
        if type:
            params["type"] = type
        if location:
            params["location"] = location
        if q:
            params["q"] = q
        if remote is not None:
            params["remote"] = "true" if remote else "false"
        if limit is not None:
            params["limit"] = limit
        if offset is not None:
            params["offset"] = offset

        data = _json_object(self._request("GET", "/jobs", params=params))
        return [_parse_job(job) for job in data.get("jobs") or []]

    def get_job(self, job_id: str) -> Job:
        data = _json_object(self._request("GET", f"/jobs/{job_id}"))
        job = data.get("job")
        if job is None:
            raise PortalAPIError(404, "Job not found")
        return _parse_job(job)

    def increment_view(self, job_id: str) -> None:
        """Count a view. Failures are logged and ignored."""
        try:
            self._request("POST", f"/jobs/{job_id}/view")
        except PortalAPIError as e:
            logger.debug(f"View count for job {job_id} not recorded: {e.message}")

    # === Applications ===

    def submit_application(self, application: Dict[str, Any]) -> Application:
        """
        Submit an application.

        Args:
            application: camelCase application fields (jobId, firstName, ...)

        Returns:
            The created application, including an AI score when the
            upstream produced one synchronously
        """
        data = _json_object(self._request("POST", "/applications", json=application))
        created = data.get("submitApplication") or data.get("application") or {}
        try:
            return Application.model_validate(created)
        except ValidationError as e:
            logger.warning(f"Unexpected application payload: {e}")
            raise PortalAPIError(502, "Invalid application in gateway response")

    # === Uploads ===

    def get_presigned_url(self, filename: str, content_type: str) -> Dict[str, Any]:
        """Ask the gateway for a pre-signed PUT URL."""
        return self._request(
            "POST",
            "/upload/presigned-url",
            json={"filename": filename, "contentType": content_type},
        )

    def upload_file(self, filename: str, fileobj: BinaryIO, content_type: str) -> str:
        """
        Upload a file straight to storage through a pre-signed URL.

        Returns:
            Public URL of the stored object (no query string)
        """
        presigned = self.get_presigned_url(filename, content_type)
        upload_url = presigned["uploadUrl"]

        try:
            response = requests.put(
                upload_url,
                data=fileobj,
                headers={"Content-Type": content_type},
                timeout=UPLOAD_TIMEOUT,
            )
        except requests.exceptions.RequestException as e:
            raise PortalAPIError(503, f"Failed to upload file: {e}")

        if not response.ok:
            raise PortalAPIError(response.status_code, "Failed to upload file")

        return presigned.get("url") or upload_url.split("?", 1)[0]


def _json_object(body: Any) -> Dict[str, Any]:
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise PortalAPIError(502, "Invalid response from gateway")
    return body


def _parse_job(raw: Any) -> Job:
    try:
        return Job.model_validate(raw)
    except ValidationError as e:
        logger.warning(f"Unexpected job payload: {e}")
        raise PortalAPIError(502, "Invalid job in gateway response")


def _error_message(response: requests.Response) -> str:
    """Prefer the gateway's `message`, falling back to the status code."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        message = body.get("message")
        if not message and isinstance(body.get("error"), dict):
            message = body["error"].get("message")
        if message:
            return message
    return f"Request failed with status {response.status_code}"
