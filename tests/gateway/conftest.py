"""
Pytest fixtures for gateway tests.
"""

import os
from unittest.mock import AsyncMock, MagicMock

# IMPORTANT: Set environment variables BEFORE any imports from career_gateway
# so GatewaySettings is configured correctly when first loaded.
os.environ["ENVIRONMENT"] = "development"
os.environ["HUBHRMS_GRAPHQL_URL"] = "http://hrms.test/graphql"
os.environ["HUBHRMS_API_KEY"] = "test-service-key"
os.environ["AWS_S3_BUCKET"] = "test-bucket"
os.environ["CORS_ALLOWED_ORIGINS"] = "http://localhost:5173"
os.environ.pop("SENDGRID_API_KEY", None)

import pytest
from fastapi.testclient import TestClient

from career_gateway.gateway import GraphQLResponse
from career_gateway.services import NotificationDispatcher, UploadService


@pytest.fixture
def mock_hrms():
    """Upstream client double. Every call succeeds with empty data by default."""
    client = MagicMock()
    client.query = AsyncMock(return_value=GraphQLResponse(data={}))
    client.mutate = AsyncMock(return_value=GraphQLResponse(data={}))
    client.proxy = AsyncMock()
    client.health = AsyncMock(return_value=None)
    return client


@pytest.fixture
def mock_email():
    service = MagicMock()
    service.send_application_confirmation = AsyncMock(return_value=True)
    service.send_status_update = AsyncMock(return_value=False)
    return service


@pytest.fixture
def mock_s3():
    s3 = MagicMock()
    s3.generate_presigned_url.return_value = (
        "https://test-bucket.s3.amazonaws.com/resumes/2025/06/abc.pdf"
        "?X-Amz-Algorithm=AWS4-HMAC-SHA256&X-Amz-Signature=deadbeef"
    )
    return s3


@pytest.fixture
def upload_service(mock_s3):
    """Real upload service backed by a mocked S3 client."""
    return UploadService(bucket="test-bucket", region="us-east-1", s3_client=mock_s3)


@pytest.fixture
def dispatcher():
    return NotificationDispatcher()


@pytest.fixture
def app(mock_hrms, mock_email, upload_service, dispatcher):
    """Application with every outbound collaborator replaced."""
    from career_gateway.app import app
    from career_gateway.dependencies import (
        get_dispatcher,
        get_email_service,
        get_hrms_client,
        get_upload_service,
    )

    app.dependency_overrides[get_hrms_client] = lambda: mock_hrms
    app.dependency_overrides[get_email_service] = lambda: mock_email
    app.dependency_overrides[get_upload_service] = lambda: upload_service
    app.dependency_overrides[get_dispatcher] = lambda: dispatcher
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """FastAPI test client fixture."""
    return TestClient(app)


@pytest.fixture
def auth_headers():
    """Authentication headers for protected routes (the token is not verified)."""
    return {"Authorization": "Bearer recruiter-token"}
