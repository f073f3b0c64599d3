"""
Tests for the application routes.

The submission test checks that the confirmation email runs in the
background: the response must not wait for a slow send.
"""

import asyncio
import time

import pytest

from career_gateway.gateway import GraphQLResponse, HRMSStatusError
from career_gateway.gateway import queries


VALID_APPLICATION = {
    "jobId": "job-1",
    "firstName": "Ada",
    "lastName": "Lovelace",
    "email": "ada@example.com",
    "phone": "+44 20 0000 0000",
    "resumeUrl": "https://test-bucket.s3.amazonaws.com/resumes/2025/06/a.pdf",
    "currentLocation": "London",
    "availability": "Immediately",
}


class TestSubmitApplication:
    def test_submit_returns_201_and_sends_one_confirmation(self, client, mock_hrms, mock_email):
        created = {"submitApplication": {"id": "app-1", "status": "SUBMITTED", "aiScore": None}}
        mock_hrms.mutate.return_value = GraphQLResponse(data=created)

        response = client.post("/api/v1/applications", json=VALID_APPLICATION)

        assert response.status_code == 201
        assert response.json() == created
        mock_email.send_application_confirmation.assert_called_once_with(
            "ada@example.com", "Ada", "job-1"
        )

    def test_no_confirmation_without_email_address(self, client, mock_hrms, mock_email):
        mock_hrms.mutate.return_value = GraphQLResponse(data={"submitApplication": {"id": "app-1"}})

        response = client.post("/api/v1/applications", json={**VALID_APPLICATION, "email": None})

        assert response.status_code == 201
        mock_email.send_application_confirmation.assert_not_called()

    def test_response_does_not_wait_for_email(self, client, mock_hrms, mock_email):
        async def slow_send(*args):
            await asyncio.sleep(3)
            return True

        mock_email.send_application_confirmation.side_effect = slow_send
        mock_hrms.mutate.return_value = GraphQLResponse(data={"submitApplication": {"id": "app-1"}})

        started = time.perf_counter()
        response = client.post("/api/v1/applications", json=VALID_APPLICATION)
        elapsed = time.perf_counter() - started

        assert response.status_code == 201
        assert elapsed < 2
        mock_email.send_application_confirmation.assert_called_once()

    def test_email_failure_does_not_affect_response(self, client, mock_hrms, mock_email):
        mock_email.send_application_confirmation.side_effect = RuntimeError("sendgrid down")
        mock_hrms.mutate.return_value = GraphQLResponse(data={"submitApplication": {"id": "app-1"}})

        response = client.post("/api/v1/applications", json=VALID_APPLICATION)

        assert response.status_code == 201

    def test_willing_to_relocate_defaults_false(self, client, mock_hrms):
        client.post("/api/v1/applications", json=VALID_APPLICATION)

        sent = mock_hrms.mutate.call_args.args[1]["input"]
        assert sent["willingToRelocate"] is False

    def test_explicit_willing_to_relocate_kept(self, client, mock_hrms):
        client.post("/api/v1/applications", json={**VALID_APPLICATION, "willingToRelocate": True})

        sent = mock_hrms.mutate.call_args.args[1]["input"]
        assert sent["willingToRelocate"] is True

    @pytest.mark.parametrize("missing", ["jobId", "email", "resumeUrl", "availability"])
    def test_missing_required_field(self, client, mock_hrms, mock_email, missing):
        body = {k: v for k, v in VALID_APPLICATION.items() if k != missing}

        response = client.post("/api/v1/applications", json=body)

        assert response.status_code == 400
        assert response.json()["message"] == f"Missing required field: {missing}"
        mock_hrms.mutate.assert_not_called()
        mock_email.send_application_confirmation.assert_not_called()

    def test_upstream_failure_sends_no_email(self, client, mock_hrms, mock_email):
        mock_hrms.mutate.side_effect = HRMSStatusError(500, "boom")

        response = client.post("/api/v1/applications", json=VALID_APPLICATION)

        assert response.status_code == 500
        assert response.json()["message"] == "Failed to submit application"
        mock_email.send_application_confirmation.assert_not_called()

    def test_public_route_rejects_malformed_authorization(self, client, mock_hrms):
        response = client.post(
            "/api/v1/applications",
            json=VALID_APPLICATION,
            headers={"Authorization": "Token abc"},
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid authorization header"
        mock_hrms.mutate.assert_not_called()


class TestListApplications:
    def test_requires_auth(self, client):
        assert client.get("/api/v1/applications").status_code == 401

    def test_filters_and_pagination(self, client, mock_hrms, auth_headers):
        mock_hrms.query.return_value = GraphQLResponse(data={"applications": []})

        response = client.get(
            "/api/v1/applications",
            params={
                "jobId": "job-1",
                "status": "REVIEWING",
                "dateFrom": "2025-01-01",
                "minScore": "72.5",
                "limit": "10",
            },
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert mock_hrms.query.call_args.args[0] == queries.GET_APPLICATIONS_QUERY
        assert mock_hrms.query.call_args.args[1] == {
            "limit": 10,
            "offset": 0,
            "filters": {
                "jobId": "job-1",
                "status": "REVIEWING",
                "dateFrom": "2025-01-01",
                "minScore": 72.5,
            },
        }

    def test_no_filters_omits_filters_key(self, client, mock_hrms, auth_headers):
        client.get("/api/v1/applications", params={"minScore": "high"}, headers=auth_headers)

        assert mock_hrms.query.call_args.args[1] == {"limit": 20, "offset": 0}


class TestGetApplication:
    def test_not_found(self, client, mock_hrms, auth_headers):
        mock_hrms.query.return_value = GraphQLResponse(data={"application": None})

        response = client.get("/api/v1/applications/app-9", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["message"] == "Application not found"

    def test_found(self, client, mock_hrms, auth_headers):
        mock_hrms.query.return_value = GraphQLResponse(data={"application": {"id": "app-9"}})

        response = client.get("/api/v1/applications/app-9", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["application"]["id"] == "app-9"


class TestUpdateStatus:
    def test_updates_and_dispatches_status_email(self, client, mock_hrms, mock_email, auth_headers):
        response = client.put(
            "/api/v1/applications/app-1/status",
            json={"status": "INTERVIEWING", "note": "Strong portfolio"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert mock_hrms.mutate.call_args.args[1] == {
            "id": "app-1",
            "status": "INTERVIEWING",
            "note": "Strong portfolio",
        }
        mock_email.send_status_update.assert_called_once_with("app-1", "INTERVIEWING")

    def test_note_omitted_when_empty(self, client, mock_hrms, auth_headers):
        client.put(
            "/api/v1/applications/app-1/status",
            json={"status": "REJECTED", "note": ""},
            headers=auth_headers,
        )

        assert mock_hrms.mutate.call_args.args[1] == {"id": "app-1", "status": "REJECTED"}

    def test_status_required(self, client, mock_hrms, auth_headers):
        response = client.put(
            "/api/v1/applications/app-1/status", json={}, headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Status is required"
        mock_hrms.mutate.assert_not_called()


class TestBulkUpdate:
    def test_bulk_update(self, client, mock_hrms, auth_headers):
        response = client.post(
            "/api/v1/applications/bulk-update",
            json={"ids": ["a", "b"], "status": "REVIEWING"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert mock_hrms.mutate.call_args.args[0] == queries.BULK_UPDATE_APPLICATION_STATUS_MUTATION
        assert mock_hrms.mutate.call_args.args[1] == {"ids": ["a", "b"], "status": "REVIEWING"}

    def test_ids_required(self, client, mock_hrms, auth_headers):
        response = client.post(
            "/api/v1/applications/bulk-update",
            json={"ids": [], "status": "REVIEWING"},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Application IDs are required"
        mock_hrms.mutate.assert_not_called()


class TestNotesAndScoring:
    def test_add_note(self, client, mock_hrms, auth_headers):
        response = client.post(
            "/api/v1/applications/app-1/notes",
            json={"content": "Call back Monday", "isInternal": True},
            headers=auth_headers,
        )

        assert response.status_code == 201
        assert mock_hrms.mutate.call_args.args[1] == {
            "applicationId": "app-1",
            "content": "Call back Monday",
            "isInternal": True,
        }

    def test_empty_note_rejected(self, client, mock_hrms, auth_headers):
        response = client.post(
            "/api/v1/applications/app-1/notes", json={"content": ""}, headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Note content is required"

    def test_score_application(self, client, mock_hrms, auth_headers):
        mock_hrms.mutate.return_value = GraphQLResponse(
            data={"scoreApplication": {"id": "app-1", "aiScore": {"overall": 88}}}
        )

        response = client.post("/api/v1/applications/app-1/score", headers=auth_headers)

        assert response.status_code == 200
        assert mock_hrms.mutate.call_args.args[1] == {"applicationId": "app-1"}
        assert response.json()["scoreApplication"]["aiScore"]["overall"] == 88
