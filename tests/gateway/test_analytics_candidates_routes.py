"""
Tests for analytics and candidate routes.
"""

from datetime import datetime, timedelta, timezone

import pytest

from career_gateway.gateway import GraphQLResponse, HRMSTransportError
from career_gateway.gateway import queries


def parse_rfc3339(value):
    return datetime.strptime(value, "%Y-%m-%dT%H:%M:%SZ").replace(tzinfo=timezone.utc)


class TestMetrics:
    def test_requires_auth(self, client, mock_hrms):
        response = client.get("/api/v1/analytics/metrics")

        assert response.status_code == 401
        mock_hrms.query.assert_not_called()

    def test_explicit_dates(self, client, mock_hrms, auth_headers):
        client.get(
            "/api/v1/analytics/metrics",
            params={"startDate": "2025-01-01", "endDate": "2025-03-31"},
            headers=auth_headers,
        )

        assert mock_hrms.query.call_args.args[0] == queries.GET_RECRUITMENT_METRICS_QUERY
        assert mock_hrms.query.call_args.args[1] == {
            "dateRange": {"start": "2025-01-01T00:00:00Z", "end": "2025-03-31T00:00:00Z"}
        }

    def test_malformed_dates_fall_back_to_last_30_days(self, client, mock_hrms, auth_headers):
        response = client.get(
            "/api/v1/analytics/metrics",
            params={"startDate": "01/02/2025", "endDate": "yesterday"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        date_range = mock_hrms.query.call_args.args[1]["dateRange"]
        start = parse_rfc3339(date_range["start"])
        end = parse_rfc3339(date_range["end"])
        assert abs((end - start) - timedelta(days=30)) < timedelta(seconds=2)
        assert abs(datetime.now(timezone.utc) - end) < timedelta(minutes=1)

    def test_upstream_failure(self, client, mock_hrms, auth_headers):
        mock_hrms.query.side_effect = HRMSTransportError("down")

        response = client.get("/api/v1/analytics/metrics", headers=auth_headers)

        assert response.status_code == 500
        assert response.json()["message"] == "Failed to fetch metrics"


class TestTrends:
    def test_narrows_to_application_trend(self, client, mock_hrms, auth_headers):
        trend = [{"date": "2025-05-01", "count": 12}]
        mock_hrms.query.return_value = GraphQLResponse(
            data={"recruitmentMetrics": {"totalApplications": 40, "applicationTrend": trend}}
        )

        response = client.get("/api/v1/analytics/trends", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"applicationTrend": trend}

    def test_relays_full_payload_without_trend(self, client, mock_hrms, auth_headers):
        data = {"recruitmentMetrics": {"totalApplications": 40}}
        mock_hrms.query.return_value = GraphQLResponse(data=data)

        response = client.get("/api/v1/analytics/trends", headers=auth_headers)

        assert response.json() == data

    def test_defaults_to_three_months(self, client, mock_hrms, auth_headers):
        client.get("/api/v1/analytics/trends", headers=auth_headers)

        date_range = mock_hrms.query.call_args.args[1]["dateRange"]
        span = parse_rfc3339(date_range["end"]) - parse_rfc3339(date_range["start"])
        assert timedelta(days=88) <= span <= timedelta(days=93)


class TestPipelineAndPerformance:
    def test_pipeline_with_job_filter(self, client, mock_hrms, auth_headers):
        client.get("/api/v1/analytics/pipeline", params={"jobId": "job-1"}, headers=auth_headers)

        assert mock_hrms.query.call_args.args[0] == queries.GET_APPLICATION_PIPELINE_QUERY
        assert mock_hrms.query.call_args.args[1] == {"jobId": "job-1"}

    def test_pipeline_without_job_filter(self, client, mock_hrms, auth_headers):
        client.get("/api/v1/analytics/pipeline", headers=auth_headers)

        assert mock_hrms.query.call_args.args[1] == {}

    def test_job_performance(self, client, mock_hrms, auth_headers):
        mock_hrms.query.return_value = GraphQLResponse(data={"jobPerformance": {"views": 10}})

        response = client.get("/api/v1/analytics/jobs/job-1/performance", headers=auth_headers)

        assert response.status_code == 200
        assert mock_hrms.query.call_args.args[1] == {"jobId": "job-1"}


class TestCandidates:
    def test_get_candidate(self, client, mock_hrms, auth_headers):
        mock_hrms.query.return_value = GraphQLResponse(data={"candidate": {"id": "c-1"}})

        response = client.get("/api/v1/candidates/c-1", headers=auth_headers)

        assert response.status_code == 200
        assert mock_hrms.query.call_args.args[0] == queries.GET_CANDIDATE_QUERY

    def test_candidate_not_found(self, client, mock_hrms, auth_headers):
        mock_hrms.query.return_value = GraphQLResponse(data={"candidate": None})

        response = client.get("/api/v1/candidates/c-1", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["message"] == "Candidate not found"

    def test_update_candidate(self, client, mock_hrms, auth_headers):
        response = client.put(
            "/api/v1/candidates/c-1", json={"headline": "Engineer"}, headers=auth_headers
        )

        assert response.status_code == 200
        assert mock_hrms.mutate.call_args.args[0] == queries.UPDATE_CANDIDATE_PROFILE_MUTATION
        assert mock_hrms.mutate.call_args.args[1] == {
            "id": "c-1",
            "input": {"headline": "Engineer"},
        }

    @pytest.mark.parametrize("method", ["get", "put"])
    def test_candidates_require_auth(self, client, method):
        response = getattr(client, method)("/api/v1/candidates/c-1")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
