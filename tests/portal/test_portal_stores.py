"""
Tests for the job board and application form stores.
"""

from unittest.mock import MagicMock

import pytest

from career_portal import ApplicationFormStore, Application, Job, JobsStore, PortalAPI, PortalAPIError


def job(**fields):
    defaults = {
        "id": "job",
        "title": "Engineer",
        "department": "Engineering",
        "location": "Berlin",
        "employmentType": "FULL_TIME",
        "description": "",
    }
    return Job.model_validate({**defaults, **fields})


JOBS = [
    job(id="1", title="Backend Engineer", department="Engineering", location="Berlin, DE"),
    job(id="2", title="Designer", department="Design", location="Remote", employmentType="CONTRACT"),
    job(id="3", title="Data Analyst", department="Data", location="Berlin, DE",
        description="SQL and dashboards"),
]


@pytest.fixture
def api():
    mock_api = MagicMock()
    mock_api.list_jobs.return_value = list(JOBS)
    return mock_api


@pytest.fixture
def store(api):
    jobs_store = JobsStore(api)
    jobs_store.fetch_jobs()
    return jobs_store


class TestFetchJobs:
    def test_loads_jobs(self, store):
        assert [j.id for j in store.state.jobs] == ["1", "2", "3"]
        assert store.state.loading is False
        assert store.state.error is None

    def test_error_captured_not_raised(self, api):
        api.list_jobs.side_effect = PortalAPIError(503, "Cannot connect to gateway")
        jobs_store = JobsStore(api)

        jobs_store.fetch_jobs()

        assert jobs_store.state.error == "Cannot connect to gateway"
        assert jobs_store.state.loading is False
        assert jobs_store.state.jobs == []

    def test_retry_clears_error(self, api):
        api.list_jobs.side_effect = [PortalAPIError(503, "down"), list(JOBS)]
        jobs_store = JobsStore(api)

        jobs_store.fetch_jobs()
        jobs_store.fetch_jobs()

        assert jobs_store.state.error is None
        assert len(jobs_store.state.jobs) == 3

    def test_subscribers_see_loading_transitions(self, api):
        jobs_store = JobsStore(api)
        seen = []
        jobs_store.subscribe(lambda s: seen.append(s.state.loading))

        jobs_store.fetch_jobs()

        assert seen == [False, True, False]

    def test_unsubscribe(self, api):
        jobs_store = JobsStore(api)
        calls = []
        unsubscribe = jobs_store.subscribe(lambda s: calls.append(1))

        unsubscribe()
        jobs_store.fetch_jobs()

        assert calls == [1]


class TestFetchJobsFromGateway:
    """The store runs over a real PortalAPI with a mocked requests session."""

    @pytest.fixture
    def session(self):
        return MagicMock()

    @pytest.fixture
    def gateway_store(self, session):
        return JobsStore(PortalAPI("http://gateway.test/api/v1", session=session))

    def respond(self, session, json_data=None, json_error=None):
        response = MagicMock()
        response.status_code = 200
        response.ok = True
        if json_error is not None:
            response.json.side_effect = json_error
        else:
            response.json.return_value = json_data
        session.request.return_value = response

    def test_null_fields_load_as_empty(self, gateway_store, session):
        self.respond(session, {
            "jobs": [{
                "id": "1",
                "title": "Engineer",
                "department": None,
                "location": None,
                "employmentType": None,
                "description": None,
                "requirements": None,
                "viewCount": None,
            }]
        })

        gateway_store.fetch_jobs()

        assert gateway_store.state.error is None
        job = gateway_store.state.jobs[0]
        assert job.description == ""
        assert job.requirements == []
        assert job.view_count == 0
        assert gateway_store.departments() == []
        assert gateway_store.job_types() == []

    def test_filters_tolerate_null_fields(self, gateway_store):
        gateway_store.state.jobs = [
            Job(id="1", title=None, department=None, location=None, description=None),
            job(id="2", title="Engineer"),
        ]

        gateway_store.set_filter("search", "engineer")
        gateway_store.set_filter("location", "berlin")

        assert [j.id for j in gateway_store.filtered_jobs()] == ["2"]

    def test_invalid_job_captured(self, gateway_store, session):
        self.respond(session, {"jobs": [{"title": "No id"}]})

        gateway_store.fetch_jobs()

        assert gateway_store.state.error == "Invalid job in gateway response"
        assert gateway_store.state.loading is False

    def test_non_json_body_captured(self, gateway_store, session):
        self.respond(session, json_error=ValueError("Expecting value"))

        gateway_store.fetch_jobs()

        assert gateway_store.state.error == "Invalid response from gateway"
        assert gateway_store.state.jobs == []

    def test_non_object_body_captured(self, gateway_store, session):
        self.respond(session, ["not", "an", "object"])

        gateway_store.fetch_jobs()

        assert gateway_store.state.error == "Invalid response from gateway"


class TestFilters:
    def test_department_exact_case_insensitive(self, store):
        store.set_filter("department", "engineering")

        assert [j.id for j in store.filtered_jobs()] == ["1"]

    def test_type_filter(self, store):
        store.set_filter("type", "contract")

        assert [j.id for j in store.filtered_jobs()] == ["2"]

    def test_location_substring(self, store):
        store.set_filter("location", "berlin")

        assert [j.id for j in store.filtered_jobs()] == ["1", "3"]

    def test_search_covers_title_description_department(self, store):
        store.set_filter("search", "dashboards")
        assert [j.id for j in store.filtered_jobs()] == ["3"]

        store.set_filter("search", "design")
        assert [j.id for j in store.filtered_jobs()] == ["2"]

    def test_clear_filters(self, store):
        store.set_filter("department", "Design")
        store.clear_filters()

        assert len(store.filtered_jobs()) == 3
        assert store.state.filters == {"department": "", "type": "", "location": "", "search": ""}

    def test_unknown_filter(self, store):
        with pytest.raises(KeyError):
            store.set_filter("salary", "100k")

    def test_facets_sorted_unique(self, store):
        assert store.departments() == ["Data", "Design", "Engineering"]
        assert store.locations() == ["Berlin, DE", "Remote"]
        assert store.job_types() == ["CONTRACT", "FULL_TIME"]


class TestApplicationFormStore:
    def test_submit_success(self):
        api = MagicMock()
        api.submit_application.return_value = Application(id="app-1", status="SUBMITTED")
        form = ApplicationFormStore(api)
        statuses = []
        form.subscribe(lambda s: statuses.append(s.status))

        result = form.submit({"jobId": "1"})

        assert result.id == "app-1"
        assert form.status == "submitted"
        assert statuses == ["idle", "submitting", "submitted"]

    def test_submit_error(self):
        api = MagicMock()
        api.submit_application.side_effect = PortalAPIError(400, "Missing required field: phone")
        form = ApplicationFormStore(api)

        assert form.submit({"jobId": "1"}) is None
        assert form.status == "error"
        assert form.error == "Missing required field: phone"

    def test_reset(self):
        api = MagicMock()
        api.submit_application.side_effect = PortalAPIError(500, "boom")
        form = ApplicationFormStore(api)
        form.submit({})

        form.reset()

        assert form.status == "idle"
        assert form.error is None
