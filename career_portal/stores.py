"""
Client-side state for the job board and the application form.

Stores are plain objects owned by the caller (one per page or session).
Every state change notifies subscribers with the store itself, so views can
re-render from the current state.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from .api import PortalAPI, PortalAPIError
from .models import Application, Job

logger = logging.getLogger(__name__)

FILTER_KEYS = ("department", "type", "location", "search")

IDLE = "idle"
SUBMITTING = "submitting"
SUBMITTED = "submitted"
ERROR = "error"


def _empty_filters() -> Dict[str, str]:
    return {key: "" for key in FILTER_KEYS}


class _Observable:
    def __init__(self):
        self._subscribers: List[Callable[[Any], None]] = []

    def subscribe(self, callback: Callable[[Any], None]) -> Callable[[], None]:
        """
        Register a callback, called immediately and on every change.

        Returns:
            A function that removes the subscription
        """
        self._subscribers.append(callback)
        callback(self)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        for callback in list(self._subscribers):
            callback(self)


@dataclass
class JobsState:
    jobs: List[Job] = field(default_factory=list)
    loading: bool = False
    error: Optional[str] = None
    filters: Dict[str, str] = field(default_factory=_empty_filters)


class JobsStore(_Observable):
    """Job board state: the fetched page plus client-side filters."""

    def __init__(self, api: PortalAPI):
        super().__init__()
        self.api = api
        self.state = JobsState()

    def fetch_jobs(self) -> None:
        """
        Load jobs from the gateway.

        Errors are captured in `state.error`, never raised; the board
        offers a "try again" action that simply calls this again.
        """
        self.state.loading = True
        self.state.error = None
        self._notify()

        try:
            self.state.jobs = self.api.list_jobs()
        except PortalAPIError as e:
            logger.warning(f"Failed to fetch jobs: {e.message}")
            self.state.error = e.message or "Failed to fetch jobs"
        finally:
            self.state.loading = False
            self._notify()

    def set_filter(self, key: str, value: str) -> None:
        if key not in FILTER_KEYS:
            raise KeyError(f"Unknown filter: {key}")
        self.state.filters[key] = value
        self._notify()

    def clear_filters(self) -> None:
        self.state.filters = _empty_filters()
        self._notify()

    def filtered_jobs(self) -> List[Job]:
        filters = self.state.filters
        jobs = self.state.jobs

        department = filters["department"].lower()
        if department:
            jobs = [job for job in jobs if (job.department or "").lower() == department]

        job_type = filters["type"].lower()
        if job_type:
            jobs = [job for job in jobs if job.type.lower() == job_type]

        location = filters["location"].lower()
        if location:
            jobs = [job for job in jobs if location in (job.location or "").lower()]

        search = filters["search"].lower()
        if search:
            jobs = [
                job for job in jobs
                if search in (job.title or "").lower()
                or search in (job.description or "").lower()
                or search in (job.department or "").lower()
            ]

        return jobs

    def _facet(self, attribute: str) -> List[str]:
        # Jobs without a value do not add an empty option
        return sorted({getattr(job, attribute) or "" for job in self.state.jobs} - {""})

    def departments(self) -> List[str]:
        return self._facet("department")

    def locations(self) -> List[str]:
        return self._facet("location")

    def job_types(self) -> List[str]:
        return self._facet("type")


class ApplicationFormStore(_Observable):
    """Submission state of the application form."""

    def __init__(self, api: PortalAPI):
        super().__init__()
        self.api = api
        self.status: str = IDLE
        self.error: Optional[str] = None
        self.application: Optional[Application] = None

    def submit(self, payload: Dict[str, Any]) -> Optional[Application]:
        """Submit the form; returns the created application or None on error."""
        self.status = SUBMITTING
        self.error = None
        self._notify()

        try:
            self.application = self.api.submit_application(payload)
        except PortalAPIError as e:
            self.status = ERROR
            self.error = e.message
            self._notify()
            return None

        self.status = SUBMITTED
        self._notify()
        return self.application

    def reset(self) -> None:
        self.status = IDLE
        self.error = None
        self.application = None
        self._notify()
