"""Python consumer for the career portal gateway: API client and page stores."""

from .api import PortalAPI, PortalAPIError
from .models import AIScore, Application, Candidate, Job, SalaryRange
from .stores import ApplicationFormStore, JobsStore

__all__ = [
    "AIScore",
    "Application",
    "ApplicationFormStore",
    "Candidate",
    "Job",
    "JobsStore",
    "PortalAPI",
    "PortalAPIError",
    "SalaryRange",
]
