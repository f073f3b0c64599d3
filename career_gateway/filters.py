"""
Request normalization for list, mutation and analytics handlers.

Turns query strings and JSON bodies into the GraphQL variables the catalog
documents expect. Unknown query keys are ignored, out-of-range pagination
falls back to defaults, and malformed analytics dates fall back to a default
window. Nothing here talks to the upstream.
"""

import calendar
import json
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence

from fastapi import Request

from .errors import APIError
from .models import JobStatus

DEFAULT_LIMIT = 20
MAX_LIMIT = 100
DEFAULT_OFFSET = 0

DATE_FORMAT = "%Y-%m-%d"

# Spellings accepted as true; everything else is false
_TRUE_VALUES = {"1", "t", "T", "TRUE", "true", "True"}


def _param(params: Mapping[str, str], key: str) -> Optional[str]:
    """Query parameter value, with empty strings treated as absent."""
    value = params.get(key)
    if value is None or value == "":
        return None
    return value


def parse_bool(value: str) -> bool:
    """Lenient boolean parse; anything unrecognized is False."""
    return value in _TRUE_VALUES


def _parse_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _parse_float(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


# =============================================================================
# Pagination
# =============================================================================

@dataclass
class Pagination:
    limit: int = DEFAULT_LIMIT
    offset: int = DEFAULT_OFFSET

    @classmethod
    def from_params(cls, params: Mapping[str, str]) -> "Pagination":
        """Parse limit/offset; anything invalid or out of bounds uses the default."""
        pagination = cls()

        limit = _parse_int(_param(params, "limit"))
        if limit is not None and 1 <= limit <= MAX_LIMIT:
            pagination.limit = limit

        offset = _parse_int(_param(params, "offset"))
        if offset is not None and offset >= 0:
            pagination.offset = offset

        return pagination

    def to_variables(self) -> Dict[str, int]:
        return {"limit": self.limit, "offset": self.offset}


# =============================================================================
# Filter sets
# =============================================================================

@dataclass
class JobFilterSet:
    """Criteria for GET /jobs. Status defaults to PUBLISHED for public callers."""

    query: Optional[str] = None
    departments: List[str] = field(default_factory=list)
    locations: List[str] = field(default_factory=list)
    employment_types: List[str] = field(default_factory=list)
    experience_levels: List[str] = field(default_factory=list)
    remote: Optional[bool] = None
    status: str = JobStatus.PUBLISHED.value

    @classmethod
    def from_params(cls, params: Mapping[str, str]) -> "JobFilterSet":
        filters = cls()
        filters.query = _param(params, "q")

        department = _param(params, "department")
        if department:
            filters.departments = [department]

        location = _param(params, "location")
        if location:
            filters.locations = [location]

        # The public board sends `type`; internal callers use `employmentType`
        employment_type = _param(params, "employmentType") or _param(params, "type")
        if employment_type:
            filters.employment_types = [employment_type]

        experience_level = _param(params, "experienceLevel")
        if experience_level:
            filters.experience_levels = [experience_level]

        remote = _param(params, "remote")
        if remote is not None:
            filters.remote = parse_bool(remote)

        status = _param(params, "status")
        if status:
            filters.status = status

        return filters

    def to_variables(self) -> Dict[str, Any]:
        variables: Dict[str, Any] = {}
        if self.query:
            variables["query"] = self.query
        if self.departments:
            variables["departments"] = list(self.departments)
        if self.locations:
            variables["locations"] = list(self.locations)
        if self.employment_types:
            variables["employmentTypes"] = list(self.employment_types)
        if self.experience_levels:
            variables["experienceLevels"] = list(self.experience_levels)
        if self.remote is not None:
            variables["remoteWork"] = self.remote
        variables["status"] = self.status
        return variables


@dataclass
class ApplicationFilterSet:
    job_id: Optional[str] = None
    status: Optional[str] = None
    date_from: Optional[str] = None
    date_to: Optional[str] = None
    min_score: Optional[float] = None

    @classmethod
    def from_params(cls, params: Mapping[str, str]) -> "ApplicationFilterSet":
        return cls(
            job_id=_param(params, "jobId"),
            status=_param(params, "status"),
            date_from=_param(params, "dateFrom"),
            date_to=_param(params, "dateTo"),
            min_score=_parse_float(_param(params, "minScore")),
        )

    def to_variables(self) -> Dict[str, Any]:
        variables: Dict[str, Any] = {}
        if self.job_id:
            variables["jobId"] = self.job_id
        if self.status:
            variables["status"] = self.status
        if self.date_from:
            variables["dateFrom"] = self.date_from
        if self.date_to:
            variables["dateTo"] = self.date_to
        if self.min_score is not None:
            variables["minScore"] = self.min_score
        return variables


def build_list_variables(filters: Dict[str, Any], pagination: Pagination) -> Dict[str, Any]:
    """Combine pagination with filters; `filters` is omitted when empty."""
    variables: Dict[str, Any] = pagination.to_variables()
    if filters:
        variables["filters"] = filters
    return variables


def job_list_variables(params: Mapping[str, str]) -> Dict[str, Any]:
    return build_list_variables(
        JobFilterSet.from_params(params).to_variables(),
        Pagination.from_params(params),
    )


def application_list_variables(params: Mapping[str, str]) -> Dict[str, Any]:
    return build_list_variables(
        ApplicationFilterSet.from_params(params).to_variables(),
        Pagination.from_params(params),
    )


# =============================================================================
# Analytics date ranges
# =============================================================================

def subtract_months(moment: datetime, months: int) -> datetime:
    """Shift a datetime back by whole months, clamping to the month's last day."""
    month_index = moment.month - 1 - months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def _parse_date(value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    try:
        return datetime.strptime(value, DATE_FORMAT).replace(tzinfo=timezone.utc)
    except ValueError:
        return None


def format_rfc3339(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


@dataclass
class DateRange:
    start: datetime
    end: datetime

    @classmethod
    def from_params(
        cls,
        params: Mapping[str, str],
        default_days: Optional[int] = None,
        default_months: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> "DateRange":
        """
        Parse startDate/endDate (YYYY-MM-DD).

        The default window ends now and spans `default_days` or
        `default_months`. A missing or malformed bound silently keeps its
        default rather than failing the request.
        """
        end = now or datetime.now(timezone.utc)
        if default_months is not None:
            start = subtract_months(end, default_months)
        else:
            start = end - timedelta(days=default_days or 30)

        parsed_start = _parse_date(_param(params, "startDate"))
        if parsed_start is not None:
            start = parsed_start

        parsed_end = _parse_date(_param(params, "endDate"))
        if parsed_end is not None:
            end = parsed_end

        return cls(start=start, end=end)

    def to_variables(self) -> Dict[str, Any]:
        return {
            "dateRange": {
                "start": format_rfc3339(self.start),
                "end": format_rfc3339(self.end),
            }
        }


# =============================================================================
# Request bodies
# =============================================================================

async def read_json_object(request: Request) -> Dict[str, Any]:
    """Decode the request body as a JSON object or fail with 400."""
    raw = await request.body()
    try:
        body = json.loads(raw) if raw else None
    except ValueError as e:
        raise APIError(400, "Invalid request body", details=str(e))
    if not isinstance(body, dict):
        raise APIError(400, "Invalid request body", details="expected a JSON object")
    return body


def require_fields(body: Mapping[str, Any], required: Sequence[str]) -> None:
    """Fail with 400 naming the first required top-level key that is absent."""
    for name in required:
        if name not in body:
            raise APIError(400, f"Missing required field: {name}")


def require_path_id(value: Optional[str], label: str) -> str:
    if value is None or not value.strip():
        raise APIError(400, f"{label} ID is required")
    return value
