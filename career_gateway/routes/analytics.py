"""
Analytics Routes

Recruiting dashboards. Dates are YYYY-MM-DD query parameters; a missing or
malformed date falls back to the endpoint's default window instead of
failing the request.

Endpoints:
    GET /api/v1/analytics/metrics                     - Metrics (default: last 30 days)
    GET /api/v1/analytics/jobs/{job_id}/performance   - Per-job performance
    GET /api/v1/analytics/pipeline                    - Pipeline counts (optional jobId)
    GET /api/v1/analytics/trends                      - Application trend (default: last 3 months)
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Request

from ..auth import require_auth
from ..dependencies import get_hrms_client
from ..filters import DateRange, require_path_id
from ..gateway import HRMSClient
from ..gateway import queries
from ..relay import execute, relay

router = APIRouter(
    prefix="/api/v1/analytics",
    tags=["analytics"],
    dependencies=[Depends(require_auth)],
)

METRICS_DEFAULT_DAYS = 30
TRENDS_DEFAULT_MONTHS = 3


@router.get("/metrics")
async def get_metrics(request: Request, client: HRMSClient = Depends(get_hrms_client)):
    date_range = DateRange.from_params(request.query_params, default_days=METRICS_DEFAULT_DAYS)
    result = await execute(
        client,
        queries.GET_RECRUITMENT_METRICS_QUERY,
        date_range.to_variables(),
        "Failed to fetch metrics",
    )
    return relay(result.data)


@router.get("/jobs/{job_id}/performance")
async def get_job_performance(job_id: str, client: HRMSClient = Depends(get_hrms_client)):
    job_id = require_path_id(job_id, "Job")
    result = await execute(
        client,
        queries.GET_JOB_PERFORMANCE_QUERY,
        {"jobId": job_id},
        "Failed to fetch job performance",
    )
    return relay(result.data)


@router.get("/pipeline")
async def get_pipeline(request: Request, client: HRMSClient = Depends(get_hrms_client)):
    variables: Dict[str, Any] = {}
    job_id = request.query_params.get("jobId")
    if job_id:
        variables["jobId"] = job_id

    result = await execute(
        client, queries.GET_APPLICATION_PIPELINE_QUERY, variables, "Failed to fetch pipeline"
    )
    return relay(result.data)


@router.get("/trends")
async def get_trends(request: Request, client: HRMSClient = Depends(get_hrms_client)):
    """
    Application trend over time.

    Reuses the metrics query and narrows the reply to
    `{"applicationTrend": ...}` when the upstream includes one; otherwise the
    full payload is relayed.
    """
    date_range = DateRange.from_params(request.query_params, default_months=TRENDS_DEFAULT_MONTHS)
    result = await execute(
        client,
        queries.GET_RECRUITMENT_METRICS_QUERY,
        date_range.to_variables(),
        "Failed to fetch trends",
    )

    data = result.data
    if isinstance(data, dict):
        metrics = data.get("recruitmentMetrics")
        if isinstance(metrics, dict) and metrics.get("applicationTrend") is not None:
            return relay({"applicationTrend": metrics["applicationTrend"]})
    return relay(data)
