"""
app/api/routers/jobs_router.py

Job applications endpoint.

Proxies one date window of the external job feed and returns curated rows.
Failures are answered with a structured payload rather than raised:

    400  invalid or missing startDate/endDate
    502  the feed answered with a non-success status
    500  the feed could not be reached or read
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from app.connectors import TransportError, UpstreamError
from app.schemas.jobs import JobsErrorResponse, JobsResponse
from app.services.job_feed_service import (
    InvalidDateRangeError,
    JobFeedService,
    get_job_feed_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["jobs"])


def _error(status_code: int, payload: JobsErrorResponse) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=payload.model_dump(by_alias=True, exclude_none=True),
    )


@router.get(
    "/jobs",
    response_model=JobsResponse,
    responses={
        400: {"model": JobsErrorResponse},
        500: {"model": JobsErrorResponse},
        502: {"model": JobsErrorResponse},
    },
)
def list_jobs(
    start_date: str | None = Query(default=None, alias="startDate"),
    end_date: str | None = Query(default=None, alias="endDate"),
    feed_service: JobFeedService = Depends(get_job_feed_service),
) -> JobsResponse | JSONResponse:
    """
    Return curated applicant rows for ``[startDate, endDate]``.

    Both dates accept ``YYYY-MM-DD`` or ``YYYYMMDD``.
    """

    try:
        rows = feed_service.fetch_rows(start_date, end_date)
    except InvalidDateRangeError as exc:
        return _error(status.HTTP_400_BAD_REQUEST, JobsErrorResponse(error=str(exc)))
    except UpstreamError as exc:
        return _error(
            status.HTTP_502_BAD_GATEWAY,
            JobsErrorResponse(
                error="External API error",
                upstream_status=exc.status_code,
                upstream_body=exc.body,
            ),
        )
    except TransportError as exc:
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            JobsErrorResponse(error="Request failed", message=str(exc)),
        )

    return JobsResponse(data=rows)
