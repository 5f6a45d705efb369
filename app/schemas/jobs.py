"""
app/schemas/jobs.py

Response schemas for the job applications endpoint.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

CuratedRowValue = str | int | float | None


class JobsResponse(BaseModel):
    """
    Curated applicant rows for one date window, in feed order.
    """

    data: list[dict[str, CuratedRowValue]] = Field(default_factory=list)


class JobsErrorResponse(BaseModel):
    """
    Error payload; upstream fields are set only for feed failures.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    error: str
    message: str | None = None
    upstream_status: int | None = None
    upstream_body: str | None = None
