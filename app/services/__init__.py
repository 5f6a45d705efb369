"""
app/services package marker.
"""

from app.services.dashboard_state import DashboardState, DateRange, FetchTicket
from app.services.job_feed_service import (
    InvalidDateRangeError,
    JobFeedService,
    get_job_feed_service,
)
from app.services.metrics_service import MetricsService
from app.services.preference_service import PreferenceService, resolve_visible_columns

__all__ = [
    "DashboardState",
    "DateRange",
    "FetchTicket",
    "InvalidDateRangeError",
    "JobFeedService",
    "MetricsService",
    "PreferenceService",
    "get_job_feed_service",
    "resolve_visible_columns",
]
