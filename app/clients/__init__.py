"""
app/clients package marker.
"""

from app.clients.dashboard_client import DashboardAPIError, DashboardClient, AuthSession

__all__ = [
    "DashboardAPIError",
    "DashboardClient",
    "AuthSession",
]
