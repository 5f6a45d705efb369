"""
app/connectors package marker.
"""

from app.connectors.base import BaseConnector, FeedGatewayError, TransportError, UpstreamError
from app.connectors.job_feed_connector import JobFeedConnector, unwrap_feed_payload

__all__ = [
    "BaseConnector",
    "FeedGatewayError",
    "JobFeedConnector",
    "TransportError",
    "UpstreamError",
    "unwrap_feed_payload",
]
