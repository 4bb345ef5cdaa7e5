"""Driftline: pseudonymous analytics events for ATProto app views."""

from driftline.identity import derive_uid_from_did
from driftline.core.config import (
    AnalyticsClientConfig,
    DriftlineSettings,
    Environment,
    EventType,
)
from driftline.core.events import AnalyticsEvent
from driftline.core.protocols import CollectorTransport, TransportResponse
from driftline.adapters.transport.http import HttpxTransport
from driftline.client import AnalyticsClient

__all__ = [
    "AnalyticsClient",
    "AnalyticsClientConfig",
    "AnalyticsEvent",
    "CollectorTransport",
    "DriftlineSettings",
    "Environment",
    "EventType",
    "HttpxTransport",
    "TransportResponse",
    "derive_uid_from_did",
]
