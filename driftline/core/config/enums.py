"""Closed vocabularies of the analytics wire record.

Both values end up verbatim in the posted JSON (``env`` and ``type``), so
members are ``str`` subclasses whose value is the wire string.
"""

from enum import Enum


class Environment(str, Enum):
    """Deployment environment of the app view emitting events.

    Sent with every event so the collector can separate test traffic
    from production traffic.
    """

    DEV = "dev"
    PROD = "prod"


class EventType(str, Enum):
    """Analytics event categories understood by the collector."""

    ACCOUNT = "account"
    VIEW = "view"
    ACTION = "action"
