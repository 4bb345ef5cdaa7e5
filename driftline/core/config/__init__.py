"""Configuration module for the Driftline client.

Usage:
    from driftline.core.config import AnalyticsClientConfig, Environment

    config = AnalyticsClientConfig(
        app_view="xyz.kipclip.feed",
        env=Environment.PROD,
        collector_url="https://driftline.val.run",
        api_key=api_key,
        uid=uid,
    )
"""

from driftline.core.config.client_config import AnalyticsClientConfig
from driftline.core.config.enums import Environment, EventType
from driftline.core.config.settings import DriftlineSettings

__all__ = [
    "AnalyticsClientConfig",
    "DriftlineSettings",
    "Environment",
    "EventType",
]
