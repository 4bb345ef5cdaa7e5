"""Environment-driven settings for host applications.

Uses Pydantic Settings for automatic env var loading. Loading settings is
opt-in: the client itself never reads the environment.

Env vars use the ``DRIFTLINE_`` prefix:
    DRIFTLINE_APP_VIEW=xyz.kipclip.feed
    DRIFTLINE_ENV=prod
    DRIFTLINE_COLLECTOR_URL=https://driftline.val.run
    DRIFTLINE_API_KEY=...
    DRIFTLINE_UID_SALT=...
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from driftline.core.config.client_config import AnalyticsClientConfig
from driftline.core.config.enums import Environment
from driftline.identity import derive_uid_from_did


class DriftlineSettings(BaseSettings):
    """Settings for wiring an analytics client from the process environment."""

    model_config = SettingsConfigDict(
        env_prefix="DRIFTLINE_",
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    APP_VIEW: str = Field(..., description="App view identifier sent with every event")
    ENV: Environment = Field(Environment.DEV, description="Deployment environment")
    COLLECTOR_URL: str = Field(..., description="Base URL of the collector service")
    API_KEY: str = Field(..., description="Collector API key")
    UID_SALT: str = Field(..., description="App-specific secret salt for uid derivation")
    REQUEST_TIMEOUT: Optional[float] = Field(
        None, description="HTTP timeout in seconds; httpx default when unset"
    )

    def derive_uid(self, did: str) -> str:
        """Derive the pseudonymous uid for a DID using the configured salt."""
        return derive_uid_from_did(did, self.UID_SALT)

    def client_config(self, uid: str) -> AnalyticsClientConfig:
        """Build the immutable client configuration for the given uid."""
        return AnalyticsClientConfig(
            app_view=self.APP_VIEW,
            env=self.ENV,
            collector_url=self.COLLECTOR_URL,
            api_key=self.API_KEY,
            uid=uid,
        )
