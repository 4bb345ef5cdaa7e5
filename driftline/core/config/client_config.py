"""Static configuration for a single analytics client."""

from pydantic import BaseModel, ConfigDict

from driftline.core.config.enums import Environment


class AnalyticsClientConfig(BaseModel):
    """Immutable configuration supplied by the embedding application.

    Nothing here is checked beyond its type: a malformed collector URL or a
    revoked API key only shows up later as a logged delivery failure.

    Attributes:
        app_view: Identifier of the consuming app view (e.g. ``xyz.kipclip.feed``).
        env: Environment the app view runs in.
        collector_url: Base URL of the collector; ``/collect`` is appended.
        api_key: Key sent in the ``X-API-Key`` header.
        uid: Pseudonymous user id, usually from ``derive_uid_from_did``.
    """

    model_config = ConfigDict(frozen=True)

    app_view: str
    env: Environment
    collector_url: str
    api_key: str
    uid: str
