"""Root conftest for pytest configuration and shared fixtures.

Loaded for both testpaths (tests/ and the colocated driftline tests),
making its fixtures available everywhere.
"""

import os

import pytest

# Register pytest-asyncio plugin at the root level
pytest_plugins = ("pytest_asyncio",)


# ---------------------------------------------------------------------------
# Environment: keep real DRIFTLINE_* vars out of the tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _clean_driftline_env(monkeypatch):
    for key in list(os.environ):
        if key.upper().startswith("DRIFTLINE_"):
            monkeypatch.delenv(key, raising=False)


# ---------------------------------------------------------------------------
# Shared fakes
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_transport():
    """Fake CollectorTransport that records posted events and answers 202."""
    from driftline.adapters.transport.fake import FakeTransport

    return FakeTransport()


@pytest.fixture
def client_config():
    """Client configuration pointing at a fake collector."""
    from driftline.core.config import AnalyticsClientConfig, Environment

    return AnalyticsClientConfig(
        app_view="xyz.kipclip.feed",
        env=Environment.PROD,
        collector_url="https://collector.example.com/",
        api_key="test-api-key",
        uid="fef99e9a34b2",
    )


@pytest.fixture
def analytics_client(client_config, fake_transport):
    """AnalyticsClient wired to the fake transport."""
    from driftline.client import AnalyticsClient

    return AnalyticsClient(client_config, transport=fake_transport)
