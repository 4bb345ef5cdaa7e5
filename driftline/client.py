"""Analytics client for ATProto app views.

Usage:
    uid = derive_uid_from_did(user.did, APP_SALT)
    analytics = AnalyticsClient(
        AnalyticsClientConfig(
            app_view="xyz.kipclip.feed",
            env=Environment.PROD,
            collector_url="https://driftline.val.run",
            api_key=API_KEY,
            uid=uid,
        )
    )

    analytics.track_account_created()
    analytics.track_view("HomeScreen")
    analytics.track_action("checkin_created", "CheckinScreen", {"placeType": "cafe"})

Tracking methods return immediately. Delivery happens in the background
and failures only ever reach the ``driftline`` loggers.
"""

import json
import logging
from typing import Any, Dict, Mapping, Optional

import httpx

from driftline.adapters.transport.http import HttpxTransport
from driftline.core.config import AnalyticsClientConfig, DriftlineSettings, EventType
from driftline.core.dispatcher import BackgroundDispatcher
from driftline.core.events import AnalyticsEvent
from driftline.core.exceptions import CollectorResponseError
from driftline.core.protocols.transport import CollectorTransport, TransportResponse

logger = logging.getLogger(__name__)

COLLECT_PATH = "/collect"
UNKNOWN_ERROR: Dict[str, Any] = {"error": "Unknown error"}


def collect_url_for(collector_url: str) -> str:
    """Strip one trailing slash from the collector URL and append ``/collect``."""
    if collector_url.endswith("/"):
        collector_url = collector_url[:-1]
    return collector_url + COLLECT_PATH


def _error_detail(response: TransportResponse) -> Dict[str, Any]:
    try:
        detail = json.loads(response.body.decode("utf-8"))
    except (UnicodeDecodeError, ValueError):
        return dict(UNKNOWN_ERROR)
    if isinstance(detail, dict):
        return detail
    return {"error": detail}


class AnalyticsClient:
    """Builds analytics events and ships them to the collector.

    The configuration is read-only and shared by every in-flight delivery;
    the only thing the client tracks between calls is which deliveries have
    not finished yet (see ``drain``).

    Synchronous hosts (no running event loop) get one daemon thread per
    delivery. Daemon threads die with the interpreter, so such hosts must
    call ``asyncio.run(client.drain())`` before exiting or the events still
    in flight are lost.

    Args:
        config: Static client configuration.
        transport: Collector transport. Defaults to ``HttpxTransport``.
    """

    def __init__(
        self,
        config: AnalyticsClientConfig,
        transport: Optional[CollectorTransport] = None,
    ) -> None:
        self._config = config
        self._transport = transport if transport is not None else HttpxTransport()
        self._dispatcher = BackgroundDispatcher()
        self._collect_url = collect_url_for(config.collector_url)

    @classmethod
    def from_settings(
        cls,
        settings: DriftlineSettings,
        uid: str,
        transport: Optional[CollectorTransport] = None,
    ) -> "AnalyticsClient":
        """Create a client from env-loaded settings and a derived uid."""
        if transport is None:
            transport = HttpxTransport(timeout=settings.REQUEST_TIMEOUT)
        return cls(settings.client_config(uid), transport=transport)

    @property
    def config(self) -> AnalyticsClientConfig:
        """The client's immutable configuration."""
        return self._config

    @property
    def collect_url(self) -> str:
        """Normalized endpoint every event is posted to."""
        return self._collect_url

    @property
    def pending(self) -> int:
        """Number of deliveries still in flight."""
        return self._dispatcher.pending

    # ------------------------------------------------------------------
    # Tracking
    # ------------------------------------------------------------------

    def track_account_created(self, props: Optional[Mapping[str, Any]] = None) -> None:
        """Track when an account is first created/registered for this app view.

        Should only be called once per user; the client does not check.
        """
        self._track(self._create_event(EventType.ACCOUNT, "account_created", None, props))

    def track_view(self, screen: str, props: Optional[Mapping[str, Any]] = None) -> None:
        """Track a screen/view impression."""
        self._track(self._create_event(EventType.VIEW, "screen_impression", screen, props))

    def track_action(
        self,
        name: str,
        screen: Optional[str] = None,
        props: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """Track a user action."""
        self._track(self._create_event(EventType.ACTION, name, screen, props))

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def drain(self) -> None:
        """Wait for every delivery started so far. Never raises delivery errors."""
        await self._dispatcher.drain()

    async def aclose(self) -> None:
        """Drain pending deliveries, then release the transport."""
        await self.drain()
        await self._transport.aclose()

    async def __aenter__(self) -> "AnalyticsClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _create_event(
        self,
        event_type: EventType,
        name: str,
        screen: Optional[str] = None,
        props: Optional[Mapping[str, Any]] = None,
    ) -> AnalyticsEvent:
        return AnalyticsEvent.build(
            app_view=self._config.app_view,
            env=self._config.env,
            uid=self._config.uid,
            event_type=event_type,
            name=name,
            screen=screen,
            props=props,
        )

    def _track(self, event: AnalyticsEvent) -> None:
        # Serialize before detaching so bad props raise in the caller.
        body = event.to_json()
        logger.debug("[driftline] Dispatching '%s' event to %s", event.name, self._collect_url)
        self._dispatcher.spawn(lambda: self._send(body))

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "X-API-Key": self._config.api_key,
        }

    async def _send(self, body: bytes) -> None:
        try:
            response = await self._transport.post(self._collect_url, self._headers(), body)
            if not response.ok:
                raise CollectorResponseError(response.status_code, _error_detail(response))
        except CollectorResponseError as e:
            logger.error("[driftline] Failed to send event: %s", e.detail)
        except (httpx.HTTPError, OSError) as e:
            logger.error("[driftline] Network error: %s", e)
