"""Analytics event wire record.

One immutable Pydantic model per event. Optional fields use ``None`` as
the single "absent" marker and are left out of the wire form entirely,
never sent as ``null``, ``""`` or ``{}``.
"""

import json
from datetime import datetime, timezone
from typing import Any, Dict, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from driftline.core.config.enums import Environment, EventType

SCHEMA_VERSION = 1

_OPTIONAL_FIELDS = ("screen", "props")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AnalyticsEvent(BaseModel):
    """Versioned analytics record as posted to the collector.

    Attributes map to wire keys as follows: ``app_view`` -> ``appView``,
    ``timestamp`` -> ``ts``, ``event_type`` -> ``type``. Everything else
    keeps its name.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    v: Literal[1] = SCHEMA_VERSION
    app_view: str = Field(alias="appView")
    env: Environment
    timestamp: datetime = Field(default_factory=_utcnow, alias="ts")
    uid: str
    event_type: EventType = Field(alias="type")
    name: str
    screen: Optional[str] = None
    props: Optional[Dict[str, Any]] = None

    @classmethod
    def build(
        cls,
        *,
        app_view: str,
        env: Environment,
        uid: str,
        event_type: EventType,
        name: str,
        screen: Optional[str] = None,
        props: Optional[Mapping[str, Any]] = None,
    ) -> "AnalyticsEvent":
        """Create an event stamped with the current time.

        Empty ``screen`` strings and empty ``props`` mappings are treated as
        absent. ``props`` is copied so later mutation by the caller does not
        leak into an event that is already in flight.
        """
        return cls(
            app_view=app_view,
            env=env,
            uid=uid,
            event_type=event_type,
            name=name,
            screen=screen or None,
            props=dict(props) if props else None,
        )

    @field_serializer("timestamp")
    def _serialize_timestamp(self, value: datetime) -> str:
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        value = value.astimezone(timezone.utc)
        return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")

    def to_payload(self) -> Dict[str, Any]:
        """Return the JSON-safe wire dict, without keys for absent optionals."""
        absent = {field for field in _OPTIONAL_FIELDS if getattr(self, field) is None}
        return self.model_dump(mode="json", by_alias=True, exclude=absent)

    def to_json(self) -> bytes:
        """Serialize to the UTF-8 JSON request body."""
        return json.dumps(self.to_payload(), separators=(",", ":")).encode("utf-8")
