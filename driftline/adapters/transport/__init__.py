"""Collector transport adapters."""

from driftline.adapters.transport.fake import FakeTransport
from driftline.adapters.transport.http import HttpxTransport

__all__ = ["HttpxTransport", "FakeTransport"]
