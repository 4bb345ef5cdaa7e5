"""Protocols for pluggable infrastructure."""

from driftline.core.protocols.transport import CollectorTransport, TransportResponse

__all__ = ["CollectorTransport", "TransportResponse"]
