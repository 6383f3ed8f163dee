"""
Pulsar Bridge Layer

Handshake, transport and host capability interfaces.
"""

from .channel import TransportChannel
from .envelope import (
    HOST_FALSE,
    HOST_TRUE,
    RequestEnvelope,
    RequestKind,
    ResponseEnvelope,
    from_host_bool,
    to_host_bool,
)
from .environment import LocalHostEnvironment
from .handshake import ConnectionState, HandshakeResult, perform_handshake
from .protocol import (
    BridgeHandle,
    EmbeddedHostHandle,
    HostEnvironment,
    HostHandler,
    ReadyListener,
    ResponseCallback,
)
from .session import SYNC_DATA_FINISHED, SYNC_DATA_UPDATE, PulsarSession

__all__ = [
    # Session
    "PulsarSession",
    "ConnectionState",
    "HandshakeResult",
    "perform_handshake",
    "SYNC_DATA_UPDATE",
    "SYNC_DATA_FINISHED",
    # Transport
    "TransportChannel",
    "RequestEnvelope",
    "RequestKind",
    "ResponseEnvelope",
    "HOST_TRUE",
    "HOST_FALSE",
    "to_host_bool",
    "from_host_bool",
    # Host capabilities
    "BridgeHandle",
    "EmbeddedHostHandle",
    "HostEnvironment",
    "HostHandler",
    "ReadyListener",
    "ResponseCallback",
    "LocalHostEnvironment",
]
