"""
Pulsar Bridge

Async Python client for the Pulsar for Salesforce host bridge.

Usage:
    from pulsar_bridge import LocalHostEnvironment, PulsarClient, PulsarSession

    session = PulsarSession(LocalHostEnvironment())
    client = await PulsarClient(session).connect()
    owner = await client.resolve_soql_field_path(contact, "Owner.Name", "Contact")
"""

from pulsar_bridge.bridge import (
    ConnectionState,
    LocalHostEnvironment,
    PulsarSession,
    RequestEnvelope,
    RequestKind,
    ResponseEnvelope,
)
from pulsar_bridge.client import PulsarClient
from pulsar_bridge.config import BridgeSettings, configure_logging, get_settings
from pulsar_bridge.errors import (
    AlreadyConnectedError,
    HandshakeTimeoutError,
    InvalidArgumentError,
    NotConnectedError,
    PulsarError,
    ResponseShapeError,
    TransportError,
)
from pulsar_bridge.resolver import FieldPathResolver, MissingReason, PathResolution
from pulsar_bridge.schemas import FieldDescriptor, SObjectSchema
from pulsar_bridge.utils import ResponseShape, normalize_response

__version__ = "0.1.0"

__all__ = [
    # Session
    "PulsarSession",
    "ConnectionState",
    "LocalHostEnvironment",
    "RequestEnvelope",
    "RequestKind",
    "ResponseEnvelope",
    # Client
    "PulsarClient",
    "FieldDescriptor",
    "SObjectSchema",
    # Resolver
    "FieldPathResolver",
    "MissingReason",
    "PathResolution",
    # Normalization
    "ResponseShape",
    "normalize_response",
    # Config
    "BridgeSettings",
    "configure_logging",
    "get_settings",
    # Errors
    "PulsarError",
    "NotConnectedError",
    "AlreadyConnectedError",
    "HandshakeTimeoutError",
    "TransportError",
    "ResponseShapeError",
    "InvalidArgumentError",
]
