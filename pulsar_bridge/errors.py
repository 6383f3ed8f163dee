"""
Exceptions for the Pulsar bridge client.

Every failure surfaced to callers is a PulsarError subclass. None of them
are retried by this package; callers decide what to do.

Taxonomy:
    NotConnectedError       transport used before the handshake completed
    AlreadyConnectedError   handshake requested on a session that already ran one
    HandshakeTimeoutError   native bridge never announced itself in time
    TransportError          host answered a request with an error envelope
    ResponseShapeError      host payload had the wrong shape or was undecodable
    InvalidArgumentError    caller-side precondition violated before sending
"""

from __future__ import annotations

GENERIC_TRANSPORT_ERROR = "Unknown Pulsar JSAPI error"


class PulsarError(Exception):
    """Base exception for the Pulsar bridge client."""


class NotConnectedError(PulsarError):
    """Raised when a request is made before the bridge is ready."""

    def __init__(self, message: str = "Pulsar bridge not initialized. Call connect() first."):
        super().__init__(message)


class AlreadyConnectedError(PulsarError):
    """Raised when connect() is called on a session that is not fresh."""

    def __init__(self, message: str = "Pulsar is already initialized."):
        super().__init__(message)


class HandshakeTimeoutError(PulsarError):
    """Raised when the native bridge-ready notification never arrives."""

    def __init__(self, timeout: float, event_name: str = ""):
        super().__init__("Pulsar bridge initialization timed out.")
        self.timeout = timeout
        self.event_name = event_name

    def __str__(self) -> str:
        return f"{self.args[0]} (waited {self.timeout:g}s for {self.event_name or 'ready event'})"


class TransportError(PulsarError):
    """Raised when the host answers a request with an error envelope."""

    def __init__(self, message: object = None, *, kind: str | None = None):
        super().__init__(str(message) if message else GENERIC_TRANSPORT_ERROR)
        self.kind = kind

    @property
    def message(self) -> str:
        return self.args[0]

    def __str__(self) -> str:
        return self.args[0]


class ResponseShapeError(PulsarError):
    """Raised when a host payload does not have the expected shape."""

    def __init__(
        self,
        message: str,
        *,
        expected: str | None = None,
        received: str | None = None,
        operation: str | None = None,
    ):
        super().__init__(message)
        self.expected = expected
        self.received = received
        self.operation = operation

    def __str__(self) -> str:
        if self.operation:
            return f"[{self.operation}] {self.args[0]}"
        return self.args[0]


class InvalidArgumentError(PulsarError, ValueError):
    """Raised when an operation is called with invalid arguments."""


__all__ = [
    "GENERIC_TRANSPORT_ERROR",
    "AlreadyConnectedError",
    "HandshakeTimeoutError",
    "InvalidArgumentError",
    "NotConnectedError",
    "PulsarError",
    "ResponseShapeError",
    "TransportError",
]
