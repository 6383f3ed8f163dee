"""
Pulsar Session.

One explicit object owns the connection state and the BridgeHandle. Nothing
else mutates them; the client and the resolver only ever go through the
session's send().

Usage:
    session = PulsarSession(LocalHostEnvironment())
    await session.connect()
    accounts = await session.send(RequestEnvelope(RequestKind.READ, object="Account", data={}))
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pulsar_bridge.config import BridgeSettings, get_settings
from pulsar_bridge.errors import (
    AlreadyConnectedError,
    HandshakeTimeoutError,
    InvalidArgumentError,
    NotConnectedError,
)

from .channel import TransportChannel
from .envelope import RequestEnvelope
from .handshake import ConnectionState, perform_handshake

if TYPE_CHECKING:
    from .protocol import BridgeHandle, EmbeddedHostHandle, HostEnvironment, HostHandler

logger = logging.getLogger(__name__)

SYNC_DATA_UPDATE = "syncDataUpdate"
SYNC_DATA_FINISHED = "syncDataFinished"
SYNC_EVENTS = frozenset({SYNC_DATA_UPDATE, SYNC_DATA_FINISHED})

_ALREADY_CONNECTED_MESSAGES = {
    ConnectionState.AWAITING_HANDSHAKE: "Pulsar handshake already in progress.",
    ConnectionState.READY: "Pulsar is already initialized.",
    ConnectionState.FAILED: "Pulsar initialization already failed; create a new session.",
}


class PulsarSession:
    """
    Connection to the host bridge.

    State moves UNINITIALIZED -> AWAITING_HANDSHAKE -> READY | FAILED, once.
    A failed session is not reusable.
    """

    def __init__(
        self,
        environment: HostEnvironment,
        settings: BridgeSettings | None = None,
    ):
        self._environment = environment
        self._settings = settings or get_settings()
        self._state = ConnectionState.UNINITIALIZED
        self._bridge: BridgeHandle | None = None
        self._embedded_host: EmbeddedHostHandle | None = None
        self._channel: TransportChannel | None = None

    # =========================================================================
    # State
    # =========================================================================

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def settings(self) -> BridgeSettings:
        return self._settings

    @property
    def bridge(self) -> BridgeHandle | None:
        return self._bridge

    @property
    def embedded_host(self) -> EmbeddedHostHandle | None:
        return self._embedded_host

    @property
    def is_connected(self) -> bool:
        return self._state is ConnectionState.READY

    @property
    def is_embedded(self) -> bool:
        return self._embedded_host is not None

    # =========================================================================
    # Handshake
    # =========================================================================

    async def connect(self) -> PulsarSession:
        """
        Acquire the host bridge.

        Returns:
            self, once READY

        Raises:
            AlreadyConnectedError: If connect() already ran or is running
            HandshakeTimeoutError: If the native bridge never announced itself
        """
        if self._state is not ConnectionState.UNINITIALIZED:
            logger.info(
                f"[pulsar:session] Initialization requested, but session is {self._state.value}"
            )
            raise AlreadyConnectedError(_ALREADY_CONNECTED_MESSAGES[self._state])

        self._state = ConnectionState.AWAITING_HANDSHAKE
        logger.info("[pulsar:session] Initializing...")

        try:
            result = await perform_handshake(
                self._environment,
                timeout=self._settings.handshake_timeout,
                event_name=self._settings.ready_event_name,
            )
        except HandshakeTimeoutError as e:
            self._state = ConnectionState.FAILED
            logger.warning(f"[pulsar:session] Failed to initialize: {e}")
            raise
        except BaseException:
            # Cancelled or broken handshake still ends the lifecycle.
            self._state = ConnectionState.FAILED
            raise

        self._bridge = result.bridge
        self._embedded_host = result.embedded_host
        self._channel = TransportChannel(
            result.bridge,
            log_requests=self._settings.log_requests,
            log_responses=self._settings.log_responses,
        )
        self._state = ConnectionState.READY
        logger.info(f"[pulsar:session] Initialized ({'embedded' if result.is_embedded else 'native'})")
        return self

    # =========================================================================
    # Transport
    # =========================================================================

    async def send(self, request: RequestEnvelope) -> Any:
        """
        Send one request through the transport channel.

        Raises:
            NotConnectedError: If the session is not READY; the host is not contacted
            TransportError: If the host answers with an error envelope
        """
        if self._state is not ConnectionState.READY or self._channel is None:
            raise NotConnectedError()
        if not isinstance(request, RequestEnvelope):
            raise InvalidArgumentError(
                f"send requires a RequestEnvelope, got {type(request).__name__}"
            )
        return await self._channel.request(request)

    # =========================================================================
    # Host-pushed events
    # =========================================================================

    def register_handler(self, name: str, handler: HostHandler) -> None:
        """
        Subscribe handler to a host-pushed event.

        In the embedded context the sync events go through the embedded
        host, which owns those subscriptions for every nested document.
        """
        bridge = self._require_bridge()
        if not isinstance(name, str) or not callable(handler):
            raise InvalidArgumentError(
                "register_handler requires a string name and a callable handler"
            )

        if self._embedded_host is not None and name in SYNC_EVENTS:
            if name == SYNC_DATA_UPDATE:
                self._embedded_host.add_sync_data_update_handler(handler)
            else:
                self._embedded_host.add_sync_finished_handler(handler)
            logger.warning(f"[pulsar:session] Registered embedded-safe handler for {name}")
            return

        bridge.register_handler(name, handler)
        logger.debug(f"[pulsar:session] Registered bridge handler for {name}")

    def deregister_handler(self, name: str) -> None:
        """Remove the subscription for a host-pushed event."""
        bridge = self._require_bridge()
        if not isinstance(name, str):
            raise InvalidArgumentError("deregister_handler requires a string name")

        if self._embedded_host is not None and name in SYNC_EVENTS:
            if name == SYNC_DATA_UPDATE:
                self._embedded_host.remove_sync_data_update_handler()
            else:
                self._embedded_host.remove_sync_finished_handler()
            logger.warning(f"[pulsar:session] Deregistered embedded-safe handler for {name}")
            return

        bridge.deregister_handler(name)
        logger.debug(f"[pulsar:session] Deregistered bridge handler for {name}")

    def _require_bridge(self) -> BridgeHandle:
        if self._state is not ConnectionState.READY or self._bridge is None:
            raise NotConnectedError()
        return self._bridge

    def __repr__(self) -> str:
        return f"PulsarSession(state={self._state.value}, embedded={self.is_embedded})"


__all__ = [
    "PulsarSession",
    "SYNC_DATA_FINISHED",
    "SYNC_DATA_UPDATE",
    "SYNC_EVENTS",
]
