"""
Connection Handshake for the Pulsar bridge.

Acquires a working BridgeHandle before any request can be sent.

Two contexts:
    Embedded: the document runs inside an already connected parent. The
        parent's embedded host is adopted immediately.
    Native: the document runs directly in the host's web view. The host
        announces its bridge with a one-shot notification; we wait for it
        against a deadline.

The native wait races two awaitables, the ready notification and the
deadline timer. Whichever finishes first wins and the other is disarmed, so
a notification arriving after the deadline cannot touch settled state.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from pulsar_bridge.errors import HandshakeTimeoutError

from .channel import call_in_loop

if TYPE_CHECKING:
    from .protocol import BridgeHandle, EmbeddedHostHandle, HostEnvironment

logger = logging.getLogger(__name__)


class ConnectionState(Enum):
    """
    Lifecycle of a session's connection.

    UNINITIALIZED -> AWAITING_HANDSHAKE -> READY | FAILED
    READY and FAILED are terminal.
    """

    UNINITIALIZED = "uninitialized"
    AWAITING_HANDSHAKE = "awaiting_handshake"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class HandshakeResult:
    """Outcome of a successful handshake."""

    bridge: BridgeHandle
    embedded_host: EmbeddedHostHandle | None = None

    @property
    def is_embedded(self) -> bool:
        return self.embedded_host is not None


def activate_bridge(bridge: BridgeHandle) -> bool:
    """
    Run the one-time activation older host releases need.

    Hosts that expose a version marker activate themselves. Without one,
    init() must be called exactly once.

    Returns:
        True if init() was called
    """
    if getattr(bridge, "version", None) is not None:
        return False

    init = getattr(bridge, "init", None)
    if not callable(init):
        logger.warning("[pulsar:handshake] Bridge has neither version nor init(); skipping activation")
        return False

    init()
    logger.debug("[pulsar:handshake] Activated legacy bridge with init()")
    return True


def _deliver(ready: asyncio.Future, bridge: BridgeHandle) -> None:
    if ready.done():
        logger.debug("[pulsar:handshake] Ignoring bridge-ready notification after handshake settled")
        return
    ready.set_result(bridge)


async def wait_for_native_bridge(
    environment: HostEnvironment,
    *,
    timeout: float,
    event_name: str,
) -> BridgeHandle:
    """
    Wait for the host's bridge-ready notification.

    Args:
        environment: Where the notification is delivered
        timeout: Seconds before giving up
        event_name: Notification name

    Returns:
        The delivered BridgeHandle

    Raises:
        HandshakeTimeoutError: If the deadline passes first
    """
    loop = asyncio.get_running_loop()
    ready: asyncio.Future[BridgeHandle] = loop.create_future()

    def on_ready(bridge: BridgeHandle) -> None:
        call_in_loop(loop, _deliver, ready, bridge)

    environment.add_listener(event_name, on_ready)
    deadline = asyncio.ensure_future(asyncio.sleep(timeout))
    try:
        done, _ = await asyncio.wait({ready, deadline}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        environment.remove_listener(event_name, on_ready)
        deadline.cancel()
        if not ready.done():
            ready.cancel()

    if ready in done and not ready.cancelled():
        return ready.result()

    raise HandshakeTimeoutError(timeout, event_name)


async def perform_handshake(
    environment: HostEnvironment,
    *,
    timeout: float,
    event_name: str,
) -> HandshakeResult:
    """
    Acquire a BridgeHandle from the embedded or the native context.

    Raises:
        HandshakeTimeoutError: If the native bridge never announces itself
    """
    embedded = environment.find_embedded_host()
    if embedded is not None:
        logger.info("[pulsar:handshake] Embedded host found; adopting parent bridge")
        return HandshakeResult(bridge=embedded.bridge, embedded_host=embedded)

    logger.info(f"[pulsar:handshake] Waiting up to {timeout:g}s for {event_name}")
    bridge = await wait_for_native_bridge(environment, timeout=timeout, event_name=event_name)
    activate_bridge(bridge)
    return HandshakeResult(bridge=bridge)


__all__ = [
    "ConnectionState",
    "HandshakeResult",
    "activate_bridge",
    "perform_handshake",
    "wait_for_native_bridge",
]
