"""
In-process Host Environment.

A HostEnvironment for hosts that live in the same Python process as the
client (desktop shells, test harnesses). The host side calls
dispatch_ready() once its bridge is up, or sets embedded_host before the
session connects.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from pulsar_bridge.config import DEFAULT_READY_EVENT

if TYPE_CHECKING:
    from .protocol import BridgeHandle, EmbeddedHostHandle, ReadyListener

logger = logging.getLogger(__name__)


class LocalHostEnvironment:
    """
    Listener registry plus an optional embedded host.

    Listeners may be added from the event loop and notifications dispatched
    from a host thread, so the registry is guarded by a lock.

    Example:
        env = LocalHostEnvironment()
        session = PulsarSession(env)
        connecting = asyncio.create_task(session.connect())
        ...
        env.dispatch_ready(native_bridge)   # from the host side
        await connecting
    """

    def __init__(self, embedded_host: EmbeddedHostHandle | None = None) -> None:
        self.embedded_host = embedded_host
        self._listeners: dict[str, list[ReadyListener]] = {}
        self._lock = threading.Lock()

    def find_embedded_host(self) -> EmbeddedHostHandle | None:
        embedded = self.embedded_host
        if embedded is None or getattr(embedded, "bridge", None) is None:
            return None
        return embedded

    def add_listener(self, event_name: str, listener: ReadyListener) -> None:
        with self._lock:
            self._listeners.setdefault(event_name, []).append(listener)
        logger.debug(f"[pulsar:env] Listener added for {event_name}")

    def remove_listener(self, event_name: str, listener: ReadyListener) -> None:
        with self._lock:
            listeners = self._listeners.get(event_name, [])
            if listener in listeners:
                listeners.remove(listener)
                logger.debug(f"[pulsar:env] Listener removed for {event_name}")
            if not listeners:
                self._listeners.pop(event_name, None)

    def listener_count(self, event_name: str) -> int:
        """Number of listeners currently subscribed to event_name."""
        with self._lock:
            return len(self._listeners.get(event_name, []))

    def dispatch(self, event_name: str, bridge: BridgeHandle) -> int:
        """
        Deliver bridge to every listener of event_name.

        Returns:
            Number of listeners notified
        """
        with self._lock:
            listeners = list(self._listeners.get(event_name, []))
        for listener in listeners:
            listener(bridge)
        logger.debug(f"[pulsar:env] Dispatched {event_name} to {len(listeners)} listener(s)")
        return len(listeners)

    def dispatch_ready(self, bridge: BridgeHandle, event_name: str | None = None) -> int:
        """Announce a ready native bridge under the configured event name."""
        return self.dispatch(event_name or DEFAULT_READY_EVENT, bridge)


__all__ = ["LocalHostEnvironment"]
