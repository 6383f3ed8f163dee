"""
Host Capability Protocols for the Pulsar bridge.

Defines the interfaces the host application provides to a document running
in its embedded web view. This package consumes these capabilities; it never
implements the native side.

Three capabilities are involved:

- BridgeHandle: the raw message bridge. Everything the client does goes
  through its send() primitive.
- EmbeddedHostHandle: present only when the document runs inside an already
  connected parent document. Wraps a BridgeHandle and owns the sync event
  subscriptions, so a nested document must not grab those on the raw bridge.
- HostEnvironment: the enclosing execution context. It is where the session
  looks for an embedded host and where the native host announces its bridge.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

ResponseCallback = Callable[[dict[str, Any]], None]
HostHandler = Callable[..., Any]
ReadyListener = Callable[["BridgeHandle"], None]


@runtime_checkable
class BridgeHandle(Protocol):
    """
    Raw message bridge exposed by the native host.

    Optional members, looked up with getattr() by the handshake:
        version: present on host releases that self-activate
        init(): explicit activation required by older host releases
    """

    def send(self, request: dict[str, Any], callback: ResponseCallback) -> None:
        """
        Submit a request envelope.

        The host calls callback exactly once with a response envelope
        ({"type": ..., "data": ...}), possibly from another thread.
        """
        ...

    def register_handler(self, name: str, handler: HostHandler) -> None:
        """Subscribe handler to host-pushed events called name."""
        ...

    def deregister_handler(self, name: str) -> None:
        """Remove the subscription for host-pushed events called name."""
        ...


@runtime_checkable
class EmbeddedHostHandle(Protocol):
    """
    Richer capability of an already-connected parent document.

    When discoverable, it takes precedence over a fresh native handshake.
    """

    @property
    def bridge(self) -> BridgeHandle:
        """The parent's BridgeHandle, adopted as-is by the session."""
        ...

    def add_sync_data_update_handler(self, handler: HostHandler) -> None: ...

    def add_sync_finished_handler(self, handler: HostHandler) -> None: ...

    def remove_sync_data_update_handler(self) -> None: ...

    def remove_sync_finished_handler(self) -> None: ...


@runtime_checkable
class HostEnvironment(Protocol):
    """
    Enclosing execution context of the document.

    Example implementation: LocalHostEnvironment (in-process dispatch).
    """

    def find_embedded_host(self) -> EmbeddedHostHandle | None:
        """Return the parent's embedded host if one is reachable."""
        ...

    def add_listener(self, event_name: str, listener: ReadyListener) -> None:
        """Subscribe listener to a one-shot host notification."""
        ...

    def remove_listener(self, event_name: str, listener: ReadyListener) -> None:
        """Unsubscribe listener; unknown listeners are ignored."""
        ...


__all__ = [
    "BridgeHandle",
    "EmbeddedHostHandle",
    "HostEnvironment",
    "HostHandler",
    "ReadyListener",
    "ResponseCallback",
]
