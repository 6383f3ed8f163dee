"""
Transport Channel for the Pulsar bridge.

Turns the host's callback-style send(request, callback) into a single
awaitable per request and separates success from error envelopes.

The channel does not retry, time out, or match responses by id: each
request's callback closure is its only correlation, and a host that never
calls back leaves the awaiting caller pending.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from pulsar_bridge.errors import TransportError

from .envelope import RequestEnvelope, ResponseEnvelope

if TYPE_CHECKING:
    from .protocol import BridgeHandle

logger = logging.getLogger(__name__)


def call_in_loop(loop: asyncio.AbstractEventLoop, fn: Callable[..., None], *args: Any) -> None:
    """
    Run fn on loop, directly if we are already on it.

    Host callbacks may fire synchronously inside send(), later on the same
    loop, or from a host thread.
    """
    try:
        running = asyncio.get_running_loop()
    except RuntimeError:
        running = None

    if running is loop:
        fn(*args)
    elif loop.is_closed():
        logger.warning("[pulsar:channel] Dropping host callback: event loop is closed")
    else:
        loop.call_soon_threadsafe(fn, *args)


def _settle(future: asyncio.Future, payload: Any) -> None:
    # First callback wins; the host is trusted to call back exactly once.
    if future.done():
        logger.debug("[pulsar:channel] Ignoring extra callback for settled request")
        return
    future.set_result(ResponseEnvelope.from_wire(payload))


class TransportChannel:
    """
    Single chokepoint for request/response exchanges with the host.

    Example:
        channel = TransportChannel(bridge)
        records = await channel.request(
            RequestEnvelope(RequestKind.READ, object="Account", data={})
        )
    """

    def __init__(
        self,
        bridge: BridgeHandle,
        *,
        log_requests: bool = False,
        log_responses: bool = False,
    ):
        self._bridge = bridge
        self._log_requests = log_requests
        self._log_responses = log_responses

    @property
    def bridge(self) -> BridgeHandle:
        return self._bridge

    async def request(self, envelope: RequestEnvelope) -> Any:
        """
        Send envelope and wait for the host's answer.

        Returns:
            The response envelope's data

        Raises:
            TransportError: If the host answers with an error envelope or
                its send primitive raises
        """
        loop = asyncio.get_running_loop()
        future: asyncio.Future[ResponseEnvelope] = loop.create_future()

        def on_result(payload: Any) -> None:
            call_in_loop(loop, _settle, future, payload)

        wire = envelope.to_wire()
        if self._log_requests:
            logger.debug(f"[pulsar:channel] -> {wire}")

        try:
            self._bridge.send(wire, on_result)
        except Exception as e:
            raise TransportError(
                f"Bridge send failed: {e}",
                kind=envelope.kind.value,
            ) from e

        response = await future

        if self._log_responses:
            logger.debug(f"[pulsar:channel] <- {envelope.kind.value}: type={response.kind}")

        if response.is_error:
            error = TransportError(response.data, kind=envelope.kind.value)
            logger.info(f"[pulsar:channel] {envelope.kind.value} failed: {error}")
            raise error

        return response.data


__all__ = ["TransportChannel", "call_in_loop"]
