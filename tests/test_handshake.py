"""
Tests for the connection handshake.
"""
import asyncio
import threading

import pytest

from pulsar_bridge.bridge import (
    ConnectionState,
    LocalHostEnvironment,
    PulsarSession,
    RequestEnvelope,
    RequestKind,
)
from pulsar_bridge.bridge.handshake import activate_bridge, perform_handshake
from pulsar_bridge.config import DEFAULT_READY_EVENT, BridgeSettings
from pulsar_bridge.errors import AlreadyConnectedError, HandshakeTimeoutError, NotConnectedError

from conftest import FakeBridge, FakeEmbeddedHost


# =============================================================================
# Embedded context
# =============================================================================


class TestEmbeddedHandshake:
    """Tests for adopting an embedded host's bridge."""

    @pytest.mark.asyncio
    async def test_adopts_embedded_bridge(self, settings):
        bridge = FakeBridge()
        env = LocalHostEnvironment(embedded_host=FakeEmbeddedHost(bridge))
        session = PulsarSession(env, settings)

        result = await session.connect()

        assert result is session
        assert session.state is ConnectionState.READY
        assert session.bridge is bridge
        assert session.is_embedded
        assert env.listener_count(DEFAULT_READY_EVENT) == 0

    @pytest.mark.asyncio
    async def test_embedded_bridge_is_not_activated(self, settings):
        bridge = FakeBridge(version=None)
        env = LocalHostEnvironment(embedded_host=FakeEmbeddedHost(bridge))

        await PulsarSession(env, settings).connect()

        assert bridge.init_calls == 0

    @pytest.mark.asyncio
    async def test_embedded_host_without_bridge_falls_back_to_native(self, settings):
        env = LocalHostEnvironment(embedded_host=FakeEmbeddedHost(None))
        session = PulsarSession(env, settings)

        with pytest.raises(HandshakeTimeoutError):
            await session.connect()
        assert session.state is ConnectionState.FAILED


# =============================================================================
# Native context
# =============================================================================


class TestNativeHandshake:
    """Tests for waiting on the bridge-ready notification."""

    @pytest.mark.asyncio
    async def test_ready_notification_connects(self, session, environment, bridge, connect_native):
        result = await connect_native(session, environment, bridge)

        assert result is session
        assert session.state is ConnectionState.READY
        assert session.bridge is bridge
        assert not session.is_embedded

    @pytest.mark.asyncio
    async def test_listener_removed_after_success(self, session, environment, bridge, connect_native):
        await connect_native(session, environment, bridge)

        assert environment.listener_count(DEFAULT_READY_EVENT) == 0

    @pytest.mark.asyncio
    async def test_init_called_once_without_version(self, session, environment, connect_native):
        bridge = FakeBridge(version=None)

        await connect_native(session, environment, bridge)

        assert bridge.init_calls == 1

    @pytest.mark.asyncio
    async def test_init_never_called_with_version(self, session, environment, connect_native):
        bridge = FakeBridge(version="12.0")

        await connect_native(session, environment, bridge)

        assert bridge.init_calls == 0

    @pytest.mark.asyncio
    async def test_second_notification_does_not_reinit(self, session, environment, connect_native):
        bridge = FakeBridge(version=None)
        await connect_native(session, environment, bridge)

        delivered = environment.dispatch_ready(bridge)

        assert delivered == 0
        assert bridge.init_calls == 1

    @pytest.mark.asyncio
    async def test_custom_ready_event_name(self, environment, bridge, connect_native):
        session = PulsarSession(environment, BridgeSettings(ready_event_name="HostReady"))

        await connect_native(session, environment, bridge)

        assert session.is_connected

    @pytest.mark.asyncio
    async def test_notification_from_host_thread(self, session, environment, bridge):
        task = asyncio.create_task(session.connect())
        while environment.listener_count(DEFAULT_READY_EVENT) == 0:
            await asyncio.sleep(0)

        thread = threading.Thread(target=environment.dispatch_ready, args=(bridge,))
        thread.start()
        thread.join()

        await asyncio.wait_for(task, timeout=1.0)
        assert session.state is ConnectionState.READY


# =============================================================================
# Timeout
# =============================================================================


class TestHandshakeTimeout:
    """Tests for the handshake deadline."""

    @pytest.mark.asyncio
    async def test_times_out_without_notification(self, session):
        with pytest.raises(HandshakeTimeoutError) as exc_info:
            await session.connect()

        assert exc_info.value.timeout == 0.05
        assert "timed out" in str(exc_info.value)
        assert session.state is ConnectionState.FAILED

    @pytest.mark.asyncio
    async def test_listener_removed_after_timeout(self, session, environment):
        with pytest.raises(HandshakeTimeoutError):
            await session.connect()

        assert environment.listener_count(DEFAULT_READY_EVENT) == 0

    @pytest.mark.asyncio
    async def test_late_notification_is_ignored(self, session, environment):
        bridge = FakeBridge(version=None)
        with pytest.raises(HandshakeTimeoutError):
            await session.connect()

        delivered = environment.dispatch_ready(bridge)

        assert delivered == 0
        assert bridge.init_calls == 0
        assert session.state is ConnectionState.FAILED
        assert session.bridge is None

    @pytest.mark.asyncio
    async def test_late_delivery_to_stale_listener_is_ignored(self, settings):
        """A listener captured before removal must not settle the handshake."""
        captured = []

        class LeakyEnvironment(LocalHostEnvironment):
            def add_listener(self, event_name, listener):
                captured.append(listener)
                super().add_listener(event_name, listener)

        bridge = FakeBridge(version=None)
        with pytest.raises(HandshakeTimeoutError):
            await perform_handshake(LeakyEnvironment(), timeout=0.01, event_name="Ready")

        captured[0](bridge)
        await asyncio.sleep(0)

        assert bridge.init_calls == 0


# =============================================================================
# Lifecycle
# =============================================================================


class TestConnectLifecycle:
    """Tests for repeated and early use of the session."""

    @pytest.mark.asyncio
    async def test_connect_twice_fails(self, session, environment, bridge, connect_native):
        await connect_native(session, environment, bridge)

        with pytest.raises(AlreadyConnectedError):
            await session.connect()

        assert session.state is ConnectionState.READY
        assert session.bridge is bridge

    @pytest.mark.asyncio
    async def test_connect_while_awaiting_fails(self, session, environment, bridge):
        first = asyncio.create_task(session.connect())
        while environment.listener_count(DEFAULT_READY_EVENT) == 0:
            await asyncio.sleep(0)

        with pytest.raises(AlreadyConnectedError, match="in progress"):
            await session.connect()
        assert environment.listener_count(DEFAULT_READY_EVENT) == 1

        environment.dispatch_ready(bridge)
        await first
        assert session.state is ConnectionState.READY

    @pytest.mark.asyncio
    async def test_connect_after_failure_fails(self, session):
        with pytest.raises(HandshakeTimeoutError):
            await session.connect()

        with pytest.raises(AlreadyConnectedError):
            await session.connect()
        assert session.state is ConnectionState.FAILED

    @pytest.mark.asyncio
    async def test_send_before_connect_fails(self, session, bridge):
        with pytest.raises(NotConnectedError):
            await session.send(RequestEnvelope(RequestKind.READ, object="Account", data={}))
        assert bridge.requests == []

    @pytest.mark.asyncio
    async def test_send_while_awaiting_fails(self, session, environment):
        task = asyncio.create_task(session.connect())
        while environment.listener_count(DEFAULT_READY_EVENT) == 0:
            await asyncio.sleep(0)

        with pytest.raises(NotConnectedError):
            await session.send(RequestEnvelope(RequestKind.USER_INFO, data={}))

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        assert session.state is ConnectionState.FAILED
        assert environment.listener_count(DEFAULT_READY_EVENT) == 0


class TestActivateBridge:
    """Tests for legacy bridge activation."""

    def test_skips_versioned_bridge(self):
        bridge = FakeBridge(version="1")
        assert activate_bridge(bridge) is False
        assert bridge.init_calls == 0

    def test_calls_init_without_version(self):
        bridge = FakeBridge(version=None)
        assert activate_bridge(bridge) is True
        assert bridge.init_calls == 1

    def test_bridge_without_init(self):
        class Bare:
            pass

        assert activate_bridge(Bare()) is False
