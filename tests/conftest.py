"""
Pytest configuration and fixtures for pulsar_bridge tests.

FakeBridge and FakeEmbeddedHost stand in for the native host side.
"""

import asyncio
import sys
from pathlib import Path

import pytest

# Add the repository root to path for imports
# This allows `from pulsar_bridge.bridge import ...` to work
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from pulsar_bridge.bridge import LocalHostEnvironment, PulsarSession  # noqa: E402
from pulsar_bridge.config import BridgeSettings  # noqa: E402


class FakeBridge:
    """
    In-memory host bridge.

    Answers each request from a per-type response table. With hold=True,
    callbacks are queued in `pending` instead of being called.
    """

    def __init__(self, *, version="2.0", hold=False):
        if version is not None:
            self.version = version
        self.hold = hold
        self.requests = []
        self.pending = []
        self.handlers = {}
        self.init_calls = 0
        self._responses = {}

    def respond(self, kind, data=None, *, error=False):
        """Answer requests of type kind with data (or an error envelope)."""
        self._responses[kind] = {"type": "error" if error else kind, "data": data}
        if error and data is None:
            self._responses[kind] = {"type": "error"}

    def respond_with(self, kind, fn):
        """Answer requests of type kind with fn(request)."""
        self._responses[kind] = fn

    def send(self, request, callback):
        self.requests.append(request)
        if self.hold:
            self.pending.append(callback)
            return
        payload = self._responses.get(request["type"], {"type": request["type"], "data": None})
        if callable(payload):
            payload = payload(request)
        callback(payload)

    def init(self):
        self.init_calls += 1

    def register_handler(self, name, handler):
        self.handlers[name] = handler

    def deregister_handler(self, name):
        self.handlers.pop(name, None)

    @property
    def last_request(self):
        return self.requests[-1]


class FakeEmbeddedHost:
    """Embedded host owning the sync subscriptions."""

    def __init__(self, bridge):
        self.bridge = bridge
        self.sync_update_handler = None
        self.sync_finished_handler = None
        self.calls = []

    def add_sync_data_update_handler(self, handler):
        self.calls.append("add_sync_data_update_handler")
        self.sync_update_handler = handler

    def add_sync_finished_handler(self, handler):
        self.calls.append("add_sync_finished_handler")
        self.sync_finished_handler = handler

    def remove_sync_data_update_handler(self):
        self.calls.append("remove_sync_data_update_handler")
        self.sync_update_handler = None

    def remove_sync_finished_handler(self):
        self.calls.append("remove_sync_finished_handler")
        self.sync_finished_handler = None


@pytest.fixture
def settings():
    """Settings with a short handshake deadline."""
    return BridgeSettings(handshake_timeout=0.05)


@pytest.fixture
def bridge():
    return FakeBridge()


@pytest.fixture
def environment():
    return LocalHostEnvironment()


@pytest.fixture
def session(environment, settings):
    return PulsarSession(environment, settings)


@pytest.fixture
def connect_native():
    """
    Connect a session through the native handshake.

    Usage:
        await connect_native(session, environment, bridge)
    """

    async def _connect(session, environment, bridge):
        task = asyncio.create_task(session.connect())
        event_name = session.settings.ready_event_name
        while environment.listener_count(event_name) == 0:
            if task.done():
                return await task
            await asyncio.sleep(0)
        environment.dispatch_ready(bridge, event_name)
        return await task

    return _connect
