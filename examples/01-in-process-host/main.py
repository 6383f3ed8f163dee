"""
In-Process Host Example

This example demonstrates the full client lifecycle against a host that
lives in the same process:
1. The host thread announces its bridge with the ready notification
2. The session completes the native handshake
3. The client reads records and resolves a relationship path

Run: python -m examples.01-in-process-host.main
"""

import asyncio
import threading
import time
from typing import Any

from pulsar_bridge import (
    LocalHostEnvironment,
    PulsarClient,
    PulsarSession,
    configure_logging,
)

# =============================================================================
# Host side: a tiny in-memory "database"
# =============================================================================

SCHEMAS = {
    "Contact": {
        "name": "Contact",
        "fields": {
            "OwnerId": {"name": "OwnerId", "relationshipName": "Owner", "referenceTo": ["User"]},
        },
    },
    "User": {"name": "User", "fields": {}},
}

RECORDS = {
    "Contact": [{"Id": "003A", "Name": "Erin", "OwnerId": "005X"}],
    "User": [{"Id": "005X", "Name": "Carol"}],
}


class InMemoryBridge:
    """
    A host bridge answering from RECORDS and SCHEMAS.

    Callbacks fire on a host thread, like a real web view bridge.
    """

    version = "12.0"

    def __init__(self):
        self._handlers: dict[str, Any] = {}

    def send(self, request: dict[str, Any], callback) -> None:
        threading.Thread(target=self._answer, args=(request, callback)).start()

    def _answer(self, request: dict[str, Any], callback) -> None:
        kind = request["type"]
        if kind == "getSObjectSchema":
            callback({"type": kind, "data": SCHEMAS.get(request["object"], {"fields": {}})})
        elif kind == "read":
            filters = request.get("data") or {}
            rows = [
                row
                for row in RECORDS.get(request["object"], [])
                if all(row.get(k) == v for k, v in filters.items())
            ]
            callback({"type": kind, "data": rows})
        else:
            callback({"type": "error", "data": f"Unsupported request: {kind}"})

    def register_handler(self, name: str, handler) -> None:
        self._handlers[name] = handler

    def deregister_handler(self, name: str) -> None:
        self._handlers.pop(name, None)


def start_host(environment: LocalHostEnvironment, delay: float = 0.2) -> None:
    """Announce the bridge from a host thread after delay seconds."""

    def announce():
        time.sleep(delay)
        environment.dispatch_ready(InMemoryBridge())

    threading.Thread(target=announce, daemon=True).start()


# =============================================================================
# Client side
# =============================================================================


async def main():
    configure_logging()

    environment = LocalHostEnvironment()
    start_host(environment)

    client = await PulsarClient(PulsarSession(environment)).connect()
    print(f"Connected: {client.session}")

    contacts = await client.read("Contact")
    print(f"Contacts: {contacts}")

    owner = await client.resolve_soql_field_path(contacts[0], "Owner.Name", "Contact")
    print(f"Owner of {contacts[0]['Name']}: {owner}")

    missing = await client.resolve_soql_field_path(contacts[0], "Account.Name", "Contact")
    print(f"Account of {contacts[0]['Name']}: {missing}")


if __name__ == "__main__":
    asyncio.run(main())
