"""
Pulsar JSAPI Client

Usage:
    from pulsar_bridge.client import PulsarClient

    client = await PulsarClient(session).connect()
    accounts = await client.read("Account")
"""

from .client import SYNC_OPTION_KEYS, PulsarClient

__all__ = ["PulsarClient", "SYNC_OPTION_KEYS"]
