"""
Pulsar bridge configuration.

Settings come from PULSAR_BRIDGE_* environment variables.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache

from .schemas import DEFAULT_HANDSHAKE_TIMEOUT, DEFAULT_READY_EVENT, BridgeSettings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


@lru_cache()
def get_settings() -> BridgeSettings:
    """
    Get bridge settings from environment.

    Uses lru_cache for singleton pattern. Call get_settings.cache_clear()
    after changing the environment.
    """
    return BridgeSettings(
        handshake_timeout=float(
            os.getenv("PULSAR_BRIDGE_HANDSHAKE_TIMEOUT", str(DEFAULT_HANDSHAKE_TIMEOUT))
        ),
        ready_event_name=os.getenv("PULSAR_BRIDGE_READY_EVENT", DEFAULT_READY_EVENT),
        log_level=os.getenv("PULSAR_BRIDGE_LOG_LEVEL", "INFO"),
        log_requests=_env_flag("PULSAR_BRIDGE_LOG_REQUESTS"),
        log_responses=_env_flag("PULSAR_BRIDGE_LOG_RESPONSES"),
    )


def configure_logging(settings: BridgeSettings | None = None) -> None:
    """
    Configure root logging for applications embedding the client.

    The package itself never calls this; it only emits through
    module-level loggers.
    """
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format=LOG_FORMAT,
    )


__all__ = [
    "BridgeSettings",
    "DEFAULT_HANDSHAKE_TIMEOUT",
    "DEFAULT_READY_EVENT",
    "LOG_FORMAT",
    "configure_logging",
    "get_settings",
]
