"""
Configuration Schemas for the Pulsar bridge client.

Pydantic models for settings read from the environment.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_HANDSHAKE_TIMEOUT = 5.0  # seconds
DEFAULT_READY_EVENT = "WebViewJavascriptBridgeReady"


class BridgeSettings(BaseModel):
    """
    Bridge client settings.

    Used for type-safe settings access by the session and the client.
    """

    model_config = ConfigDict(frozen=True)

    # Handshake
    handshake_timeout: float = Field(
        DEFAULT_HANDSHAKE_TIMEOUT,
        gt=0,
        description="Seconds to wait for the native bridge-ready notification",
    )
    ready_event_name: str = Field(
        DEFAULT_READY_EVENT,
        min_length=1,
        description="Name of the notification the native host dispatches when its bridge is ready",
    )

    # Observability
    log_level: str = Field("INFO", description="Log level used by configure_logging()")
    log_requests: bool = Field(False, description="Log every outgoing request envelope at DEBUG")
    log_responses: bool = Field(False, description="Log every incoming response envelope at DEBUG")

    @field_validator("log_level")
    @classmethod
    def normalize_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level
