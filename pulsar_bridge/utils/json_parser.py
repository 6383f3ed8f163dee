"""
Response normalization for host payloads.

Older host releases return some payloads as serialized JSON strings while
newer ones return the structured value directly. normalize_response()
accepts both and checks the result has the expected shape:
- already the right shape: returned unchanged
- a string: decoded with json.loads
- anything else: ResponseShapeError
"""
from __future__ import annotations

import json
import logging
from enum import Enum
from typing import Any

from pulsar_bridge.errors import ResponseShapeError

logger = logging.getLogger(__name__)


class ResponseShape(str, Enum):
    """Structured shapes a host payload can be normalized to."""

    OBJECT = "object"
    ARRAY = "array"

    def matches(self, value: Any) -> bool:
        if self is ResponseShape.OBJECT:
            return isinstance(value, dict)
        return isinstance(value, list)


def describe_kind(value: Any) -> str:
    """Name a payload's kind in the host's vocabulary."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    return type(value).__name__


def normalize_response(
    expected: ResponseShape,
    response: Any,
    *,
    operation: str | None = None,
) -> Any:
    """
    Normalize a host payload to the expected shape.

    Args:
        expected: Shape the caller needs
        response: Raw payload from the transport channel
        operation: Operation name used in error messages

    Returns:
        response itself, or its decoded value if it was a JSON string

    Raises:
        ResponseShapeError: If the string does not decode, or the payload
            is neither the expected shape nor a string
    """
    expected = ResponseShape(expected)

    if expected.matches(response):
        return response

    if isinstance(response, str):
        try:
            decoded = json.loads(response)
        except json.JSONDecodeError as e:
            logger.warning(f"[pulsar:normalize] Failed to decode {operation or 'response'}: {response[:100]}")
            raise ResponseShapeError(
                "parse failure",
                expected=expected.value,
                received="string",
                operation=operation,
            ) from e
        # Legacy strings are trusted to decode to the right shape.
        return decoded

    received = describe_kind(response)
    raise ResponseShapeError(
        f"Unexpected return type. Expected {expected.value} or JSON string, but received {received}.",
        expected=expected.value,
        received=received,
        operation=operation,
    )


__all__ = [
    "ResponseShape",
    "describe_kind",
    "normalize_response",
]
