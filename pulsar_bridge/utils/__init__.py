"""
Pulsar Bridge Utilities

Helpers shared by the client and the resolver.
"""

from .json_parser import ResponseShape, describe_kind, normalize_response

__all__ = [
    "ResponseShape",
    "describe_kind",
    "normalize_response",
]
