"""
Pulsar Field Path Resolution

Resolves dotted relationship paths across related records.
"""

from .field_path import (
    FieldPathResolver,
    MissingReason,
    PathResolution,
    RecordSource,
    SchemaSource,
)

__all__ = [
    "FieldPathResolver",
    "MissingReason",
    "PathResolution",
    "RecordSource",
    "SchemaSource",
]
