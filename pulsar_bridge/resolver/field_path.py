"""
Relationship Path Resolver.

Resolves a SOQL-style dotted field path ("Owner.Manager.Name") against a
record, fetching each related record through the host as it goes.

Resolution is soft-fail: a missing relationship, foreign key, target type or
related record collapses the whole walk to None. Callers cannot tell "field
is null" apart from "relationship missing"; that ambiguity is accepted for
partially synced offline data. trace_path() exposes the reason when it
matters.

Per hop, the schema fetch completes before the record read, and the read
completes before the next hop's schema fetch. Nothing is prefetched.

Usage:
    resolver = FieldPathResolver(client.get_sobject_schema, client.read)
    name = await resolver.resolve_path(contact, "Owner.Name", "Contact")
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import ValidationError

from pulsar_bridge.errors import InvalidArgumentError, ResponseShapeError
from pulsar_bridge.schemas import FieldDescriptor, SObjectSchema

logger = logging.getLogger(__name__)

SchemaSource = Callable[[str], Awaitable[Any]]
RecordSource = Callable[[str, dict[str, Any]], Awaitable[Any]]


# =============================================================================
# Results
# =============================================================================


class MissingReason(str, Enum):
    """Why a path did not resolve to a value."""

    EMPTY_PATH = "empty_path"
    FIELD_ABSENT = "field_absent"
    NO_RELATIONSHIP = "no_relationship"
    NO_FOREIGN_KEY = "no_foreign_key"
    UNKNOWN_TARGET = "unknown_target"
    UNDECLARED_TARGET = "undeclared_target"
    RECORD_NOT_FOUND = "record_not_found"


@dataclass(frozen=True, slots=True)
class PathResolution:
    """
    Outcome of resolving one path.

    Attributes:
        value: Leaf value, None when missing
        reason: Why resolution stopped, None when the leaf was found
        segment: Segment being resolved when the walk stopped
        entity_type: SObject type of the record at that point
        hops: Relationship hops completed
    """

    value: Any = None
    reason: MissingReason | None = None
    segment: str | None = None
    entity_type: str | None = None
    hops: int = 0

    @property
    def found(self) -> bool:
        return self.reason is None

    @classmethod
    def resolved(cls, value: Any, *, segment: str, entity_type: str, hops: int) -> PathResolution:
        return cls(value=value, segment=segment, entity_type=entity_type, hops=hops)

    @classmethod
    def missing(
        cls,
        reason: MissingReason,
        *,
        segment: str | None = None,
        entity_type: str | None = None,
        hops: int = 0,
    ) -> PathResolution:
        return cls(reason=reason, segment=segment, entity_type=entity_type, hops=hops)


# =============================================================================
# Resolver
# =============================================================================


class FieldPathResolver:
    """
    Walks relationship paths using a schema source and a record source.

    Args:
        schema_source: async (entity_type) -> SObjectSchema or describe mapping
        record_source: async (entity_type, {"Id": ...}) -> list of records
    """

    def __init__(self, schema_source: SchemaSource, record_source: RecordSource):
        self._schema_source = schema_source
        self._record_source = record_source

    async def resolve_path(
        self,
        record: Mapping[str, Any],
        path: str,
        base_type: str,
    ) -> Any:
        """
        Resolve path against record.

        Returns:
            The leaf value, or None if any hop is missing

        Raises:
            InvalidArgumentError: If path or base_type is not a string, or
                record is not a mapping
        """
        resolution = await self.trace_path(record, path, base_type)
        return resolution.value

    async def trace_path(
        self,
        record: Mapping[str, Any],
        path: str,
        base_type: str,
    ) -> PathResolution:
        """Resolve path and report where and why a walk stopped."""
        if not isinstance(path, str):
            raise InvalidArgumentError(f"resolve_path requires a string path, got {type(path).__name__}")
        if not isinstance(base_type, str):
            raise InvalidArgumentError(
                f"resolve_path requires a string base type, got {type(base_type).__name__}"
            )
        if not isinstance(record, Mapping):
            raise InvalidArgumentError(f"resolve_path requires a record mapping, got {type(record).__name__}")

        segments = path.split(".")
        if segments[0] == base_type:
            segments = segments[1:]

        if not segments:
            # Bare base type resolves to nothing, not to the record itself.
            logger.debug(f"[pulsar:resolver] Path {path!r} names only the base type {base_type}")
            return PathResolution.missing(MissingReason.EMPTY_PATH, entity_type=base_type)

        resolution = await self._walk(record, segments, base_type, 0)
        if not resolution.found:
            logger.debug(
                f"[pulsar:resolver] {base_type}.{path} unresolved: {resolution.reason.value} "
                f"at {resolution.entity_type}.{resolution.segment}"
            )
        return resolution

    async def _walk(
        self,
        record: Mapping[str, Any],
        segments: list[str],
        entity_type: str,
        hops: int,
    ) -> PathResolution:
        segment, remaining = segments[0], segments[1:]

        if not remaining:
            value = record.get(segment)
            if value is None:
                return PathResolution.missing(
                    MissingReason.FIELD_ABSENT, segment=segment, entity_type=entity_type, hops=hops
                )
            return PathResolution.resolved(value, segment=segment, entity_type=entity_type, hops=hops)

        def stop(reason: MissingReason) -> PathResolution:
            return PathResolution.missing(reason, segment=segment, entity_type=entity_type, hops=hops)

        schema = await self._schema(entity_type)
        relationship = schema.relationship(segment)
        if relationship is None:
            return stop(MissingReason.NO_RELATIONSHIP)

        foreign_key = record.get(relationship.name)
        if isinstance(foreign_key, Mapping):
            foreign_key = foreign_key.get("Id")
        if not foreign_key:
            return stop(MissingReason.NO_FOREIGN_KEY)

        target_type, reason = self._target_type(record, relationship)
        if target_type is None:
            return stop(reason)

        rows = await self._record_source(target_type, {"Id": foreign_key})
        related = rows[0] if isinstance(rows, list) and rows else None
        if not isinstance(related, Mapping):
            return stop(MissingReason.RECORD_NOT_FOUND)

        return await self._walk(related, remaining, target_type, hops + 1)

    async def _schema(self, entity_type: str) -> SObjectSchema:
        schema = await self._schema_source(entity_type)
        if isinstance(schema, SObjectSchema):
            return schema
        try:
            return SObjectSchema.model_validate(schema)
        except ValidationError as e:
            raise ResponseShapeError(
                f"Invalid schema for {entity_type}: {e.error_count()} validation error(s)",
                expected="object",
                received=type(schema).__name__,
                operation="resolve_path",
            ) from e

    @staticmethod
    def _target_type(
        record: Mapping[str, Any],
        relationship: FieldDescriptor,
    ) -> tuple[str | None, MissingReason | None]:
        references = relationship.reference_to
        if len(references) == 1:
            return references[0], None
        if not references:
            return None, MissingReason.UNKNOWN_TARGET

        hint = _type_hint(record, relationship)
        if hint is None:
            return references[0], None
        if hint not in references:
            return None, MissingReason.UNDECLARED_TARGET
        return hint, None


def _type_hint(record: Mapping[str, Any], relationship: FieldDescriptor) -> str | None:
    """Find the polymorphic target type carried alongside the record."""
    candidates = [record.get(f"{relationship.name}__r")]
    if relationship.relationship_name:
        candidates.append(record.get(relationship.relationship_name))
    candidates.append(record.get(relationship.name))

    for candidate in candidates:
        if not isinstance(candidate, Mapping):
            continue
        attributes = candidate.get("attributes")
        if isinstance(attributes, Mapping):
            hint = attributes.get("type")
            if isinstance(hint, str) and hint:
                return hint
    return None


__all__ = [
    "FieldPathResolver",
    "MissingReason",
    "PathResolution",
    "RecordSource",
    "SchemaSource",
]
