"""
Pydantic schemas for Pulsar describe metadata.

The host returns DescribeSObjectResult-style payloads. Depending on the host
release, "fields" is either a mapping keyed by field API name or the
describe list form. Both are normalized to a mapping here, and entries that
are not valid field descriptors are skipped rather than failing the whole
describe.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

# =============================================================================
# Describe Schemas
# =============================================================================


class FieldDescriptor(BaseModel):
    """One field of an SObject describe."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str = Field(..., min_length=1, description="Field API name")
    relationship_name: str | None = Field(
        None,
        alias="relationshipName",
        description="Relationship name for lookup fields (e.g. Owner for OwnerId)",
    )
    reference_to: list[str] = Field(
        default_factory=list,
        alias="referenceTo",
        description="SObject types a lookup may point at; more than one means polymorphic",
    )

    @field_validator("reference_to", mode="before")
    @classmethod
    def coerce_reference_to(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value

    @property
    def is_polymorphic(self) -> bool:
        return len(self.reference_to) > 1


def _entry_name(item: Any) -> str | None:
    if isinstance(item, FieldDescriptor):
        return item.name
    if isinstance(item, dict):
        name = item.get("name")
        return name if isinstance(name, str) and name else None
    return None


def _coerce_descriptor(key: Any, item: Any) -> FieldDescriptor | None:
    """Validate one describe field entry; None if it is unusable."""
    if not isinstance(key, str) or not key:
        logger.debug(f"[pulsar:schema] Skipping describe field without a name: {str(item)[:100]}")
        return None
    if isinstance(item, FieldDescriptor):
        return item
    if not isinstance(item, dict):
        logger.debug(f"[pulsar:schema] Skipping describe field {key}: not an object")
        return None
    try:
        return FieldDescriptor.model_validate({"name": key, **item})
    except ValidationError as e:
        logger.debug(f"[pulsar:schema] Skipping describe field {key}: {e.error_count()} validation error(s)")
        return None


class SObjectSchema(BaseModel):
    """Describe result for one SObject type."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str | None = Field(None, description="SObject API name")
    fields: dict[str, FieldDescriptor] = Field(default_factory=dict)

    @field_validator("fields", mode="before")
    @classmethod
    def normalize_fields(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, list):
            entries = [(_entry_name(item), item) for item in value]
        elif isinstance(value, dict):
            entries = list(value.items())
        else:
            return value

        normalized = {}
        for key, item in entries:
            descriptor = _coerce_descriptor(key, item)
            if descriptor is not None:
                normalized[key] = descriptor
        return normalized

    def field(self, api_name: str) -> FieldDescriptor | None:
        """Look a field up by API name."""
        return self.fields.get(api_name)

    def relationship(self, relationship_name: str) -> FieldDescriptor | None:
        """Look a lookup field up by its relationship name."""
        for descriptor in self.fields.values():
            if descriptor.relationship_name == relationship_name:
                return descriptor
        return None


__all__ = ["FieldDescriptor", "SObjectSchema"]
