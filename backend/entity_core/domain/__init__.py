"""
entity_core/domain - 实体模式与校验
"""
from entity_core.domain.schema import (
    DeleteBehavior,
    SchemaRegistryFrozen,
    FieldSpec,
    Relationship,
    EntitySchema,
    SchemaRegistry,
    schema_registry,
)
from entity_core.domain.validation import validate_row

__all__ = [
    "DeleteBehavior",
    "SchemaRegistryFrozen",
    "FieldSpec",
    "Relationship",
    "EntitySchema",
    "SchemaRegistry",
    "schema_registry",
    "validate_row",
]
