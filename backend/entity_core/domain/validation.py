"""
entity_core/domain/validation.py

Row validation derived purely from the schema registry.
"""
from datetime import datetime
from decimal import Decimal
from numbers import Number
from typing import Any, Dict, Optional

from entity_core.domain.schema import EntitySchema
from entity_core.result import ValidationError


def _decimal_places(value: Number) -> int:
    exponent = Decimal(str(value)).normalize().as_tuple().exponent
    return -exponent if isinstance(exponent, int) and exponent < 0 else 0


def validate_row(schema: EntitySchema, row: Dict[str, Any],
                 skip: tuple = ()) -> Optional[ValidationError]:
    """
    Check ``row`` against the schema's field specs.

    Args:
        schema: Entity schema to validate against
        row: Column name -> value mapping
        skip: Field names not to check (e.g. a storage-generated key on insert)

    Returns:
        The first violation found, or None when the row is valid.
    """
    for spec in schema.fields:
        if spec.name in skip:
            continue
        value = row.get(spec.name)

        if value is None or (isinstance(value, str) and not value.strip()):
            if spec.required:
                return ValidationError(schema.name, spec.name, f"{spec.name} is required")
            continue

        if spec.max_length is not None and isinstance(value, str) and len(value) > spec.max_length:
            return ValidationError(
                schema.name, spec.name,
                f"{spec.name} must be at most {spec.max_length} characters (got {len(value)})",
            )

        # 存储层只保存不带时区的时间
        if isinstance(value, datetime) and value.utcoffset() is not None:
            return ValidationError(
                schema.name, spec.name,
                f"{spec.name} must not carry a timezone offset",
            )

        if spec.min_value is not None or spec.max_scale is not None:
            # bool is a Number subclass; it is never a valid numeric column value
            if isinstance(value, bool) or not isinstance(value, Number):
                return ValidationError(schema.name, spec.name, f"{spec.name} must be a number")
            if spec.min_value is not None and value < spec.min_value:
                return ValidationError(
                    schema.name, spec.name,
                    f"{spec.name} must be greater than or equal to {spec.min_value}",
                )
            if spec.max_scale is not None and _decimal_places(value) > spec.max_scale:
                return ValidationError(
                    schema.name, spec.name,
                    f"{spec.name} must have at most {spec.max_scale} decimal places",
                )
    return None
