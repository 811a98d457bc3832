"""
测试 entity_core.domain - 模式注册表与字段校验
"""
import pytest
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from entity_core.domain.schema import (
    DeleteBehavior,
    EntitySchema,
    FieldSpec,
    Relationship,
    SchemaRegistry,
    SchemaRegistryFrozen,
    schema_registry,
)
from entity_core.domain.validation import validate_row
from entity_core.result import ResultKind
from hotel_server.hotel.schema import (
    HOTEL, HOTEL_ROOM, ROOM_RESERVATION, ROOM_TYPE,
    HOTEL_ROOMS, ROOM_RESERVATIONS, ROOM_TYPE_ROOMS, BED_TYPE_ROOMS,
    register_hotel_schemas,
)


@pytest.fixture
def registry():
    return register_hotel_schemas(SchemaRegistry())


class TestHotelSchemas:
    def test_primary_keys(self, registry):
        assert registry.primary_key(HOTEL) == ["id"]
        assert registry.primary_key(HOTEL_ROOM) == ["room_number", "hotel_id"]
        assert registry.primary_key(ROOM_RESERVATION) == ["reservation_id"]
        assert registry.primary_key(ROOM_TYPE) == ["id", "name"]

    def test_generated_keys(self, registry):
        assert registry.get(HOTEL).generated_key is True
        assert registry.get(ROOM_RESERVATION).generated_key is True
        assert registry.get(HOTEL_ROOM).generated_key is False

    def test_required_fields(self, registry):
        assert set(registry.required_fields(HOTEL)) == {"id", "name", "address", "phone_number"}
        assert set(registry.required_fields(ROOM_RESERVATION)) == {
            "reservation_id", "hotel_id", "room_number", "start_date", "end_date",
        }

    def test_max_length(self, registry):
        assert registry.max_length(HOTEL, "name") == 100
        assert registry.max_length(HOTEL, "address") == 200
        assert registry.max_length(HOTEL, "phone_number") == 100
        assert registry.max_length(HOTEL_ROOM, "nightly_rate") is None
        assert registry.max_length(HOTEL, "no_such_field") is None

    def test_min_value(self, registry):
        assert registry.min_value(HOTEL_ROOM, "nightly_rate") == 0
        assert registry.min_value(HOTEL_ROOM, "number_of_beds") == 1

    def test_delete_behavior(self, registry):
        assert registry.delete_behavior(HOTEL_ROOMS) == DeleteBehavior.CASCADE
        assert registry.delete_behavior(ROOM_RESERVATIONS) == DeleteBehavior.CASCADE
        assert registry.delete_behavior(ROOM_TYPE_ROOMS) == DeleteBehavior.RESTRICT
        assert registry.delete_behavior(BED_TYPE_ROOMS) == DeleteBehavior.RESTRICT

    def test_unknown_relationship(self, registry):
        with pytest.raises(KeyError):
            registry.delete_behavior("nope")

    def test_children_of(self, registry):
        assert [rel.name for rel in registry.children_of(HOTEL)] == [HOTEL_ROOMS]
        assert [rel.name for rel in registry.children_of(HOTEL_ROOM)] == [ROOM_RESERVATIONS]
        assert registry.children_of(ROOM_RESERVATION) == []

    def test_column_pairs_skip_uncarried_parent_columns(self, registry):
        rel = next(r for r in registry.relationships() if r.name == ROOM_TYPE_ROOMS)
        assert rel.column_pairs(registry.get(ROOM_TYPE).key) == [("room_type_id", "id")]

    def test_reservation_references_room_composite_key(self, registry):
        rel = next(r for r in registry.relationships() if r.name == ROOM_RESERVATIONS)
        assert rel.column_pairs(registry.get(HOTEL_ROOM).key) == [
            ("room_number", "room_number"), ("hotel_id", "hotel_id"),
        ]


class TestRegistration:
    def test_relationship_with_unknown_entity(self):
        registry = SchemaRegistry()
        registry.register(EntitySchema("A", "a", ("id",)))
        with pytest.raises(KeyError):
            registry.register_relationship(
                Relationship("a_b", parent="A", child="B", columns=("a_id",),
                             on_delete=DeleteBehavior.CASCADE)
            )

    def test_relationship_column_count_must_match_parent_key(self):
        registry = SchemaRegistry()
        registry.register(EntitySchema("A", "a", ("x", "y")))
        registry.register(EntitySchema("B", "b", ("id",)))
        with pytest.raises(ValueError):
            registry.register_relationship(
                Relationship("a_b", parent="A", child="B", columns=("a_x",),
                             on_delete=DeleteBehavior.CASCADE)
            )

    def test_frozen_registry_rejects_registration(self):
        registry = SchemaRegistry()
        registry.freeze()
        with pytest.raises(SchemaRegistryFrozen):
            registry.register(EntitySchema("A", "a", ("id",)))

    def test_global_registry_is_frozen_with_hotel_schemas(self):
        import hotel_server.hotel  # noqa: registers on import
        assert schema_registry.frozen
        assert set(schema_registry.entity_names()) >= {HOTEL, HOTEL_ROOM, ROOM_RESERVATION}

    def test_registry_matches_table_foreign_keys(self):
        """模式中的删除行为与表外键 ondelete 一致"""
        from hotel_server.database import Base
        from hotel_server.models import ontology  # noqa

        tables = Base.metadata.tables
        for rel in schema_registry.relationships():
            child_table = tables[schema_registry.get(rel.child).table]
            parent_table = schema_registry.get(rel.parent).table
            fks = [fk for fk in child_table.foreign_keys if fk.column.table.name == parent_table]
            assert fks, rel.name
            assert all(fk.ondelete.lower() == rel.on_delete.value for fk in fks)


class TestValidateRow:
    def _hotel(self, **overrides):
        row = {"id": 1, "name": "Hotel", "address": "Street 1", "phone_number": "555"}
        row.update(overrides)
        return row

    def test_valid_row(self, registry):
        assert validate_row(registry.get(HOTEL), self._hotel()) is None

    def test_name_length_boundary(self, registry):
        schema = registry.get(HOTEL)
        assert validate_row(schema, self._hotel(name="x" * 100)) is None

        error = validate_row(schema, self._hotel(name="x" * 101))
        assert error is not None
        assert error.kind == ResultKind.VALIDATION_ERROR
        assert error.field == "name"

    def test_missing_required_field(self, registry):
        error = validate_row(registry.get(HOTEL), self._hotel(address=None))
        assert error.field == "address"

    def test_blank_string_counts_as_missing(self, registry):
        error = validate_row(registry.get(HOTEL), self._hotel(phone_number="   "))
        assert error.field == "phone_number"

    def test_skip_generated_key(self, registry):
        row = self._hotel()
        row.pop("id")
        assert validate_row(registry.get(HOTEL), row, skip=("id",)) is None
        assert validate_row(registry.get(HOTEL), row).field == "id"

    def test_numeric_lower_bounds(self, registry):
        schema = registry.get(HOTEL_ROOM)
        row = {"room_number": 1, "hotel_id": 1, "nightly_rate": Decimal("0"),
               "number_of_beds": 1, "room_type_id": 1, "bed_type_id": 1}
        assert validate_row(schema, row) is None
        assert validate_row(schema, {**row, "nightly_rate": Decimal("-0.01")}).field == "nightly_rate"
        assert validate_row(schema, {**row, "number_of_beds": 0}).field == "number_of_beds"

    def test_bool_is_not_a_number(self):
        schema = EntitySchema("A", "a", ("id",), fields=[FieldSpec("count", min_value=0)])
        assert validate_row(schema, {"count": True}).field == "count"

    def test_decimal_places(self, registry):
        schema = registry.get(HOTEL_ROOM)
        row = {"room_number": 1, "hotel_id": 1, "nightly_rate": Decimal("99.50"),
               "number_of_beds": 1, "room_type_id": 1, "bed_type_id": 1}
        assert registry.max_scale(HOTEL_ROOM, "nightly_rate") == 2
        assert validate_row(schema, row) is None
        assert validate_row(schema, {**row, "nightly_rate": Decimal("99.500")}) is None
        assert validate_row(schema, {**row, "nightly_rate": Decimal("120")}) is None

        error = validate_row(schema, {**row, "nightly_rate": Decimal("99.555")})
        assert error.field == "nightly_rate"
        assert "decimal places" in error.message

    def test_timezone_aware_datetime_rejected(self, registry):
        schema = registry.get(ROOM_RESERVATION)
        row = {"reservation_id": 1, "hotel_id": 1, "room_number": 1,
               "start_date": datetime(2026, 11, 1, 14, 0),
               "end_date": datetime(2026, 11, 3, 11, 0)}
        assert validate_row(schema, row) is None

        aware = datetime(2026, 11, 1, 14, 0, tzinfo=timezone(timedelta(hours=5)))
        assert validate_row(schema, {**row, "start_date": aware}).field == "start_date"
