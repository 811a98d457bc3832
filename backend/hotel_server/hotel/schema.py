"""
酒店实体模式注册
实体名称、主键、必填字段、长度限制以及外键删除行为
"""
from entity_core.domain.schema import (
    DeleteBehavior, EntitySchema, FieldSpec, Relationship, SchemaRegistry,
)

# 实体名称
HOTEL = "Hotel"
HOTEL_ROOM = "HotelRoom"
ROOM_RESERVATION = "RoomReservation"
ROOM_TYPE = "RoomType"
BED_TYPE = "BedType"

# 关系名称
HOTEL_ROOMS = "hotel_rooms"                  # Hotel 1 -> * HotelRoom
ROOM_RESERVATIONS = "room_reservations"      # HotelRoom 1 -> * RoomReservation
ROOM_TYPE_ROOMS = "room_type_rooms"          # RoomType 1 -> * HotelRoom
BED_TYPE_ROOMS = "bed_type_rooms"            # BedType 1 -> * HotelRoom


HOTEL_SCHEMAS = [
    EntitySchema(
        name=HOTEL,
        table="hotels",
        key=("id",),
        generated_key=True,
        fields=[
            FieldSpec("id"),
            FieldSpec("name", max_length=100),
            FieldSpec("address", max_length=200),
            FieldSpec("phone_number", max_length=100),
        ],
    ),
    EntitySchema(
        name=HOTEL_ROOM,
        table="hotel_rooms",
        key=("room_number", "hotel_id"),
        fields=[
            FieldSpec("room_number"),
            FieldSpec("hotel_id"),
            FieldSpec("nightly_rate", min_value=0, max_scale=2),
            FieldSpec("number_of_beds", min_value=1),
            FieldSpec("room_type_id"),
            FieldSpec("bed_type_id"),
        ],
    ),
    EntitySchema(
        name=ROOM_RESERVATION,
        table="room_reservations",
        key=("reservation_id",),
        generated_key=True,
        fields=[
            FieldSpec("reservation_id"),
            FieldSpec("hotel_id"),
            FieldSpec("room_number"),
            FieldSpec("start_date"),
            FieldSpec("end_date"),
        ],
    ),
    # 查找表只读，没有 CRUD 接口
    EntitySchema(
        name=ROOM_TYPE,
        table="room_types",
        key=("id", "name"),
        fields=[FieldSpec("id"), FieldSpec("name", max_length=50)],
    ),
    EntitySchema(
        name=BED_TYPE,
        table="bed_types",
        key=("id", "name"),
        fields=[FieldSpec("id"), FieldSpec("name", max_length=50)],
    ),
]


HOTEL_RELATIONSHIPS = [
    Relationship(HOTEL_ROOMS, parent=HOTEL, child=HOTEL_ROOM,
                 columns=("hotel_id",), on_delete=DeleteBehavior.CASCADE),
    Relationship(ROOM_RESERVATIONS, parent=HOTEL_ROOM, child=ROOM_RESERVATION,
                 columns=("room_number", "hotel_id"), on_delete=DeleteBehavior.CASCADE),
    # 房间只保存 room_type_id / bed_type_id，只引用复合主键中的 id 列
    Relationship(ROOM_TYPE_ROOMS, parent=ROOM_TYPE, child=HOTEL_ROOM,
                 columns=("room_type_id", None), on_delete=DeleteBehavior.RESTRICT),
    Relationship(BED_TYPE_ROOMS, parent=BED_TYPE, child=HOTEL_ROOM,
                 columns=("bed_type_id", None), on_delete=DeleteBehavior.RESTRICT),
]


def register_hotel_schemas(registry: SchemaRegistry) -> SchemaRegistry:
    """注册酒店领域的实体模式和关系"""
    for schema in HOTEL_SCHEMAS:
        registry.register(schema)
    for relationship in HOTEL_RELATIONSHIPS:
        registry.register_relationship(relationship)
    return registry
