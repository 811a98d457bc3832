"""
酒店领域 - 实体记录与模式注册
"""
from entity_core.domain.schema import schema_registry

from hotel_server.hotel.entities import Hotel, HotelRoom, RoomReservation
from hotel_server.hotel.schema import (
    HOTEL, HOTEL_ROOM, ROOM_RESERVATION, ROOM_TYPE, BED_TYPE,
    register_hotel_schemas,
)

# 模式在导入时注册一次，之后只读
if not schema_registry.frozen:
    register_hotel_schemas(schema_registry)
    schema_registry.freeze()

__all__ = [
    "Hotel", "HotelRoom", "RoomReservation",
    "HOTEL", "HOTEL_ROOM", "ROOM_RESERVATION", "ROOM_TYPE", "BED_TYPE",
    "register_hotel_schemas",
]
