"""
酒店实体仓储
Hotel / HotelRoom / RoomReservation 共用 EntityRepository 的 CRUD 契约，
这里只声明实体类型和按父记录查询的方法
"""
from typing import List

from fastapi import Depends
from sqlalchemy.orm import Session

from entity_core.repository import EntityRepository
from hotel_server.database import get_db
from hotel_server.hotel import (
    Hotel, HotelRoom, RoomReservation, HOTEL, HOTEL_ROOM, ROOM_RESERVATION,
)
from hotel_server.services.storage import SqlStorageEngine


class HotelRepository(EntityRepository[Hotel]):
    """酒店仓储 - 主键 id 由数据库生成"""
    entity_type = HOTEL
    entity_cls = Hotel


class HotelRoomRepository(EntityRepository[HotelRoom]):
    """房间仓储 - 复合主键 (room_number, hotel_id) 由调用方提供"""
    entity_type = HOTEL_ROOM
    entity_cls = HotelRoom

    def list_for_hotel(self, hotel_id: int) -> List[HotelRoom]:
        """获取某酒店的全部房间"""
        return self.list_where(hotel_id=hotel_id)


class RoomReservationRepository(EntityRepository[RoomReservation]):
    """预订仓储 - 主键 reservation_id 由数据库生成"""
    entity_type = ROOM_RESERVATION
    entity_cls = RoomReservation

    def list_for_room(self, room_number: int, hotel_id: int) -> List[RoomReservation]:
        """获取某房间的全部预订"""
        return self.list_where(room_number=room_number, hotel_id=hotel_id)


# ============== 依赖注入 ==============

def get_storage(db: Session = Depends(get_db)) -> SqlStorageEngine:
    """每个请求一个存储句柄"""
    return SqlStorageEngine(db)


def get_hotel_repository(storage: SqlStorageEngine = Depends(get_storage)) -> HotelRepository:
    return HotelRepository(storage)


def get_hotel_room_repository(storage: SqlStorageEngine = Depends(get_storage)) -> HotelRoomRepository:
    return HotelRoomRepository(storage)


def get_room_reservation_repository(
    storage: SqlStorageEngine = Depends(get_storage),
) -> RoomReservationRepository:
    return RoomReservationRepository(storage)
