"""
酒店领域实体记录
字段名与表列名一致；version 为乐观并发版本号
"""
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class Hotel:
    """酒店"""
    name: Optional[str] = None
    address: Optional[str] = None
    phone_number: Optional[str] = None
    id: Optional[int] = None
    version: Optional[int] = None


@dataclass
class HotelRoom:
    """酒店房间，主键 (room_number, hotel_id) 由调用方提供"""
    room_number: Optional[int] = None
    hotel_id: Optional[int] = None
    nightly_rate: Optional[Decimal] = None
    number_of_beds: Optional[int] = None
    room_type_id: Optional[int] = None
    bed_type_id: Optional[int] = None
    version: Optional[int] = None


@dataclass
class RoomReservation:
    """房间预订"""
    hotel_id: Optional[int] = None
    room_number: Optional[int] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    reservation_id: Optional[int] = None
    version: Optional[int] = None
