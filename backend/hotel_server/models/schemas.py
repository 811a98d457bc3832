"""
Pydantic 模式定义
用于 API 请求/响应验证；JSON 字段名使用 camelCase（phoneNumber、roomNumber ...）

请求体只校验类型；必填、长度、取值范围由模式注册表在仓储层统一校验，
违规时返回 400 并指明字段
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ============== 酒店 Schemas ==============

class HotelBody(CamelModel):
    id: Optional[int] = None
    name: Optional[str] = None
    address: Optional[str] = None
    phone_number: Optional[str] = None
    version: Optional[int] = None


class HotelResponse(CamelModel):
    id: int
    name: str
    address: str
    phone_number: str
    version: int


# ============== 房间 Schemas ==============

class HotelRoomBody(CamelModel):
    room_number: Optional[int] = None
    hotel_id: Optional[int] = None
    nightly_rate: Optional[Decimal] = None
    number_of_beds: Optional[int] = None
    room_type_id: Optional[int] = None
    bed_type_id: Optional[int] = None
    version: Optional[int] = None


class HotelRoomResponse(CamelModel):
    room_number: int
    hotel_id: int
    nightly_rate: Decimal
    number_of_beds: int
    room_type_id: int
    bed_type_id: int
    version: int


# ============== 预订 Schemas ==============

class RoomReservationBody(CamelModel):
    reservation_id: Optional[int] = None
    hotel_id: Optional[int] = None
    room_number: Optional[int] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    version: Optional[int] = None


class RoomReservationResponse(CamelModel):
    reservation_id: int
    hotel_id: int
    room_number: int
    start_date: datetime
    end_date: datetime
    version: int


# ============== 错误 ==============

class ErrorDetail(CamelModel):
    kind: str
    message: str
    field: Optional[str] = None
