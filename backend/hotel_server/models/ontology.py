"""
数据表定义
Hotel → HotelRoom → RoomReservation，RoomType/BedType 为只读查找表
外键删除行为与 hotel_server.hotel.schema 中注册的关系一致
"""
from sqlalchemy import (
    Column, Integer, String, DateTime, Numeric,
    ForeignKey, ForeignKeyConstraint, PrimaryKeyConstraint, UniqueConstraint,
)
from hotel_server.database import Base


# ============== 查找表 ==============

class RoomType(Base):
    """房型 - 复合主键 (id, name)"""
    __tablename__ = "room_types"

    id = Column(Integer, nullable=False)
    name = Column(String(50), nullable=False)

    __table_args__ = (
        PrimaryKeyConstraint("id", "name"),
        UniqueConstraint("id", name="uq_room_types_id"),  # 供 hotel_rooms 外键引用
    )


class BedType(Base):
    """床型 - 复合主键 (id, name)"""
    __tablename__ = "bed_types"

    id = Column(Integer, nullable=False)
    name = Column(String(50), nullable=False)

    __table_args__ = (
        PrimaryKeyConstraint("id", "name"),
        UniqueConstraint("id", name="uq_bed_types_id"),
    )


# ============== 实体表 ==============

class Hotel(Base):
    """酒店"""
    __tablename__ = "hotels"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    address = Column(String(200), nullable=False)
    phone_number = Column(String(100), nullable=False)
    version = Column(Integer, nullable=False, default=1)   # 乐观并发版本号


class HotelRoom(Base):
    """酒店房间 - 房间号仅在酒店内唯一"""
    __tablename__ = "hotel_rooms"

    room_number = Column(Integer, primary_key=True, autoincrement=False)
    hotel_id = Column(
        Integer, ForeignKey("hotels.id", ondelete="CASCADE"),
        primary_key=True, autoincrement=False, index=True,
    )
    nightly_rate = Column(Numeric(10, 2), nullable=False)
    number_of_beds = Column(Integer, nullable=False)
    room_type_id = Column(Integer, ForeignKey("room_types.id", ondelete="RESTRICT"), nullable=False)
    bed_type_id = Column(Integer, ForeignKey("bed_types.id", ondelete="RESTRICT"), nullable=False)
    version = Column(Integer, nullable=False, default=1)


class RoomReservation(Base):
    """房间预订 - 不做日期重叠检查"""
    __tablename__ = "room_reservations"

    reservation_id = Column(Integer, primary_key=True, autoincrement=True)
    hotel_id = Column(Integer, nullable=False)
    room_number = Column(Integer, nullable=False)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    version = Column(Integer, nullable=False, default=1)

    __table_args__ = (
        ForeignKeyConstraint(
            ["room_number", "hotel_id"],
            ["hotel_rooms.room_number", "hotel_rooms.hotel_id"],
            ondelete="CASCADE",
        ),
    )
