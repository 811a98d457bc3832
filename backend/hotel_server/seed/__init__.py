"""
种子数据加载
从 YAML 文件写入房型、床型查找表，以及可选的演示酒店和房间
重复执行不会产生重复数据
"""
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, Union
import logging

import yaml
from sqlalchemy.orm import Session

from hotel_server.hotel import Hotel, HotelRoom
from hotel_server.models.ontology import BedType, RoomType
from hotel_server.services.repositories import HotelRepository, HotelRoomRepository
from hotel_server.services.storage import SqlStorageEngine

logger = logging.getLogger(__name__)


def load_seed_file(path: Union[str, Path]) -> Dict[str, Any]:
    """读取种子数据文件"""
    with open(path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def seed_lookup_tables(db: Session, data: Dict[str, Any]) -> Dict[str, int]:
    """写入房型和床型，已存在的 id 跳过"""
    stats = {"room_types": 0, "bed_types": 0}
    for model, section in ((RoomType, "room_types"), (BedType, "bed_types")):
        for item in data.get(section) or []:
            if db.query(model).filter(model.id == item["id"]).first():
                continue
            db.add(model(id=item["id"], name=item["name"]))
            stats[section] += 1
    db.commit()
    return stats


def seed_demo_hotels(db: Session, data: Dict[str, Any]) -> Dict[str, int]:
    """数据库中没有任何酒店时写入演示酒店和房间"""
    stats = {"hotels": 0, "hotel_rooms": 0}
    storage = SqlStorageEngine(db)
    hotels = HotelRepository(storage)
    if hotels.list():
        return stats

    rooms = HotelRoomRepository(storage)
    for item in data.get("demo_hotels") or []:
        result = hotels.create(Hotel(
            name=item["name"],
            address=item["address"],
            phone_number=str(item["phone_number"]),
        ))
        if not result.is_ok:
            logger.warning(f"Skipped demo hotel {item['name']!r}: {result.message}")
            continue
        stats["hotels"] += 1

        for room in item.get("rooms") or []:
            room_result = rooms.create(HotelRoom(
                room_number=room["room_number"],
                hotel_id=result.value.id,
                nightly_rate=Decimal(str(room["nightly_rate"])),
                number_of_beds=room["number_of_beds"],
                room_type_id=room["room_type_id"],
                bed_type_id=room["bed_type_id"],
            ))
            if room_result.is_ok:
                stats["hotel_rooms"] += 1
            else:
                logger.warning(f"Skipped demo room {room['room_number']}: {room_result.message}")
    return stats


def seed_database(db: Session, path: Union[str, Path], include_demo: bool = False) -> Dict[str, int]:
    """加载种子数据，返回各表新增行数"""
    data = load_seed_file(path)
    stats = seed_lookup_tables(db, data)
    if include_demo:
        stats.update(seed_demo_hotels(db, data))
    return stats
