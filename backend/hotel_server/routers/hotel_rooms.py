"""
房间管理路由
房间由 (hotelId, roomNumber) 定位；房间号只在酒店内唯一
"""
from typing import List
from fastapi import APIRouter, Depends, Response, status

from hotel_server.hotel import HotelRoom
from hotel_server.models.schemas import HotelRoomBody, HotelRoomResponse, RoomReservationResponse
from hotel_server.routers.responses import raise_for_failure
from hotel_server.services.repositories import (
    HotelRoomRepository, RoomReservationRepository,
    get_hotel_room_repository, get_room_reservation_repository,
)

router = APIRouter(prefix="/api/hotel-rooms", tags=["房间管理"])


@router.get("", response_model=List[HotelRoomResponse])
def list_hotel_rooms(repo: HotelRoomRepository = Depends(get_hotel_room_repository)):
    """获取所有房间"""
    return [HotelRoomResponse.model_validate(room) for room in repo.list()]


@router.get("/{hotel_id}/{room_number}", response_model=HotelRoomResponse)
def get_hotel_room(
    hotel_id: int,
    room_number: int,
    repo: HotelRoomRepository = Depends(get_hotel_room_repository)
):
    """获取房间详情"""
    result = repo.get({"room_number": room_number, "hotel_id": hotel_id})
    raise_for_failure(result)
    return HotelRoomResponse.model_validate(result.value)


@router.post("", response_model=HotelRoomResponse, status_code=status.HTTP_201_CREATED)
def create_hotel_room(
    data: HotelRoomBody,
    response: Response,
    repo: HotelRoomRepository = Depends(get_hotel_room_repository)
):
    """创建房间；(hotelId, roomNumber) 已存在时返回 409"""
    result = repo.create(HotelRoom(**data.model_dump()))
    raise_for_failure(result)
    room = result.value
    response.headers["Location"] = f"{router.prefix}/{room.hotel_id}/{room.room_number}"
    return HotelRoomResponse.model_validate(room)


@router.put("/{hotel_id}/{room_number}", status_code=status.HTTP_204_NO_CONTENT)
def update_hotel_room(
    hotel_id: int,
    room_number: int,
    data: HotelRoomBody,
    repo: HotelRoomRepository = Depends(get_hotel_room_repository)
):
    """整体更新房间"""
    result = repo.update({"room_number": room_number, "hotel_id": hotel_id}, HotelRoom(**data.model_dump()))
    raise_for_failure(result)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{hotel_id}/{room_number}", response_model=HotelRoomResponse)
def delete_hotel_room(
    hotel_id: int,
    room_number: int,
    repo: HotelRoomRepository = Depends(get_hotel_room_repository)
):
    """删除房间，级联删除其预订"""
    result = repo.delete({"room_number": room_number, "hotel_id": hotel_id})
    raise_for_failure(result)
    return HotelRoomResponse.model_validate(result.value)


@router.get("/{hotel_id}/{room_number}/reservations", response_model=List[RoomReservationResponse])
def list_room_reservations(
    hotel_id: int,
    room_number: int,
    repo: HotelRoomRepository = Depends(get_hotel_room_repository),
    reservation_repo: RoomReservationRepository = Depends(get_room_reservation_repository)
):
    """获取房间的全部预订"""
    raise_for_failure(repo.get({"room_number": room_number, "hotel_id": hotel_id}))
    return [
        RoomReservationResponse.model_validate(reservation)
        for reservation in reservation_repo.list_for_room(room_number, hotel_id)
    ]
