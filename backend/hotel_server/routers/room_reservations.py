"""
预订管理路由
"""
from typing import List
from fastapi import APIRouter, Depends, Response, status

from hotel_server.hotel import RoomReservation
from hotel_server.models.schemas import RoomReservationBody, RoomReservationResponse
from hotel_server.routers.responses import raise_for_failure
from hotel_server.services.repositories import (
    RoomReservationRepository, get_room_reservation_repository,
)

router = APIRouter(prefix="/api/room-reservations", tags=["预订管理"])


@router.get("", response_model=List[RoomReservationResponse])
def list_room_reservations(repo: RoomReservationRepository = Depends(get_room_reservation_repository)):
    """获取所有预订"""
    return [RoomReservationResponse.model_validate(r) for r in repo.list()]


@router.get("/{reservation_id}", response_model=RoomReservationResponse)
def get_room_reservation(
    reservation_id: int,
    repo: RoomReservationRepository = Depends(get_room_reservation_repository)
):
    """获取预订详情"""
    result = repo.get(reservation_id)
    raise_for_failure(result)
    return RoomReservationResponse.model_validate(result.value)


@router.post("", response_model=RoomReservationResponse, status_code=status.HTTP_201_CREATED)
def create_room_reservation(
    data: RoomReservationBody,
    response: Response,
    repo: RoomReservationRepository = Depends(get_room_reservation_repository)
):
    """创建预订（reservationId 由数据库生成）"""
    result = repo.create(RoomReservation(**data.model_dump()))
    raise_for_failure(result)
    response.headers["Location"] = f"{router.prefix}/{result.value.reservation_id}"
    return RoomReservationResponse.model_validate(result.value)


@router.put("/{reservation_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_room_reservation(
    reservation_id: int,
    data: RoomReservationBody,
    repo: RoomReservationRepository = Depends(get_room_reservation_repository)
):
    """整体更新预订"""
    result = repo.update(reservation_id, RoomReservation(**data.model_dump()))
    raise_for_failure(result)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{reservation_id}", response_model=RoomReservationResponse)
def delete_room_reservation(
    reservation_id: int,
    repo: RoomReservationRepository = Depends(get_room_reservation_repository)
):
    """删除预订"""
    result = repo.delete(reservation_id)
    raise_for_failure(result)
    return RoomReservationResponse.model_validate(result.value)
