"""
酒店管理路由
"""
from typing import List
from fastapi import APIRouter, Depends, Response, status

from hotel_server.hotel import Hotel
from hotel_server.models.schemas import HotelBody, HotelResponse, HotelRoomResponse
from hotel_server.routers.responses import raise_for_failure
from hotel_server.services.repositories import (
    HotelRepository, HotelRoomRepository,
    get_hotel_repository, get_hotel_room_repository,
)

router = APIRouter(prefix="/api/hotels", tags=["酒店管理"])


@router.get("", response_model=List[HotelResponse])
def list_hotels(repo: HotelRepository = Depends(get_hotel_repository)):
    """获取所有酒店"""
    return [HotelResponse.model_validate(hotel) for hotel in repo.list()]


@router.get("/{hotel_id}", response_model=HotelResponse)
def get_hotel(hotel_id: int, repo: HotelRepository = Depends(get_hotel_repository)):
    """获取酒店详情"""
    result = repo.get(hotel_id)
    raise_for_failure(result)
    return HotelResponse.model_validate(result.value)


@router.post("", response_model=HotelResponse, status_code=status.HTTP_201_CREATED)
def create_hotel(
    data: HotelBody,
    response: Response,
    repo: HotelRepository = Depends(get_hotel_repository)
):
    """创建酒店（id 由数据库生成，请求体中的 id 被忽略）"""
    result = repo.create(Hotel(**data.model_dump()))
    raise_for_failure(result)
    response.headers["Location"] = f"{router.prefix}/{result.value.id}"
    return HotelResponse.model_validate(result.value)


@router.put("/{hotel_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_hotel(
    hotel_id: int,
    data: HotelBody,
    repo: HotelRepository = Depends(get_hotel_repository)
):
    """整体更新酒店；请求体需携带 id 和最近读取的 version"""
    result = repo.update(hotel_id, Hotel(**data.model_dump()))
    raise_for_failure(result)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{hotel_id}", response_model=HotelResponse)
def delete_hotel(hotel_id: int, repo: HotelRepository = Depends(get_hotel_repository)):
    """删除酒店，级联删除其房间和预订"""
    result = repo.delete(hotel_id)
    raise_for_failure(result)
    return HotelResponse.model_validate(result.value)


@router.get("/{hotel_id}/rooms", response_model=List[HotelRoomResponse])
def list_hotel_rooms(
    hotel_id: int,
    repo: HotelRepository = Depends(get_hotel_repository),
    room_repo: HotelRoomRepository = Depends(get_hotel_room_repository)
):
    """获取酒店的全部房间"""
    raise_for_failure(repo.get(hotel_id))
    return [HotelRoomResponse.model_validate(room) for room in room_repo.list_for_hotel(hotel_id)]
