# Storage and Repositories
from hotel_server.services.storage import SqlStorageEngine
from hotel_server.services.repositories import (
    HotelRepository, HotelRoomRepository, RoomReservationRepository
)

__all__ = [
    'SqlStorageEngine',
    'HotelRepository', 'HotelRoomRepository', 'RoomReservationRepository'
]
