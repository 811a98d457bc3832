# Table Models
from hotel_server.models.ontology import (
    RoomType, BedType, Hotel, HotelRoom, RoomReservation
)

__all__ = [
    'RoomType', 'BedType', 'Hotel', 'HotelRoom', 'RoomReservation'
]
