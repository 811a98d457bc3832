# API Routers
from hotel_server.routers import hotels, hotel_rooms, room_reservations

__all__ = ['hotels', 'hotel_rooms', 'room_reservations']
