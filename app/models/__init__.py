"""Database models"""

from app.models.reservation import Reservation, ReservationStatus
from app.models.message import Message
from app.models.call import CallLog
from app.models.payment import Payment
from app.models.setting import Setting
from app.models.staff import Employee, Shift
from app.models.menu import MenuCatalogItem, MenuSelection

__all__ = [
    "Reservation",
    "ReservationStatus",
    "Message",
    "CallLog",
    "Payment",
    "Setting",
    "Employee",
    "Shift",
    "MenuCatalogItem",
    "MenuSelection",
]
