"""Pydantic schemas for request/response validation"""

from app.schemas.reservation import (
    ReservationCreate,
    ReservationUpdate,
    ReservationResponse,
    ReservationDetailResponse,
)
from app.schemas.call import (
    CallLogResponse,
    CallListResponse,
)
from app.schemas.message import (
    MessageResponse,
    MessageListResponse,
    SendMessageRequest,
)
from app.schemas.payment import (
    ManualPaymentCreate,
    ManualPaymentResponse,
    PaymentResponse,
    PaymentWithReservationResponse,
)
from app.schemas.setting import (
    SettingsResponse,
    SettingsUpdate,
    WhatsAppTestResponse,
)
from app.schemas.staff import (
    EmployeeCreate,
    EmployeeResponse,
    ShiftUpsert,
    ShiftResponse,
)
from app.schemas.menu import (
    MenuCatalogResponse,
    MenuSelectionSave,
    DishSummaryResponse,
)
from app.schemas.actions import (
    CallActionRequest,
    WhatsAppSendRequest,
)

__all__ = [
    "ReservationCreate",
    "ReservationUpdate",
    "ReservationResponse",
    "ReservationDetailResponse",
    "CallLogResponse",
    "CallListResponse",
    "MessageResponse",
    "MessageListResponse",
    "SendMessageRequest",
    "ManualPaymentCreate",
    "ManualPaymentResponse",
    "PaymentResponse",
    "PaymentWithReservationResponse",
    "SettingsResponse",
    "SettingsUpdate",
    "WhatsAppTestResponse",
    "EmployeeCreate",
    "EmployeeResponse",
    "ShiftUpsert",
    "ShiftResponse",
    "MenuCatalogResponse",
    "MenuSelectionSave",
    "DishSummaryResponse",
    "CallActionRequest",
    "WhatsAppSendRequest",
]
