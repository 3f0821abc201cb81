from pydantic import BaseModel, Field
from datetime import datetime

from schemas.event import EventSummary


class BookingCreate(BaseModel):
    seat_type: str = Field("Standard", min_length=1, max_length=20)  # Standard or VIP
    quantity: int = Field(1, ge=1, le=10)


class BookingResponse(BaseModel):
    id: str
    member_id: str
    event_id: str
    seat_type: str
    quantity: int
    booking_date: datetime
    event: EventSummary

    class Config:
        from_attributes = True
