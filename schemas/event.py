from pydantic import BaseModel, Field, field_validator
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional, List

from schemas.review import ReviewResponse


class EventBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    category: str = Field(..., min_length=1, max_length=50)
    event_date: datetime
    venue: str = Field(..., min_length=1, max_length=200)
    price: Decimal = Field(..., ge=0, le=10000, decimal_places=2)
    total_seats: int = Field(..., ge=1, le=10000)
    description: Optional[str] = Field(None, max_length=1000)


class EventCreate(EventBase):
    @field_validator("event_date")
    @classmethod
    def store_as_naive_utc(cls, value: datetime) -> datetime:
        # Dates are stored naive, in UTC
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value


class EventUpdate(EventCreate):
    pass


class EventSummary(BaseModel):
    id: str
    name: str
    category: str
    event_date: datetime
    venue: str
    price: float

    class Config:
        from_attributes = True


class EventResponse(EventSummary):
    total_seats: int
    description: Optional[str] = None
    booked_seats: int
    available_seats: int
    is_full: bool

    class Config:
        from_attributes = True


class EventDetailResponse(EventResponse):
    reviews: List[ReviewResponse] = []
    review_count: int
    average_rating: Optional[float] = None
    has_booked: Optional[bool] = None
    has_reviewed: Optional[bool] = None

    class Config:
        from_attributes = True
