from pydantic import BaseModel
from datetime import datetime
from typing import List

from schemas.event import EventResponse, EventSummary
from schemas.member import MemberResponse


class DashboardStats(BaseModel):
    total_events: int
    total_members: int
    total_bookings: int
    total_inquiries: int
    total_reviews: int
    upcoming_events: List[EventSummary]


class AdminEventResponse(EventResponse):
    review_count: int

    class Config:
        from_attributes = True


class AdminMemberResponse(MemberResponse):
    booking_count: int
    review_count: int


class AdminBookingResponse(BaseModel):
    id: str
    member_id: str
    member_name: str
    member_email: str
    event_id: str
    event_name: str
    event_date: datetime
    seat_type: str
    quantity: int
    booking_date: datetime


class FilterOption(BaseModel):
    id: str
    name: str
