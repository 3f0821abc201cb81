from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database.connection import get_db
from schemas.booking import BookingCreate, BookingResponse
from schemas.event import EventResponse
from services import booking_service
from utils.gates import AuthContext, require_member

router = APIRouter()


@router.get("/bookings", response_model=list[BookingResponse])
def my_bookings(
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_member)
):
    """The logged-in member's bookings, newest first"""
    return booking_service.list_own_bookings(db, auth)


@router.get("/bookings/create")
def booking_form(
    event_id: str = Query(..., alias="eventId"),
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_member)
):
    form = booking_service.booking_form(db, event_id)
    return {
        "event": EventResponse.model_validate(form["event"]),
        "available_seats": form["available_seats"],
        "booking": form["booking"],
    }


@router.post("/bookings/create")
def create_booking(
    data: BookingCreate,
    event_id: str = Query(..., alias="eventId"),
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_member)
):
    booking = booking_service.create_booking(db, auth, event_id, data)
    return {
        "success": True,
        "message": f"Successfully booked {booking.quantity} ticket(s) for {booking.event.name}!",
        "booking": BookingResponse.model_validate(booking),
        "redirect_to": "/bookings",
    }


@router.get("/bookings/details/{booking_id}", response_model=BookingResponse)
def booking_details(
    booking_id: str,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_member)
):
    return booking_service.get_own_booking(db, auth, booking_id)


@router.get("/bookings/delete/{booking_id}", response_model=BookingResponse)
def confirm_cancel_booking(
    booking_id: str,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_member)
):
    return booking_service.get_own_booking(db, auth, booking_id)


@router.post("/bookings/delete/{booking_id}")
def cancel_booking(
    booking_id: str,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_member)
):
    event = booking_service.cancel_booking(db, auth, booking_id)
    return {
        "success": True,
        "message": "Booking canceled successfully.",
        "event_id": event.id,
        "available_seats": event.available_seats,
        "redirect_to": "/bookings",
    }
