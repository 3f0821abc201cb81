"""
Ticket bookings for the logged-in member
"""
from datetime import datetime
from typing import List

from loguru import logger
from sqlalchemy.orm import Session, joinedload

from database.aggregates import reserve_seats, release_seats
from models.booking import Booking
from models.event import Event
from schemas.booking import BookingCreate
from services.event_service import get_event
from utils.errors import NotFound, InsufficientSeats
from utils.gates import AuthContext


def booking_form(db: Session, event_id: str) -> dict:
    event = get_event(db, event_id)
    return {
        "event": event,
        "available_seats": event.available_seats,
        "booking": {"event_id": event.id, "seat_type": "Standard", "quantity": 1},
    }


def create_booking(db: Session, auth: AuthContext, event_id: str, data: BookingCreate) -> Booking:
    """
    Book seats for the member

    The seat check and the counter update are a single conditional UPDATE,
    committed together with the booking row.
    """
    event = get_event(db, event_id)

    if not reserve_seats(db, event.id, data.quantity):
        db.rollback()
        current = db.query(Event.total_seats, Event.booked_seats).filter(Event.id == event_id).first()
        if current is None:
            raise NotFound("Event")
        available = current.total_seats - current.booked_seats
        logger.info(
            f"Booking rejected for member {auth.member_id}: wanted {data.quantity}, "
            f"{available} left for event {event_id}"
        )
        raise InsufficientSeats(available)

    booking = Booking(
        member_id=auth.member_id,
        event_id=event.id,
        seat_type=data.seat_type.strip(),
        quantity=data.quantity,
        booking_date=datetime.utcnow(),
    )
    db.add(booking)
    db.commit()
    db.refresh(booking)

    logger.info(f"Member {auth.member_id} booked {booking.quantity} seat(s) for event {event.id}")
    return booking


def list_own_bookings(db: Session, auth: AuthContext) -> List[Booking]:
    return db.query(Booking).options(
        joinedload(Booking.event)
    ).filter(
        Booking.member_id == auth.member_id
    ).order_by(Booking.booking_date.desc()).all()


def get_own_booking(db: Session, auth: AuthContext, booking_id: str) -> Booking:
    """Bookings of other members are reported as missing"""
    booking = db.query(Booking).options(
        joinedload(Booking.event)
    ).filter(
        Booking.id == booking_id,
        Booking.member_id == auth.member_id
    ).first()
    if not booking:
        raise NotFound("Booking")
    return booking


def cancel_booking(db: Session, auth: AuthContext, booking_id: str) -> Event:
    """
    Delete the member's booking and give its seats back to the event

    Seats are released only by the request whose DELETE removed the row, so
    overlapping cancels of one booking release its seats once.
    """
    booking = get_own_booking(db, auth, booking_id)
    event = booking.event
    event_id, quantity = booking.event_id, booking.quantity

    deleted = db.query(Booking).filter(
        Booking.id == booking_id,
        Booking.member_id == auth.member_id
    ).delete(synchronize_session=False)
    if deleted != 1:
        db.rollback()
        raise NotFound("Booking")

    release_seats(db, event_id, quantity)
    db.commit()

    logger.info(f"Member {auth.member_id} canceled booking {booking_id} ({quantity} seat(s))")
    return event
