"""
Storage level operations that span more than one table

Seat counts and cascading deletes live here so that every caller goes through
the same statements. None of these functions commit: they run inside the
caller's transaction and the caller decides when to commit or roll back.
"""
from sqlalchemy import case
from sqlalchemy.orm import Session

from models.event import Event
from models.booking import Booking
from models.review import Review
from models.member import Member
from models.member_session import MemberSession


def reserve_seats(db: Session, event_id: str, quantity: int) -> bool:
    """
    Atomically add quantity to the event's booked seat counter

    The availability check is part of the UPDATE's WHERE clause, so two
    concurrent reservations against the last seats cannot both succeed:
    the database serializes the row update and re-evaluates the condition.

    Returns False when the event does not have enough seats left.
    """
    updated = db.query(Event).filter(
        Event.id == event_id,
        Event.booked_seats + quantity <= Event.total_seats
    ).update(
        {Event.booked_seats: Event.booked_seats + quantity},
        synchronize_session=False
    )
    return updated == 1


def release_seats(db: Session, event_id: str, quantity: int) -> None:
    """Give seats back to an event after its bookings are removed"""
    db.query(Event).filter(
        Event.id == event_id
    ).update(
        {Event.booked_seats: case(
            (Event.booked_seats >= quantity, Event.booked_seats - quantity),
            else_=0
        )},
        synchronize_session=False
    )


def delete_event_aggregate(db: Session, event: Event) -> dict:
    """
    Delete an event together with its reviews and bookings

    The event row is written first, so a reservation racing with the delete
    either commits before it (and its booking is removed here) or finds no
    event afterwards. Foreign keys restrict deletes at the storage level, so
    dependents go before the event. Returns how many dependents were removed.
    """
    db.query(Event).filter(
        Event.id == event.id
    ).update(
        {Event.booked_seats: 0},
        synchronize_session=False
    )

    reviews_deleted = db.query(Review).filter(
        Review.event_id == event.id
    ).delete(synchronize_session=False)
    bookings_deleted = db.query(Booking).filter(
        Booking.event_id == event.id
    ).delete(synchronize_session=False)

    db.delete(event)
    db.flush()

    return {"bookings": bookings_deleted, "reviews": reviews_deleted}


def delete_member_aggregate(db: Session, member: Member) -> dict:
    """
    Delete a member together with their reviews, bookings and sessions

    Each booking is removed with its own DELETE and its seats are released
    only when that DELETE matched the row, so a booking canceled concurrently
    is not released twice.
    """
    held = db.query(
        Booking.id, Booking.event_id, Booking.quantity
    ).filter(
        Booking.member_id == member.id
    ).all()

    bookings_deleted = 0
    for booking_id, event_id, quantity in held:
        deleted = db.query(Booking).filter(
            Booking.id == booking_id
        ).delete(synchronize_session=False)
        if deleted == 1:
            release_seats(db, event_id, quantity)
            bookings_deleted += 1

    reviews_deleted = db.query(Review).filter(
        Review.member_id == member.id
    ).delete(synchronize_session=False)
    db.query(MemberSession).filter(
        MemberSession.member_id == member.id
    ).delete(synchronize_session=False)

    db.delete(member)
    db.flush()

    return {"bookings": bookings_deleted, "reviews": reviews_deleted}
