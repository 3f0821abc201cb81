"""
Administrative operations: statistics, event and member management,
read-only booking and inquiry views
"""
from typing import List, Optional

from loguru import logger
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.orm.exc import StaleDataError

from database.aggregates import delete_event_aggregate, delete_member_aggregate
from models.booking import Booking
from models.event import Event
from models.inquiry import Inquiry
from models.member import Member, MemberRole
from models.review import Review
from schemas.event import EventCreate, EventUpdate
from schemas.member import MemberUpdate
from services.account_service import email_taken, normalize_email
from services.event_service import get_event, upcoming_events
from utils.errors import DuplicateEmail, Forbidden, NotFound, ValidationFailed
from utils.gates import AuthContext

DASHBOARD_UPCOMING_EVENTS = 5
MIN_PASSWORD_LENGTH = 6


def dashboard_stats(db: Session) -> dict:
    return {
        "total_events": db.query(Event).count(),
        "total_members": db.query(Member).filter(Member.role == MemberRole.MEMBER).count(),
        "total_bookings": db.query(Booking).count(),
        "total_inquiries": db.query(Inquiry).count(),
        "total_reviews": db.query(Review).count(),
        "upcoming_events": upcoming_events(db, limit=DASHBOARD_UPCOMING_EVENTS),
    }


# ---------------------------------------------------------------- events

def list_events(db: Session) -> List[Event]:
    return db.query(Event).order_by(Event.event_date.asc()).all()


def create_event(db: Session, auth: AuthContext, data: EventCreate) -> Event:
    event = Event(**data.model_dump(), booked_seats=0)
    db.add(event)
    db.commit()
    db.refresh(event)

    logger.info(f"Admin {auth.email} created event '{event.name}' ({event.id})")
    return event


def edit_event(db: Session, auth: AuthContext, event_id: str, data: EventUpdate) -> Event:
    """
    Apply the edit form to an event

    The new capacity is written with a conditional UPDATE against the live
    seat counter, so bookings committed after the event was loaded still
    keep total_seats at or above booked_seats.
    """
    event = get_event(db, event_id)

    updated = db.query(Event).filter(
        Event.id == event.id,
        Event.booked_seats <= data.total_seats
    ).update(
        {**data.model_dump(), "version_id": Event.version_id + 1},
        synchronize_session=False
    )

    if updated != 1:
        db.rollback()
        booked = db.query(Event.booked_seats).filter(Event.id == event_id).scalar()
        if booked is None:
            raise NotFound("Event")
        raise ValidationFailed(
            "total_seats",
            f"Total seats cannot be lower than the {booked} seats already booked."
        )

    db.commit()
    db.refresh(event)

    logger.info(f"Admin {auth.email} updated event '{event.name}' ({event.id})")
    return event


def delete_event_preview(db: Session, event_id: str) -> dict:
    event = get_event(db, event_id)
    return {
        "event": event,
        "booking_count": db.query(Booking).filter(Booking.event_id == event.id).count(),
        "review_count": db.query(Review).filter(Review.event_id == event.id).count(),
    }


def delete_event(db: Session, auth: AuthContext, event_id: str) -> dict:
    """Delete the event with all of its bookings and reviews in one transaction"""
    event = get_event(db, event_id)
    name = event.name

    removed = delete_event_aggregate(db, event)
    db.commit()

    logger.info(
        f"Admin {auth.email} deleted event '{name}' ({event_id}) with "
        f"{removed['bookings']} booking(s) and {removed['reviews']} review(s)"
    )
    return removed


# ---------------------------------------------------------------- members

def list_members(db: Session) -> List[dict]:
    """Member-role accounts only, with their booking and review counts"""
    booking_counts = dict(
        db.query(Booking.member_id, func.count(Booking.id)).group_by(Booking.member_id).all()
    )
    review_counts = dict(
        db.query(Review.member_id, func.count(Review.id)).group_by(Review.member_id).all()
    )

    members = db.query(Member).filter(
        Member.role == MemberRole.MEMBER
    ).order_by(Member.full_name.asc()).all()

    return [
        {
            "id": m.id,
            "full_name": m.full_name,
            "email": m.email,
            "role": m.role,
            "preferred_category": m.preferred_category,
            "created_at": m.created_at,
            "booking_count": booking_counts.get(m.id, 0),
            "review_count": review_counts.get(m.id, 0),
        }
        for m in members
    ]


def get_member(db: Session, member_id: str, action: str = "edit") -> Member:
    """Load a member for editing or deleting; admin records are off limits"""
    member = db.query(Member).filter(Member.id == member_id).first()
    if not member:
        raise NotFound("Member")
    if member.role == MemberRole.ADMIN:
        raise Forbidden(f"Cannot {action} admin users.")
    return member


def edit_member(db: Session, auth: AuthContext, member_id: str, data: MemberUpdate) -> Member:
    """
    Update a member's profile

    The submitted role is ignored and the record stays a Member. An empty
    new_password keeps the stored hash.
    """
    member = get_member(db, member_id, action="edit")

    new_password = data.new_password or ""
    if new_password and len(new_password) < MIN_PASSWORD_LENGTH:
        raise ValidationFailed(
            "new_password", f"Password must be at least {MIN_PASSWORD_LENGTH} characters."
        )

    if email_taken(db, data.email, exclude_member_id=member.id):
        raise DuplicateEmail()

    if data.role and data.role != MemberRole.MEMBER.value:
        logger.warning(f"Admin {auth.email} tried to set role '{data.role}' on member {member.id}, ignored")

    member.full_name = data.full_name.strip()
    member.email = normalize_email(data.email)
    member.preferred_category = data.preferred_category or None
    member.role = MemberRole.MEMBER
    if new_password:
        member.set_password(new_password)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateEmail()
    except StaleDataError:
        db.rollback()
        if not db.query(db.query(Member).filter(Member.id == member_id).exists()).scalar():
            raise NotFound("Member")
        raise
    db.refresh(member)

    logger.info(f"Admin {auth.email} updated member {member.email}")
    return member


def delete_member_preview(db: Session, member_id: str) -> dict:
    member = get_member(db, member_id, action="delete")
    return {
        "member": member,
        "booking_count": db.query(Booking).filter(Booking.member_id == member.id).count(),
        "review_count": db.query(Review).filter(Review.member_id == member.id).count(),
    }


def delete_member(db: Session, auth: AuthContext, member_id: str) -> dict:
    """Delete the member with their bookings, reviews and sessions; seats are released"""
    member = get_member(db, member_id, action="delete")
    email = member.email

    removed = delete_member_aggregate(db, member)
    db.commit()

    logger.info(
        f"Admin {auth.email} deleted member {email} with "
        f"{removed['bookings']} booking(s) and {removed['reviews']} review(s)"
    )
    return removed


# ---------------------------------------------------------------- read-only views

def list_bookings(db: Session, event_id: Optional[str] = None, member_id: Optional[str] = None) -> dict:
    query = db.query(Booking).options(
        joinedload(Booking.member),
        joinedload(Booking.event)
    )

    filtered_event_name = None
    filtered_member_name = None

    if event_id:
        query = query.filter(Booking.event_id == event_id)
        event = db.query(Event).filter(Event.id == event_id).first()
        filtered_event_name = event.name if event else None

    if member_id:
        query = query.filter(Booking.member_id == member_id)
        member = db.query(Member).filter(Member.id == member_id).first()
        filtered_member_name = member.full_name if member else None

    bookings = query.order_by(Booking.booking_date.desc()).all()

    events = db.query(Event.id, Event.name).order_by(Event.name.asc()).all()
    members = db.query(Member.id, Member.full_name).filter(
        Member.role == MemberRole.MEMBER
    ).order_by(Member.full_name.asc()).all()

    return {
        "bookings": [
            {
                "id": b.id,
                "member_id": b.member_id,
                "member_name": b.member.full_name,
                "member_email": b.member.email,
                "event_id": b.event_id,
                "event_name": b.event.name,
                "event_date": b.event.event_date,
                "seat_type": b.seat_type,
                "quantity": b.quantity,
                "booking_date": b.booking_date,
            }
            for b in bookings
        ],
        "filtered_event_name": filtered_event_name,
        "filtered_member_name": filtered_member_name,
        "events": [{"id": e_id, "name": name} for e_id, name in events],
        "members": [{"id": m_id, "name": name} for m_id, name in members],
    }


def list_inquiries(db: Session) -> List[Inquiry]:
    return db.query(Inquiry).order_by(Inquiry.inquiry_date.desc()).all()


def admin_event_rows(db: Session, events: List[Event]) -> List[dict]:
    """Admin event listing rows with review counts, computed in one query"""
    review_counts = dict(
        db.query(Review.event_id, func.count(Review.id)).group_by(Review.event_id).all()
    )
    return [
        {
            "id": e.id,
            "name": e.name,
            "category": e.category,
            "event_date": e.event_date,
            "venue": e.venue,
            "price": e.price,
            "total_seats": e.total_seats,
            "description": e.description,
            "booked_seats": e.booked_seats,
            "available_seats": e.available_seats,
            "is_full": e.is_full,
            "review_count": review_counts.get(e.id, 0),
        }
        for e in events
    ]