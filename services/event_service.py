"""
Public event catalogue: browsing, filtering and event details
"""
from datetime import date, datetime, timedelta
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from models.event import Event
from models.booking import Booking
from models.review import Review
from schemas.event import EventDetailResponse
from utils.errors import NotFound
from utils.gates import AuthContext

UPCOMING_EVENTS_ON_HOME = 6


def list_categories(db: Session) -> List[str]:
    """Distinct categories across all events, for filter and registration forms"""
    rows = db.query(Event.category).distinct().order_by(Event.category).all()
    return [category for (category,) in rows]


def list_events(
    db: Session,
    category: Optional[str] = None,
    on_date: Optional[date] = None,
    venue: Optional[str] = None,
    max_price: Optional[float] = None,
    search_term: Optional[str] = None,
) -> List[Event]:
    """Events matching every provided filter, soonest first"""
    query = db.query(Event)

    if category:
        query = query.filter(Event.category == category)

    if on_date:
        day_start = datetime.combine(on_date, datetime.min.time())
        query = query.filter(
            Event.event_date >= day_start,
            Event.event_date < day_start + timedelta(days=1)
        )

    if venue:
        query = query.filter(Event.venue.ilike(f"%{venue}%"))

    if max_price is not None:
        query = query.filter(Event.price <= max_price)

    if search_term:
        pattern = f"%{search_term}%"
        query = query.filter(or_(Event.name.ilike(pattern), Event.description.ilike(pattern)))

    return query.order_by(Event.event_date.asc()).all()


def upcoming_events(db: Session, limit: int = UPCOMING_EVENTS_ON_HOME) -> List[Event]:
    return db.query(Event).filter(
        Event.event_date >= datetime.utcnow()
    ).order_by(Event.event_date.asc()).limit(limit).all()


def get_event(db: Session, event_id: str) -> Event:
    event = db.query(Event).filter(Event.id == event_id).first()
    if not event:
        raise NotFound("Event")
    return event


def has_booked(db: Session, member_id: str, event_id: str) -> bool:
    return db.query(
        db.query(Booking).filter(
            Booking.member_id == member_id,
            Booking.event_id == event_id
        ).exists()
    ).scalar()


def find_review(db: Session, member_id: str, event_id: str) -> Optional[Review]:
    return db.query(Review).filter(
        Review.member_id == member_id,
        Review.event_id == event_id
    ).first()


def get_event_detail(db: Session, event_id: str, auth: Optional[AuthContext]) -> EventDetailResponse:
    """
    Event with its reviews and seat figures
    For a logged-in member also reports review eligibility: whether they
    booked the event and whether they already reviewed it
    """
    event = db.query(Event).options(
        selectinload(Event.reviews).selectinload(Review.member)
    ).filter(Event.id == event_id).first()
    if not event:
        raise NotFound("Event")

    detail = EventDetailResponse.model_validate(event)
    if auth is not None:
        detail = detail.model_copy(update={
            "has_booked": has_booked(db, auth.member_id, event.id),
            "has_reviewed": find_review(db, auth.member_id, event.id) is not None,
        })
    return detail
