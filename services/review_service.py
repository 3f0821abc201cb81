"""
Event reviews: only members who booked an event may review it, once
"""
from datetime import datetime

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.orm.exc import StaleDataError

from models.review import Review
from schemas.review import ReviewCreate, ReviewUpdate
from services.event_service import get_event, has_booked, find_review
from utils.errors import NotFound, NotEligible, AlreadyReviewed
from utils.gates import AuthContext

DEFAULT_RATING = 5


def check_can_review(db: Session, auth: AuthContext, event_id: str):
    event = get_event(db, event_id)
    if not has_booked(db, auth.member_id, event.id):
        raise NotEligible()
    if find_review(db, auth.member_id, event.id) is not None:
        raise AlreadyReviewed()
    return event


def review_form(db: Session, auth: AuthContext, event_id: str) -> dict:
    event = check_can_review(db, auth, event_id)
    return {
        "event": event,
        "review": {"event_id": event.id, "rating": DEFAULT_RATING, "comment": ""},
    }


def create_review(db: Session, auth: AuthContext, event_id: str, data: ReviewCreate) -> Review:
    event = check_can_review(db, auth, event_id)

    review = Review(
        member_id=auth.member_id,
        event_id=event.id,
        rating=data.rating,
        comment=data.comment.strip(),
        review_date=datetime.utcnow(),
    )
    db.add(review)
    try:
        db.commit()
    except IntegrityError:
        # A concurrent submission won the unique (member, event) slot
        db.rollback()
        raise AlreadyReviewed()
    db.refresh(review)

    logger.info(f"Member {auth.member_id} reviewed event {event.id} ({review.rating}/5)")
    return review


def get_own_review(db: Session, auth: AuthContext, review_id: str) -> Review:
    """Reviews written by other members are reported as missing"""
    review = db.query(Review).options(
        joinedload(Review.event),
        joinedload(Review.member)
    ).filter(
        Review.id == review_id,
        Review.member_id == auth.member_id
    ).first()
    if not review:
        raise NotFound("Review")
    return review


def edit_review(db: Session, auth: AuthContext, review_id: str, data: ReviewUpdate) -> Review:
    review = get_own_review(db, auth, review_id)

    review.rating = data.rating
    review.comment = data.comment.strip()
    try:
        db.commit()
    except StaleDataError:
        db.rollback()
        if not db.query(db.query(Review).filter(Review.id == review_id).exists()).scalar():
            raise NotFound("Review")
        raise
    db.refresh(review)

    logger.info(f"Member {auth.member_id} edited review {review.id}")
    return review


def delete_review(db: Session, auth: AuthContext, review_id: str) -> str:
    """Returns the id of the reviewed event"""
    review = get_own_review(db, auth, review_id)
    event_id = review.event_id

    db.delete(review)
    db.commit()

    logger.info(f"Member {auth.member_id} deleted review {review_id}")
    return event_id
