from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database.connection import get_db
from schemas.event import EventSummary
from schemas.review import ReviewCreate, ReviewUpdate, ReviewResponse
from services import review_service
from utils.gates import AuthContext, require_member

router = APIRouter()


@router.get("/reviews/create")
def review_form(
    event_id: str = Query(..., alias="eventId"),
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_member)
):
    """Only available to members who booked the event and have not reviewed it"""
    form = review_service.review_form(db, auth, event_id)
    return {
        "event": EventSummary.model_validate(form["event"]),
        "review": form["review"],
    }


@router.post("/reviews/create")
def create_review(
    data: ReviewCreate,
    event_id: str = Query(..., alias="eventId"),
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_member)
):
    review = review_service.create_review(db, auth, event_id, data)
    return {
        "success": True,
        "message": "Thank you for your review!",
        "review": ReviewResponse.model_validate(review),
        "redirect_to": f"/events/details/{review.event_id}",
    }


@router.get("/reviews/edit/{review_id}")
def edit_review_form(
    review_id: str,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_member)
):
    review = review_service.get_own_review(db, auth, review_id)
    return {
        "review": ReviewResponse.model_validate(review),
        "event": EventSummary.model_validate(review.event),
    }


@router.post("/reviews/edit/{review_id}")
def edit_review(
    review_id: str,
    data: ReviewUpdate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_member)
):
    review = review_service.edit_review(db, auth, review_id, data)
    return {
        "success": True,
        "message": "Review updated successfully!",
        "review": ReviewResponse.model_validate(review),
        "redirect_to": f"/events/details/{review.event_id}",
    }


@router.get("/reviews/delete/{review_id}")
def confirm_delete_review(
    review_id: str,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_member)
):
    review = review_service.get_own_review(db, auth, review_id)
    return {
        "review": ReviewResponse.model_validate(review),
        "event": EventSummary.model_validate(review.event),
    }


@router.post("/reviews/delete/{review_id}")
def delete_review(
    review_id: str,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_member)
):
    event_id = review_service.delete_review(db, auth, review_id)
    return {
        "success": True,
        "message": "Your review has been deleted successfully.",
        "redirect_to": f"/events/details/{event_id}",
    }
