from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from datetime import date
from typing import Optional

from database.connection import get_db
from schemas.event import EventResponse, EventDetailResponse
from services import event_service
from utils.gates import AuthContext, get_auth_context

router = APIRouter()


@router.get("/events")
def list_events(
    category: Optional[str] = Query(None),
    on_date: Optional[date] = Query(None, alias="date"),
    venue: Optional[str] = Query(None),
    max_price: Optional[float] = Query(None, alias="maxPrice", ge=0),
    search_term: Optional[str] = Query(None, alias="searchTerm"),
    db: Session = Depends(get_db)
):
    """
    Events matching every provided filter, ordered by date
    categories always lists every category, regardless of the filters
    """
    events = event_service.list_events(
        db,
        category=category,
        on_date=on_date,
        venue=venue,
        max_price=max_price,
        search_term=search_term,
    )
    return {
        "events": [EventResponse.model_validate(e) for e in events],
        "categories": event_service.list_categories(db),
        "filters": {
            "category": category,
            "date": on_date,
            "venue": venue,
            "max_price": max_price,
            "search_term": search_term,
        },
    }


@router.get("/events/details/{event_id}", response_model=EventDetailResponse)
def event_details(
    event_id: str,
    db: Session = Depends(get_db),
    auth: Optional[AuthContext] = Depends(get_auth_context)
):
    return event_service.get_event_detail(db, event_id, auth)
