from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from database.connection import get_db
from schemas.event import EventResponse
from services import event_service
from utils.gates import AuthContext, get_auth_context

router = APIRouter()


@router.get("/")
def home(
    error: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    auth: Optional[AuthContext] = Depends(get_auth_context)
):
    """
    Landing page: the next upcoming events and who is logged in
    error echoes the flag set by the admin gate (access_denied)
    """
    events = event_service.upcoming_events(db)
    return {
        "message": "Smart Events API",
        "upcoming_events": [EventResponse.model_validate(e) for e in events],
        "is_logged_in": auth is not None,
        "member_name": auth.full_name if auth else None,
        "is_admin": auth.is_admin if auth else False,
        "error": error,
    }
