from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from database.connection import get_db
from schemas.admin import (
    DashboardStats,
    AdminEventResponse,
    AdminMemberResponse,
    AdminBookingResponse,
    FilterOption,
)
from schemas.event import EventCreate, EventUpdate, EventResponse
from schemas.inquiry import InquiryResponse
from schemas.member import MemberUpdate, MemberResponse
from services import admin_service
from services.event_service import get_event
from utils.gates import AuthContext, require_admin

router = APIRouter()


@router.get("/admin", response_model=DashboardStats)
def dashboard(
    db: Session = Depends(get_db),
    admin: AuthContext = Depends(require_admin)
):
    """Totals across the system plus the next five upcoming events"""
    return admin_service.dashboard_stats(db)


# ---------------------------------------------------------------- events

@router.get("/admin/events", response_model=list[AdminEventResponse])
def list_events(
    db: Session = Depends(get_db),
    admin: AuthContext = Depends(require_admin)
):
    events = admin_service.list_events(db)
    return admin_service.admin_event_rows(db, events)


@router.get("/admin/events/create")
def create_event_form(admin: AuthContext = Depends(require_admin)):
    return {"event": {"name": "", "category": "", "venue": "", "price": 0, "total_seats": 1, "description": None}}


@router.post("/admin/events/create")
def create_event(
    data: EventCreate,
    db: Session = Depends(get_db),
    admin: AuthContext = Depends(require_admin)
):
    event = admin_service.create_event(db, admin, data)
    return {
        "success": True,
        "message": f"Event '{event.name}' created successfully!",
        "event": EventResponse.model_validate(event),
        "redirect_to": "/admin/events",
    }


@router.get("/admin/events/edit/{event_id}", response_model=EventResponse)
def edit_event_form(
    event_id: str,
    db: Session = Depends(get_db),
    admin: AuthContext = Depends(require_admin)
):
    return get_event(db, event_id)


@router.post("/admin/events/edit/{event_id}")
def edit_event(
    event_id: str,
    data: EventUpdate,
    db: Session = Depends(get_db),
    admin: AuthContext = Depends(require_admin)
):
    event = admin_service.edit_event(db, admin, event_id, data)
    return {
        "success": True,
        "message": f"Event '{event.name}' updated successfully!",
        "event": EventResponse.model_validate(event),
        "redirect_to": "/admin/events",
    }


@router.get("/admin/events/delete/{event_id}")
def delete_event_confirm(
    event_id: str,
    db: Session = Depends(get_db),
    admin: AuthContext = Depends(require_admin)
):
    """What deleting the event would remove along with it"""
    preview = admin_service.delete_event_preview(db, event_id)
    return {
        "event": EventResponse.model_validate(preview["event"]),
        "booking_count": preview["booking_count"],
        "review_count": preview["review_count"],
    }


@router.post("/admin/events/delete/{event_id}")
def delete_event(
    event_id: str,
    db: Session = Depends(get_db),
    admin: AuthContext = Depends(require_admin)
):
    removed = admin_service.delete_event(db, admin, event_id)
    return {
        "success": True,
        "message": "Event deleted successfully!",
        "removed_bookings": removed["bookings"],
        "removed_reviews": removed["reviews"],
        "redirect_to": "/admin/events",
    }


# ---------------------------------------------------------------- members

@router.get("/admin/members", response_model=list[AdminMemberResponse])
def list_members(
    db: Session = Depends(get_db),
    admin: AuthContext = Depends(require_admin)
):
    """Member-role accounts only; admins are never listed"""
    return admin_service.list_members(db)


@router.get("/admin/members/edit/{member_id}", response_model=MemberResponse)
def edit_member_form(
    member_id: str,
    db: Session = Depends(get_db),
    admin: AuthContext = Depends(require_admin)
):
    return admin_service.get_member(db, member_id, action="edit")


@router.post("/admin/members/edit/{member_id}")
def edit_member(
    member_id: str,
    data: MemberUpdate,
    db: Session = Depends(get_db),
    admin: AuthContext = Depends(require_admin)
):
    member = admin_service.edit_member(db, admin, member_id, data)
    return {
        "success": True,
        "message": f"Member '{member.full_name}' updated successfully!",
        "member": MemberResponse.model_validate(member),
        "redirect_to": "/admin/members",
    }


@router.get("/admin/members/delete/{member_id}")
def delete_member_confirm(
    member_id: str,
    db: Session = Depends(get_db),
    admin: AuthContext = Depends(require_admin)
):
    preview = admin_service.delete_member_preview(db, member_id)
    return {
        "member": MemberResponse.model_validate(preview["member"]),
        "booking_count": preview["booking_count"],
        "review_count": preview["review_count"],
    }


@router.post("/admin/members/delete/{member_id}")
def delete_member(
    member_id: str,
    db: Session = Depends(get_db),
    admin: AuthContext = Depends(require_admin)
):
    removed = admin_service.delete_member(db, admin, member_id)
    return {
        "success": True,
        "message": "Member deleted successfully!",
        "removed_bookings": removed["bookings"],
        "removed_reviews": removed["reviews"],
        "redirect_to": "/admin/members",
    }


# ---------------------------------------------------------------- read-only views

@router.get("/admin/bookings")
def list_bookings(
    event_id: Optional[str] = Query(None, alias="eventId"),
    member_id: Optional[str] = Query(None, alias="memberId"),
    db: Session = Depends(get_db),
    admin: AuthContext = Depends(require_admin)
):
    """All bookings, optionally narrowed to one event and/or one member"""
    view = admin_service.list_bookings(db, event_id=event_id, member_id=member_id)
    return {
        "bookings": [AdminBookingResponse(**b) for b in view["bookings"]],
        "filtered_event_name": view["filtered_event_name"],
        "filtered_member_name": view["filtered_member_name"],
        "events": [FilterOption(**e) for e in view["events"]],
        "members": [FilterOption(**m) for m in view["members"]],
    }


@router.get("/admin/inquiries", response_model=list[InquiryResponse])
def list_inquiries(
    db: Session = Depends(get_db),
    admin: AuthContext = Depends(require_admin)
):
    return admin_service.list_inquiries(db)
