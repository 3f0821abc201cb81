from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.orm import Session
from typing import Optional

from database.connection import get_db
from schemas.member import MemberRegister, MemberLogin, MemberResponse
from services import account_service, event_service
from utils.auth import (
    SESSION_COOKIE_NAME,
    set_session_cookie,
    clear_session_cookie,
    verify_session_token,
)

router = APIRouter()


@router.get("/account/register")
def register_form(db: Session = Depends(get_db)):
    """Categories a new member can pick as preferred"""
    return {"categories": event_service.list_categories(db)}


@router.post("/account/register")
def register(data: MemberRegister, db: Session = Depends(get_db)):
    member = account_service.register(db, data)
    return {
        "success": True,
        "message": "Registration successful! Please login.",
        "member": MemberResponse.model_validate(member),
        "redirect_to": "/account/login",
    }


@router.get("/account/login")
def login_form(return_url: Optional[str] = Query(None, alias="returnUrl")):
    return {"return_url": return_url}


@router.post("/account/login")
def login(
    credentials: MemberLogin,
    request: Request,
    response: Response,
    return_url: Optional[str] = Query(None, alias="returnUrl"),
    db: Session = Depends(get_db)
):
    """
    Open a session for the member and set the http-only session cookie
    redirect_to is the requested returnUrl when it is a local path, else /
    """
    member_session = account_service.login(db, credentials)

    # Logging in again replaces whatever session this browser had
    previous_token = request.cookies.get(SESSION_COOKIE_NAME)
    if previous_token:
        account_service.logout(db, verify_session_token(previous_token))

    set_session_cookie(response, member_session.id)

    return {
        "success": True,
        "message": f"Welcome back, {member_session.full_name}!",
        "member": {
            "id": member_session.member_id,
            "full_name": member_session.full_name,
            "email": member_session.email,
            "role": member_session.role,
        },
        "redirect_to": account_service.login_redirect_target(credentials.return_url or return_url),
    }


@router.get("/account/logout")
def logout(request: Request, response: Response, db: Session = Depends(get_db)):
    """Clears the session unconditionally"""
    token = request.cookies.get(SESSION_COOKIE_NAME)
    if token:
        account_service.logout(db, verify_session_token(token))
    clear_session_cookie(response)

    return {
        "success": True,
        "message": "You have been logged out successfully.",
        "redirect_to": "/",
    }
