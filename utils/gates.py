"""
Authorization gates
FastAPI dependencies that resolve the request's AuthContext from the session
cookie and short-circuit with a redirect before any handler logic runs
"""
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from database.connection import get_db
from models.member import MemberRole
from utils.auth import SESSION_COOKIE_NAME, verify_session_token
from utils.errors import GateRedirect
from utils.session_store import load_session


@dataclass(frozen=True)
class AuthContext:
    """Identity of the member behind the current request"""
    member_id: str
    full_name: str
    email: str
    role: MemberRole
    session_id: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == MemberRole.ADMIN


def get_auth_context(request: Request, db: Session = Depends(get_db)) -> Optional[AuthContext]:
    """Resolve the session cookie; None for guests and expired or forged sessions"""
    token = request.cookies.get(SESSION_COOKIE_NAME)
    if not token:
        return None

    member_session = load_session(db, verify_session_token(token))
    if not member_session:
        return None

    return AuthContext(
        member_id=member_session.member_id,
        full_name=member_session.full_name,
        email=member_session.email,
        role=member_session.role,
        session_id=member_session.id,
    )


def require_member(
    request: Request,
    auth: Optional[AuthContext] = Depends(get_auth_context)
) -> AuthContext:
    """Member gate: anonymous callers go to login with the requested path kept as returnUrl"""
    if auth is None:
        return_url = request.url.path
        if request.url.query:
            return_url = f"{return_url}?{request.url.query}"
        raise GateRedirect(f"/account/login?returnUrl={quote(return_url, safe='')}")
    return auth


def require_admin(auth: Optional[AuthContext] = Depends(get_auth_context)) -> AuthContext:
    """Admin gate: anonymous callers go to login, non-admins back to the landing page"""
    if auth is None:
        raise GateRedirect("/account/login")
    if not auth.is_admin:
        raise GateRedirect("/?error=access_denied")
    return auth
