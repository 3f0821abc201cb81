"""
Session cookie utilities
The cookie carries a signed JWT that references a server-side session row.
Identity, role and idle expiry are decided by the session store, the token
only proves that this server issued the reference.
"""
import jwt
import os
from datetime import datetime
from typing import Optional
from urllib.parse import urlsplit


# Secret key for JWT - MUST be set in environment variables for production
SESSION_SECRET_KEY = os.getenv("SESSION_SECRET_KEY", "dev-secret-key-change-in-production")
JWT_ALGORITHM = "HS256"

SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "smart_events_session")
SESSION_COOKIE_SECURE = os.getenv("SESSION_COOKIE_SECURE", "false").lower() in ("1", "true", "yes")
SESSION_IDLE_MINUTES = int(os.getenv("SESSION_IDLE_MINUTES", 30))


def create_session_token(session_id: str) -> str:
    """
    Create a signed token for a server-side session

    Token includes:
        - sid: id of the member_sessions row
        - iat: Issued at timestamp
        - type: Token type identifier
    """
    payload = {
        "sid": session_id,
        "iat": datetime.utcnow(),
        "type": "session"
    }

    return jwt.encode(payload, SESSION_SECRET_KEY, algorithm=JWT_ALGORITHM)


def verify_session_token(token: str) -> Optional[str]:
    """
    Verify a session token and return the session id it references
    Returns None for tampered, malformed or foreign tokens
    """
    try:
        payload = jwt.decode(token, SESSION_SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except jwt.InvalidTokenError:
        return None

    if payload.get("type") != "session":
        return None

    return payload.get("sid")


def set_session_cookie(response, session_id: str) -> None:
    """Attach the session cookie to a response (http-only, browser-session lifetime)"""
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=create_session_token(session_id),
        httponly=True,
        secure=SESSION_COOKIE_SECURE,
        samesite="lax",
        path="/",
    )


def clear_session_cookie(response) -> None:
    response.delete_cookie(key=SESSION_COOKIE_NAME, path="/")


def is_local_url(url: Optional[str]) -> bool:
    """
    True for same-origin relative paths such as /bookings?x=1
    Rejects absolute URLs, scheme-relative //host and /\\host forms
    """
    if not url or not url.startswith("/"):
        return False
    if url.startswith("//") or url.startswith("/\\"):
        return False

    parts = urlsplit(url)
    return not parts.scheme and not parts.netloc
