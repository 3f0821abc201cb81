"""
Server-side session store backed by the member_sessions table
"""
from datetime import datetime, timedelta
from typing import Optional

from loguru import logger
from sqlalchemy.orm import Session

from models.member import Member
from models.member_session import MemberSession
from utils.auth import SESSION_IDLE_MINUTES


def create_session(db: Session, member: Member) -> MemberSession:
    """Bind a member's identity and role to a fresh session"""
    member_session = MemberSession(
        member_id=member.id,
        full_name=member.full_name,
        email=member.email,
        role=member.role,
    )
    db.add(member_session)
    db.commit()
    db.refresh(member_session)
    return member_session


def load_session(db: Session, session_id: Optional[str]) -> Optional[MemberSession]:
    """
    Return the live session for session_id and refresh its idle timer
    Sessions idle for longer than SESSION_IDLE_MINUTES are deleted
    """
    if not session_id:
        return None

    member_session = db.query(MemberSession).filter(MemberSession.id == session_id).first()
    if not member_session:
        return None

    now = datetime.utcnow()
    if now - member_session.last_seen_at > timedelta(minutes=SESSION_IDLE_MINUTES):
        logger.info(f"Session for member {member_session.member_id} expired after inactivity")
        db.delete(member_session)
        db.commit()
        return None

    member_session.last_seen_at = now
    db.commit()
    return member_session


def delete_session(db: Session, session_id: Optional[str]) -> None:
    if not session_id:
        return
    db.query(MemberSession).filter(MemberSession.id == session_id).delete(synchronize_session=False)
    db.commit()
