"""
Account operations: registration, login and logout
"""
from typing import Optional

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models.member import Member, MemberRole
from models.member_session import MemberSession
from schemas.member import MemberRegister, MemberLogin
from utils.auth import is_local_url
from utils.errors import DuplicateEmail, InvalidCredentials
from utils.session_store import create_session, delete_session


def normalize_email(email: str) -> str:
    return email.strip().lower()


def email_taken(db: Session, email: str, exclude_member_id: Optional[str] = None) -> bool:
    query = db.query(Member).filter(Member.email == normalize_email(email))
    if exclude_member_id:
        query = query.filter(Member.id != exclude_member_id)
    return db.query(query.exists()).scalar()


def register(db: Session, data: MemberRegister) -> Member:
    """Create a member account. New accounts always get the Member role"""
    if email_taken(db, data.email):
        logger.info(f"Registration rejected, email already registered: {normalize_email(data.email)}")
        raise DuplicateEmail()

    member = Member(
        full_name=data.full_name.strip(),
        email=normalize_email(data.email),
        role=MemberRole.MEMBER,
        preferred_category=data.preferred_category or None,
    )
    member.set_password(data.password)

    db.add(member)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race against a concurrent registration with the same email
        db.rollback()
        raise DuplicateEmail()
    db.refresh(member)

    logger.info(f"Member registered: {member.email}")
    return member


def login(db: Session, credentials: MemberLogin) -> MemberSession:
    """Verify credentials and open a session bound to the member"""
    member = db.query(Member).filter(Member.email == normalize_email(credentials.email)).first()

    if not member or not member.verify_password(credentials.password):
        logger.warning(f"Failed login attempt for {normalize_email(credentials.email)}")
        raise InvalidCredentials()

    member_session = create_session(db, member)
    logger.info(f"Member logged in: {member.email} ({member.role.value})")
    return member_session


def login_redirect_target(return_url: Optional[str]) -> str:
    """Only same-origin relative paths are honoured, anything else lands on /"""
    if return_url and is_local_url(return_url):
        return return_url
    return "/"


def logout(db: Session, session_id: Optional[str]) -> None:
    delete_session(db, session_id)
