from sqlalchemy import Column, String, DateTime, ForeignKey, Enum
from datetime import datetime
import secrets

from database.connection import Base
from models.member import MemberRole


class MemberSession(Base):
    """
    MemberSession model - server side session store
    The browser only holds a signed reference to the id; identity and role
    live here and are dropped on logout or after the idle timeout
    """
    __tablename__ = "member_sessions"

    id = Column(String, primary_key=True, default=lambda: secrets.token_urlsafe(32))
    member_id = Column(String, ForeignKey("members.id", ondelete="RESTRICT"), nullable=False, index=True)
    full_name = Column(String(100), nullable=False)
    email = Column(String(100), nullable=False)
    role = Column(Enum(MemberRole), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    last_seen_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self):
        return f"<MemberSession(member_id={self.member_id}, role={self.role})>"
