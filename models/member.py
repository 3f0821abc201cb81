from sqlalchemy import Column, String, DateTime, Integer, Enum
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid
import enum
import bcrypt

from database.connection import Base


class MemberRole(str, enum.Enum):
    MEMBER = "Member"
    ADMIN = "Admin"


class Member(Base):
    """
    Member model - a registered user who can book tickets and write reviews
    Admins are members with the Admin role
    Password hashing uses bcrypt with automatic salt generation
    """
    __tablename__ = "members"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    full_name = Column(String(100), nullable=False)
    email = Column(String(100), unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    role = Column(Enum(MemberRole), nullable=False, default=MemberRole.MEMBER)
    preferred_category = Column(String(50), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    version_id = Column(Integer, nullable=False)

    bookings = relationship("Booking", back_populates="member", passive_deletes="all")
    reviews = relationship("Review", back_populates="member", passive_deletes="all")

    __mapper_args__ = {"version_id_col": version_id}

    @property
    def is_admin(self) -> bool:
        return self.role == MemberRole.ADMIN

    @staticmethod
    def hash_password(password: str) -> str:
        """Hash password using bcrypt with a fresh salt"""
        salt = bcrypt.gensalt()
        hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
        return hashed.decode('utf-8')

    def set_password(self, password: str) -> None:
        self.password_hash = Member.hash_password(password)

    def verify_password(self, password: str) -> bool:
        """
        Verify password against stored bcrypt hash
        Returns False for malformed hashes instead of raising
        """
        try:
            return bcrypt.checkpw(
                password.encode('utf-8'),
                self.password_hash.encode('utf-8')
            )
        except ValueError:
            return False

    def __repr__(self):
        return f"<Member(email={self.email}, role={self.role})>"
