from sqlalchemy import Column, String, DateTime
from datetime import datetime
import uuid

from database.connection import Base


class Inquiry(Base):
    """Contact message from a guest or a member. Not linked to any account."""
    __tablename__ = "inquiries"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False)
    email = Column(String(100), nullable=False)
    message = Column(String(1000), nullable=False)
    inquiry_date = Column(DateTime, nullable=False, default=datetime.utcnow)
