from sqlalchemy import Column, String, DateTime, Integer, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid

from database.connection import Base


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        CheckConstraint("quantity >= 1 AND quantity <= 10", name="ck_bookings_quantity_range"),
    )

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    member_id = Column(String, ForeignKey("members.id", ondelete="RESTRICT"), nullable=False, index=True)
    event_id = Column(String, ForeignKey("events.id", ondelete="RESTRICT"), nullable=False, index=True)
    seat_type = Column(String(20), nullable=False, default="Standard")  # Standard or VIP
    quantity = Column(Integer, nullable=False)
    booking_date = Column(DateTime, nullable=False, default=datetime.utcnow)

    member = relationship("Member", back_populates="bookings")
    event = relationship("Event", back_populates="bookings")
