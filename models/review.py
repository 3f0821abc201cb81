from sqlalchemy import Column, String, DateTime, Integer, ForeignKey, CheckConstraint, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid

from database.connection import Base


class Review(Base):
    __tablename__ = "reviews"
    __table_args__ = (
        UniqueConstraint("member_id", "event_id", name="uq_reviews_member_event"),
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_reviews_rating_range"),
    )

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    member_id = Column(String, ForeignKey("members.id", ondelete="RESTRICT"), nullable=False, index=True)
    event_id = Column(String, ForeignKey("events.id", ondelete="RESTRICT"), nullable=False, index=True)
    rating = Column(Integer, nullable=False)
    comment = Column(String(500), nullable=False)
    review_date = Column(DateTime, nullable=False, default=datetime.utcnow)
    version_id = Column(Integer, nullable=False)

    member = relationship("Member", back_populates="reviews")
    event = relationship("Event", back_populates="reviews")

    __mapper_args__ = {"version_id_col": version_id}

    @property
    def member_name(self):
        return self.member.full_name if self.member else None
