from sqlalchemy import Column, String, DateTime, Integer, Numeric, CheckConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid
from database.connection import Base


class Event(Base):
    """
    Event model - a cultural event members can book tickets for

    booked_seats is a materialized counter of the quantities of all bookings
    for the event. It is only changed through reserve_seats/release_seats in
    database.aggregates, never assigned directly.
    """
    __tablename__ = "events"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_events_price_non_negative"),
        CheckConstraint("total_seats >= 1", name="ck_events_total_seats_positive"),
        CheckConstraint("booked_seats >= 0", name="ck_events_booked_seats_non_negative"),
        CheckConstraint("booked_seats <= total_seats", name="ck_events_booked_within_capacity"),
    )

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(200), nullable=False)
    category = Column(String(50), nullable=False, index=True)
    event_date = Column(DateTime, nullable=False, index=True)
    venue = Column(String(200), nullable=False)
    price = Column(Numeric(18, 2), nullable=False)
    total_seats = Column(Integer, nullable=False)
    description = Column(String(1000), nullable=True)
    booked_seats = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)
    version_id = Column(Integer, nullable=False)

    bookings = relationship("Booking", back_populates="event", passive_deletes="all")
    reviews = relationship(
        "Review",
        back_populates="event",
        passive_deletes="all",
        order_by="Review.review_date.desc()",
    )

    __mapper_args__ = {"version_id_col": version_id}

    @property
    def available_seats(self) -> int:
        return self.total_seats - (self.booked_seats or 0)

    @property
    def is_full(self) -> bool:
        return self.available_seats <= 0

    @property
    def review_count(self) -> int:
        return len(self.reviews)

    @property
    def average_rating(self):
        if not self.reviews:
            return None
        return round(sum(r.rating for r in self.reviews) / len(self.reviews), 2)

    def __repr__(self):
        return f"<Event(name={self.name}, date={self.event_date})>"
