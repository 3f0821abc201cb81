"""
Reset the database and load an administrator plus sample events
WARNING: clears all existing data
"""
from datetime import datetime
from decimal import Decimal
import os

from loguru import logger

from database.connection import SessionLocal, engine, Base
from models import Member, MemberRole, Event, Booking, Review, Inquiry, MemberSession
from utils.logger import setup_logging

ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@culturalcouncil.org")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")
ADMIN_NAME = os.getenv("ADMIN_NAME", "Administrator")

SAMPLE_EVENTS = [
    {
        "name": "Metropolitan Orchestra: Symphony Night",
        "category": "Music",
        "event_date": datetime(2027, 6, 15, 19, 30),
        "venue": "Grand Concert Hall",
        "price": Decimal("45.00"),
        "total_seats": 500,
        "description": "An enchanting evening of classical music featuring renowned orchestra performers.",
    },
    {
        "name": "Contemporary Art Exhibition",
        "category": "Art",
        "event_date": datetime(2027, 5, 20, 10, 0),
        "venue": "City Art Gallery",
        "price": Decimal("15.00"),
        "total_seats": 200,
        "description": "Explore modern art from local and international artists.",
    },
    {
        "name": "Shakespeare's Hamlet",
        "category": "Theater",
        "event_date": datetime(2027, 7, 10, 20, 0),
        "venue": "Metropolitan Theater",
        "price": Decimal("35.00"),
        "total_seats": 350,
        "description": "A dramatic performance of the classic tragedy by William Shakespeare.",
    },
    {
        "name": "Jazz Night Live",
        "category": "Music",
        "event_date": datetime(2027, 5, 30, 21, 0),
        "venue": "Blue Note Jazz Club",
        "price": Decimal("25.00"),
        "total_seats": 150,
        "description": "Smooth jazz performances by award-winning musicians.",
    },
    {
        "name": "Cultural Dance Festival",
        "category": "Dance",
        "event_date": datetime(2027, 8, 5, 18, 0),
        "venue": "City Cultural Center",
        "price": Decimal("30.00"),
        "total_seats": 400,
        "description": "A celebration of diverse cultural dance traditions from around the world.",
    },
    {
        "name": "Photography Workshop",
        "category": "Workshop",
        "event_date": datetime(2027, 6, 1, 14, 0),
        "venue": "Community Arts Space",
        "price": Decimal("50.00"),
        "total_seats": 30,
        "description": "Learn advanced photography techniques from professional photographers.",
    },
]


def seed_database():
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()

    try:
        # Dependents first, foreign keys restrict deletes
        for model in (Review, Booking, MemberSession, Inquiry, Event, Member):
            deleted = db.query(model).delete()
            if deleted:
                logger.info(f"Removed {deleted} row(s) from {model.__tablename__}")
        db.commit()

        admin = Member(
            full_name=ADMIN_NAME,
            email=ADMIN_EMAIL.strip().lower(),
            role=MemberRole.ADMIN,
        )
        admin.set_password(ADMIN_PASSWORD)
        db.add(admin)

        for data in SAMPLE_EVENTS:
            db.add(Event(**data, booked_seats=0))

        db.commit()

        logger.info(f"Administrator created: {admin.email}")
        logger.info(f"{len(SAMPLE_EVENTS)} sample events created")

    except Exception:
        logger.exception("Seeding failed, rolling back")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    setup_logging()
    seed_database()
