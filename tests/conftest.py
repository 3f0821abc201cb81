"""
Test configuration and fixtures
"""
import pytest
from datetime import datetime, timedelta
from decimal import Decimal
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from database.connection import Base, get_db, enable_sqlite_foreign_keys

# Import all models BEFORE importing app to ensure they're registered
from models import Member, MemberRole, Event

from main import app

# Test database (file-based SQLite for better connection handling)
TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    echo=False  # Set to True to debug SQL
)
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

DEFAULT_PASSWORD = "secret1"


@pytest.fixture
def db_session():
    """Create a fresh database for each test"""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def session_factory(db_session):
    """Independent sessions on the test database, for multi-connection tests"""
    return TestingSessionLocal


@pytest.fixture
def client(db_session):
    """Create a test client with test database"""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def client_factory(client):
    """Extra clients with their own cookie jar, one per simulated browser"""
    clients = []

    def _make():
        extra = TestClient(app)
        extra.__enter__()
        clients.append(extra)
        return extra

    yield _make

    for extra in clients:
        extra.__exit__(None, None, None)


@pytest.fixture
def make_member(db_session):
    """Insert a member directly, bypassing registration"""
    def _make(email="member@example.com", password=DEFAULT_PASSWORD,
              full_name="Test Member", role=MemberRole.MEMBER, preferred_category=None):
        member = Member(
            full_name=full_name,
            email=email.lower(),
            role=role,
            preferred_category=preferred_category,
        )
        member.set_password(password)
        db_session.add(member)
        db_session.commit()
        db_session.refresh(member)
        return member

    return _make


@pytest.fixture
def make_event(db_session):
    def _make(name="Symphony Night", category="Music", event_date=None,
              venue="Grand Concert Hall", price=Decimal("45.00"), total_seats=100,
              description="An evening of classical music"):
        event = Event(
            name=name,
            category=category,
            event_date=event_date or datetime.utcnow() + timedelta(days=30),
            venue=venue,
            price=price,
            total_seats=total_seats,
            description=description,
            booked_seats=0,
        )
        db_session.add(event)
        db_session.commit()
        db_session.refresh(event)
        return event

    return _make


@pytest.fixture
def login():
    def _login(client, email, password=DEFAULT_PASSWORD):
        response = client.post("/account/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return response

    return _login


@pytest.fixture
def member(make_member):
    return make_member()


@pytest.fixture
def member_client(client, member, login):
    """The default client, logged in as a regular member"""
    login(client, member.email)
    return client


@pytest.fixture
def admin(make_member):
    return make_member(email="admin@example.com", full_name="Administrator", role=MemberRole.ADMIN)


@pytest.fixture
def admin_client(client_factory, admin, login):
    admin_test_client = client_factory()
    login(admin_test_client, admin.email)
    return admin_test_client


def book(client, event_id, quantity=1, seat_type="Standard"):
    return client.post(
        "/bookings/create",
        params={"eventId": event_id},
        json={"seat_type": seat_type, "quantity": quantity},
    )


@pytest.fixture
def book_seats():
    return book
