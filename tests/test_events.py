"""
Tests for event browsing and event details
"""
from datetime import datetime, timedelta
from decimal import Decimal

from models import Review


class TestListEvents:
    """Test the public event list and its filters"""

    def setup_catalogue(self, make_event):
        """Helper to create a small catalogue with distinct attributes"""
        base = datetime(2030, 5, 20, 19, 0)
        return {
            "jazz": make_event(
                name="Jazz Night Live", category="Music", event_date=base + timedelta(days=10),
                venue="Blue Note Jazz Club", price=Decimal("25.00"),
                description="Smooth jazz performances"
            ),
            "hamlet": make_event(
                name="Shakespeare's Hamlet", category="Theater", event_date=base + timedelta(days=40),
                venue="Metropolitan Theater", price=Decimal("35.00"),
                description="The classic tragedy"
            ),
            "symphony": make_event(
                name="Symphony Night", category="Music", event_date=base,
                venue="Grand Concert Hall", price=Decimal("45.00"),
                description="Classical music with the Metropolitan orchestra"
            ),
        }

    def test_events_ordered_by_date(self, client, make_event):
        catalogue = self.setup_catalogue(make_event)

        response = client.get("/events")

        assert response.status_code == 200
        names = [e["name"] for e in response.json()["events"]]
        assert names == [catalogue["symphony"].name, catalogue["jazz"].name, catalogue["hamlet"].name]

    def test_event_includes_seat_figures(self, client, make_event):
        make_event(total_seats=50)

        event = client.get("/events").json()["events"][0]

        assert event["total_seats"] == 50
        assert event["booked_seats"] == 0
        assert event["available_seats"] == 50
        assert event["is_full"] is False
        assert event["price"] == 45.0

    def test_filter_by_category(self, client, make_event):
        self.setup_catalogue(make_event)

        events = client.get("/events", params={"category": "Music"}).json()["events"]

        assert {e["name"] for e in events} == {"Jazz Night Live", "Symphony Night"}

    def test_categories_are_unfiltered(self, client, make_event):
        self.setup_catalogue(make_event)

        data = client.get("/events", params={"category": "Theater"}).json()

        assert len(data["events"]) == 1
        assert data["categories"] == ["Music", "Theater"]

    def test_filter_by_date(self, client, make_event):
        self.setup_catalogue(make_event)

        events = client.get("/events", params={"date": "2030-05-30"}).json()["events"]

        assert [e["name"] for e in events] == ["Jazz Night Live"]

    def test_filter_by_venue_substring(self, client, make_event):
        self.setup_catalogue(make_event)

        events = client.get("/events", params={"venue": "concert"}).json()["events"]

        assert [e["name"] for e in events] == ["Symphony Night"]

    def test_filter_by_max_price(self, client, make_event):
        self.setup_catalogue(make_event)

        events = client.get("/events", params={"maxPrice": 35}).json()["events"]

        assert [e["name"] for e in events] == ["Jazz Night Live", "Shakespeare's Hamlet"]

    def test_search_term_matches_name_or_description(self, client, make_event):
        self.setup_catalogue(make_event)

        by_description = client.get("/events", params={"searchTerm": "metropolitan orchestra"}).json()["events"]
        by_name = client.get("/events", params={"searchTerm": "hamlet"}).json()["events"]

        assert [e["name"] for e in by_description] == ["Symphony Night"]
        assert [e["name"] for e in by_name] == ["Shakespeare's Hamlet"]

    def test_filters_are_conjunctive(self, client, make_event):
        self.setup_catalogue(make_event)

        events = client.get("/events", params={
            "category": "Music",
            "maxPrice": 30,
            "searchTerm": "jazz"
        }).json()["events"]
        none_match = client.get("/events", params={
            "category": "Theater",
            "searchTerm": "jazz"
        }).json()["events"]

        assert [e["name"] for e in events] == ["Jazz Night Live"]
        assert none_match == []

    def test_filters_are_echoed(self, client):
        data = client.get("/events", params={"category": "Music", "searchTerm": "jazz"}).json()

        assert data["filters"]["category"] == "Music"
        assert data["filters"]["search_term"] == "jazz"
        assert data["filters"]["venue"] is None


class TestEventDetails:
    """Test the event detail page and review eligibility flags"""

    def test_nonexistent_event(self, client):
        response = client.get("/events/details/nonexistent-id")

        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"

    def test_guest_sees_no_eligibility_flags(self, client, make_event):
        event = make_event()

        data = client.get(f"/events/details/{event.id}").json()

        assert data["id"] == event.id
        assert data["has_booked"] is None
        assert data["has_reviewed"] is None
        assert data["reviews"] == []
        assert data["review_count"] == 0
        assert data["average_rating"] is None

    def test_member_without_booking(self, member_client, make_event):
        event = make_event()

        data = member_client.get(f"/events/details/{event.id}").json()

        assert data["has_booked"] is False
        assert data["has_reviewed"] is False

    def test_member_with_booking_and_review(self, member_client, make_event, book_seats):
        event = make_event()
        assert book_seats(member_client, event.id).status_code == 200
        member_client.post("/reviews/create", params={"eventId": event.id}, json={
            "rating": 4,
            "comment": "Lovely evening"
        })

        data = member_client.get(f"/events/details/{event.id}").json()

        assert data["has_booked"] is True
        assert data["has_reviewed"] is True
        assert data["booked_seats"] == 1
        assert data["review_count"] == 1
        assert data["average_rating"] == 4.0
        assert data["reviews"][0]["member_name"] == "Test Member"

    def test_reviews_newest_first(self, client, make_event, make_member, db_session):
        event = make_event()
        first = make_member(email="first@example.com", full_name="First")
        second = make_member(email="second@example.com", full_name="Second")
        now = datetime.utcnow()
        db_session.add_all([
            Review(member_id=first.id, event_id=event.id, rating=2, comment="Meh",
                   review_date=now - timedelta(days=1)),
            Review(member_id=second.id, event_id=event.id, rating=5, comment="Great", review_date=now),
        ])
        db_session.commit()

        data = client.get(f"/events/details/{event.id}").json()

        assert [r["member_name"] for r in data["reviews"]] == ["Second", "First"]
        assert data["average_rating"] == 3.5


class TestHome:
    """Test the landing page"""

    def test_home_lists_next_six_upcoming_events(self, client, make_event):
        now = datetime.utcnow()
        make_event(name="Past", event_date=now - timedelta(days=1))
        for i in range(7):
            make_event(name=f"Upcoming {i}", event_date=now + timedelta(days=i + 1))

        data = client.get("/").json()

        names = [e["name"] for e in data["upcoming_events"]]
        assert names == [f"Upcoming {i}" for i in range(6)]
        assert data["is_logged_in"] is False
        assert data["member_name"] is None

    def test_home_shows_member_name(self, member_client):
        data = member_client.get("/").json()

        assert data["is_logged_in"] is True
        assert data["member_name"] == "Test Member"

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}
