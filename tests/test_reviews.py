"""
Tests for event reviews
"""
from models import Review


class TestReviewRoutes:
    """Test review eligibility and ownership rules"""

    def setup_booked_event(self, member_client, make_event, book_seats):
        """Helper to create an event the logged-in member has booked"""
        event = make_event()
        assert book_seats(member_client, event.id).status_code == 200
        return event

    def post_review(self, client, event_id, rating=5, comment="Wonderful performance"):
        return client.post("/reviews/create", params={"eventId": event_id}, json={
            "rating": rating,
            "comment": comment
        })

    def test_review_form_for_booked_event(self, member_client, make_event, book_seats):
        event = self.setup_booked_event(member_client, make_event, book_seats)

        response = member_client.get("/reviews/create", params={"eventId": event.id})

        assert response.status_code == 200
        data = response.json()
        assert data["event"]["id"] == event.id
        assert data["review"]["rating"] == 5

    def test_create_review(self, member_client, member, make_event, book_seats):
        event = self.setup_booked_event(member_client, make_event, book_seats)

        response = self.post_review(member_client, event.id, rating=4, comment="Great night")

        assert response.status_code == 200
        data = response.json()
        assert data["review"]["rating"] == 4
        assert data["review"]["comment"] == "Great night"
        assert data["review"]["member_id"] == member.id
        assert data["review"]["member_name"] == member.full_name
        assert data["redirect_to"] == f"/events/details/{event.id}"

    def test_review_without_booking_not_eligible(self, member_client, make_event, db_session):
        event = make_event()

        form = member_client.get("/reviews/create", params={"eventId": event.id})
        response = self.post_review(member_client, event.id)

        assert form.status_code == 403
        assert response.status_code == 403
        assert response.json()["code"] == "NOT_ELIGIBLE"
        assert db_session.query(Review).count() == 0

    def test_second_review_rejected(self, member_client, make_event, book_seats, db_session):
        event = self.setup_booked_event(member_client, make_event, book_seats)
        assert self.post_review(member_client, event.id).status_code == 200

        form = member_client.get("/reviews/create", params={"eventId": event.id})
        response = self.post_review(member_client, event.id, rating=1, comment="Changed my mind")

        assert form.status_code == 409
        assert response.status_code == 409
        assert response.json()["code"] == "ALREADY_REVIEWED"
        assert db_session.query(Review).filter(Review.event_id == event.id).count() == 1

    def test_review_unknown_event(self, member_client):
        response = self.post_review(member_client, "missing")
        assert response.status_code == 404

    def test_rating_must_be_between_one_and_five(self, member_client, make_event, book_seats):
        event = self.setup_booked_event(member_client, make_event, book_seats)

        assert self.post_review(member_client, event.id, rating=0).status_code == 422
        assert self.post_review(member_client, event.id, rating=6).status_code == 422

    def test_comment_required_and_limited(self, member_client, make_event, book_seats):
        event = self.setup_booked_event(member_client, make_event, book_seats)

        empty = self.post_review(member_client, event.id, comment="")
        too_long = self.post_review(member_client, event.id, comment="x" * 501)

        assert empty.status_code == 422
        assert "comment" in empty.json()["errors"]
        assert too_long.status_code == 422


class TestEditAndDeleteReview:
    """Test that members can only edit and delete their own reviews"""

    def create_review(self, client, make_event, book_seats):
        event = make_event()
        book_seats(client, event.id)
        response = client.post("/reviews/create", params={"eventId": event.id}, json={
            "rating": 3,
            "comment": "It was fine"
        })
        return event, response.json()["review"]

    def test_edit_own_review(self, member_client, make_event, book_seats, db_session):
        event, review = self.create_review(member_client, make_event, book_seats)

        form = member_client.get(f"/reviews/edit/{review['id']}")
        response = member_client.post(f"/reviews/edit/{review['id']}", json={
            "rating": 5,
            "comment": "Actually brilliant"
        })

        assert form.status_code == 200
        assert form.json()["event"]["id"] == event.id
        assert response.status_code == 200
        db_session.expire_all()
        stored = db_session.get(Review, review["id"])
        assert stored.rating == 5
        assert stored.comment == "Actually brilliant"

    def test_edit_validation(self, member_client, make_event, book_seats):
        _, review = self.create_review(member_client, make_event, book_seats)

        response = member_client.post(f"/reviews/edit/{review['id']}", json={
            "rating": 9,
            "comment": "Too high"
        })

        assert response.status_code == 422

    def test_delete_own_review(self, member_client, make_event, book_seats, db_session):
        event, review = self.create_review(member_client, make_event, book_seats)

        confirm = member_client.get(f"/reviews/delete/{review['id']}")
        response = member_client.post(f"/reviews/delete/{review['id']}")

        assert confirm.status_code == 200
        assert response.status_code == 200
        assert response.json()["redirect_to"] == f"/events/details/{event.id}"
        db_session.expire_all()
        assert db_session.get(Review, review["id"]) is None

    def test_member_can_review_again_after_deleting(self, member_client, make_event, book_seats):
        event, review = self.create_review(member_client, make_event, book_seats)
        member_client.post(f"/reviews/delete/{review['id']}")

        response = member_client.post("/reviews/create", params={"eventId": event.id}, json={
            "rating": 4,
            "comment": "Second thoughts"
        })

        assert response.status_code == 200

    def test_other_members_review_is_not_found(self, member_client, client_factory, make_member,
                                               login, make_event, book_seats, db_session):
        other = make_member(email="b@example.com", full_name="Member B")
        other_client = client_factory()
        login(other_client, other.email)
        _, review = self.create_review(other_client, make_event, book_seats)

        assert member_client.get(f"/reviews/edit/{review['id']}").status_code == 404
        assert member_client.post(f"/reviews/edit/{review['id']}", json={
            "rating": 1,
            "comment": "Hijacked"
        }).status_code == 404
        assert member_client.get(f"/reviews/delete/{review['id']}").status_code == 404
        assert member_client.post(f"/reviews/delete/{review['id']}").status_code == 404

        db_session.expire_all()
        stored = db_session.get(Review, review["id"])
        assert stored.rating == 3
        assert stored.comment == "It was fine"
