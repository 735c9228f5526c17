import unittest
from datetime import datetime, timedelta, timezone

from api_support import ApiTestCase

from app.store.repositories import get_session, save_session

SOON = datetime.now(timezone.utc) + timedelta(days=3)


class SessionApiTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.host_id = self.create_user(name="Ravi Kumar", role="alumni")
        self.student_id = self.create_user(name="Asha Rao", skills=["React", "CSS"])

    def create_session(self, **fields) -> dict:
        payload = {
            "title": "Frontend Career Chat",
            "domain": "React Development",
            "date_time": SOON.isoformat(),
            **fields,
        }
        response = self.client.post("/v1/sessions", json=payload, headers=self.headers(self.host_id))
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    def book(self, session_id: str, user_id: str):
        return self.client.post(f"/v1/sessions/{session_id}/book", headers=self.headers(user_id))

    def rate(self, session_id: str, user_id: str, rating: int):
        return self.client.post(
            f"/v1/sessions/{session_id}/rate",
            json={"rating": rating, "feedback": "Helpful"},
            headers=self.headers(user_id),
        )

    def test_students_cannot_host(self):
        response = self.client.post(
            "/v1/sessions",
            json={"title": "x", "domain": "y", "date_time": SOON.isoformat()},
            headers=self.headers(self.student_id),
        )
        self.assertEngineError(response, 403, "forbidden")

    def test_one_on_one_sessions_hold_one_participant(self):
        session = self.create_session(type="1:1", max_participants=12)
        self.assertEqual(session["max_participants"], 1)

    def test_listing_filters_by_domain_and_status(self):
        self.create_session(title="Later", domain="Data Science", date_time=(SOON + timedelta(days=1)).isoformat())
        self.create_session(title="Sooner", domain="React Development")
        done = self.create_session(title="Done", domain="React Native")
        save_session(get_session(done["id"]).model_copy(update={"status": "completed"}))

        everything = self.client.get("/v1/sessions", headers=self.headers(self.student_id)).json()
        self.assertEqual([s["title"] for s in everything], ["Sooner", "Later"])

        react = self.client.get("/v1/sessions", params={"domain": "REACT"}, headers=self.headers(self.student_id)).json()
        self.assertEqual([s["title"] for s in react], ["Sooner"])

    def test_recommendations_are_sorted_by_relevance(self):
        self.create_session(title="Data", domain="Data Science")
        self.create_session(title="React", domain="React Development")
        self.update_profile(self.student_id, target_role="Frontend Developer")

        response = self.client.get("/v1/sessions/recommended", headers=self.headers(self.student_id))
        self.assertEqual(response.status_code, 200)
        items = response.json()
        self.assertEqual([item["session"]["title"] for item in items], ["React", "Data"])
        self.assertEqual(items[0]["relevance"], 50)
        self.assertEqual(items[1]["relevance"], 0)
        self.assertFalse(items[0]["is_booked"])
        self.assertEqual(items[0]["spots_left"], 30)

    def test_booking_deducts_credits(self):
        session = self.create_session(credit_cost=3)
        response = self.book(session["id"], self.student_id)
        self.assertEqual(response.status_code, 200, response.text)
        body = response.json()
        self.assertEqual(body["remaining_credits"], 7)
        self.assertEqual(body["session"]["participants"][0]["user"], self.student_id)

        bookings = self.client.get("/v1/sessions/my-bookings", headers=self.headers(self.student_id)).json()
        self.assertEqual([s["id"] for s in bookings], [session["id"]])
        dashboard = self.client.get("/v1/gamification/dashboard", headers=self.headers(self.student_id)).json()
        self.assertEqual(dashboard["credits"], 7)

        self.assertEngineError(self.book(session["id"], self.student_id), 400, "duplicate_booking")

    def test_booking_precondition_order(self):
        self.assertEngineError(self.book("missing", self.student_id), 404, "not_found")

        ongoing = self.create_session()
        save_session(get_session(ongoing["id"]).model_copy(update={"status": "ongoing"}))
        self.assertEngineError(self.book(ongoing["id"], self.student_id), 400, "session_unavailable")

        full = self.create_session(type="1:1", credit_cost=50)
        save_session(get_session(full["id"]).model_copy(update={"credit_cost": 0}))
        self.assertEqual(self.book(full["id"], self.create_user(name="Kiran")).status_code, 200)
        save_session(get_session(full["id"]).model_copy(update={"credit_cost": 50}))
        # Capacity is checked before credits.
        self.assertEngineError(self.book(full["id"], self.student_id), 400, "capacity_exceeded")

    def test_insufficient_credits(self):
        session = self.create_session(credit_cost=11)
        detail = self.assertEngineError(self.book(session["id"], self.student_id), 400, "insufficient_credits")
        self.assertEqual(detail["current"], 10)
        self.assertEqual(detail["required"], 11)
        self.assertEqual(get_session(session["id"]).participants, [])

    def test_rating_rules(self):
        session = self.create_session()
        self.assertEngineError(self.rate(session["id"], self.student_id, 4), 400, "not_a_participant")

        self.book(session["id"], self.student_id)
        response = self.rate(session["id"], self.student_id, 9)
        self.assertEqual(response.status_code, 200, response.text)
        body = response.json()
        self.assertEqual(body["rating"], 5)
        self.assertEqual(body["session"]["ratings"][0]["feedback"], "Helpful")

        self.assertEngineError(self.rate(session["id"], self.student_id, 3), 400, "duplicate_rating")

    def test_low_ratings_are_clamped(self):
        session = self.create_session()
        self.book(session["id"], self.student_id)
        self.assertEqual(self.rate(session["id"], self.student_id, -2).json()["rating"], 1)


if __name__ == "__main__":
    unittest.main()
