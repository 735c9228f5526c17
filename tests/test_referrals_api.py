import unittest

from api_support import ApiTestCase

from app.store.repositories import get_referral, save_referral


class ReferralApiTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.alumni_id = self.create_user(name="Ravi Kumar", role="alumni", company="Acme")
        self.student_id = self.create_user(name="Asha Rao", skills=["Python", "SQL"])

    def create_referral(self, **fields) -> dict:
        payload = {"company": "Acme", "role": "Backend Developer", "required_skills": ["python", "django", "sql"], **fields}
        response = self.client.post("/v1/referrals", json=payload, headers=self.headers(self.alumni_id))
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    def apply(self, referral_id: str, user_id: str):
        return self.client.post(f"/v1/referrals/{referral_id}/apply", headers=self.headers(user_id))

    def test_students_cannot_post(self):
        response = self.client.post(
            "/v1/referrals",
            json={"company": "Acme", "role": "Intern"},
            headers=self.headers(self.student_id),
        )
        self.assertEngineError(response, 403, "forbidden")

    def test_created_referral_defaults(self):
        referral = self.create_referral()
        self.assertEqual(referral["status"], "open")
        self.assertEqual(referral["max_applicants"], 10)
        self.assertEqual(referral["posted_by"], self.alumni_id)
        self.assertIsNotNone(referral["deadline"])

    def test_open_referrals_newest_first(self):
        older = self.create_referral(company="Older")
        self.create_referral(company="Newer")
        closed = get_referral(older["id"]).model_copy(update={"status": "closed"})
        self.create_referral(company="Newest")
        save_referral(closed)

        response = self.client.get("/v1/referrals", headers=self.headers(self.student_id))
        self.assertEqual(response.status_code, 200)
        self.assertEqual([item["company"] for item in response.json()], ["Newest", "Newer"])
        self.assertNotIn(older["id"], [item["id"] for item in response.json()])

    def test_matches_are_ranked_by_score(self):
        self.create_referral(company="Weak Fit", required_skills=["kotlin", "swift"])
        self.create_referral(company="Strong Fit", required_skills=["python", "sql"])

        response = self.client.get("/v1/referrals/matches", headers=self.headers(self.student_id))
        self.assertEqual(response.status_code, 200)
        matches = response.json()
        self.assertEqual([m["referral"]["company"] for m in matches], ["Strong Fit", "Weak Fit"])
        self.assertEqual([m["rank"] for m in matches], [1, 2])
        self.assertGreater(matches[0]["match_score"], matches[1]["match_score"])
        self.assertFalse(matches[0]["has_applied"])
        self.assertIsNone(matches[0]["application_status"])
        self.assertTrue(matches[0]["meets_min_score"])

    def test_apply_and_duplicate(self):
        referral = self.create_referral()
        response = self.apply(referral["id"], self.student_id)
        self.assertEqual(response.status_code, 200, response.text)
        body = response.json()
        self.assertEqual(body["message"], "Application submitted")
        self.assertEqual(body["rank"], 1)

        self.assertEngineError(self.apply(referral["id"], self.student_id), 400, "duplicate_application")

        matches = self.client.get("/v1/referrals/matches", headers=self.headers(self.student_id)).json()
        self.assertTrue(matches[0]["has_applied"])
        self.assertEqual(matches[0]["application_status"], "applied")
        self.assertEqual(matches[0]["applicant_count"], 1)

    def test_applicants_are_reranked(self):
        referral = self.create_referral()
        self.apply(referral["id"], self.student_id)
        stronger = self.create_user(name="Meera Iyer", skills=["Python", "Django", "SQL"], bio="Backend engineer in the making.")
        response = self.apply(referral["id"], stronger)
        self.assertEqual(response.json()["rank"], 1)

        detail = self.client.get(f"/v1/referrals/{referral['id']}", headers=self.headers(self.alumni_id)).json()
        ranked = [(a["name"], a["rank"]) for a in detail["applicants"]]
        self.assertEqual(ranked, [("Meera Iyer", 1), ("Asha Rao", 2)])

    def test_unknown_referral(self):
        self.assertEngineError(self.apply("missing", self.student_id), 404, "not_found")
        response = self.client.get("/v1/referrals/missing", headers=self.headers(self.student_id))
        self.assertEngineError(response, 404, "not_found")

    def test_closed_referral(self):
        referral = self.create_referral()
        save_referral(get_referral(referral["id"]).model_copy(update={"status": "filled"}))
        self.assertEngineError(self.apply(referral["id"], self.student_id), 400, "referral_closed")

    def test_minimum_profile_score(self):
        referral = self.create_referral(min_profile_score=90)
        detail = self.assertEngineError(self.apply(referral["id"], self.student_id), 400, "below_minimum_score")
        self.assertEqual(detail["required"], 90)
        self.assertEqual(detail["current"], 13)

    def test_capacity(self):
        referral = self.create_referral(max_applicants=1)
        self.assertEqual(self.apply(referral["id"], self.student_id).status_code, 200)
        other = self.create_user(name="Kiran")
        self.assertEngineError(self.apply(referral["id"], other), 400, "capacity_exceeded")


if __name__ == "__main__":
    unittest.main()
