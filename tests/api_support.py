import unittest
from itertools import count

import env_support  # noqa: F401

from fastapi.testclient import TestClient  # noqa: E402

from app.main import app  # noqa: E402
from app.store.documents import clear_documents  # noqa: E402

_emails = count(1)


class ApiTestCase(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def setUp(self):
        clear_documents()

    def headers(self, user_id: str) -> dict[str, str]:
        return {"X-User-Id": user_id}

    def create_user(self, name: str = "Asha Rao", role: str = "student", **fields) -> str:
        payload = {"name": name, "email": f"user{next(_emails)}@example.com", "role": role, **fields}
        response = self.client.post("/v1/users", json=payload)
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()["id"]

    def update_profile(self, user_id: str, **fields) -> dict:
        response = self.client.put("/v1/ai-profile", json=fields, headers=self.headers(user_id))
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()

    def assertEngineError(self, response, status_code: int, code: str) -> dict:
        self.assertEqual(response.status_code, status_code, response.text)
        detail = response.json()["detail"]
        self.assertEqual(detail["code"], code)
        return detail
