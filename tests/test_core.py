import unittest
from dataclasses import replace
from unittest import mock

import env_support  # noqa: F401

from starlette.requests import Request  # noqa: E402

from app.core import cors  # noqa: E402
from app.core.config import settings  # noqa: E402
from app.core.rate_limit import client_key  # noqa: E402


def make_request(headers: dict[str, str] | None = None) -> Request:
    raw = [(key.lower().encode("latin-1"), value.encode("latin-1")) for key, value in (headers or {}).items()]
    return Request({"type": "http", "method": "GET", "path": "/", "headers": raw, "client": ("10.0.0.7", 5123)})


class RateLimitKeyTests(unittest.TestCase):
    def test_keys_on_user_header(self):
        self.assertEqual(client_key(make_request({"X-User-Id": " u42 "})), "user:u42")

    def test_falls_back_to_remote_address(self):
        self.assertEqual(client_key(make_request()), "ip:10.0.0.7")
        self.assertEqual(client_key(make_request({"X-User-Id": "  "})), "ip:10.0.0.7")


class CorsOptionsTests(unittest.TestCase):
    def test_options_follow_settings(self):
        patched = replace(
            settings,
            cors_allowed_origins=("http://localhost:5173",),
            cors_allow_origin_regex="  ",
            cors_allow_credentials=True,
        )
        with mock.patch.object(cors, "settings", patched):
            options = cors.cors_options()
        self.assertEqual(options["allow_origins"], ["http://localhost:5173"])
        self.assertIsNone(options["allow_origin_regex"])
        self.assertTrue(options["allow_credentials"])
        self.assertIn("X-User-Id", options["allow_headers"])

    def test_wildcard_disables_credentials(self):
        patched = replace(settings, cors_allowed_origins=("*",), cors_allow_credentials=True)
        with mock.patch.object(cors, "settings", patched):
            with self.assertLogs("app.core.cors", level="WARNING"):
                options = cors.cors_options()
        self.assertFalse(options["allow_credentials"])


if __name__ == "__main__":
    unittest.main()
