import asyncio
import unittest

from api_support import ApiTestCase

from fastapi.testclient import TestClient

from app.api.v1 import chat
from app.main import app
from app.realtime import ChatRelay, InMemoryPresenceRegistry


class FakeConnection:
    def __init__(self, fail: bool = False):
        self.frames: list[dict] = []
        self.fail = fail

    async def send_json(self, data):
        if self.fail:
            raise RuntimeError("socket closed")
        self.frames.append(data)

    def events(self) -> list[str]:
        return [frame["event"] for frame in self.frames]


class PresenceRegistryTests(unittest.TestCase):
    def test_register_lookup_unregister(self):
        registry = InMemoryPresenceRegistry()
        first, second = FakeConnection(), FakeConnection()
        registry.register("a", first)
        registry.register("b", second)
        self.assertIs(registry.lookup("a"), first)
        self.assertEqual(registry.online_users(), ["a", "b"])

        self.assertEqual(registry.unregister(first), "a")
        self.assertIsNone(registry.lookup("a"))
        self.assertIsNone(registry.unregister(first))
        self.assertEqual(registry.online_users(), ["b"])

    def test_later_registration_replaces_earlier(self):
        registry = InMemoryPresenceRegistry()
        old, new = FakeConnection(), FakeConnection()
        registry.register("a", old)
        registry.register("a", new)
        self.assertIs(registry.lookup("a"), new)
        self.assertIsNone(registry.unregister(old))
        self.assertEqual(registry.online_users(), ["a"])


class ChatRelayTests(unittest.TestCase):
    def setUp(self):
        self.relay = ChatRelay(InMemoryPresenceRegistry())
        self.alice = FakeConnection()
        self.bob = FakeConnection()

    def run_async(self, coro):
        return asyncio.run(coro)

    def setup_both(self):
        self.run_async(self.relay.handle(self.alice, {"event": "setup", "data": {"user_id": "alice"}}))
        self.run_async(self.relay.handle(self.bob, {"event": "setup", "data": {"user_id": "bob"}}))

    def test_setup_broadcasts_online_users(self):
        self.setup_both()
        self.assertEqual(self.alice.frames[-1], {"event": "online_users", "data": ["alice", "bob"]})
        self.assertEqual(self.bob.frames, [{"event": "online_users", "data": ["alice", "bob"]}])

    def test_message_typing_and_notification_relay(self):
        self.setup_both()
        self.bob.frames.clear()
        self.run_async(
            self.relay.handle(
                self.alice,
                {
                    "event": "send_message",
                    "data": {"receiver_id": "bob", "sender_id": "alice", "sender_name": "Alice", "message": "hi"},
                },
            )
        )
        self.run_async(self.relay.handle(self.alice, {"event": "typing", "data": {"receiver_id": "bob", "sender_id": "alice"}}))
        self.run_async(self.relay.handle(self.alice, {"event": "stop_typing", "data": {"receiver_id": "bob", "sender_id": "alice"}}))
        self.run_async(
            self.relay.handle(
                self.alice,
                {"event": "new_notification", "data": {"user_id": "bob", "notification": {"text": "New referral"}}},
            )
        )

        self.assertEqual(self.bob.events(), ["receive_message", "user_typing", "user_stopped_typing", "receive_notification"])
        message = self.bob.frames[0]["data"]
        self.assertEqual(message["message"], "hi")
        self.assertEqual(message["sender_name"], "Alice")
        self.assertTrue(message["created_at"])
        self.assertEqual(self.bob.frames[1]["data"], {"sender_id": "alice"})
        self.assertEqual(self.bob.frames[3]["data"], {"text": "New referral"})

    def test_events_for_offline_users_are_dropped(self):
        self.setup_both()
        before = list(self.alice.frames)
        self.run_async(self.relay.handle(self.alice, {"event": "typing", "data": {"receiver_id": "carol"}}))
        self.assertEqual(self.alice.frames, before)

    def test_disconnect_broadcasts_remaining_users(self):
        self.setup_both()
        self.run_async(self.relay.disconnect(self.bob))
        self.assertEqual(self.alice.frames[-1], {"event": "online_users", "data": ["alice"]})

    def test_bad_events_get_error_frames(self):
        self.run_async(self.relay.handle(self.alice, {"event": "dance"}))
        self.run_async(self.relay.handle(self.alice, {"data": {}}))
        self.run_async(self.relay.handle(self.alice, {"event": "setup", "data": {}}))
        self.assertEqual(self.alice.events(), ["error", "error", "error"])

    def test_failed_send_does_not_break_broadcast(self):
        broken = FakeConnection(fail=True)
        self.run_async(self.relay.handle(broken, {"event": "setup", "data": {"user_id": "broken"}}))
        self.run_async(self.relay.handle(self.alice, {"event": "setup", "data": {"user_id": "alice"}}))
        self.assertEqual(self.alice.frames[-1], {"event": "online_users", "data": ["broken", "alice"]})


class ChatSocketTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        chat.presence.clear()

    def test_relay_over_websocket(self):
        with TestClient(app) as client:
            with client.websocket_connect("/v1/chat/ws") as alice:
                alice.send_json({"event": "setup", "data": {"user_id": "alice"}})
                self.assertEqual(alice.receive_json(), {"event": "online_users", "data": ["alice"]})

                with client.websocket_connect("/v1/chat/ws") as bob:
                    bob.send_json({"event": "setup", "data": {"user_id": "bob"}})
                    self.assertEqual(bob.receive_json()["data"], ["alice", "bob"])
                    self.assertEqual(alice.receive_json()["data"], ["alice", "bob"])

                    alice.send_json(
                        {"event": "send_message", "data": {"receiver_id": "bob", "sender_id": "alice", "message": "hello"}}
                    )
                    frame = bob.receive_json()
                    self.assertEqual(frame["event"], "receive_message")
                    self.assertEqual(frame["data"]["message"], "hello")

                    bob.send_text("not json")
                    self.assertEqual(bob.receive_json()["event"], "error")


if __name__ == "__main__":
    unittest.main()
