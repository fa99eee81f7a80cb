"""Tests for the dashboard client against a mocked API."""

import json

import httpx
import pytest
import websockets

from app.dashboard.client import DashboardClient, _websocket_url

USERS = [
    {"id": 1, "name": "Ann", "email": "ann@example.com", "role": "admin", "status": "active", "joinDate": "2024-01-01T00:00:00", "orders": 3},
]
NOTIFICATIONS = [{"id": 1, "type": "info", "message": "hello", "time": "now", "read": False}]
ACTIVITIES = [{"id": 1, "description": "Payment processed", "timestamp": "2024-01-01T00:00:00"}]


class FakeApi:
    def __init__(self, staff=True):
        self.staff = staff
        self.calls = []
        self.total_orders = 3

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request.url.path)
        assert request.headers["Authorization"] == "Bearer tok"

        path = request.url.path
        if path in ("/api/users", "/api/stats") and not self.staff:
            return httpx.Response(403, json={"error": "FORBIDDEN"})
        if path == "/api/users":
            return httpx.Response(200, json=USERS)
        if path == "/api/notifications":
            return httpx.Response(200, json=NOTIFICATIONS)
        if path == "/api/activities":
            return httpx.Response(200, json=ACTIVITIES)
        if path == "/api/stats":
            return httpx.Response(200, json={"totalUsers": 1, "activeUsers": 1, "totalOrders": self.total_orders, "totalRevenue": 0})
        return httpx.Response(404)


class FakeSocket:
    """Async-iterable stand-in for a websockets connection."""

    def __init__(self, messages):
        self.messages = messages

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for message in self.messages:
            yield message


def _client(api):
    http = httpx.AsyncClient(base_url="http://dash.test", transport=httpx.MockTransport(api))
    return DashboardClient("http://dash.test", "tok", http=http)


class TestDashboardClient:

    @pytest.mark.asyncio
    async def test_load(self):
        client = _client(FakeApi())
        state = await client.load()

        assert [u.name for u in state.users] == ["Ann"]
        assert state.notifications[0].message == "hello"
        assert state.activities[0].description == "Payment processed"
        assert state.stats.total_orders == 3
        await client.aclose()

    @pytest.mark.asyncio
    async def test_load_as_plain_user(self):
        client = _client(FakeApi(staff=False))
        state = await client.load()

        assert state.users == ()
        assert state.stats.total_users == 0
        assert len(state.notifications) == 1
        await client.aclose()

    @pytest.mark.asyncio
    async def test_order_update_refetches_stats(self):
        api = FakeApi()
        client = _client(api)
        await client.load()

        api.total_orders = 4
        api.calls.clear()
        state = await client.handle_message(
            json.dumps({"event": "orderUpdate", "data": {"userId": 1, "newOrderCount": 4, "message": "New order for Ann"}})
        )

        assert state.find_user(1).orders == 4
        assert state.stats.total_orders == 4
        assert api.calls == ["/api/stats"]
        await client.aclose()

    @pytest.mark.asyncio
    async def test_activity_does_not_hit_api(self):
        api = FakeApi()
        changes = []
        client = _client(api)
        client.on_change = changes.append
        await client.load()

        api.calls.clear()
        await client.handle_message(
            json.dumps({"event": "newActivity", "data": {"id": 2, "description": "User Ann updated", "timestamp": "2024-01-02T00:00:00"}})
        )

        assert api.calls == []
        assert client.state.activities[0].description == "User Ann updated"
        assert len(changes) == 2
        await client.aclose()

    @pytest.mark.asyncio
    async def test_malformed_message_ignored(self):
        client = _client(FakeApi())
        await client.load()
        before = client.state

        assert await client.handle_message("not json") is None
        assert await client.handle_message(json.dumps({"event": "bogus", "data": {}})) is None
        assert client.state is before
        await client.aclose()

    @pytest.mark.asyncio
    async def test_listen_feeds_push_messages_into_state(self, monkeypatch):
        urls = []
        messages = [
            json.dumps({"event": "userDeleted", "data": {"id": 1}}),
            "garbage",
            json.dumps({"event": "newNotification", "data": {"id": 2, "type": "warning", "message": "disk", "time": "now", "read": False}}),
        ]

        def fake_connect(url):
            urls.append(url)
            return FakeSocket(messages)

        monkeypatch.setattr(websockets, "connect", fake_connect)
        client = _client(FakeApi())
        await client.load()

        await client.listen()

        assert urls == ["ws://dash.test/api/ws?token=tok"]
        assert client.state.users == ()
        assert [n.message for n in client.state.notifications] == ["disk", "hello"]
        await client.aclose()


def test_websocket_url():
    assert _websocket_url("http://localhost:3000/", "a b") == "ws://localhost:3000/api/ws?token=a+b"
    assert _websocket_url("https://dash.example.com", "t") == "wss://dash.example.com/api/ws?token=t"
