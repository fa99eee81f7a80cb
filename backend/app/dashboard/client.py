import json
import logging
from dataclasses import replace
from typing import Any, Callable, Optional
from urllib.parse import urlencode

import httpx
import pydantic
import websockets

from app.dashboard.state import DashboardState, needs_stats_refresh, reduce
from app.schemas import ActivityOut, NotificationOut, StatsOut, UserOut
from app.services.events import BroadcastEvent, parse_event

logger = logging.getLogger(__name__)


def _websocket_url(base_url: str, token: str) -> str:
    base = base_url.rstrip("/")
    if base.startswith("https://"):
        base = "wss://" + base[len("https://"):]
    elif base.startswith("http://"):
        base = "ws://" + base[len("http://"):]
    return f"{base}/api/ws?{urlencode({'token': token})}"


class DashboardClient:
    """Keeps a ``DashboardState`` in step with the API and its push channel."""

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        http: Optional[httpx.AsyncClient] = None,
        on_change: Optional[Callable[[DashboardState], Any]] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.http = http or httpx.AsyncClient(base_url=self.base_url, timeout=10.0)
        self.on_change = on_change
        self.state = DashboardState()

    @property
    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}

    async def _get(self, path: str, *, staff_only: bool = False) -> Any:
        response = await self.http.get(path, headers=self._headers)
        if staff_only and response.status_code == httpx.codes.FORBIDDEN:
            return None
        response.raise_for_status()
        return response.json()

    def _set_state(self, state: DashboardState) -> None:
        self.state = state
        if self.on_change is not None:
            self.on_change(state)

    async def fetch_stats(self) -> StatsOut:
        data = await self._get("/api/stats", staff_only=True)
        return StatsOut.model_validate(data) if data is not None else StatsOut()

    async def load(self) -> DashboardState:
        """Full refresh from the REST API; replaces whatever was mirrored."""
        users = await self._get("/api/users", staff_only=True) or []
        notifications = await self._get("/api/notifications")
        activities = await self._get("/api/activities")
        stats = await self.fetch_stats()

        self._set_state(
            DashboardState(
                users=tuple(UserOut.model_validate(u) for u in users),
                notifications=tuple(NotificationOut.model_validate(n) for n in notifications),
                activities=tuple(ActivityOut.model_validate(a) for a in activities),
                stats=stats,
            )
        )
        return self.state

    async def apply(self, event: BroadcastEvent) -> DashboardState:
        state = reduce(self.state, event)
        if needs_stats_refresh(event):
            state = replace(state, stats=await self.fetch_stats())
        self._set_state(state)
        return state

    async def handle_message(self, raw: str) -> Optional[DashboardState]:
        try:
            event = parse_event(json.loads(raw))
        except (ValueError, pydantic.ValidationError):
            logger.warning("Ignoring malformed push message: %.200s", raw)
            return None
        return await self.apply(event)

    async def listen(self) -> None:
        """Consume the push channel until the server closes it."""
        async with websockets.connect(_websocket_url(self.base_url, self.token)) as ws:
            logger.info("Connected to %s push channel", self.base_url)
            async for raw in ws:
                await self.handle_message(raw)

    async def aclose(self) -> None:
        await self.http.aclose()
