"""
Demo activity generator.

Every few seconds bumps the order count of a random user and, now and
then, drops in a random notification, publishing both through the normal
broadcaster so open dashboards keep moving. Not a source of real data.
"""

import asyncio
import logging
import random
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import sessionmaker
from starlette.concurrency import run_in_threadpool

from app.models.user import User
from app.schemas import NotificationOut
from app.services import notifications as notification_service
from app.services import users as user_service
from app.services.broadcaster import Broadcaster
from app.services.events import BroadcastEvent, NewNotification, OrderUpdate, OrderUpdatePayload

logger = logging.getLogger(__name__)

NOTIFICATION_TYPES = ["success", "warning", "info"]
NOTIFICATION_MESSAGES = [
    "New user registration",
    "Order completed",
    "Payment received",
    "System update available",
    "Inventory updated",
]


class ActivitySimulator:
    def __init__(
        self,
        session_factory: sessionmaker,
        broadcaster: Broadcaster,
        interval_seconds: float = 10.0,
        notification_chance: float = 0.3,
        rng: Optional[random.Random] = None,
    ):
        self.session_factory = session_factory
        self.broadcaster = broadcaster
        self.interval_seconds = interval_seconds
        self.notification_chance = notification_chance
        self.rng = rng or random.Random()
        self._task: Optional[asyncio.Task] = None

    def run_once(self) -> list[BroadcastEvent]:
        """One simulated tick against the store; returns the events to publish."""
        events: list[BroadcastEvent] = []

        db = self.session_factory()
        try:
            picked = db.query(User.id).order_by(func.random()).first()
            if picked:
                user = user_service.increment_orders(db, picked.id)
                events.append(
                    OrderUpdate(
                        data=OrderUpdatePayload(
                            user_id=user.id,
                            new_order_count=user.orders,
                            message=f"New order for {user.name}",
                        )
                    )
                )

            if self.rng.random() < self.notification_chance:
                notification = notification_service.create_notification(
                    db,
                    type=self.rng.choice(NOTIFICATION_TYPES),
                    message=self.rng.choice(NOTIFICATION_MESSAGES),
                )
                events.append(NewNotification(data=NotificationOut.model_validate(notification)))
        finally:
            db.close()

        return events

    async def tick(self) -> None:
        try:
            events = await run_in_threadpool(self.run_once)
            await self.broadcaster.publish_all(*events)
        except Exception:
            logger.exception("Simulator tick failed")

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            await self.tick()

    def start(self) -> None:
        if self._task is None:
            self._task = asyncio.create_task(self._loop())
            logger.info("Simulator started (every %ss)", self.interval_seconds)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Simulator stopped")
