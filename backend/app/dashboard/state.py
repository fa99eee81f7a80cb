"""
Client-side mirror of the dashboard.

``reduce`` is a pure function from (state, event) to a new state. State only
ever changes through full loads and server-confirmed events; aggregate
stats are never patched locally, they are re-fetched instead.
"""

from dataclasses import dataclass, field, replace
from typing import Optional

from app.schemas import ActivityOut, NotificationOut, StatsOut, UserOut
from app.services.events import (
    BroadcastEvent,
    NewActivity,
    NewNotification,
    NotificationRead,
    OrderUpdate,
    UserAdded,
    UserDeleted,
    UserUpdated,
)

NOTIFICATIONS_CAP = 20
ACTIVITIES_CAP = 10


@dataclass(frozen=True)
class DashboardState:
    users: tuple[UserOut, ...] = ()
    notifications: tuple[NotificationOut, ...] = ()
    activities: tuple[ActivityOut, ...] = ()
    stats: StatsOut = field(default_factory=StatsOut)

    def find_user(self, user_id: int) -> Optional[UserOut]:
        for u in self.users:
            if u.id == user_id:
                return u
        return None


def _upsert(items: tuple, item) -> tuple:
    for i, existing in enumerate(items):
        if existing.id == item.id:
            return items[:i] + (item,) + items[i + 1:]
    return items + (item,)


def _replace_existing(items: tuple, item) -> tuple:
    return tuple(item if existing.id == item.id else existing for existing in items)


def _prepend(items: tuple, item, cap: int) -> tuple:
    rest = tuple(existing for existing in items if existing.id != item.id)
    return ((item,) + rest)[:cap]


def reduce(state: DashboardState, event: BroadcastEvent) -> DashboardState:
    if isinstance(event, (UserAdded, UserUpdated)):
        return replace(state, users=_upsert(state.users, event.data))

    if isinstance(event, UserDeleted):
        return replace(state, users=tuple(u for u in state.users if u.id != event.data.id))

    if isinstance(event, NewNotification):
        return replace(
            state,
            notifications=_prepend(state.notifications, event.data, NOTIFICATIONS_CAP),
        )

    if isinstance(event, NotificationRead):
        return replace(state, notifications=_replace_existing(state.notifications, event.data))

    if isinstance(event, NewActivity):
        return replace(state, activities=_prepend(state.activities, event.data, ACTIVITIES_CAP))

    if isinstance(event, OrderUpdate):
        user = state.find_user(event.data.user_id)
        if user is None:
            return state
        updated = user.model_copy(update={"orders": event.data.new_order_count})
        return replace(state, users=_replace_existing(state.users, updated))

    raise TypeError(f"Unhandled event type: {type(event).__name__}")


def needs_stats_refresh(event: BroadcastEvent) -> bool:
    """Events that move the aggregate counters."""
    return isinstance(event, (OrderUpdate, UserAdded, UserUpdated, UserDeleted))
