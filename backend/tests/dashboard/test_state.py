"""Tests for the client-side event reducer."""

from datetime import datetime

import pytest

from app.dashboard.state import DashboardState, needs_stats_refresh, reduce
from app.schemas import ActivityOut, NotificationOut, StatsOut, UserOut
from app.services.events import (
    DeletedRef,
    NewActivity,
    NewNotification,
    NotificationRead,
    OrderUpdate,
    OrderUpdatePayload,
    UserAdded,
    UserDeleted,
    UserUpdated,
)

JOINED = datetime(2024, 1, 1)


def user(id, name="U", orders=0, status="active"):
    return UserOut(id=id, name=name, email=f"u{id}@example.com", role="user", status=status, join_date=JOINED, orders=orders)


def note(id, read=False):
    return NotificationOut(id=id, type="info", message=f"n{id}", time="now", read=read)


def activity(id):
    return ActivityOut(id=id, description=f"a{id}", timestamp=JOINED)


@pytest.fixture
def state():
    return DashboardState(
        users=(user(1, "Ann", orders=3), user(2, "Ben")),
        notifications=(note(2), note(1)),
        activities=(activity(1),),
        stats=StatsOut(total_users=2, active_users=2, total_orders=3, total_revenue=10),
    )


class TestReduce:

    def test_user_added_appends(self, state):
        new = reduce(state, UserAdded(data=user(3, "Cy")))
        assert [u.id for u in new.users] == [1, 2, 3]
        assert [u.id for u in state.users] == [1, 2]

    def test_user_added_twice_does_not_duplicate(self, state):
        new = reduce(reduce(state, UserAdded(data=user(3))), UserAdded(data=user(3)))
        assert [u.id for u in new.users] == [1, 2, 3]

    def test_user_updated_replaces_in_place(self, state):
        new = reduce(state, UserUpdated(data=user(1, "Ann B", status="inactive")))
        assert [u.name for u in new.users] == ["Ann B", "Ben"]

    def test_user_deleted(self, state):
        new = reduce(state, UserDeleted(data=DeletedRef(id=1)))
        assert [u.id for u in new.users] == [2]

    def test_notification_prepends_and_caps(self, state):
        new = state
        for i in range(3, 30):
            new = reduce(new, NewNotification(data=note(i)))
        assert len(new.notifications) == 20
        assert new.notifications[0].id == 29

    def test_notification_read_replaces(self, state):
        new = reduce(state, NotificationRead(data=note(1, read=True)))
        assert [n.read for n in new.notifications] == [False, True]

    def test_notification_read_unknown_is_ignored(self, state):
        assert reduce(state, NotificationRead(data=note(99, read=True))) == state

    def test_activity_prepends_and_caps(self, state):
        new = state
        for i in range(2, 15):
            new = reduce(new, NewActivity(data=activity(i)))
        assert len(new.activities) == 10
        assert [a.id for a in new.activities[:2]] == [14, 13]

    def test_order_update_sets_count(self, state):
        event = OrderUpdate(data=OrderUpdatePayload(user_id=1, new_order_count=4, message="New order for Ann"))
        new = reduce(state, event)
        assert new.find_user(1).orders == 4
        # aggregates are re-fetched, not patched
        assert new.stats == state.stats

    def test_order_update_for_unknown_user(self, state):
        event = OrderUpdate(data=OrderUpdatePayload(user_id=42, new_order_count=1, message="x"))
        assert reduce(state, event) is state

    def test_unknown_event_type(self, state):
        with pytest.raises(TypeError):
            reduce(state, object())


@pytest.mark.parametrize(
    "event,expected",
    [
        (UserAdded(data=user(3)), True),
        (UserDeleted(data=DeletedRef(id=3)), True),
        (OrderUpdate(data=OrderUpdatePayload(user_id=1, new_order_count=1, message="x")), True),
        (NewNotification(data=note(5)), False),
        (NewActivity(data=activity(5)), False),
    ],
)
def test_needs_stats_refresh(event, expected):
    assert needs_stats_refresh(event) is expected
