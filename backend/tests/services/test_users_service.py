"""Tests for the user record service."""

import pytest

from app.core.errors import NotFoundError, ValidationError
from app.models.activity import Activity
from app.schemas import UserCreate, UserUpdate
from app.services import users as user_service


class TestListUsers:

    def test_lists_everyone(self, seeded_db):
        assert len(user_service.list_users(seeded_db)) == 8

    def test_search_is_case_insensitive_on_name_and_email(self, seeded_db):
        by_name = user_service.list_users(seeded_db, search="SMITH")
        assert [u.email for u in by_name] == ["jane@example.com"]

        by_email = user_service.list_users(seeded_db, search="alice@")
        assert [u.name for u in by_email] == ["Alice Brown"]

    def test_status_filter(self, seeded_db):
        inactive = user_service.list_users(seeded_db, status="inactive")
        assert {u.name for u in inactive} == {"Bob Johnson", "Edward Miller"}

    def test_status_all_means_no_filter(self, seeded_db):
        assert len(user_service.list_users(seeded_db, status="all")) == 8

    def test_newest_first(self, seeded_db):
        user, _ = user_service.create_user(seeded_db, UserCreate(name="Newest", email="new@example.com"))
        assert user_service.list_users(seeded_db)[0].id == user.id


class TestMutations:

    def test_create_writes_activity(self, seeded_db):
        user, activity = user_service.create_user(
            seeded_db, UserCreate(name="X", email="x@example.com", password="secret1")
        )
        assert user.id is not None
        assert user.password_hash != "secret1"
        assert activity.description == "New user X added"

    def test_create_by_actor(self, seeded_db):
        _, activity = user_service.create_user(
            seeded_db, UserCreate(name="Y", email="y@example.com"), actor="John Doe"
        )
        assert activity.description == "New user Y registered by John Doe"

    def test_duplicate_email(self, seeded_db):
        with pytest.raises(ValidationError):
            user_service.create_user(seeded_db, UserCreate(name="J", email="JOHN@example.com"))

    def test_update(self, seeded_db):
        jane = user_service.list_users(seeded_db, search="jane")[0]
        user, activity = user_service.update_user(seeded_db, jane.id, UserUpdate(status="inactive", orders=40))

        assert user.status == "inactive"
        assert user.orders == 40
        assert user.name == "Jane Smith"
        assert activity.description == "User Jane Smith updated"

    def test_update_email_collision(self, seeded_db):
        jane = user_service.list_users(seeded_db, search="jane")[0]
        with pytest.raises(ValidationError):
            user_service.update_user(seeded_db, jane.id, UserUpdate(email="john@example.com"))

    def test_update_missing(self, seeded_db):
        with pytest.raises(NotFoundError):
            user_service.update_user(seeded_db, 9999, UserUpdate(name="Ghost"))

    def test_delete(self, seeded_db):
        jane = user_service.list_users(seeded_db, search="jane")[0]
        deleted_id, activity = user_service.delete_user(seeded_db, jane.id)

        assert deleted_id == jane.id
        assert activity.description == "User Jane Smith deleted"
        assert user_service.list_users(seeded_db, search="jane") == []

    def test_delete_missing(self, seeded_db):
        before = seeded_db.query(Activity).count()
        with pytest.raises(NotFoundError):
            user_service.delete_user(seeded_db, 9999)
        assert seeded_db.query(Activity).count() == before

    def test_increment_orders(self, seeded_db):
        jane = user_service.list_users(seeded_db, search="jane")[0]
        user = user_service.increment_orders(seeded_db, jane.id)
        assert user.orders == 9
