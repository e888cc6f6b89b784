"""Unit tests for the User aggregate."""

from datetime import UTC, datetime, timedelta

import pytest

from users.domain.aggregates import User
from users.domain.events import UserCreated, UserUpdated
from users.domain.value_objects import UserId, UserType


class TestUserCreation:
    """Tests for User.create()."""

    def test_create_assigns_fresh_id_and_timestamps(self):
        user = User.create(name="John Doe", email="john@example.com", type=UserType.EMPLOYEE)

        assert isinstance(user.id, UserId)
        assert user.name == "John Doe"
        assert user.email == "john@example.com"
        assert user.type == UserType.EMPLOYEE
        assert user.created_at.tzinfo is not None
        assert user.updated_at is None

    def test_create_generates_distinct_ids(self):
        first = User.create(name="A", email="a@example.com", type=UserType.GUEST)
        second = User.create(name="B", email="b@example.com", type=UserType.GUEST)

        assert first.id != second.id

    def test_create_records_user_created_event(self):
        user = User.create(name="John Doe", email="john@example.com", type=UserType.ADMIN)

        events = user.collect_events()

        assert len(events) == 1
        event = events[0]
        assert isinstance(event, UserCreated)
        assert event.user_id == user.id.value
        assert event.email == "john@example.com"
        assert event.user_type == "admin"

    @pytest.mark.parametrize("name", ["", "   "])
    def test_create_rejects_blank_name(self, name):
        with pytest.raises(ValueError, match="name cannot be blank"):
            User.create(name=name, email="john@example.com", type=UserType.EMPLOYEE)

    def test_create_rejects_blank_email(self):
        with pytest.raises(ValueError, match="email cannot be blank"):
            User.create(name="John", email=" ", type=UserType.EMPLOYEE)

    def test_rejects_non_enum_type(self):
        with pytest.raises(TypeError):
            User(
                id=UserId.generate(),
                name="John",
                email="john@example.com",
                type="employee",  # type: ignore[arg-type]
                created_at=datetime.now(UTC),
            )


class TestUserMutations:
    """Tests for update_name, update_email and update_type."""

    @pytest.fixture
    def user(self) -> User:
        user = User.create(name="John Doe", email="john@example.com", type=UserType.EMPLOYEE)
        user.collect_events()
        return user

    def test_update_name_stamps_updated_at(self, user):
        user.update_name("Jane Doe")

        assert user.name == "Jane Doe"
        assert user.updated_at is not None
        assert user.updated_at >= user.created_at

    def test_update_rejects_blank_values(self, user):
        with pytest.raises(ValueError):
            user.update_name("")
        with pytest.raises(ValueError):
            user.update_email("  ")

        assert user.name == "John Doe"
        assert user.email == "john@example.com"
        assert user.updated_at is None

    def test_updated_at_never_moves_backwards(self, user):
        user.update_name("First")
        first = user.updated_at
        user.update_email("second@example.com")
        second = user.updated_at
        user.update_type(UserType.MANAGER)

        assert first <= second <= user.updated_at

    def test_updated_at_is_floored_at_previous_value(self, user):
        future = datetime.now(UTC) + timedelta(hours=1)
        user.updated_at = future

        user.update_name("Later")

        assert user.updated_at == future

    def test_consecutive_mutations_record_one_update_event(self, user):
        user.update_name("Jane Doe")
        user.update_email("jane@example.com")
        user.update_type(UserType.MANAGER)

        events = user.collect_events()

        assert len(events) == 1
        assert isinstance(events[0], UserUpdated)
        assert events[0].name == "Jane Doe"
        assert events[0].email == "jane@example.com"
        assert events[0].user_type == "manager"

    def test_collect_events_clears_pending(self, user):
        user.update_name("Jane")
        user.collect_events()

        assert user.collect_events() == []

    def test_update_type_rejects_raw_string(self, user):
        with pytest.raises(TypeError):
            user.update_type("admin")  # type: ignore[arg-type]


class TestUserIdentity:
    """Tests for identity-based equality."""

    def test_has_email_is_case_insensitive(self):
        user = User.create(name="John", email="John@Example.com", type=UserType.GUEST)

        assert user.has_email("john@example.com")
        assert not user.has_email("other@example.com")

    def test_users_with_same_id_are_equal(self):
        user = User.create(name="John", email="john@example.com", type=UserType.GUEST)
        clone = User(
            id=user.id,
            name="Other",
            email="other@example.com",
            type=UserType.ADMIN,
            created_at=user.created_at,
        )

        assert user == clone
        assert hash(user) == hash(clone)
