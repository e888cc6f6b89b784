"""Unit tests for the users command and query handlers."""

from unittest.mock import AsyncMock, create_autospec

import pytest

from shared_kernel.mediator import CancellationToken
from shared_kernel.messaging import IMessageBus
from users.application.commands import (
    CreateUserCommand,
    DeleteUserCommand,
    UpdateUserCommand,
)
from users.application.dtos import UserDto
from users.application.handlers import (
    CreateUserHandler,
    DeleteUserHandler,
    GetAllUsersHandler,
    GetUserHandler,
    UpdateUserHandler,
)
from users.application.observability import UserHandlerProbe
from users.application.queries import GetAllUsersQuery, GetUserQuery
from users.domain.aggregates import User
from users.domain.events import UserCreated, UserDeleted, UserUpdated
from users.domain.value_objects import UserId, UserType
from users.ports.exceptions import DuplicateEmailError, UserNotFoundError
from users.ports.repositories import IUserRepository


@pytest.fixture
def mock_repository():
    return create_autospec(IUserRepository, instance=True)


@pytest.fixture
def mock_bus():
    bus = create_autospec(IMessageBus, instance=True)
    bus.publish = AsyncMock()
    return bus


@pytest.fixture
def mock_probe():
    return create_autospec(UserHandlerProbe, instance=True)


@pytest.fixture
def token() -> CancellationToken:
    return CancellationToken()


def existing_user() -> User:
    user = User.create(name="John Doe", email="john@example.com", type=UserType.EMPLOYEE)
    user.collect_events()
    return user


class TestCreateUserHandler:
    @pytest.fixture
    def handler(self, mock_repository, mock_bus, mock_probe):
        return CreateUserHandler(mock_repository, mock_bus, probe=mock_probe)

    @pytest.mark.asyncio
    async def test_creates_stores_and_publishes(self, handler, mock_repository, mock_bus, token):
        mock_repository.exists_by_email.return_value = False
        mock_repository.add.side_effect = lambda user, token=None: user

        result = await handler.handle(
            CreateUserCommand(name="John Doe", email="john@example.com", type="employee"),
            token,
        )

        assert isinstance(result, UserDto)
        assert result.name == "John Doe"
        assert result.type == "employee"
        assert result.updated_at is None
        mock_repository.add.assert_awaited_once()
        stored = mock_repository.add.call_args.args[0]
        assert stored.id.value == result.id
        published = mock_bus.publish.call_args.args[0]
        assert isinstance(published, UserCreated)
        assert published.user_id == result.id

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected_before_add(
        self, handler, mock_repository, mock_bus, mock_probe, token
    ):
        mock_repository.exists_by_email.return_value = True

        with pytest.raises(DuplicateEmailError):
            await handler.handle(
                CreateUserCommand(name="John", email="JOHN@example.com", type="employee"),
                token,
            )

        mock_repository.add.assert_not_called()
        mock_bus.publish.assert_not_called()
        mock_probe.duplicate_email_rejected.assert_called_once_with("JOHN@example.com")

    @pytest.mark.asyncio
    async def test_bus_outage_after_write_does_not_fail_create(
        self, handler, mock_repository, mock_bus, mock_probe, token
    ):
        mock_repository.exists_by_email.return_value = False
        mock_repository.add.side_effect = lambda user, token=None: user
        mock_bus.publish.side_effect = ConnectionError("broker unreachable")

        result = await handler.handle(
            CreateUserCommand(name="John Doe", email="john@example.com", type="employee"),
            token,
        )

        mock_repository.add.assert_awaited_once()
        mock_probe.event_publish_failed.assert_called_once()
        assert mock_probe.event_publish_failed.call_args.args[:2] == (result.id, "UserCreated")
        mock_probe.events_published.assert_not_called()


class TestUpdateUserHandler:
    @pytest.fixture
    def handler(self, mock_repository, mock_bus, mock_probe):
        return UpdateUserHandler(mock_repository, mock_bus, probe=mock_probe)

    @pytest.mark.asyncio
    async def test_unknown_user_raises_and_does_not_write(self, handler, mock_repository, token):
        mock_repository.get_by_id.return_value = None
        user_id = UserId.generate().value

        with pytest.raises(UserNotFoundError):
            await handler.handle(
                UpdateUserCommand(id=user_id, name="X", email="x@example.com", type="guest"),
                token,
            )

        mock_repository.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_updates_fields_and_publishes(self, handler, mock_repository, mock_bus, token):
        user = existing_user()
        mock_repository.get_by_id.return_value = user
        mock_repository.get_by_email.return_value = None
        mock_repository.update.side_effect = lambda u, token=None: u

        result = await handler.handle(
            UpdateUserCommand(
                id=user.id.value, name="Jane Doe", email="jane@example.com", type="manager"
            ),
            token,
        )

        assert result.name == "Jane Doe"
        assert result.email == "jane@example.com"
        assert result.type == "manager"
        assert result.updated_at is not None
        assert isinstance(mock_bus.publish.call_args.args[0], UserUpdated)

    @pytest.mark.asyncio
    async def test_email_taken_by_other_user(self, handler, mock_repository, token):
        user = existing_user()
        other = User.create(name="Jane", email="jane@example.com", type=UserType.GUEST)
        mock_repository.get_by_id.return_value = user
        mock_repository.get_by_email.return_value = other

        with pytest.raises(DuplicateEmailError):
            await handler.handle(
                UpdateUserCommand(
                    id=user.id.value, name="John", email="Jane@Example.com", type="guest"
                ),
                token,
            )

        mock_repository.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_same_email_other_case_skips_lookup(self, handler, mock_repository, token):
        user = existing_user()
        mock_repository.get_by_id.return_value = user
        mock_repository.update.side_effect = lambda u, token=None: u

        await handler.handle(
            UpdateUserCommand(
                id=user.id.value, name="John", email="JOHN@example.com", type="employee"
            ),
            token,
        )

        mock_repository.get_by_email.assert_not_called()


class TestDeleteUserHandler:
    @pytest.fixture
    def handler(self, mock_repository, mock_bus, mock_probe):
        return DeleteUserHandler(mock_repository, mock_bus, probe=mock_probe)

    @pytest.mark.asyncio
    async def test_deletes_and_publishes(self, handler, mock_repository, mock_bus, token):
        user_id = UserId.generate().value
        mock_repository.exists.return_value = True
        mock_repository.delete.return_value = True

        assert await handler.handle(DeleteUserCommand(id=user_id), token) is None

        event = mock_bus.publish.call_args.args[0]
        assert isinstance(event, UserDeleted)
        assert event.user_id == user_id

    @pytest.mark.asyncio
    async def test_unknown_user_raises(self, handler, mock_repository, token):
        mock_repository.exists.return_value = False

        with pytest.raises(UserNotFoundError):
            await handler.handle(DeleteUserCommand(id=UserId.generate().value), token)

        mock_repository.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_lost_race_raises_not_found(self, handler, mock_repository, mock_bus, token):
        mock_repository.exists.return_value = True
        mock_repository.delete.return_value = False

        with pytest.raises(UserNotFoundError):
            await handler.handle(DeleteUserCommand(id=UserId.generate().value), token)

        mock_bus.publish.assert_not_called()


class TestQueryHandlers:
    @pytest.mark.asyncio
    async def test_get_user_returns_dto(self, mock_repository, token):
        user = existing_user()
        mock_repository.get_by_id.return_value = user

        result = await GetUserHandler(mock_repository).handle(
            GetUserQuery(id=user.id.value), token
        )

        assert result == UserDto.from_domain(user)

    @pytest.mark.asyncio
    async def test_get_user_absent_returns_none(self, mock_repository, token):
        mock_repository.get_by_id.return_value = None

        result = await GetUserHandler(mock_repository).handle(
            GetUserQuery(id=UserId.generate().value), token
        )

        assert result is None

    @pytest.mark.asyncio
    async def test_get_all_preserves_repository_order(self, mock_repository, token):
        first = existing_user()
        second = User.create(name="Jane", email="jane@example.com", type=UserType.GUEST)
        mock_repository.get_all.return_value = [first, second]

        result = await GetAllUsersHandler(mock_repository).handle(GetAllUsersQuery(), token)

        assert [dto.id for dto in result] == [first.id.value, second.id.value]
