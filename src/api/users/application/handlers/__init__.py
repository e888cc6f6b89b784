"""Request handlers of the users context."""

from users.application.handlers.create_user import CreateUserHandler
from users.application.handlers.delete_user import DeleteUserHandler
from users.application.handlers.get_all_users import GetAllUsersHandler
from users.application.handlers.get_user import GetUserHandler
from users.application.handlers.update_user import UpdateUserHandler

__all__ = [
    "CreateUserHandler",
    "DeleteUserHandler",
    "GetAllUsersHandler",
    "GetUserHandler",
    "UpdateUserHandler",
]
