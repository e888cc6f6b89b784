"""Domain exceptions for the users bounded context.

These exceptions represent business-rule violations raised by handlers and
the repository. The presentation layer maps them to HTTP responses.
"""


class UserNotFoundError(Exception):
    """Raised when a referenced user does not exist.

    Recoverable by the caller: verify the id and retry.
    """

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        super().__init__(f"User with ID '{user_id}' was not found.")


class DuplicateEmailError(Exception):
    """Raised when an email address is already used by another user.

    Emails are compared case-insensitively. Recoverable by the caller:
    choose a different email.
    """

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"A user with email '{email}' already exists.")


class UserAlreadyExistsError(Exception):
    """Raised when inserting a user whose id is already stored.

    Ids are generated by the aggregate, so this indicates a programming
    error rather than bad input.
    """

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        super().__init__(f"User with ID '{user_id}' already exists.")
