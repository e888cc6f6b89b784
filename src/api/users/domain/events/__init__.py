"""Domain events for the users bounded context.

Domain events capture facts about things that have happened in the domain.
They are immutable value objects published on the message bus once the
change they describe has been stored.
"""

from users.domain.events.user import UserCreated, UserDeleted, UserUpdated

# Type alias for all domain events in the users context
DomainEvent = UserCreated | UserUpdated | UserDeleted

__all__ = [
    "DomainEvent",
    "UserCreated",
    "UserDeleted",
    "UserUpdated",
]
