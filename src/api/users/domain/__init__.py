"""Domain layer for the users bounded context."""
