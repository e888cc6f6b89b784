"""Message bus adapters."""

from infrastructure.messaging.in_memory_bus import InMemoryMessageBus

__all__ = ["InMemoryMessageBus"]
