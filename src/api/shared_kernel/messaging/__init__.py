"""Messaging port shared by bounded contexts and the bus adapter."""

from shared_kernel.messaging.ports import IMessageBus, MessageHandler

__all__ = ["IMessageBus", "MessageHandler"]
