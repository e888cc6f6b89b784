"""Email adapters."""

from infrastructure.email.email_service import EmailService, SentEmail

__all__ = ["EmailService", "SentEmail"]
