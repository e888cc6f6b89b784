"""Protocol for outbound user notifications."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IEmailService(Protocol):
    """Sends transactional email to users."""

    async def send_email(self, to: str, subject: str, body: str) -> None:
        """Send a plain-text email.

        Args:
            to: Recipient address
            subject: Subject line
            body: Message body
        """
        ...

    async def send_welcome_email(self, to: str, name: str) -> None:
        """Send the welcome email for a newly created account."""
        ...
