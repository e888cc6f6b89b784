"""Mock email sender.

Nothing leaves the process; each message is logged through the email probe
and kept in ``sent`` for inspection.
"""

from __future__ import annotations

from dataclasses import dataclass

from infrastructure.observability import DefaultEmailProbe, EmailProbe


@dataclass(frozen=True)
class SentEmail:
    to: str
    subject: str
    body: str


class EmailService:
    """Logs emails instead of delivering them."""

    def __init__(self, probe: EmailProbe | None = None):
        self._probe = probe or DefaultEmailProbe()
        self.sent: list[SentEmail] = []

    async def send_email(self, to: str, subject: str, body: str) -> None:
        self.sent.append(SentEmail(to=to, subject=subject, body=body))
        self._probe.email_sent(to, subject)

    async def send_welcome_email(self, to: str, name: str) -> None:
        await self.send_email(
            to,
            "Welcome to Bwadl!",
            f"Hello {name}, welcome to our platform!",
        )
