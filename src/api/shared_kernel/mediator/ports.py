"""Protocols for mediator participants.

Handlers execute one request type; behaviors wrap every handler with a
cross-cutting concern. Both are resolved once, when the mediator is built.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from shared_kernel.mediator.cancellation import CancellationToken
    from shared_kernel.mediator.requests import Request

NextStage = Callable[[], Awaitable[Any]]
"""Continuation invoking the remainder of the pipeline."""


@runtime_checkable
class RequestHandler(Protocol):
    """Terminal unit of logic executing a single command or query."""

    async def handle(self, request: Request, token: CancellationToken) -> Any:
        """Execute the request.

        Args:
            request: The command or query to execute
            token: Cancellation signal for the request

        Returns:
            The request's result (DTO, list of DTOs, or None)
        """
        ...


@runtime_checkable
class PipelineBehavior(Protocol):
    """Decorator applied around every handler invocation."""

    async def handle(
        self,
        request: Request,
        next_: NextStage,
        token: CancellationToken,
    ) -> Any:
        """Run the behavior and, unless short-circuiting, the rest of the chain.

        Args:
            request: The request being dispatched
            next_: Continuation to the next stage of the pipeline
            token: Cancellation signal for the request

        Returns:
            The result produced by the chain
        """
        ...
