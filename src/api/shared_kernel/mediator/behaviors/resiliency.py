"""Resiliency behavior: retries transient failures with exponential backoff.

Retry policy:
- Stop: after ``max_attempts`` attempts (3 by default).
- Wait: exponential backoff, ``multiplier * 2 ** (attempt - 1)`` seconds,
  clamped to ``[backoff_min, backoff_max]``.
- Retry only transient errors. Validation, not-found, duplicate and
  cancellation errors are business outcomes and propagate on first sight.
- Handlers that mutate state must raise retryable errors only before their
  write. Failures after the write (such as publishing domain events) are
  recorded and not raised, since a retry would repeat the write.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from shared_kernel.mediator.exceptions import TransientError
from shared_kernel.mediator.observability import DefaultPipelineProbe, PipelineProbe

if TYPE_CHECKING:
    from shared_kernel.mediator.cancellation import CancellationToken
    from shared_kernel.mediator.ports import NextStage
    from shared_kernel.mediator.requests import Request

TRANSIENT_ERRORS: tuple[type[Exception], ...] = (
    TransientError,
    TimeoutError,
    ConnectionError,
)


class ResiliencyBehavior:
    """Wraps the remainder of the pipeline in a tenacity retry loop."""

    def __init__(
        self,
        max_attempts: int = 3,
        backoff_multiplier: float = 2.0,
        backoff_min_seconds: float = 0.0,
        backoff_max_seconds: float = 30.0,
        retry_on: tuple[type[Exception], ...] = TRANSIENT_ERRORS,
        probe: PipelineProbe | None = None,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._max_attempts = max_attempts
        self._wait = wait_exponential(
            multiplier=backoff_multiplier,
            min=backoff_min_seconds,
            max=backoff_max_seconds,
        )
        self._retry_on = retry_on
        self._probe = probe or DefaultPipelineProbe()

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    async def handle(
        self,
        request: Request,
        next_: NextStage,
        token: CancellationToken,
    ) -> Any:
        request_name = request.request_name()

        def before_sleep(retry_state: RetryCallState) -> None:
            outcome = retry_state.outcome
            error = outcome.exception() if outcome is not None else None
            delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
            self._probe.retry_scheduled(
                request_name,
                attempt=retry_state.attempt_number,
                delay_seconds=delay,
                error=error,
            )

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self._max_attempts),
            wait=self._wait,
            retry=retry_if_exception_type(self._retry_on),
            sleep=token.sleep,
            before_sleep=before_sleep,
            reraise=True,
        )

        try:
            async for attempt in retrying:
                with attempt:
                    token.raise_if_cancelled()
                    response = await next_()
        except self._retry_on as e:
            self._probe.retries_exhausted(
                request_name,
                attempts=retrying.statistics.get("attempt_number", self._max_attempts),
                error=e,
            )
            raise

        return response
