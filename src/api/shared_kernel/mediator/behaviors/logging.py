"""Logging behavior: records start, duration and outcome of every request."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

from shared_kernel.mediator.exceptions import (
    OperationCancelledError,
    RequestValidationError,
)
from shared_kernel.mediator.observability import DefaultPipelineProbe, PipelineProbe

if TYPE_CHECKING:
    from shared_kernel.mediator.cancellation import CancellationToken
    from shared_kernel.mediator.ports import NextStage
    from shared_kernel.mediator.requests import Request


class LoggingBehavior:
    """Outermost behavior of the pipeline.

    Never alters the result. Exceptions are recorded and re-raised unchanged.
    Errors listed in ``expected_errors`` are business outcomes and are
    logged as warnings; everything else is logged as an error with its
    stack.
    """

    DEFAULT_EXPECTED_ERRORS: tuple[type[Exception], ...] = (
        RequestValidationError,
        OperationCancelledError,
    )

    def __init__(
        self,
        probe: PipelineProbe | None = None,
        expected_errors: tuple[type[Exception], ...] = (),
    ) -> None:
        self._probe = probe or DefaultPipelineProbe()
        self._expected_errors = self.DEFAULT_EXPECTED_ERRORS + tuple(expected_errors)

    async def handle(
        self,
        request: Request,
        next_: NextStage,
        token: CancellationToken,
    ) -> Any:
        request_name = request.request_name()
        self._probe.request_started(request_name)
        started = time.perf_counter()

        try:
            response = await next_()
        except Exception as e:
            elapsed_ms = (time.perf_counter() - started) * 1000
            self._probe.request_failed(
                request_name,
                elapsed_ms,
                e,
                expected=isinstance(e, self._expected_errors),
            )
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        self._probe.request_completed(request_name, elapsed_ms)
        return response
