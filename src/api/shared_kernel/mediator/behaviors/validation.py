"""Validation behavior: rejects invalid requests before any later stage runs."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from shared_kernel.mediator.exceptions import RequestValidationError
from shared_kernel.mediator.observability import DefaultPipelineProbe, PipelineProbe

if TYPE_CHECKING:
    from shared_kernel.mediator.cancellation import CancellationToken
    from shared_kernel.mediator.ports import NextStage
    from shared_kernel.mediator.requests import Request
    from shared_kernel.mediator.validation import Validator


class ValidationBehavior:
    """Runs every validator registered for one request type.

    Validators run concurrently and their failures are merged. A single
    failure anywhere aborts the request with a RequestValidationError that
    carries all of them.
    """

    def __init__(
        self,
        validators: Sequence[Validator[Any]] = (),
        probe: PipelineProbe | None = None,
    ) -> None:
        self._validators = tuple(validators)
        self._probe = probe or DefaultPipelineProbe()

    @property
    def validator_count(self) -> int:
        return len(self._validators)

    async def handle(
        self,
        request: Request,
        next_: NextStage,
        token: CancellationToken,
    ) -> Any:
        token.raise_if_cancelled()
        request_name = request.request_name()

        if not self._validators:
            self._probe.validation_skipped(request_name)
            return await next_()

        results = await asyncio.gather(
            *(validator.validate(request) for validator in self._validators)
        )
        failures = [failure for result in results for failure in result]

        if failures:
            self._probe.validation_failed(request_name, failures)
            raise RequestValidationError(request_name, failures)

        self._probe.validation_passed(request_name, len(self._validators))
        return await next_()
