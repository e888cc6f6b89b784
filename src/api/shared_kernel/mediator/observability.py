"""Domain probes for the mediator pipeline.

One probe covers every pipeline behavior so that a request's journey
(validation, cache lookup, retries, outcome) shows up as one family of
structured log events.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.mediator.validation import ValidationFailure
    from shared_kernel.observability_context import ObservationContext


class PipelineProbe(Protocol):
    """Domain probe for request pipeline operations."""

    def request_started(self, request_name: str) -> None:
        """Record that a request entered the pipeline."""
        ...

    def request_completed(self, request_name: str, elapsed_ms: float) -> None:
        """Record that a request completed successfully."""
        ...

    def request_failed(
        self,
        request_name: str,
        elapsed_ms: float,
        error: Exception,
        expected: bool,
    ) -> None:
        """Record that a request failed."""
        ...

    def validation_skipped(self, request_name: str) -> None:
        """Record that no validators are registered for a request type."""
        ...

    def validation_passed(self, request_name: str, validator_count: int) -> None:
        """Record that every validator accepted the request."""
        ...

    def validation_failed(
        self,
        request_name: str,
        failures: list[ValidationFailure],
    ) -> None:
        """Record that validation rejected the request."""
        ...

    def cache_hit(self, request_name: str, key: str) -> None:
        """Record that a query was answered from the cache."""
        ...

    def cache_miss(self, request_name: str, key: str) -> None:
        """Record that a query was not found in the cache."""
        ...

    def cache_stored(self, request_name: str, key: str, ttl_seconds: float) -> None:
        """Record that a query result was cached."""
        ...

    def cache_store_discarded(self, request_name: str, key: str, region: str) -> None:
        """Record that a result was dropped after its region was invalidated."""
        ...

    def cache_invalidated(self, request_name: str, region: str, removed: int) -> None:
        """Record that a command invalidated a cache region."""
        ...

    def retry_scheduled(
        self,
        request_name: str,
        attempt: int,
        delay_seconds: float,
        error: BaseException,
    ) -> None:
        """Record that a transient failure will be retried."""
        ...

    def retries_exhausted(
        self,
        request_name: str,
        attempts: int,
        error: BaseException,
    ) -> None:
        """Record that a request failed after its final attempt."""
        ...

    def with_context(self, context: ObservationContext) -> PipelineProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultPipelineProbe:
    """Default implementation of PipelineProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultPipelineProbe:
        """Create a new probe with observation context bound."""
        return DefaultPipelineProbe(logger=self._logger, context=context)

    def request_started(self, request_name: str) -> None:
        self._logger.info(
            "request_started",
            request_name=request_name,
            **self._get_context_kwargs(),
        )

    def request_completed(self, request_name: str, elapsed_ms: float) -> None:
        self._logger.info(
            "request_completed",
            request_name=request_name,
            elapsed_ms=round(elapsed_ms, 3),
            **self._get_context_kwargs(),
        )

    def request_failed(
        self,
        request_name: str,
        elapsed_ms: float,
        error: Exception,
        expected: bool,
    ) -> None:
        """Record a failed request.

        Expected (business) failures are warnings; anything else is logged
        as an error with the exception attached.
        """
        if expected:
            self._logger.warning(
                "request_failed",
                request_name=request_name,
                elapsed_ms=round(elapsed_ms, 3),
                error_type=type(error).__name__,
                error=str(error),
                **self._get_context_kwargs(),
            )
            return
        self._logger.error(
            "request_failed",
            request_name=request_name,
            elapsed_ms=round(elapsed_ms, 3),
            error_type=type(error).__name__,
            error=str(error),
            exc_info=error,
            **self._get_context_kwargs(),
        )

    def validation_skipped(self, request_name: str) -> None:
        self._logger.debug(
            "validation_skipped",
            request_name=request_name,
            **self._get_context_kwargs(),
        )

    def validation_passed(self, request_name: str, validator_count: int) -> None:
        self._logger.debug(
            "validation_passed",
            request_name=request_name,
            validator_count=validator_count,
            **self._get_context_kwargs(),
        )

    def validation_failed(
        self,
        request_name: str,
        failures: list[ValidationFailure],
    ) -> None:
        self._logger.warning(
            "validation_failed",
            request_name=request_name,
            error_count=len(failures),
            errors=[f"{f.field}: {f.message}" for f in failures],
            **self._get_context_kwargs(),
        )

    def cache_hit(self, request_name: str, key: str) -> None:
        self._logger.info(
            "cache_hit",
            request_name=request_name,
            cache_key=key,
            **self._get_context_kwargs(),
        )

    def cache_miss(self, request_name: str, key: str) -> None:
        self._logger.info(
            "cache_miss",
            request_name=request_name,
            cache_key=key,
            **self._get_context_kwargs(),
        )

    def cache_stored(self, request_name: str, key: str, ttl_seconds: float) -> None:
        self._logger.debug(
            "cache_stored",
            request_name=request_name,
            cache_key=key,
            ttl_seconds=ttl_seconds,
            **self._get_context_kwargs(),
        )

    def cache_store_discarded(self, request_name: str, key: str, region: str) -> None:
        self._logger.debug(
            "cache_store_discarded",
            request_name=request_name,
            cache_key=key,
            cache_region=region,
            **self._get_context_kwargs(),
        )

    def cache_invalidated(self, request_name: str, region: str, removed: int) -> None:
        self._logger.info(
            "cache_invalidated",
            request_name=request_name,
            cache_region=region,
            removed=removed,
            **self._get_context_kwargs(),
        )

    def retry_scheduled(
        self,
        request_name: str,
        attempt: int,
        delay_seconds: float,
        error: BaseException,
    ) -> None:
        self._logger.warning(
            "request_retry_scheduled",
            request_name=request_name,
            attempt=attempt,
            delay_seconds=delay_seconds,
            error=str(error),
            **self._get_context_kwargs(),
        )

    def retries_exhausted(
        self,
        request_name: str,
        attempts: int,
        error: BaseException,
    ) -> None:
        self._logger.error(
            "request_retries_exhausted",
            request_name=request_name,
            attempts=attempts,
            error=str(error),
            **self._get_context_kwargs(),
        )
