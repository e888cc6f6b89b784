"""Mediator dispatching commands and queries through the behavior pipeline.

The registry maps each request type to a pipeline resolved once, at
registration time: the ordered behavior list and the terminal handler.
Dispatch is a dictionary lookup followed by running that pipeline.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from shared_kernel.mediator.behaviors import (
    LoggingBehavior,
    ResiliencyBehavior,
    ValidationBehavior,
)
from shared_kernel.mediator.cancellation import CancellationToken
from shared_kernel.mediator.exceptions import (
    HandlerAlreadyRegisteredError,
    HandlerNotRegisteredError,
)

if TYPE_CHECKING:
    from shared_kernel.mediator.behaviors import CachingBehavior
    from shared_kernel.mediator.observability import PipelineProbe
    from shared_kernel.mediator.ports import PipelineBehavior, RequestHandler
    from shared_kernel.mediator.requests import Request
    from shared_kernel.mediator.validation import Validator


@dataclass(frozen=True)
class Pipeline:
    """The compiled chain for one request type."""

    request_type: type
    handler: RequestHandler
    behaviors: tuple[PipelineBehavior, ...]

    async def run(self, request: Request, token: CancellationToken) -> Any:
        """Run the request through every behavior, then the handler."""

        async def invoke(index: int) -> Any:
            if index == len(self.behaviors):
                token.raise_if_cancelled()
                return await self.handler.handle(request, token)
            behavior = self.behaviors[index]
            return await behavior.handle(request, lambda: invoke(index + 1), token)

        return await invoke(0)


class Mediator:
    """Sends requests to their handlers through a fixed behavior order.

    Every pipeline is composed as:
        Logging -> Validation -> Caching -> Resiliency -> Handler

    The logging, caching and resiliency behaviors are shared by all request
    types; validation is per type since it holds that type's validators.
    Caching is optional.
    """

    def __init__(
        self,
        logging_behavior: LoggingBehavior | None = None,
        caching_behavior: CachingBehavior | None = None,
        resiliency_behavior: ResiliencyBehavior | None = None,
        probe: PipelineProbe | None = None,
    ) -> None:
        self._logging = logging_behavior or LoggingBehavior(probe=probe)
        self._caching = caching_behavior
        self._resiliency = resiliency_behavior or ResiliencyBehavior(probe=probe)
        self._probe = probe
        self._pipelines: dict[type, Pipeline] = {}

    def register(
        self,
        request_type: type,
        handler: RequestHandler,
        validators: Sequence[Validator[Any]] = (),
    ) -> None:
        """Register the handler and validators of a request type.

        Args:
            request_type: Concrete Command or Query class
            handler: Terminal handler for the request type
            validators: Rule sets evaluated before the handler

        Raises:
            HandlerAlreadyRegisteredError: If the type already has a handler
        """
        if request_type in self._pipelines:
            raise HandlerAlreadyRegisteredError(request_type)

        behaviors: list[PipelineBehavior] = [
            self._logging,
            ValidationBehavior(validators, probe=self._probe),
        ]
        if self._caching is not None:
            behaviors.append(self._caching)
        behaviors.append(self._resiliency)

        self._pipelines[request_type] = Pipeline(
            request_type=request_type,
            handler=handler,
            behaviors=tuple(behaviors),
        )

    def is_registered(self, request_type: type) -> bool:
        return request_type in self._pipelines

    def pipeline_for(self, request_type: type) -> Pipeline:
        """Return the compiled pipeline of a request type.

        Raises:
            HandlerNotRegisteredError: If the type was never registered
        """
        try:
            return self._pipelines[request_type]
        except KeyError:
            raise HandlerNotRegisteredError(request_type) from None

    async def send(
        self,
        request: Request,
        token: CancellationToken | None = None,
    ) -> Any:
        """Dispatch a request through its pipeline.

        Args:
            request: Command or query instance
            token: Cancellation signal; a fresh token is used when omitted

        Returns:
            The handler's result, possibly served from the cache

        Raises:
            HandlerNotRegisteredError: If the request type is unknown
        """
        pipeline = self.pipeline_for(type(request))
        return await pipeline.run(request, token or CancellationToken())
