"""Unit tests for the Mediator registry and pipeline composition."""

from dataclasses import dataclass
from unittest.mock import create_autospec

import pytest

from shared_kernel.mediator import (
    CancellationToken,
    Command,
    HandlerAlreadyRegisteredError,
    HandlerNotRegisteredError,
    Mediator,
    OperationCancelledError,
    Query,
    RequestValidationError,
    Rule,
    Validator,
)
from shared_kernel.mediator.behaviors import (
    CachingBehavior,
    LoggingBehavior,
    ResiliencyBehavior,
    ValidationBehavior,
)
from shared_kernel.mediator.observability import PipelineProbe
from shared_kernel.mediator.validation import not_blank


@dataclass(frozen=True)
class Ping(Query):
    message: str


@dataclass(frozen=True)
class Rename(Command):
    name: str


class PingValidator(Validator[Ping]):
    def rules(self):
        return (Rule("message", not_blank, "Message is required"),)


class EchoHandler:
    def __init__(self):
        self.calls = 0

    async def handle(self, request, token):
        self.calls += 1
        return f"pong: {request.message}"


class RecordingHandler:
    def __init__(self):
        self.received = []

    async def handle(self, request, token):
        self.received.append((request, token))


@pytest.fixture
def mock_probe():
    return create_autospec(PipelineProbe, instance=True)


@pytest.fixture
def mediator(mock_probe) -> Mediator:
    return Mediator(probe=mock_probe)


class TestRegistration:
    def test_register_compiles_pipeline_in_order(self, mock_probe):
        caching = CachingBehavior(cache=object(), probe=mock_probe)
        mediator = Mediator(caching_behavior=caching, probe=mock_probe)

        mediator.register(Ping, EchoHandler(), validators=[PingValidator()])
        pipeline = mediator.pipeline_for(Ping)

        kinds = [type(behavior) for behavior in pipeline.behaviors]
        assert kinds == [
            LoggingBehavior,
            ValidationBehavior,
            CachingBehavior,
            ResiliencyBehavior,
        ]
        assert pipeline.behaviors[1].validator_count == 1

    def test_pipeline_without_cache_skips_caching_stage(self, mediator):
        mediator.register(Ping, EchoHandler())

        kinds = [type(behavior) for behavior in mediator.pipeline_for(Ping).behaviors]

        assert CachingBehavior not in kinds

    def test_duplicate_registration_rejected(self, mediator):
        mediator.register(Ping, EchoHandler())

        with pytest.raises(HandlerAlreadyRegisteredError):
            mediator.register(Ping, EchoHandler())

    def test_is_registered(self, mediator):
        mediator.register(Ping, EchoHandler())

        assert mediator.is_registered(Ping)
        assert not mediator.is_registered(Rename)


class TestSend:
    @pytest.mark.asyncio
    async def test_send_returns_handler_result(self, mediator):
        mediator.register(Ping, EchoHandler())

        assert await mediator.send(Ping(message="hi")) == "pong: hi"

    @pytest.mark.asyncio
    async def test_unregistered_type_raises(self, mediator):
        with pytest.raises(HandlerNotRegisteredError, match="Rename"):
            await mediator.send(Rename(name="x"))

    @pytest.mark.asyncio
    async def test_token_reaches_handler(self, mediator):
        handler = RecordingHandler()
        mediator.register(Rename, handler)
        token = CancellationToken()

        await mediator.send(Rename(name="x"), token)

        assert handler.received[0][1] is token

    @pytest.mark.asyncio
    async def test_invalid_request_never_reaches_handler(self, mediator):
        handler = EchoHandler()
        mediator.register(Ping, handler, validators=[PingValidator()])

        with pytest.raises(RequestValidationError) as exc_info:
            await mediator.send(Ping(message="  "))

        assert [f.message for f in exc_info.value.failures] == ["Message is required"]
        assert handler.calls == 0

    @pytest.mark.asyncio
    async def test_cancelled_token_stops_before_handler(self, mediator, mock_probe):
        handler = EchoHandler()
        mediator.register(Ping, handler)
        token = CancellationToken()
        token.cancel()

        with pytest.raises(OperationCancelledError):
            await mediator.send(Ping(message="hi"), token)

        assert handler.calls == 0
        assert mock_probe.request_failed.call_args.kwargs["expected"] is True
