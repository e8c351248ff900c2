import asyncio
from dataclasses import dataclass, replace
from typing import Any

import pydantic
import pytest

from resdk.core.errors import (
    AuthenticationError,
    AuthorizationError,
    HandlerConfigError,
    NotFoundError,
    ValidationError,
)
from resdk.core.handler import SERIALIZER_SLOTS, BaseHandler, HandlerConfig
from resdk.core.models import NO_AUTH, AuthorizableOutput, PlainOutput
from resdk.core.response import ResponseBuffer
from resdk.telemetry.inmemory import InMemoryTelemetry


@dataclass(frozen=True)
class _Item:
    id: int


@dataclass
class _GuardedItem:
    id: int
    owner: str
    seen_auth: list[Any]

    def authorize(self, auth: Any) -> None:
        self.seen_auth.append(auth)
        if auth != self.owner:
            raise AuthorizationError("denied")


class _Input:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.validated = 0

    def validate(self) -> None:
        self.validated += 1
        if self.error is not None:
            raise self.error


class _Deserializer:
    def __init__(self, data: _Input | None = None) -> None:
        self.data = data or _Input()
        self.calls = 0

    async def deserialize(self, request) -> _Input:
        self.calls += 1
        return self.data


class _Processor:
    def __init__(self, result: Any = None, error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.calls: list[Any] = []

    async def process(self, data: Any) -> Any:
        self.calls.append(data)
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        return self.result


class _Authenticator:
    def __init__(self, auth: Any = "alice", error: Exception | None = None) -> None:
        self.auth = auth
        self.error = error
        self.calls = 0

    async def authenticate(self, request) -> Any:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.auth


class _RecordingSerializer:
    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        self.values: list[Any] = []

    def serialize(self, value: Any, writer, request) -> None:
        self.values.append(value)
        writer.set_status(self.status_code)
        writer.set_header("Content-Type", "text/plain")
        writer.write(repr(value).encode())


_STATUSES = dict(zip(SERIALIZER_SLOTS.values(), (200, 401, 400, 500, 404, 403)))


def _build(**overrides: Any) -> tuple[BaseHandler, dict[str, _RecordingSerializer]]:
    serializers = {slot: _RecordingSerializer(status) for slot, status in _STATUSES.items()}
    collaborators: dict[str, Any] = {
        "deserializer": _Deserializer(),
        "processor": _Processor(result=_Item(id=1)),
        **serializers,
        **overrides,
    }
    return BaseHandler(HandlerConfig(**collaborators)), serializers


def _called(serializers: dict[str, _RecordingSerializer]) -> list[str]:
    return [slot for slot, s in serializers.items() for _ in s.values]


@pytest.mark.asyncio
async def test_success_without_authenticator_or_authorizer(make_request) -> None:
    handler, serializers = _build()
    writer = ResponseBuffer()

    outcome = await handler.handle(make_request(), writer)

    assert outcome == "success"
    assert serializers["success_serializer"].values == [_Item(id=1)]
    assert _called(serializers) == ["success_serializer"]
    assert writer.status_code == 200


@pytest.mark.asyncio
async def test_validation_error_stops_before_processor(make_request) -> None:
    error = ValidationError("missing field X")
    processor = _Processor(result=_Item(id=1))
    handler, serializers = _build(deserializer=_Deserializer(_Input(error)), processor=processor)

    outcome = await handler.handle(make_request(), ResponseBuffer())

    assert outcome == "validation_error"
    assert serializers["validation_error_serializer"].values == [error]
    assert processor.calls == []
    assert _called(serializers) == ["validation_error_serializer"]


@pytest.mark.asyncio
async def test_pydantic_validation_error_is_a_validation_outcome(make_request) -> None:
    class _Query(pydantic.BaseModel):
        limit: int

    class _PydanticInput:
        def validate(self) -> None:
            _Query.model_validate({"limit": "many"})

    class _Deser:
        async def deserialize(self, request) -> _PydanticInput:
            return _PydanticInput()

    handler, serializers = _build(deserializer=_Deser())

    outcome = await handler.handle(make_request(), ResponseBuffer())

    assert outcome == "validation_error"
    assert isinstance(serializers["validation_error_serializer"].values[0], pydantic.ValidationError)


@pytest.mark.asyncio
async def test_no_result_is_not_found(make_request) -> None:
    handler, serializers = _build(processor=_Processor(result=None))

    outcome = await handler.handle(make_request(), ResponseBuffer())

    assert outcome == "not_found"
    (error,) = serializers["not_found_serializer"].values
    assert isinstance(error, NotFoundError)
    assert str(error) == "Not found"
    assert _called(serializers) == ["not_found_serializer"]


@pytest.mark.asyncio
async def test_not_found_takes_precedence_over_authorization(make_request) -> None:
    authenticator = _Authenticator(auth="mallory")
    handler, serializers = _build(authenticator=authenticator, processor=_Processor(result=None))

    outcome = await handler.handle(make_request(), ResponseBuffer())

    assert outcome == "not_found"
    assert serializers["authorization_error_serializer"].values == []


@pytest.mark.asyncio
async def test_authorization_denied(make_request) -> None:
    seen: list[Any] = []
    item = _GuardedItem(id=1, owner="alice", seen_auth=seen)
    handler, serializers = _build(
        authenticator=_Authenticator(auth="bob"),
        processor=_Processor(result=item),
    )

    outcome = await handler.handle(make_request(), ResponseBuffer())

    assert outcome == "authorization_error"
    (error,) = serializers["authorization_error_serializer"].values
    assert str(error) == "denied"
    assert seen == ["bob"]
    assert serializers["success_serializer"].values == []


@pytest.mark.asyncio
async def test_authorization_granted_serializes_output(make_request) -> None:
    item = _GuardedItem(id=1, owner="alice", seen_auth=[])
    handler, serializers = _build(authenticator=_Authenticator(auth="alice"), processor=_Processor(result=item))

    assert await handler.handle(make_request(), ResponseBuffer()) == "success"
    assert serializers["success_serializer"].values == [item]


@pytest.mark.asyncio
async def test_authorizer_sees_no_auth_without_authenticator(make_request) -> None:
    seen: list[Any] = []
    item = _GuardedItem(id=1, owner="alice", seen_auth=seen)
    handler, _ = _build(processor=_Processor(result=item))

    outcome = await handler.handle(make_request(), ResponseBuffer())

    assert outcome == "authorization_error"
    assert seen == [NO_AUTH]


@pytest.mark.asyncio
async def test_authentication_error_stops_everything(make_request) -> None:
    error = AuthenticationError("bad token")
    deserializer = _Deserializer()
    handler, serializers = _build(authenticator=_Authenticator(error=error), deserializer=deserializer)

    outcome = await handler.handle(make_request(), ResponseBuffer())

    assert outcome == "authentication_error"
    assert serializers["authentication_error_serializer"].values == [error]
    assert deserializer.calls == 0
    assert _called(serializers) == ["authentication_error_serializer"]


@pytest.mark.asyncio
async def test_any_authenticator_exception_is_an_authentication_error(make_request) -> None:
    error = ValueError("malformed token")
    deserializer = _Deserializer()
    handler, serializers = _build(authenticator=_Authenticator(error=error), deserializer=deserializer)

    outcome = await handler.handle(make_request(), ResponseBuffer())

    assert outcome == "authentication_error"
    assert serializers["authentication_error_serializer"].values[0] is error
    assert deserializer.calls == 0
    assert _called(serializers) == ["authentication_error_serializer"]


@pytest.mark.asyncio
async def test_any_validate_exception_is_a_validation_error(make_request) -> None:
    error = KeyError("limit")
    processor = _Processor(result=_Item(id=1))
    handler, serializers = _build(deserializer=_Deserializer(_Input(error)), processor=processor)

    outcome = await handler.handle(make_request(), ResponseBuffer())

    assert outcome == "validation_error"
    assert serializers["validation_error_serializer"].values[0] is error
    assert processor.calls == []
    assert _called(serializers) == ["validation_error_serializer"]


@pytest.mark.asyncio
async def test_any_authorize_exception_is_an_authorization_error(make_request) -> None:
    error = PermissionError("read-only")

    def deny(auth: Any) -> None:
        raise error

    guarded = AuthorizableOutput(value={"id": 4}, authorize=deny)
    handler, serializers = _build(authenticator=_Authenticator(auth="alice"), processor=_Processor(result=guarded))

    outcome = await handler.handle(make_request(), ResponseBuffer())

    assert outcome == "authorization_error"
    assert serializers["authorization_error_serializer"].values[0] is error
    assert _called(serializers) == ["authorization_error_serializer"]


@pytest.mark.asyncio
async def test_processor_exception_is_processing_error(make_request) -> None:
    error = RuntimeError("db down")
    handler, serializers = _build(processor=_Processor(error=error))

    outcome = await handler.handle(make_request(), ResponseBuffer())

    assert outcome == "processing_error"
    assert serializers["processing_error_serializer"].values[0] is error
    assert _called(serializers) == ["processing_error_serializer"]


@pytest.mark.asyncio
async def test_explicit_output_variants(make_request) -> None:
    calls: list[Any] = []
    guarded = AuthorizableOutput(value={"id": 2}, authorize=calls.append)
    handler, serializers = _build(authenticator=_Authenticator(auth="alice"), processor=_Processor(result=guarded))

    assert await handler.handle(make_request(), ResponseBuffer()) == "success"
    assert calls == ["alice"]
    assert serializers["success_serializer"].values == [{"id": 2}]

    # PlainOutput skips authorization even when the value could authorize.
    item = _GuardedItem(id=3, owner="nobody", seen_auth=[])
    handler, serializers = _build(processor=_Processor(result=PlainOutput(value=item)))

    assert await handler.handle(make_request(), ResponseBuffer()) == "success"
    assert item.seen_auth == []


@pytest.mark.asyncio
async def test_authenticator_unset_is_never_called(make_request) -> None:
    seen: list[Any] = []
    authenticator = _Authenticator(auth="alice")
    item = _GuardedItem(id=1, owner="alice", seen_auth=seen)
    handler, _ = _build(authenticator=authenticator, processor=_Processor(result=item))
    unauthenticated = BaseHandler(replace(handler.config, authenticator=None))

    outcome = await unauthenticated.handle(make_request(), ResponseBuffer())

    assert outcome == "authorization_error"
    assert authenticator.calls == 0
    assert seen == [NO_AUTH]


@pytest.mark.asyncio
async def test_repeated_requests_give_equal_responses(make_request) -> None:
    handler, _ = _build(processor=_Processor(result=None))
    first, second = ResponseBuffer(), ResponseBuffer()

    assert await handler.handle(make_request(), first) == await handler.handle(make_request(), second)
    assert (first.status_code, first.headers, first.body) == (second.status_code, second.headers, second.body)


@pytest.mark.asyncio
async def test_concurrent_requests_are_independent(make_request) -> None:
    class _EchoAuth:
        async def authenticate(self, request) -> str:
            await asyncio.sleep(0)
            return request.headers["x-user"]

    class _OwnedBy:
        async def process(self, data: Any) -> _GuardedItem:
            await asyncio.sleep(0)
            return _GuardedItem(id=1, owner="user-3", seen_auth=[])

    handler, serializers = _build(authenticator=_EchoAuth(), processor=_OwnedBy())
    requests = [make_request(headers={"X-User": f"user-{i}"}) for i in range(8)]

    outcomes = await asyncio.gather(*(handler.handle(r, ResponseBuffer()) for r in requests))

    assert outcomes.count("success") == 1
    assert outcomes[3] == "success"
    assert len(serializers["authorization_error_serializer"].values) == 7


def test_missing_collaborators_rejected() -> None:
    with pytest.raises(HandlerConfigError) as exc_info:
        BaseHandler(HandlerConfig(processor=_Processor()))

    missing = exc_info.value.missing
    assert "deserializer" in missing
    assert "processor" not in missing
    assert set(SERIALIZER_SLOTS.values()) <= set(missing)
    assert "authenticator" not in missing


@pytest.mark.asyncio
async def test_telemetry_records_outcomes(make_request) -> None:
    telemetry = InMemoryTelemetry()
    handler, _ = _build(processor=_Processor(result=None), telemetry=telemetry)

    await handler.handle(make_request(), ResponseBuffer())
    await handler.handle(make_request(), ResponseBuffer())

    labels = (("outcome", "not_found"),)
    assert telemetry.get_counter("pipeline_outcomes_total", labels) == 2
    assert len(telemetry.get_timing_values("pipeline_duration_seconds", labels)) == 2
    assert telemetry.get_counter("pipeline_outcomes_total", (("outcome", "success"),)) == 0


@pytest.mark.asyncio
async def test_telemetry_recorded_when_serializer_raises(make_request) -> None:
    class _Broken:
        def serialize(self, value: Any, writer, request) -> None:
            raise OSError("client went away")

    telemetry = InMemoryTelemetry()
    handler, _ = _build(success_serializer=_Broken(), telemetry=telemetry)

    with pytest.raises(OSError):
        await handler.handle(make_request(), ResponseBuffer())

    assert telemetry.outcome_counts()["success"] == 1
