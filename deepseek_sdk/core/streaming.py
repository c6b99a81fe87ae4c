"""Decoding of SSE event sequences into typed completion chunks."""
from typing import (
    Any,
    AsyncIterable,
    AsyncIterator,
    Awaitable,
    Callable,
    Dict,
    Generic,
    Iterable,
    List,
    Optional,
    Type,
    TypeVar,
)

from pydantic import BaseModel

from deepseek_sdk.models.common import FunctionCall, ToolCall
from deepseek_sdk.models.messages import ChatCompletionMessage
from deepseek_sdk.models.responses import ChatCompletionChunk
from deepseek_sdk.utils.logging import get_logger
from .codec import JsonCodec
from .errors import classify
from .sse import EventStream, ServerSentEvent, SSEStatusError

logger = get_logger(__name__)

DONE = "[DONE]"

T = TypeVar("T", bound=BaseModel)


async def decode_events(
    events: AsyncIterable[ServerSentEvent],
    chunk_model: Type[T],
    codec: JsonCodec,
) -> AsyncIterator[T]:
    """Turn inbound events into ``chunk_model`` instances, in arrival order.

    Events without data (keep-alives) are skipped and ``[DONE]`` ends the
    sequence normally. A payload that does not decode raises
    ``ResponseDecodeError``. An unsuccessful status reported by the event
    source is raised as the same typed error a buffered call would get.
    """
    count = 0
    try:
        async for event in events:
            data = (event.data or "").strip()
            if not data:
                continue
            if data == DONE:
                logger.debug("sse_done", chunks=count)
                return
            chunk = codec.decode(data, chunk_model)
            count += 1
            yield chunk
    except SSEStatusError as exc:
        error = classify(exc.status, exc.headers, exc.body, exc.reason)
        logger.warning("sse_error", status=exc.status, kind=error.kind, chunks=count)
        raise error from exc


class ChunkStream(Generic[T]):
    """Lazy, single-pass stream of decoded chunks.

    Nothing touches the network until the first ``__anext__``. Use as
    ``async with`` (or call :meth:`aclose`) to release the connection as soon
    as iteration is abandoned.
    """

    def __init__(
        self,
        connect: Callable[[], Awaitable[EventStream]],
        chunk_model: Type[T],
        codec: JsonCodec,
    ):
        self._connect = connect
        self._chunk_model = chunk_model
        self._codec = codec
        self._events: Optional[EventStream] = None
        self._iterator = self._run()

    async def _run(self) -> AsyncIterator[T]:
        self._events = await self._connect()
        finished = False
        try:
            async for chunk in decode_events(self._events, self._chunk_model, self._codec):
                yield chunk
            finished = True
        finally:
            if finished:
                await self._events.release()
            else:
                await self._events.aclose()

    def __aiter__(self) -> "ChunkStream[T]":
        return self

    async def __anext__(self) -> T:
        return await self._iterator.__anext__()

    async def aclose(self) -> None:
        await self._iterator.aclose()
        if self._events is not None:
            await self._events.aclose()

    async def __aenter__(self) -> "ChunkStream[T]":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


def accumulate_chat_chunks(chunks: Iterable[ChatCompletionChunk], index: int = 0) -> ChatCompletionMessage:
    """Rebuild the full assistant message of choice ``index`` from its deltas."""
    content: List[str] = []
    reasoning: List[str] = []
    calls: Dict[int, Dict[str, Any]] = {}

    for chunk in chunks:
        for choice in chunk.choices:
            if choice.index != index:
                continue
            delta = choice.delta
            if delta.content:
                content.append(delta.content)
            if delta.reasoning_content:
                reasoning.append(delta.reasoning_content)
            for fragment in delta.tool_calls or []:
                call = calls.setdefault(fragment.index, {"id": None, "name": "", "arguments": ""})
                if fragment.id:
                    call["id"] = fragment.id
                if fragment.function is not None:
                    call["name"] += fragment.function.name or ""
                    call["arguments"] += fragment.function.arguments or ""

    tool_calls = [
        ToolCall(id=call["id"] or "", function=FunctionCall(name=call["name"], arguments=call["arguments"]))
        for _, call in sorted(calls.items())
    ]
    return ChatCompletionMessage(
        content="".join(content) if content else None,
        reasoning_content="".join(reasoning) if reasoning else None,
        tool_calls=tool_calls or None,
    )
