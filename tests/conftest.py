"""Shared fixtures: a scripted stand-in for the DeepSeek HTTP API."""
import asyncio
import json
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Tuple, Union

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from deepseek_sdk import ClientSettings, DeepSeekClient

API_KEY = "sk-test-0123456789abcdef"

Responder = Callable[[web.Request], Awaitable[web.StreamResponse]]

COMPLETION_BODY = {
    "id": "930c60df-bf64-41c9-a88e-3ec75f81e00e",
    "choices": [
        {
            "finish_reason": "stop",
            "index": 0,
            "message": {"content": "Hello! How can I help you today?", "role": "assistant"},
        }
    ],
    "created": 1705651092,
    "model": "deepseek-chat",
    "object": "chat.completion",
    "usage": {"completion_tokens": 10, "prompt_tokens": 16, "total_tokens": 26},
}


def chunk_body(content: str, *, index: int = 0, finish_reason: Any = None, **delta: Any) -> Dict[str, Any]:
    """One ``chat.completion.chunk`` carrying ``content`` in its delta."""
    return {
        "id": "930c60df-bf64-41c9-a88e-3ec75f81e00e",
        "choices": [
            {
                "index": index,
                "delta": {"content": content, **delta},
                "finish_reason": finish_reason,
            }
        ],
        "created": 1705651092,
        "model": "deepseek-chat",
        "object": "chat.completion.chunk",
    }


def data_line(payload: Any) -> str:
    text = payload if isinstance(payload, str) else json.dumps(payload)
    return f"data: {text}\n\n"


def json_reply(body: Any, status: int = 200) -> Responder:
    async def respond(request: web.Request) -> web.Response:
        text = body if isinstance(body, str) else json.dumps(body)
        return web.Response(text=text, status=status, content_type="application/json")

    return respond


def sse_reply(*frames: Union[str, bytes], stall: float = 0, drop: bool = False) -> Responder:
    """Stream raw SSE frames, then end the response.

    ``stall`` pauses after the frames; ``drop`` then closes the connection
    instead of ending the body.
    """

    async def respond(request: web.Request) -> web.StreamResponse:
        response = web.StreamResponse(headers={"Content-Type": "text/event-stream"})
        await response.prepare(request)
        for frame in frames:
            await response.write(frame if isinstance(frame, bytes) else frame.encode("utf-8"))
        if stall:
            await asyncio.sleep(stall)
        if drop:
            request.transport.close()
            return response
        await response.write_eof()
        return response

    return respond


def slow_reply(delay: float, body: Any = COMPLETION_BODY) -> Responder:
    async def respond(request: web.Request) -> web.Response:
        await asyncio.sleep(delay)
        return web.json_response(body)

    return respond


@dataclass
class RecordedRequest:
    method: str
    path: str
    headers: Mapping[str, str]
    body: bytes
    peer: Any = None

    def json(self) -> Any:
        return json.loads(self.body)


class StubProvider:
    """Routes requests to scripted responders and records what it received.

    Responders registered for a route are used in order; the last one keeps
    answering once the others are used up.
    """

    def __init__(self):
        self.app = web.Application()
        self.app.router.add_route("*", "/{tail:.*}", self._dispatch)
        self.requests: List[RecordedRequest] = []
        self._routes: Dict[Tuple[str, str], List[Responder]] = {}
        self.base_url = ""

    def on(self, method: str, path: str, *responders: Responder) -> "StubProvider":
        self._routes.setdefault((method, path), []).extend(responders)
        return self

    def received(self, path: str) -> List[RecordedRequest]:
        return [request for request in self.requests if request.path == path]

    async def _dispatch(self, request: web.Request) -> web.StreamResponse:
        body = await request.read()
        peer = request.transport.get_extra_info("peername") if request.transport else None
        self.requests.append(RecordedRequest(request.method, request.path, request.headers.copy(), body, peer))
        queue = self._routes.get((request.method, request.path))
        if not queue:
            return web.json_response({"error": {"message": "no stub route"}}, status=404)
        responder = queue.pop(0) if len(queue) > 1 else queue[0]
        return await responder(request)


@pytest.fixture
async def provider():
    stub = StubProvider()
    server = TestServer(stub.app)
    await server.start_server()
    stub.base_url = str(server.make_url("/"))
    yield stub
    await server.close()


@pytest.fixture
def settings(provider):
    return ClientSettings(
        api_key=API_KEY,
        base_url=provider.base_url,
        chat_completion_timeout=5.0,
        fim_completion_timeout=5.0,
        max_retries=3,
        retry_backoff=0,
    )


@pytest.fixture
async def client(settings):
    async with DeepSeekClient(settings=settings) as client:
        yield client
