"""Server-sent events over an aiohttp response."""
import asyncio
from dataclasses import dataclass
from typing import AsyncIterator, List, Mapping, Optional

import aiohttp

from deepseek_sdk.utils.logging import get_logger
from .errors import ResponseDecodeError, connection_error_from

logger = get_logger(__name__)


@dataclass(frozen=True)
class ServerSentEvent:
    """One dispatched event; ``data`` is ``None`` when the event had no data lines."""
    data: Optional[str] = None
    event: Optional[str] = None
    id: Optional[str] = None
    retry: Optional[int] = None


class SSEStatusError(Exception):
    """The stream's HTTP response turned out to be unsuccessful."""

    def __init__(
        self,
        status: int,
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[str] = None,
        reason: Optional[str] = None,
    ):
        super().__init__(f"SSE response status {status}")
        self.status = status
        self.headers = dict(headers or {})
        self.body = body
        self.reason = reason


class SSEDecoder:
    """Incremental line parser following the EventSource field rules."""

    def __init__(self):
        self._data: List[str] = []
        self._event: Optional[str] = None
        self._id: Optional[str] = None
        self._retry: Optional[int] = None
        self._dirty = False

    def decode(self, line: str) -> Optional[ServerSentEvent]:
        """Feed one line (without its terminator); return an event on a blank line."""
        if not line:
            return self.flush()

        if line.startswith(":"):
            # comment / keep-alive
            return None

        field, _, value = line.partition(":")
        if value.startswith(" "):
            value = value[1:]

        if field == "data":
            self._data.append(value)
        elif field == "event":
            self._event = value
        elif field == "id":
            if "\0" not in value:
                self._id = value
        elif field == "retry":
            if value.isdigit():
                self._retry = int(value)
        else:
            return None
        self._dirty = True
        return None

    def flush(self) -> Optional[ServerSentEvent]:
        """Dispatch whatever has been buffered since the last event."""
        if not self._dirty:
            return None
        event = ServerSentEvent(
            data="\n".join(self._data) if self._data else None,
            event=self._event,
            id=self._id,
            retry=self._retry,
        )
        self._data, self._event, self._retry, self._dirty = [], None, None, False
        return event


class EventStream:
    """Inbound events of one SSE response.

    Single pass and forward only. An unsuccessful status is raised lazily as
    :class:`SSEStatusError` on first iteration, the way an SSE subscription
    reports a rejected handshake. ``release()`` hands a finished connection back
    to the pool, ``aclose()`` drops an abandoned one; both are idempotent.
    """

    def __init__(self, response: aiohttp.ClientResponse):
        self._response = response
        self._closed = False

    @property
    def response(self) -> aiohttp.ClientResponse:
        return self._response

    def __aiter__(self) -> AsyncIterator[ServerSentEvent]:
        return self._iter_events()

    async def _iter_events(self) -> AsyncIterator[ServerSentEvent]:
        response = self._response
        url = str(response.url)
        try:
            if not response.ok:
                body = await response.text(errors="replace")
                raise SSEStatusError(response.status, response.headers, body, response.reason)

            decoder = SSEDecoder()
            async for raw in response.content:
                try:
                    line = raw.decode("utf-8")
                except UnicodeDecodeError as exc:
                    raise ResponseDecodeError(
                        f"SSE line is not valid UTF-8: {exc}",
                        payload=raw.decode("utf-8", "replace"),
                    ) from exc
                event = decoder.decode(line.rstrip("\r\n"))
                if event is not None:
                    yield event

            # the final event may lack its blank-line terminator
            event = decoder.flush()
            if event is not None:
                yield event
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise connection_error_from(exc, url) from exc

    async def release(self) -> None:
        """Finish a stream that ended normally and return its connection to the pool.

        Whatever follows the terminating event is drained so the connection
        can be reused.
        """
        if self._closed:
            return
        try:
            await self._response.content.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            logger.debug("sse_drain_failed", url=str(self._response.url), error=str(exc))
        await self.aclose()

    async def aclose(self) -> None:
        """Drop the connection; idempotent. A drained response is already back in the pool."""
        if self._closed:
            return
        self._closed = True
        self._response.close()
        logger.debug("sse_stream_closed", url=str(self._response.url))
