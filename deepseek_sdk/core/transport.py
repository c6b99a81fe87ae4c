"""HTTP transport for provider API calls."""
import asyncio
from typing import Dict, Optional, Type, TypeVar

import aiohttp
from pydantic import BaseModel

from deepseek_sdk.config import USER_AGENT, ClientSettings
from deepseek_sdk.utils.logging import get_logger, redact_headers
from deepseek_sdk.utils.retry import create_retry_decorator
from .codec import JsonCodec
from .errors import ClientClosedError, classify, connection_error_from
from .sse import EventStream

logger = get_logger(__name__)

M = TypeVar("M", bound=BaseModel)


class Transport:
    """Async HTTP transport bound to one provider configuration.

    Owns (or borrows) an ``aiohttp.ClientSession``. Settings, codec and default
    headers are fixed at construction, so one instance can serve many
    concurrent calls. After :meth:`close` every call raises
    :class:`ClientClosedError`.
    """

    def __init__(
        self,
        settings: ClientSettings,
        codec: Optional[JsonCodec] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """Initialize; a session is created lazily unless one is supplied."""
        self.settings = settings
        self.codec = codec or JsonCodec()
        self._session = session
        self._owns_session = session is None
        self._closed = False
        self._retry = create_retry_decorator(settings.max_retries, settings.retry_backoff)

    @property
    def closed(self) -> bool:
        return self._closed

    def _ensure_open(self) -> None:
        if self._closed:
            raise ClientClosedError("DeepSeek client is closed")

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            connector = aiohttp.TCPConnector(
                limit=self.settings.http_max_connections,
                limit_per_host=self.settings.http_max_connections,
            )
            self._session = aiohttp.ClientSession(connector=connector)
        return self._session

    def url(self, path: str) -> str:
        return f"{self.settings.base_url.rstrip('/')}/{path.lstrip('/')}"

    def _headers(self, accept: str) -> Dict[str, str]:
        headers = {
            "Accept": accept,
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
        }
        token = self.settings.token()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def send(
        self,
        method: str,
        path: str,
        response_model: Type[M],
        *,
        payload: Optional[BaseModel] = None,
        timeout: float,
    ) -> M:
        """Issue a buffered request, retrying per policy, and decode the body.

        Non-success statuses raise the classified ``APIStatusError``; transport
        failures raise ``APIConnectionError`` / ``APITimeoutError``.
        """
        self._ensure_open()
        return await self._retry(self._send_once)(method, path, response_model, payload, timeout)

    async def _send_once(
        self,
        method: str,
        path: str,
        response_model: Type[M],
        payload: Optional[BaseModel],
        timeout: float,
    ) -> M:
        self._ensure_open()
        url = self.url(path)
        headers = self._headers("application/json")
        data = self.codec.encode(payload) if payload is not None else None

        logger.debug("http_request", method=method, url=url, headers=redact_headers(headers))

        try:
            async with self._get_session().request(
                method,
                url,
                data=data,
                headers=headers,
                timeout=aiohttp.ClientTimeout(total=timeout),
            ) as response:
                body = await response.read()

                if not response.ok:
                    error = classify(
                        response.status,
                        response.headers,
                        body.decode("utf-8", "replace"),
                        response.reason,
                    )
                    logger.warning(
                        "http_error",
                        method=method,
                        url=url,
                        status=response.status,
                        kind=error.kind,
                    )
                    raise error
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            logger.warning("http_connection_error", method=method, url=url, error=str(exc))
            raise connection_error_from(exc, url) from exc

        logger.debug("http_response", method=method, url=url, status=response.status, size=len(body))
        return self.codec.decode(body, response_model)

    async def open_stream(self, path: str, payload: BaseModel, *, timeout: float) -> EventStream:
        """POST ``payload`` and return the raw inbound SSE events.

        The handshake is retried like a buffered call: connection failures and
        a 429/5xx status seen before any event is read. Nothing is retried once
        events flow. ``timeout`` bounds connecting and each wait for inbound
        data, not the lifetime of the stream.
        """
        self._ensure_open()
        return await self._retry(self._open_stream_once)(path, payload, timeout)

    async def _open_stream_once(self, path: str, payload: BaseModel, timeout: float) -> EventStream:
        self._ensure_open()
        url = self.url(path)
        headers = self._headers("text/event-stream")
        headers["Cache-Control"] = "no-cache"
        headers["Connection"] = "keep-alive"

        logger.debug("sse_request", url=url, headers=redact_headers(headers))

        try:
            response = await self._get_session().post(
                url,
                data=self.codec.encode(payload),
                headers=headers,
                timeout=aiohttp.ClientTimeout(total=None, connect=timeout, sock_read=timeout),
            )
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            logger.warning("sse_connection_error", url=url, error=str(exc))
            raise connection_error_from(exc, url) from exc

        if not response.ok:
            try:
                body = await response.text(errors="replace")
            except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
                raise connection_error_from(exc, url) from exc
            finally:
                response.close()
            error = classify(response.status, response.headers, body, response.reason)
            logger.warning("sse_http_error", url=url, status=response.status, kind=error.kind)
            raise error

        logger.info("sse_stream_opened", url=url, status=response.status)
        return EventStream(response)

    async def close(self) -> None:
        """Release the connection pool; idempotent."""
        if self._closed:
            return
        self._closed = True
        if self._session is not None and self._owns_session:
            await self._session.close()
        logger.info("transport_closed")
