"""DeepSeek API client.

``DeepSeekClient`` is a thin facade: every call builds a wire request through
:mod:`deepseek_sdk.core.builders` and dispatches it through
:class:`~deepseek_sdk.core.transport.Transport` (buffered) or
:class:`~deepseek_sdk.core.streaming.ChunkStream` (streaming).

Example::

    async with DeepSeekClient("sk-...") as client:
        completion = await client.chat("Hi")
        print(completion.choices[0].message.content)

        async for chunk in client.chat_stream("Tell me a story"):
            print(chunk.choices[0].delta.content or "", end="")
"""
from typing import Any, Optional, Union

import aiohttp
from pydantic import SecretStr

from deepseek_sdk.config import ClientSettings, JsonConfig
from deepseek_sdk.core.builders import (
    ChatCompletionRequestBuilder,
    Conversation,
    FIMCompletionRequestBuilder,
    as_messages,
    with_stream,
)
from deepseek_sdk.core.codec import JsonCodec
from deepseek_sdk.core.errors import ClientClosedError
from deepseek_sdk.core.streaming import ChunkStream
from deepseek_sdk.core.transport import Transport
from deepseek_sdk.models.account import ModelList, UserBalance
from deepseek_sdk.models.requests import (
    ChatCompletionParams,
    ChatCompletionRequest,
    FIMCompletionParams,
    FIMCompletionRequest,
)
from deepseek_sdk.models.responses import ChatCompletion, ChatCompletionChunk, FIMCompletion
from deepseek_sdk.utils.logging import get_logger

logger = get_logger(__name__)

CHAT_COMPLETIONS_PATH = "chat/completions"
FIM_COMPLETIONS_PATH = "beta/completions"
MODELS_PATH = "models"
USER_BALANCE_PATH = "user/balance"

ChatRequestInput = Union[ChatCompletionRequest, ChatCompletionRequestBuilder]
FIMRequestInput = Union[FIMCompletionRequest, FIMCompletionRequestBuilder]


class DeepSeekClient:
    """Async client for the DeepSeek chat, FIM, model and balance endpoints."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        settings: Optional[ClientSettings] = None,
        json_config: Optional[JsonConfig] = None,
        session: Optional[aiohttp.ClientSession] = None,
        transport: Optional[Transport] = None,
        chat_params: Optional[ChatCompletionParams] = None,
        fim_params: Optional[FIMCompletionParams] = None,
    ):
        """Initialize the client.

        Args:
            api_key: Bearer token; overrides ``settings.api_key``. Without a
                token requests are sent unauthenticated.
            settings: Connection settings. Defaults to ``ClientSettings()``,
                which reads ``DEEPSEEK_*`` environment variables.
            json_config: JSON codec tuning.
            session: An existing ``aiohttp.ClientSession`` to borrow. The
                client never closes a session it did not create.
            transport: A fully custom transport; ``settings``, ``json_config``
                and ``session`` are then ignored.
            chat_params: Default params for chat calls made without params.
            fim_params: Default params for FIM calls made without params.
        """
        if transport is None:
            settings = settings or ClientSettings()
            if api_key is not None:
                settings = settings.model_copy(update={"api_key": SecretStr(api_key)})
            transport = Transport(settings, JsonCodec(json_config or JsonConfig()), session)
        self._transport = transport
        self.chat_params = chat_params
        self.fim_params = fim_params

    @classmethod
    def from_env(cls, **kwargs: Any) -> "DeepSeekClient":
        """Build a client from ``DEEPSEEK_*`` environment variables / ``.env``."""
        return cls(settings=ClientSettings(), **kwargs)

    @property
    def settings(self) -> ClientSettings:
        return self._transport.settings

    @property
    def closed(self) -> bool:
        return self._transport.closed

    def configure(
        self,
        *,
        chat: Optional[ChatCompletionParams] = None,
        fim: Optional[FIMCompletionParams] = None,
    ) -> "DeepSeekClient":
        """Return a client sharing this transport with different default params."""
        return DeepSeekClient(
            transport=self._transport,
            chat_params=chat or self.chat_params,
            fim_params=fim or self.fim_params,
        )

    def _ensure_open(self) -> None:
        if self._transport.closed:
            raise ClientClosedError("DeepSeek client is closed")

    def _chat_request(
        self,
        conversation: Conversation,
        params: Optional[ChatCompletionParams],
        stream: bool,
    ) -> ChatCompletionRequest:
        params = params or self.chat_params or ChatCompletionParams()
        return params.create_request(as_messages(conversation), stream=stream)

    def _fim_request(self, prompt: str, params: Optional[FIMCompletionParams], stream: bool) -> FIMCompletionRequest:
        params = params or self.fim_params or FIMCompletionParams()
        return params.create_request(prompt, stream=stream)

    # Chat

    async def chat(
        self,
        conversation: Conversation,
        params: Optional[ChatCompletionParams] = None,
    ) -> ChatCompletion:
        """Buffered chat completion for a message list or a single user string."""
        return await self.chat_completion(self._chat_request(conversation, params, stream=False))

    async def chat_completion(self, request: ChatRequestInput) -> ChatCompletion:
        """Send a pre-built request (or builder) on the buffered path."""
        if isinstance(request, ChatCompletionRequestBuilder):
            request = request.build()
        request = with_stream(request, False)
        self._ensure_open()

        logger.info(
            "chat_completion_request",
            model=request.model.value,
            messages=len(request.messages),
            stream=False,
        )
        return await self._transport.send(
            "POST",
            CHAT_COMPLETIONS_PATH,
            ChatCompletion,
            payload=request,
            timeout=self.settings.chat_completion_timeout,
        )

    def chat_stream(
        self,
        conversation: Conversation,
        params: Optional[ChatCompletionParams] = None,
    ) -> ChunkStream[ChatCompletionChunk]:
        """Streamed chat completion; iterate the result with ``async for``."""
        return self.chat_completion_stream(self._chat_request(conversation, params, stream=True))

    def chat_completion_stream(self, request: ChatRequestInput) -> ChunkStream[ChatCompletionChunk]:
        """Stream a pre-built request (or builder)."""
        if isinstance(request, ChatCompletionRequestBuilder):
            request = request.build()
        request = with_stream(request, True)
        self._ensure_open()

        logger.info(
            "chat_completion_request",
            model=request.model.value,
            messages=len(request.messages),
            stream=True,
        )
        timeout = self.settings.chat_completion_timeout

        async def connect():
            return await self._transport.open_stream(CHAT_COMPLETIONS_PATH, request, timeout=timeout)

        return ChunkStream(connect, ChatCompletionChunk, self._transport.codec)

    # Fill-in-the-middle

    async def fim(self, prompt: str, params: Optional[FIMCompletionParams] = None) -> FIMCompletion:
        """Buffered FIM completion of ``prompt`` (with ``params.suffix``, if any)."""
        return await self.fim_completion(self._fim_request(prompt, params, stream=False))

    async def fim_completion(self, request: FIMRequestInput) -> FIMCompletion:
        if isinstance(request, FIMCompletionRequestBuilder):
            request = request.build()
        request = with_stream(request, False)
        self._ensure_open()

        logger.info("fim_completion_request", prompt_length=len(request.prompt), stream=False)
        return await self._transport.send(
            "POST",
            FIM_COMPLETIONS_PATH,
            FIMCompletion,
            payload=request,
            timeout=self.settings.fim_completion_timeout,
        )

    def fim_stream(self, prompt: str, params: Optional[FIMCompletionParams] = None) -> ChunkStream[FIMCompletion]:
        return self.fim_completion_stream(self._fim_request(prompt, params, stream=True))

    def fim_completion_stream(self, request: FIMRequestInput) -> ChunkStream[FIMCompletion]:
        if isinstance(request, FIMCompletionRequestBuilder):
            request = request.build()
        request = with_stream(request, True)
        self._ensure_open()

        logger.info("fim_completion_request", prompt_length=len(request.prompt), stream=True)
        timeout = self.settings.fim_completion_timeout

        async def connect():
            return await self._transport.open_stream(FIM_COMPLETIONS_PATH, request, timeout=timeout)

        return ChunkStream(connect, FIMCompletion, self._transport.codec)

    # Account

    async def models(self) -> ModelList:
        """List the models available to this API key."""
        self._ensure_open()
        return await self._transport.send(
            "GET", MODELS_PATH, ModelList, timeout=self.settings.chat_completion_timeout
        )

    async def user_balance(self) -> UserBalance:
        """Current account balance."""
        self._ensure_open()
        return await self._transport.send(
            "GET", USER_BALANCE_PATH, UserBalance, timeout=self.settings.chat_completion_timeout
        )

    # Lifecycle

    async def close(self) -> None:
        """Close the underlying transport (shared with clients from :meth:`configure`)."""
        await self._transport.close()

    async def __aenter__(self) -> "DeepSeekClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
