"""Async Python client for the DeepSeek API."""
from .client import DeepSeekClient
from .config import (
    DEFAULT_BASE_URL,
    DEFAULT_CHAT_COMPLETION_TIMEOUT,
    DEFAULT_FIM_COMPLETION_TIMEOUT,
    SDK_VERSION,
    ClientSettings,
    JsonConfig,
    load_yaml_config,
)
from .core.builders import ChatCompletionRequestBuilder, FIMCompletionRequestBuilder, MessageBuilder
from .core.errors import (
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    BadRequestError,
    ClientClosedError,
    DeepSeekError,
    InsufficientBalanceError,
    InternalServerError,
    NotFoundError,
    OverloadedError,
    PermissionDeniedError,
    RateLimitedError,
    ResponseDecodeError,
    UnauthorizedError,
    UnexpectedStatusError,
    UnprocessableEntityError,
)
from .core.streaming import ChunkStream, accumulate_chat_chunks
from .models import *  # noqa: F401,F403
from .models import __all__ as _models_all

__version__ = SDK_VERSION

__all__ = [
    "DeepSeekClient",
    "DEFAULT_BASE_URL",
    "DEFAULT_CHAT_COMPLETION_TIMEOUT",
    "DEFAULT_FIM_COMPLETION_TIMEOUT",
    "ClientSettings",
    "JsonConfig",
    "load_yaml_config",
    "ChatCompletionRequestBuilder",
    "FIMCompletionRequestBuilder",
    "MessageBuilder",
    "APIConnectionError",
    "APIStatusError",
    "APITimeoutError",
    "BadRequestError",
    "ClientClosedError",
    "DeepSeekError",
    "InsufficientBalanceError",
    "InternalServerError",
    "NotFoundError",
    "OverloadedError",
    "PermissionDeniedError",
    "RateLimitedError",
    "ResponseDecodeError",
    "UnauthorizedError",
    "UnexpectedStatusError",
    "UnprocessableEntityError",
    "ChunkStream",
    "accumulate_chat_chunks",
    *_models_all,
]
