"""Request builders.

Everything here is pure: builders only assemble and validate values, they
never touch the network.
"""
from typing import Any, List, Optional, Sequence, TypeVar, Union

from deepseek_sdk.models.messages import (
    AssistantMessage,
    ChatMessage,
    SystemMessage,
    ToolMessage,
    UserMessage,
)
from deepseek_sdk.models.requests import (
    ChatCompletionParams,
    ChatCompletionRequest,
    FIMCompletionParams,
    FIMCompletionRequest,
)
from deepseek_sdk.utils.logging import get_logger

logger = get_logger(__name__)

R = TypeVar("R", ChatCompletionRequest, FIMCompletionRequest)

Conversation = Union[str, Sequence[ChatMessage]]


def as_messages(conversation: Conversation) -> List[ChatMessage]:
    """A bare string is shorthand for a single user message."""
    if isinstance(conversation, str):
        return [UserMessage(content=conversation)]
    return list(conversation)


def with_stream(request: R, stream: bool) -> R:
    """Return ``request`` with its ``stream`` flag forced to the call path's value.

    A mismatch is corrected rather than rejected, so streaming params handed
    to a buffered call (or the reverse) still work.
    """
    if request.stream is stream:
        return request
    logger.debug("stream_flag_corrected", requested=request.stream, effective=stream)
    update = {"stream": stream}
    if not stream:
        update["stream_options"] = None
    return request.model_copy(update=update)


class MessageBuilder:
    """Fluent conversation builder."""

    def __init__(self):
        self._messages: List[ChatMessage] = []

    def system(self, content: str) -> "MessageBuilder":
        self._messages.append(SystemMessage(content=content))
        return self

    def user(self, content: str) -> "MessageBuilder":
        self._messages.append(UserMessage(content=content))
        return self

    def assistant(self, content: str, *, prefix: Optional[bool] = None) -> "MessageBuilder":
        self._messages.append(AssistantMessage(content=content, prefix=prefix))
        return self

    def tool(self, content: str, tool_call_id: str) -> "MessageBuilder":
        self._messages.append(ToolMessage(content=content, tool_call_id=tool_call_id))
        return self

    def add(self, message: ChatMessage) -> "MessageBuilder":
        self._messages.append(message)
        return self

    def build(self) -> List[ChatMessage]:
        return list(self._messages)


class ChatCompletionRequestBuilder(MessageBuilder):
    """Fluent builder for a complete chat request.

    ``params(**kwargs)`` only records values; they are validated once, by
    :meth:`build`.
    """

    def __init__(self, params: Optional[ChatCompletionParams] = None):
        super().__init__()
        self._params = params
        self._param_values: dict = {}

    def messages(self, messages: Union[MessageBuilder, Sequence[ChatMessage]]) -> "ChatCompletionRequestBuilder":
        built = messages.build() if isinstance(messages, MessageBuilder) else messages
        self._messages.extend(built)
        return self

    def params(self, **values: Any) -> "ChatCompletionRequestBuilder":
        self._param_values.update(values)
        return self

    def build(self, stream: Optional[bool] = None) -> ChatCompletionRequest:  # type: ignore[override]
        base = self._params.model_dump(exclude_unset=True) if self._params else {}
        params = ChatCompletionParams(**{**base, **self._param_values})
        return params.create_request(self._messages, stream=stream)


class FIMCompletionRequestBuilder:
    """Fluent builder for a FIM request; a prompt is required."""

    def __init__(self, params: Optional[FIMCompletionParams] = None):
        self._prompt: Optional[str] = None
        self._params = params
        self._param_values: dict = {}

    def prompt(self, prompt: str) -> "FIMCompletionRequestBuilder":
        self._prompt = prompt
        return self

    def suffix(self, suffix: str) -> "FIMCompletionRequestBuilder":
        self._param_values["suffix"] = suffix
        return self

    def params(self, **values: Any) -> "FIMCompletionRequestBuilder":
        self._param_values.update(values)
        return self

    def build(self, stream: Optional[bool] = None) -> FIMCompletionRequest:
        if self._prompt is None:
            raise ValueError("FIM request needs a prompt")
        base = self._params.model_dump(exclude_unset=True) if self._params else {}
        params = FIMCompletionParams(**{**base, **self._param_values})
        return params.create_request(self._prompt, stream=stream)
