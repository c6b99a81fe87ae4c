"""Generation parameters and the wire requests derived from them.

Parameter objects are frozen and validated once, at construction: a value
outside its documented range raises ``pydantic.ValidationError`` naming the
field and the violated bound, and nothing is ever clamped.
"""
from typing import List, Optional, Sequence

from pydantic import ConfigDict, Field

from .common import (
    ChatModel,
    ResponseFormat,
    StopSequences,
    StreamOptions,
    Tool,
    ToolChoice,
    WireModel,
)
from .messages import ChatMessage

MAX_OUTPUT_TOKENS = 8192
MAX_TOP_LOGPROBS = 20


class _SamplingControls(WireModel):
    """Controls shared by chat and FIM generation."""
    frequency_penalty: Optional[float] = Field(default=None, ge=-2.0, le=2.0)
    max_tokens: Optional[int] = Field(default=None, ge=1, le=MAX_OUTPUT_TOKENS)
    presence_penalty: Optional[float] = Field(default=None, ge=-2.0, le=2.0)
    stop: Optional[StopSequences] = None
    stream: Optional[bool] = None
    stream_options: Optional[StreamOptions] = None
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    top_p: Optional[float] = Field(default=None, ge=0.0, le=1.0)


class _ChatControls(_SamplingControls):
    model: ChatModel = ChatModel.DEEPSEEK_CHAT
    response_format: Optional[ResponseFormat] = None
    tools: Optional[List[Tool]] = None
    tool_choice: Optional[ToolChoice] = None
    logprobs: Optional[bool] = None
    top_logprobs: Optional[int] = Field(default=None, ge=0, le=MAX_TOP_LOGPROBS)


class _FIMControls(_SamplingControls):
    echo: Optional[bool] = None
    logprobs: Optional[int] = Field(default=None, ge=0, le=MAX_TOP_LOGPROBS)
    suffix: Optional[str] = None


def _stream_fields(stream: Optional[bool], options: Optional[StreamOptions]) -> dict:
    # stream_options is rejected by the provider unless streaming
    return {"stream": stream, "stream_options": options if stream else None}


class ChatCompletionRequest(_ChatControls):
    """Exact body of ``POST /chat/completions``."""
    messages: List[ChatMessage]


class FIMCompletionRequest(_FIMControls):
    """Exact body of ``POST /beta/completions``."""
    model: ChatModel = ChatModel.DEEPSEEK_CHAT
    prompt: str


class ChatCompletionParams(_ChatControls):
    """Validated chat generation controls, independent of any conversation."""
    model_config = ConfigDict(extra="forbid")

    def create_request(
        self,
        messages: Sequence[ChatMessage],
        *,
        stream: Optional[bool] = None,
    ) -> ChatCompletionRequest:
        """Build the wire request; an explicit ``stream`` overrides ``self.stream``."""
        fields = self.model_dump(exclude={"stream", "stream_options"})
        effective = self.stream if stream is None else stream
        return ChatCompletionRequest(
            messages=list(messages),
            **fields,
            **_stream_fields(effective, self.stream_options),
        )


class FIMCompletionParams(_FIMControls):
    """Validated FIM generation controls, independent of any prompt."""
    model_config = ConfigDict(extra="forbid")

    def create_request(self, prompt: str, *, stream: Optional[bool] = None) -> FIMCompletionRequest:
        """Build the wire request; FIM always targets ``deepseek-chat``."""
        fields = self.model_dump(exclude={"stream", "stream_options"})
        effective = self.stream if stream is None else stream
        return FIMCompletionRequest(
            model=ChatModel.DEEPSEEK_CHAT,
            prompt=prompt,
            **fields,
            **_stream_fields(effective, self.stream_options),
        )


def chat_completion_params(**kwargs) -> ChatCompletionParams:
    """Params for the buffered chat path."""
    return ChatCompletionParams(**kwargs)


def chat_completion_stream_params(**kwargs) -> ChatCompletionParams:
    """Params for the streaming chat path (``stream=True`` preset)."""
    kwargs.setdefault("stream", True)
    return ChatCompletionParams(**kwargs)


def fim_completion_params(**kwargs) -> FIMCompletionParams:
    """Params for the buffered FIM path."""
    return FIMCompletionParams(**kwargs)


def fim_completion_stream_params(**kwargs) -> FIMCompletionParams:
    """Params for the streaming FIM path (``stream=True`` preset)."""
    kwargs.setdefault("stream", True)
    return FIMCompletionParams(**kwargs)
