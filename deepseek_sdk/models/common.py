"""Shared wire models: enums, tools, logprobs and token usage."""
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, model_validator


class WireModel(BaseModel):
    """Base for every JSON object exchanged with the provider.

    Field names are the snake_case wire names; unknown fields sent by the
    provider are ignored so newer API additions never break decoding.
    """
    model_config = ConfigDict(extra="ignore", frozen=True)


class ChatModel(str, Enum):
    """Models served by the chat and FIM endpoints."""
    DEEPSEEK_CHAT = "deepseek-chat"
    DEEPSEEK_REASONER = "deepseek-reasoner"


class FinishReason(str, Enum):
    """Why a choice stopped generating."""
    STOP = "stop"
    LENGTH = "length"
    CONTENT_FILTER = "content_filter"
    TOOL_CALLS = "tool_calls"
    INSUFFICIENT_SYSTEM_RESOURCE = "insufficient_system_resource"


class ResponseFormat(WireModel):
    """Output format of a chat completion."""
    type: Literal["text", "json_object"] = "text"

    @classmethod
    def text(cls) -> "ResponseFormat":
        return cls(type="text")

    @classmethod
    def json_object(cls) -> "ResponseFormat":
        return cls(type="json_object")


class StreamOptions(WireModel):
    """Options only valid together with ``stream=True``."""
    include_usage: bool = True


StopSequences = Union[str, List[str]]


class FunctionDefinition(WireModel):
    """A function the model may call."""
    name: str
    description: Optional[str] = None
    parameters: Optional[Dict[str, Any]] = None


class Tool(WireModel):
    """A tool declaration sent with a chat request."""
    type: Literal["function"] = "function"
    function: FunctionDefinition


class FunctionCall(WireModel):
    """A function invocation produced by the model; ``arguments`` is a JSON string."""
    name: str
    arguments: str


class ToolCall(WireModel):
    """A complete tool invocation."""
    id: str
    type: Literal["function"] = "function"
    function: FunctionCall


class NamedFunction(WireModel):
    name: str


class NamedToolChoice(WireModel):
    """Forces the model to call one specific function."""
    type: Literal["function"] = "function"
    function: NamedFunction

    @classmethod
    def of(cls, name: str) -> "NamedToolChoice":
        return cls(function=NamedFunction(name=name))


ToolChoice = Union[Literal["none", "auto", "required"], NamedToolChoice]


class TopLogProb(WireModel):
    token: str
    logprob: float
    bytes: Optional[List[int]] = None


class LogProb(WireModel):
    token: str
    logprob: float
    bytes: Optional[List[int]] = None
    top_logprobs: List[TopLogProb] = []


class LogProbs(WireModel):
    """Per-token log probabilities of a chat choice."""
    content: Optional[List[LogProb]] = None


class FIMLogProbs(WireModel):
    """Per-token log probabilities of a FIM choice."""
    text_offset: List[int] = []
    token_logprobs: List[float] = []
    tokens: List[str] = []
    top_logprobs: Optional[List[Dict[str, float]]] = None


class CompletionTokensDetails(WireModel):
    reasoning_tokens: Optional[int] = None


class Usage(WireModel):
    """Token accounting for one completion.

    Decoding rejects payloads whose totals do not add up:
    ``total_tokens == completion_tokens + prompt_tokens`` and, when both
    cache counters are reported, ``hit + miss == prompt_tokens``.
    """
    completion_tokens: int
    prompt_tokens: int
    prompt_cache_hit_tokens: Optional[int] = None
    prompt_cache_miss_tokens: Optional[int] = None
    total_tokens: int
    completion_tokens_details: Optional[CompletionTokensDetails] = None

    @model_validator(mode="after")
    def _check_totals(self) -> "Usage":
        if self.total_tokens != self.completion_tokens + self.prompt_tokens:
            raise ValueError(
                f"total_tokens ({self.total_tokens}) != completion_tokens "
                f"({self.completion_tokens}) + prompt_tokens ({self.prompt_tokens})"
            )
        hit, miss = self.prompt_cache_hit_tokens, self.prompt_cache_miss_tokens
        if hit is not None and miss is not None and hit + miss != self.prompt_tokens:
            raise ValueError(
                f"prompt_cache_hit_tokens ({hit}) + prompt_cache_miss_tokens ({miss}) "
                f"!= prompt_tokens ({self.prompt_tokens})"
            )
        return self
