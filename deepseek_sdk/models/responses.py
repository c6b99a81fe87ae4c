"""Completion responses and streamed chunks."""
from typing import List, Optional

from .common import FinishReason, FIMLogProbs, LogProbs, Usage, WireModel
from .messages import ChatCompletionMessage


class ChatCompletionChoice(WireModel):
    index: int
    message: ChatCompletionMessage
    finish_reason: Optional[FinishReason] = None
    logprobs: Optional[LogProbs] = None


class ChatCompletion(WireModel):
    """Result of a buffered chat completion."""
    id: str
    choices: List[ChatCompletionChoice]
    created: int
    model: str
    system_fingerprint: Optional[str] = None
    object: str = "chat.completion"
    usage: Usage


class ChoiceDeltaFunctionCall(WireModel):
    name: Optional[str] = None
    arguments: Optional[str] = None


class ChoiceDeltaToolCall(WireModel):
    """A fragment of a tool call; fragments with the same ``index`` concatenate."""
    index: int
    id: Optional[str] = None
    type: Optional[str] = None
    function: Optional[ChoiceDeltaFunctionCall] = None


class ChoiceDelta(WireModel):
    """The fields of the message present in one chunk; absent fields stay ``None``."""
    role: Optional[str] = None
    content: Optional[str] = None
    reasoning_content: Optional[str] = None
    tool_calls: Optional[List[ChoiceDeltaToolCall]] = None


class ChoiceChunk(WireModel):
    index: int
    delta: ChoiceDelta
    finish_reason: Optional[FinishReason] = None
    logprobs: Optional[LogProbs] = None


class ChatCompletionChunk(WireModel):
    """One streamed increment of a chat completion."""
    id: str
    choices: List[ChoiceChunk]
    created: int
    model: str
    system_fingerprint: Optional[str] = None
    object: str = "chat.completion.chunk"
    usage: Optional[Usage] = None


class FIMChoice(WireModel):
    text: str
    index: int
    finish_reason: Optional[FinishReason] = None
    logprobs: Optional[FIMLogProbs] = None


class FIMCompletion(WireModel):
    """Result of a FIM completion; the streamed chunks share this shape."""
    id: str
    choices: List[FIMChoice]
    created: int
    model: str
    system_fingerprint: Optional[str] = None
    object: str = "text_completion"
    usage: Optional[Usage] = None
