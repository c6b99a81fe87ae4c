"""Data models for API."""
from .account import BalanceInfo, Currency, ModelInfo, ModelList, UserBalance
from .common import (
    ChatModel,
    CompletionTokensDetails,
    FIMLogProbs,
    FinishReason,
    FunctionCall,
    FunctionDefinition,
    LogProb,
    LogProbs,
    NamedFunction,
    NamedToolChoice,
    ResponseFormat,
    StreamOptions,
    Tool,
    ToolCall,
    ToolChoice,
    TopLogProb,
    Usage,
)
from .messages import (
    AssistantMessage,
    AssistantToolCallsMessage,
    ChatCompletionMessage,
    ChatMessage,
    SystemMessage,
    ToolMessage,
    UserMessage,
)
from .requests import (
    ChatCompletionParams,
    ChatCompletionRequest,
    FIMCompletionParams,
    FIMCompletionRequest,
    chat_completion_params,
    chat_completion_stream_params,
    fim_completion_params,
    fim_completion_stream_params,
)
from .responses import (
    ChatCompletion,
    ChatCompletionChoice,
    ChatCompletionChunk,
    ChoiceChunk,
    ChoiceDelta,
    ChoiceDeltaToolCall,
    FIMChoice,
    FIMCompletion,
)

__all__ = [
    "BalanceInfo",
    "Currency",
    "ModelInfo",
    "ModelList",
    "UserBalance",
    "ChatModel",
    "CompletionTokensDetails",
    "FIMLogProbs",
    "FinishReason",
    "FunctionCall",
    "FunctionDefinition",
    "LogProb",
    "LogProbs",
    "NamedFunction",
    "NamedToolChoice",
    "ResponseFormat",
    "StreamOptions",
    "Tool",
    "ToolCall",
    "ToolChoice",
    "TopLogProb",
    "Usage",
    "AssistantMessage",
    "AssistantToolCallsMessage",
    "ChatCompletionMessage",
    "ChatMessage",
    "SystemMessage",
    "ToolMessage",
    "UserMessage",
    "ChatCompletionParams",
    "ChatCompletionRequest",
    "FIMCompletionParams",
    "FIMCompletionRequest",
    "chat_completion_params",
    "chat_completion_stream_params",
    "fim_completion_params",
    "fim_completion_stream_params",
    "ChatCompletion",
    "ChatCompletionChoice",
    "ChatCompletionChunk",
    "ChoiceChunk",
    "ChoiceDelta",
    "ChoiceDeltaToolCall",
    "FIMChoice",
    "FIMCompletion",
]
