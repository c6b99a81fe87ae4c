"""Chat messages.

Messages are a discriminated union keyed on the wire ``role``. An assistant
message that carries ``tool_calls`` is its own variant, selected by
:func:`message_tag` when decoding.
"""
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import Discriminator, Tag

from .common import ToolCall, WireModel


class SystemMessage(WireModel):
    role: Literal["system"] = "system"
    content: str
    name: Optional[str] = None


class UserMessage(WireModel):
    role: Literal["user"] = "user"
    content: Optional[str] = None
    name: Optional[str] = None


class AssistantMessage(WireModel):
    """A prior assistant turn.

    ``prefix=True`` asks the model to continue this message (prefix
    completion); ``reasoning_content`` is only meaningful together with it.
    """
    role: Literal["assistant"] = "assistant"
    content: Optional[str] = None
    name: Optional[str] = None
    prefix: Optional[bool] = None
    reasoning_content: Optional[str] = None


class ToolMessage(WireModel):
    role: Literal["tool"] = "tool"
    content: str
    tool_call_id: str


class AssistantToolCallsMessage(WireModel):
    """An assistant turn that invoked tools."""
    role: Literal["assistant"] = "assistant"
    content: Optional[str] = None
    reasoning_content: Optional[str] = None
    tool_calls: List[ToolCall]


def message_tag(value: Any) -> Optional[str]:
    """Pick the message variant for a raw dict or a model instance."""
    if isinstance(value, dict):
        role, tool_calls = value.get("role"), value.get("tool_calls")
    else:
        role, tool_calls = getattr(value, "role", None), getattr(value, "tool_calls", None)
    if role == "assistant" and tool_calls:
        return "assistant_tool_calls"
    return role


ChatMessage = Annotated[
    Union[
        Annotated[SystemMessage, Tag("system")],
        Annotated[UserMessage, Tag("user")],
        Annotated[AssistantMessage, Tag("assistant")],
        Annotated[ToolMessage, Tag("tool")],
        Annotated[AssistantToolCallsMessage, Tag("assistant_tool_calls")],
    ],
    Discriminator(message_tag),
]


class ChatCompletionMessage(WireModel):
    """The assistant message returned by a buffered chat completion."""
    role: Literal["assistant"] = "assistant"
    content: Optional[str] = None
    reasoning_content: Optional[str] = None
    tool_calls: Optional[List[ToolCall]] = None

    def to_message(self) -> Union[AssistantMessage, AssistantToolCallsMessage]:
        """Convert to a message that can be appended to the next request.

        ``reasoning_content`` is dropped: the provider rejects it in
        conversation history.
        """
        if self.tool_calls:
            return AssistantToolCallsMessage(content=self.content, tool_calls=self.tool_calls)
        return AssistantMessage(content=self.content)
