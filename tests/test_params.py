"""Test parameter validation and request construction."""
import pytest
from pydantic import ValidationError

from deepseek_sdk import (
    AssistantMessage,
    ChatCompletionParams,
    ChatCompletionRequestBuilder,
    ChatModel,
    ClientClosedError,
    ClientSettings,
    DeepSeekClient,
    FIMCompletionParams,
    FIMCompletionRequestBuilder,
    MessageBuilder,
    StreamOptions,
    SystemMessage,
    UserMessage,
    chat_completion_params,
    chat_completion_stream_params,
    fim_completion_params,
    fim_completion_stream_params,
)
from deepseek_sdk.core.builders import as_messages, with_stream
from deepseek_sdk.core.codec import JsonCodec


class SpyTransport:
    """Records every call; any call at all means validation leaked through."""

    def __init__(self):
        self.settings = ClientSettings(api_key="sk-spy")
        self.codec = JsonCodec()
        self.closed = False
        self.calls = []

    async def send(self, *args, **kwargs):
        self.calls.append(("send", args, kwargs))
        raise AssertionError("transport must not be reached")

    async def open_stream(self, *args, **kwargs):
        self.calls.append(("open_stream", args, kwargs))
        raise AssertionError("transport must not be reached")

    async def close(self):
        self.closed = True


@pytest.fixture
def spy():
    return SpyTransport()


@pytest.mark.parametrize(
    "field,value",
    [
        ("temperature", 2.01),
        ("temperature", -0.1),
        ("top_p", 1.5),
        ("top_p", -0.01),
        ("max_tokens", 0),
        ("max_tokens", 8193),
        ("frequency_penalty", 2.5),
        ("presence_penalty", -3.0),
        ("top_logprobs", 21),
    ],
)
def test_chat_params_reject_out_of_range(field, value):
    """Test every bounded chat control rejects values outside its range."""
    with pytest.raises(ValidationError) as exc_info:
        ChatCompletionParams(**{field: value})
    assert field in str(exc_info.value)


@pytest.mark.parametrize("field,value", [("logprobs", 21), ("logprobs", -1), ("max_tokens", 9000)])
def test_fim_params_reject_out_of_range(field, value):
    with pytest.raises(ValidationError):
        FIMCompletionParams(**{field: value})


@pytest.mark.parametrize(
    "field,value",
    [("temperature", 0.0), ("temperature", 2.0), ("top_p", 1.0), ("max_tokens", 8192), ("top_logprobs", 20)],
)
def test_params_accept_bounds(field, value):
    """Test range bounds are inclusive and values are never clamped."""
    params = ChatCompletionParams(**{field: value})
    assert getattr(params, field) == value


def test_params_reject_unknown_fields():
    with pytest.raises(ValidationError):
        ChatCompletionParams(temprature=1.0)


def test_params_are_immutable():
    params = chat_completion_params(temperature=1.0)
    with pytest.raises(ValidationError):
        params.temperature = 1.5


@pytest.mark.parametrize("temperature", [2.5, -1.0, 100.0])
async def test_invalid_temperature_never_reaches_transport(spy, temperature):
    """Test builder validation fails before any network call is attempted."""
    client = DeepSeekClient(transport=spy)
    builder = ChatCompletionRequestBuilder().user("Hi").params(temperature=temperature)

    with pytest.raises(ValidationError):
        await client.chat_completion(builder)
    with pytest.raises(ValidationError):
        client.chat_completion_stream(builder)

    assert spy.calls == []


async def test_invalid_fim_params_never_reach_transport(spy):
    client = DeepSeekClient(transport=spy)
    builder = FIMCompletionRequestBuilder().prompt("def fib(n):").params(max_tokens=0)

    with pytest.raises(ValidationError):
        await client.fim_completion(builder)

    assert spy.calls == []


async def test_closed_client_fails_before_transport(spy):
    client = DeepSeekClient(transport=spy)
    await client.close()

    with pytest.raises(ClientClosedError):
        await client.chat("Hi")
    with pytest.raises(ClientClosedError):
        client.chat_stream("Hi")
    with pytest.raises(ClientClosedError):
        await client.models()
    assert spy.calls == []


# NOTE: the stream flag on params is silently overridden by the call path.
# A caller asking for stream=True on a buffered call gets a buffered request,
# and vice versa. These tests pin that correction down on purpose.


@pytest.mark.parametrize("requested", [True, False, None])
def test_stream_flag_silently_follows_call_path(requested):
    """Test create_request forces the stream flag, whatever params asked for."""
    params = chat_completion_params(stream=requested, stream_options=StreamOptions(include_usage=True))
    messages = [UserMessage(content="Hi")]

    buffered = params.create_request(messages, stream=False)
    streamed = params.create_request(messages, stream=True)

    assert buffered.stream is False
    assert buffered.stream_options is None
    assert streamed.stream is True
    assert streamed.stream_options == StreamOptions(include_usage=True)


def test_stream_params_buffered_call_is_corrected():
    request = chat_completion_stream_params().create_request([UserMessage(content="Hi")])
    assert request.stream is True

    corrected = with_stream(request, False)
    assert corrected.stream is False
    assert request.stream is True


def test_with_stream_returns_same_request_when_flag_matches():
    request = chat_completion_params().create_request([UserMessage(content="Hi")], stream=False)
    assert with_stream(request, False) is request


def test_fim_request_always_targets_chat_model():
    params = fim_completion_stream_params(suffix="return result")
    request = params.create_request("def fib(n):", stream=False)

    assert request.model is ChatModel.DEEPSEEK_CHAT
    assert request.stream is False
    assert request.suffix == "return result"


def test_as_messages_wraps_plain_string():
    assert as_messages("Hi") == [UserMessage(content="Hi")]


def test_message_builder():
    messages = (
        MessageBuilder()
        .system("You are a helpful assistant")
        .user("Hi")
        .assistant("def main():", prefix=True)
        .build()
    )

    assert messages == [
        SystemMessage(content="You are a helpful assistant"),
        UserMessage(content="Hi"),
        AssistantMessage(content="def main():", prefix=True),
    ]


def test_chat_request_builder_merges_params():
    base = chat_completion_params(model=ChatModel.DEEPSEEK_REASONER, max_tokens=2048)
    request = (
        ChatCompletionRequestBuilder(base)
        .system("You are a helpful assistant")
        .user("Hi")
        .params(temperature=1.0)
        .build(stream=True)
    )

    assert request.model is ChatModel.DEEPSEEK_REASONER
    assert request.max_tokens == 2048
    assert request.temperature == 1.0
    assert request.stream is True
    assert len(request.messages) == 2


def test_chat_request_builder_accepts_message_builder():
    conversation = MessageBuilder().system("Be terse").user("Hi")
    request = ChatCompletionRequestBuilder().messages(conversation).user("And?").build()

    assert [message.role for message in request.messages] == ["system", "user", "user"]


def test_fim_builder_requires_prompt():
    with pytest.raises(ValueError):
        FIMCompletionRequestBuilder().suffix("}").build()


def test_fim_builder():
    request = (
        FIMCompletionRequestBuilder(fim_completion_params(max_tokens=64))
        .prompt("def fib(n):")
        .suffix("    return fib(n - 1) + fib(n - 2)")
        .params(echo=False)
        .build()
    )

    assert request.prompt == "def fib(n):"
    assert request.max_tokens == 64
    assert request.echo is False
    assert request.suffix.startswith("    return")
