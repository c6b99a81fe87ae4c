"""Request building, transport and stream decoding."""
from .builders import ChatCompletionRequestBuilder, FIMCompletionRequestBuilder, MessageBuilder
from .codec import JsonCodec
from .streaming import ChunkStream, accumulate_chat_chunks
from .transport import Transport

__all__ = [
    "ChatCompletionRequestBuilder",
    "FIMCompletionRequestBuilder",
    "MessageBuilder",
    "JsonCodec",
    "ChunkStream",
    "accumulate_chat_chunks",
    "Transport",
]
