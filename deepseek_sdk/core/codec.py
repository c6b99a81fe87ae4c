"""JSON codec shared by the transport and the stream decoder."""
from typing import Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from deepseek_sdk.config import JsonConfig
from .errors import ResponseDecodeError

M = TypeVar("M", bound=BaseModel)


class JsonCodec:
    """Encodes requests and decodes responses according to a :class:`JsonConfig`."""

    def __init__(self, config: JsonConfig = JsonConfig()):
        self.config = config

    def encode(self, model: BaseModel) -> bytes:
        """Serialize a wire model; unset optional fields are omitted unless ``explicit_nulls``."""
        return model.model_dump_json(
            exclude_none=not self.config.explicit_nulls,
            indent=2 if self.config.pretty_print else None,
        ).encode("utf-8")

    def decode(self, data: Union[str, bytes], model: Type[M]) -> M:
        """Parse ``data`` into ``model``, raising :class:`ResponseDecodeError` on failure."""
        try:
            return model.model_validate_json(data, strict=not self.config.lenient)
        except ValidationError as exc:
            text = data.decode("utf-8", "replace") if isinstance(data, bytes) else data
            raise ResponseDecodeError(
                f"Could not decode {model.__name__}: {exc}",
                payload=text,
            ) from exc
