"""Error taxonomy and HTTP status classification.

Every unsuccessful provider response, whether it is discovered on a buffered
call or after a stream has nominally opened, is turned into an
``APIStatusError`` subclass by :func:`classify`.
"""
import asyncio
from typing import Any, Dict, Mapping, Optional, Type

from pydantic import BaseModel, ConfigDict, ValidationError

DOCS_HINT = "For more API format details, please refer to DeepSeek API Docs (https://api-docs.deepseek.com/)."
API_KEY_HINT = (
    "Please check your API key.\n"
    "If you don't have one, please create an API key (https://platform.deepseek.com/api_keys) first."
)


class ErrorDetail(BaseModel):
    """The ``error`` object of a provider error body."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    message: Optional[str] = None
    type: Optional[str] = None
    param: Optional[Any] = None
    code: Optional[str] = None


class ErrorBody(BaseModel):
    """Provider error envelope: ``{"error": {...}}``."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    error: ErrorDetail


class DeepSeekError(Exception):
    """Base class for every error raised by the SDK."""


class ClientClosedError(DeepSeekError, RuntimeError):
    """A client or transport was used after ``close()``."""


class APIConnectionError(DeepSeekError):
    """The provider could not be reached (DNS, connect, reset)."""

    def __init__(self, message: str = "Connection error.", *, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class APITimeoutError(APIConnectionError):
    """The per-call timeout budget was exhausted."""

    def __init__(self, message: str = "Request timed out.", *, url: Optional[str] = None):
        super().__init__(message, url=url)


class ResponseDecodeError(DeepSeekError):
    """A successful response (or stream chunk) could not be decoded."""

    def __init__(self, message: str, *, payload: Optional[str] = None):
        super().__init__(message)
        self.payload = payload


class APIStatusError(DeepSeekError):
    """The provider answered with a non-success HTTP status."""

    kind = "unexpected_status"
    hint = ""
    retryable = False

    def __init__(
        self,
        status_code: int,
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[str] = None,
        *,
        error: Optional[ErrorDetail] = None,
        reason: Optional[str] = None,
    ):
        self.status_code = status_code
        self.headers: Dict[str, str] = dict(headers or {})
        self.body = body
        self.error = error
        self.reason = reason
        super().__init__(self._compose_message())

    def _compose_message(self) -> str:
        lines = []
        if self.error is not None and self.error.message:
            lines.append(self.error.message)
        if self.reason:
            lines.append(f"{self.status_code} {self.reason}")
        lines.append(self.hint)
        return "\n".join(lines)


class BadRequestError(APIStatusError):
    kind = "bad_request"
    hint = "Please modify your request body according to the hints in the error message.\n" + DOCS_HINT


class UnauthorizedError(APIStatusError):
    kind = "unauthorized"
    hint = API_KEY_HINT


class InsufficientBalanceError(APIStatusError):
    kind = "insufficient_balance"
    hint = (
        "Please check your account's balance, and go to the Top up page "
        "(https://platform.deepseek.com/top_up) to add funds."
    )


class PermissionDeniedError(APIStatusError):
    kind = "permission_denied"
    hint = API_KEY_HINT


class NotFoundError(APIStatusError):
    kind = "not_found"
    hint = "Please check the API endpoint you are using.\n" + DOCS_HINT


class UnprocessableEntityError(APIStatusError):
    kind = "unprocessable_entity"
    hint = "Please modify your request parameters according to the hints in the error message.\n" + DOCS_HINT


class RateLimitedError(APIStatusError):
    kind = "rate_limited"
    retryable = True
    hint = (
        "Please pace your requests reasonably.\n"
        "We also advise users to temporarily switch to the APIs of alternative LLM service providers."
    )


class InternalServerError(APIStatusError):
    kind = "internal_server_error"
    retryable = True
    hint = "Please retry your request after a brief wait and contact us if the issue persists."


class OverloadedError(APIStatusError):
    kind = "overloaded"
    retryable = True
    hint = "Please retry your request after a brief wait."


class UnexpectedStatusError(APIStatusError):
    kind = "unexpected_status"

    @property
    def hint(self) -> str:  # type: ignore[override]
        return f"Unexpected status code: {self.status_code}"

    @property
    def retryable(self) -> bool:  # type: ignore[override]
        return self.status_code >= 500


STATUS_ERRORS: Dict[int, Type[APIStatusError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    402: InsufficientBalanceError,
    403: PermissionDeniedError,
    404: NotFoundError,
    422: UnprocessableEntityError,
    429: RateLimitedError,
    500: InternalServerError,
    503: OverloadedError,
}


def parse_error_body(body: Optional[str]) -> Optional[ErrorDetail]:
    """Extract the provider ``error`` object from a raw body, if it has one."""
    if not body:
        return None
    try:
        return ErrorBody.model_validate_json(body).error
    except ValidationError:
        return None


def classify(
    status_code: int,
    headers: Optional[Mapping[str, str]] = None,
    body: Optional[str] = None,
    reason: Optional[str] = None,
) -> APIStatusError:
    """Map an unsuccessful HTTP status to its typed error.

    The raw ``body`` is kept verbatim; the parsed provider error object is
    attached when the body has the expected shape. A non-empty ``reason``
    phrase is shown ahead of the fixed remediation hint.
    """
    error_cls = STATUS_ERRORS.get(status_code, UnexpectedStatusError)
    return error_cls(
        status_code,
        headers,
        body,
        error=parse_error_body(body),
        reason=reason or None,
    )


def connection_error_from(exc: BaseException, url: Optional[str] = None) -> APIConnectionError:
    """Translate an aiohttp/asyncio transport failure into the SDK taxonomy."""
    if isinstance(exc, asyncio.TimeoutError):
        return APITimeoutError(url=url)
    return APIConnectionError(f"Connection error: {exc}", url=url)

