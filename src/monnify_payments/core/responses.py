"""
Normalization of Monnify HTTP responses.

Monnify wraps results in an envelope::

    {"requestSuccessful": true, "responseMessage": "success",
     "responseCode": "0", "responseBody": {...}}

Errors raised by the gateway's own logic keep the ``responseMessage`` /
``responseCode`` fields, while errors produced by the HTTP layer in front of
it (unknown path, method not allowed) look like ``{"path", "error",
"status"}``. :func:`normalize_response` folds both, plus bodies that are not
JSON at all, into a single :class:`OperationResult`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple, Type

import requests

from .errors import MonnifyFailedRequestError, MonnifyMalformedResponseError

__all__ = [
    "GatewayFailure",
    "OperationResult",
    "normalize_response",
]


@dataclass(frozen=True)
class GatewayFailure:
    message: str
    code: str
    status_code: Optional[int] = None
    error_class: Type[MonnifyFailedRequestError] = MonnifyFailedRequestError

    def to_exception(self) -> MonnifyFailedRequestError:
        return self.error_class(self.message, self.code, status_code=self.status_code)

    @classmethod
    def from_exception(cls, exc: MonnifyFailedRequestError) -> "GatewayFailure":
        return cls(
            message=exc.message,
            code=exc.code,
            status_code=exc.status_code,
            error_class=type(exc),
        )


@dataclass(frozen=True)
class OperationResult:
    """
    Outcome of a single gateway call: either a payload or a failure.

    Use :meth:`succeeded` and :meth:`failed` to build one; they guarantee that
    exactly one side is populated.
    """

    payload: Any = None
    failure: Optional[GatewayFailure] = None

    def __post_init__(self) -> None:
        if self.payload is not None and self.failure is not None:
            raise ValueError("OperationResult holds either a payload or a failure, not both")

    @classmethod
    def succeeded(cls, payload: Any) -> "OperationResult":
        return cls(payload=payload, failure=None)

    @classmethod
    def failed(cls, failure: GatewayFailure) -> "OperationResult":
        return cls(payload=None, failure=failure)

    @property
    def ok(self) -> bool:
        return self.failure is None

    def unwrap(self) -> Any:
        """Return the payload, or raise the exception matching the failure."""
        if self.failure is not None:
            raise self.failure.to_exception()
        return self.payload


def _decode_body(response: requests.Response) -> Optional[Dict[str, Any]]:
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    return body


def _gateway_error(body: Dict[str, Any]) -> Optional[str]:
    message = body.get("responseMessage")
    if message is None:
        return None
    return str(message)


def _http_layer_error(body: Dict[str, Any]) -> Optional[str]:
    if "path" not in body and "error" not in body:
        return None
    return f"Path '{body.get('path', '')}' {body.get('error', '')}".rstrip()


_ERROR_SHAPES: Tuple[Callable[[Dict[str, Any]], Optional[str]], ...] = (
    _gateway_error,
    _http_layer_error,
)


def _generic_message(response: requests.Response) -> str:
    return response.reason or f"HTTP {response.status_code}"


def _failure_code(body: Dict[str, Any], status_code: int) -> str:
    # Gateway codes and HTTP statuses share this field when the body has none.
    for key in ("responseCode", "status"):
        value = body.get(key)
        if value is not None and value != "":
            return str(value)
    return str(status_code)


def build_failure(
    response: requests.Response,
    *,
    error_class: Type[MonnifyFailedRequestError] = MonnifyFailedRequestError,
) -> GatewayFailure:
    body = _decode_body(response) or {}
    message = None
    for decode in _ERROR_SHAPES:
        message = decode(body)
        if message is not None:
            break
    if message is None:
        message = _generic_message(response)

    return GatewayFailure(
        message=message,
        code=_failure_code(body, response.status_code),
        status_code=response.status_code,
        error_class=error_class,
    )


def normalize_response(
    response: requests.Response,
    *,
    error_class: Type[MonnifyFailedRequestError] = MonnifyFailedRequestError,
) -> OperationResult:
    """
    Turn a raw :class:`requests.Response` into an :class:`OperationResult`.

    Never raises. ``error_class`` selects the exception type that
    :meth:`OperationResult.unwrap` raises for gateway rejections.
    """
    if not 200 <= response.status_code < 300:
        return OperationResult.failed(build_failure(response, error_class=error_class))

    body = _decode_body(response)
    if body is None:
        return OperationResult.failed(
            GatewayFailure(
                message=f"Unexpected response from {response.url or 'Monnify'}: not a JSON object",
                code=str(response.status_code),
                status_code=response.status_code,
                error_class=MonnifyMalformedResponseError,
            )
        )
    return OperationResult.succeeded(body.get("responseBody"))
