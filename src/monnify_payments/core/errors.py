"""
Exceptions raised by the Monnify client.
"""

from __future__ import annotations

from typing import Optional

__all__ = [
    "ConfigError",
    "MonnifyAuthenticationError",
    "MonnifyError",
    "MonnifyFailedRequestError",
    "MonnifyMalformedResponseError",
    "MonnifyTransportError",
]


class MonnifyError(Exception):
    """Base class for every error raised by this package."""


class ConfigError(MonnifyError):
    """Raised when the supplied configuration is invalid."""


class MonnifyFailedRequestError(MonnifyError):
    """
    A request to Monnify did not succeed.

    ``code`` is the gateway's ``responseCode`` when it sent one, otherwise the
    HTTP status rendered as a string. ``status_code`` is the raw HTTP status,
    or ``None`` when no response was received.
    """

    def __init__(
        self,
        message: str,
        code: str,
        *,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, code={self.code!r}, "
            f"status_code={self.status_code!r})"
        )


class MonnifyTransportError(MonnifyFailedRequestError):
    """No usable HTTP response: timeout, DNS failure, connection reset."""


class MonnifyMalformedResponseError(MonnifyFailedRequestError):
    """The gateway answered with a body that is not the expected JSON envelope."""


class MonnifyAuthenticationError(MonnifyFailedRequestError):
    """Exchanging the API credentials for a bearer token failed."""
