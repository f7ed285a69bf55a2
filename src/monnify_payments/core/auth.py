"""
Authentication strategies for Monnify endpoints.

Some endpoints accept the merchant's API key and secret key directly as HTTP
basic auth; the rest require a short-lived bearer token obtained by exchanging
those same credentials at ``/api/v1/auth/login``. Both strategies are
:class:`requests.auth.AuthBase` implementations, so an operation only has to
pass the right one as ``auth=`` when dispatching.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

import requests
from requests.auth import AuthBase, HTTPBasicAuth

from .config import MonnifyConfig, MonnifyCredentials
from .errors import MonnifyAuthenticationError, MonnifyTransportError
from .responses import normalize_response

__all__ = [
    "AccessToken",
    "BasicAuthStrategy",
    "OAuth2Strategy",
    "TOKEN_EXPIRY_LEEWAY_SECONDS",
]

# Tokens are dropped slightly before Monnify expires them so that a request
# signed right at the boundary is not rejected in flight. Short-lived tokens
# keep at least half of their lifetime.
TOKEN_EXPIRY_LEEWAY_SECONDS = 10


@dataclass(frozen=True)
class AccessToken:
    value: str = field(repr=False)
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class BasicAuthStrategy(AuthBase):
    """Sends ``api_key:secret_key`` as HTTP basic auth on every request."""

    def __init__(self, credentials: MonnifyCredentials) -> None:
        self._basic = HTTPBasicAuth(credentials.api_key, credentials.secret_key)

    def __call__(self, request: requests.PreparedRequest) -> requests.PreparedRequest:
        return self._basic(request)


class OAuth2Strategy(AuthBase):
    """
    Attaches a cached bearer token, refreshing it when missing or expired.

    The token lives on the strategy instance and is guarded by a lock: while
    one thread is exchanging credentials, others wait and then reuse the new
    token instead of starting their own exchange.
    """

    def __init__(
        self,
        config: MonnifyConfig,
        session: requests.Session,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._config = config
        self._session = session
        self._clock = clock
        self._basic = BasicAuthStrategy(config.credentials)
        self._lock = threading.Lock()
        self._token: Optional[AccessToken] = None

    @property
    def cached_token(self) -> Optional[AccessToken]:
        return self._token

    def token(self, *, timeout: Optional[float] = None) -> AccessToken:
        """
        Return the cached token, exchanging credentials first when needed.

        ``timeout`` bounds the exchange request; it defaults to the configured
        per-request timeout.
        """
        with self._lock:
            now = self._clock()
            if self._token is None or self._token.is_expired(now):
                self._token = None
                self._token = self._exchange(now, timeout or self._config.timeout_seconds)
            return self._token

    def __call__(self, request: requests.PreparedRequest) -> requests.PreparedRequest:
        request.headers["Authorization"] = f"Bearer {self.token().value}"
        return request

    def _exchange(self, now: float, timeout: float) -> AccessToken:
        url = self._config.token_url
        logging.debug("Requesting a new Monnify access token from %s", url)
        try:
            response = self._session.post(
                url,
                auth=self._basic,
                timeout=timeout,
            )
        except requests.Timeout as exc:
            raise MonnifyTransportError(
                f"Token request to {url} timed out: {exc}", "TIMEOUT"
            ) from exc
        except requests.RequestException as exc:
            raise MonnifyTransportError(
                f"Token request to {url} failed: {exc}", "TRANSPORT_ERROR"
            ) from exc

        body = normalize_response(response, error_class=MonnifyAuthenticationError).unwrap()
        try:
            value = str(body["accessToken"])
            expires_in = float(body["expiresIn"])
        except (KeyError, TypeError, ValueError) as exc:
            raise MonnifyAuthenticationError(
                "Token response did not contain accessToken and expiresIn",
                str(response.status_code),
                status_code=response.status_code,
            ) from exc

        logging.debug("Monnify access token valid for %.0f seconds", expires_in)
        return AccessToken(
            value=value,
            expires_at=now + max(expires_in - TOKEN_EXPIRY_LEEWAY_SECONDS, expires_in / 2),
        )
