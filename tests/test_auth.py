import base64
import threading
import time

import pytest
import requests

from conftest import TOKEN_URL, envelope
from monnify_payments import (
    BasicAuthStrategy,
    MonnifyAuthenticationError,
    MonnifyTransportError,
    OAuth2Strategy,
)
from monnify_payments.core.auth import TOKEN_EXPIRY_LEEWAY_SECONDS


class FakeClock:
    def __init__(self, now=1_000.0):
        self.now = now

    def __call__(self):
        return self.now


def _prepared(auth):
    return requests.Request("GET", "https://sandbox.monnify.com/api/v1/transactions/search", auth=auth).prepare()


def test_basic_auth_encodes_api_key_and_secret(config):
    request = _prepared(BasicAuthStrategy(config.credentials))
    expected = base64.b64encode(b"MK_TEST_KEY:SK_TEST_KEY").decode("ascii")
    assert request.headers["Authorization"] == f"Basic {expected}"


def test_oauth2_exchanges_credentials_once_and_caches(config, session, adapter):
    adapter.add_token("token-1", expires_in=3600)
    clock = FakeClock()
    strategy = OAuth2Strategy(config, session, clock=clock)

    first = _prepared(strategy)
    clock.now += 600
    second = _prepared(strategy)

    assert first.headers["Authorization"] == "Bearer token-1"
    assert second.headers["Authorization"] == "Bearer token-1"
    token_calls = adapter.calls_to(TOKEN_URL)
    assert len(token_calls) == 1
    expected = base64.b64encode(b"MK_TEST_KEY:SK_TEST_KEY").decode("ascii")
    assert token_calls[0].headers["Authorization"] == f"Basic {expected}"
    assert adapter.timeouts[0] == config.timeout_seconds


def test_oauth2_refreshes_exactly_once_after_expiry(config, session, adapter):
    adapter.add_token("token-1", expires_in=3600)
    adapter.add_token("token-2", expires_in=3600)
    clock = FakeClock()
    strategy = OAuth2Strategy(config, session, clock=clock)

    _prepared(strategy)
    clock.now += 3600 - TOKEN_EXPIRY_LEEWAY_SECONDS
    refreshed = _prepared(strategy)
    again = _prepared(strategy)

    assert refreshed.headers["Authorization"] == "Bearer token-2"
    assert again.headers["Authorization"] == "Bearer token-2"
    assert len(adapter.calls_to(TOKEN_URL)) == 2
    assert strategy.cached_token.expires_at == clock.now + 3600 - TOKEN_EXPIRY_LEEWAY_SECONDS


def test_oauth2_failed_exchange_raises_and_caches_nothing(config, session, adapter):
    adapter.add("POST", TOKEN_URL, status=401, json_body={"responseMessage": "Invalid credentials", "responseCode": "99"})
    strategy = OAuth2Strategy(config, session)

    with pytest.raises(MonnifyAuthenticationError) as excinfo:
        strategy.token()
    assert excinfo.value.message == "Invalid credentials"
    assert excinfo.value.code == "99"
    assert strategy.cached_token is None


def test_oauth2_token_body_without_access_token(config, session, adapter):
    adapter.add("POST", TOKEN_URL, json_body=envelope({"expiresIn": 3600}))
    strategy = OAuth2Strategy(config, session)
    with pytest.raises(MonnifyAuthenticationError):
        strategy.token()


def test_oauth2_transport_error(config, session, adapter):
    adapter.add("POST", TOKEN_URL, exc=requests.ConnectionError("connection reset"))
    strategy = OAuth2Strategy(config, session)
    with pytest.raises(MonnifyTransportError):
        strategy.token()


def test_oauth2_token_exchange_timeout_is_reported_as_timeout(config, session, adapter):
    adapter.add("POST", TOKEN_URL, exc=requests.ReadTimeout("read timed out"))
    strategy = OAuth2Strategy(config, session)
    with pytest.raises(MonnifyTransportError) as excinfo:
        strategy.token()
    assert excinfo.value.code == "TIMEOUT"
    assert strategy.cached_token is None


def test_short_lived_token_keeps_half_its_lifetime(config, session, adapter):
    adapter.add_token("short-1", expires_in=5)
    adapter.add_token("short-2", expires_in=5)
    clock = FakeClock()
    strategy = OAuth2Strategy(config, session, clock=clock)

    assert strategy.token().value == "short-1"
    assert strategy.token().value == "short-1"
    assert len(adapter.calls_to(TOKEN_URL)) == 1
    assert strategy.cached_token.expires_at == clock.now + 2.5

    clock.now += 3
    assert strategy.token().value == "short-2"
    assert len(adapter.calls_to(TOKEN_URL)) == 2


def test_concurrent_callers_share_one_exchange(config, session, adapter):
    adapter.add_token("shared", expires_in=3600)
    original_send = adapter.send

    def slow_send(request, **kwargs):
        time.sleep(0.05)
        return original_send(request, **kwargs)

    adapter.send = slow_send
    strategy = OAuth2Strategy(config, session)
    results = []

    def worker():
        results.append(strategy.token().value)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results == ["shared"] * 8
    assert len(adapter.calls_to(TOKEN_URL)) == 1
