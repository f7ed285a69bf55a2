"""Shared fixtures: a Monnify config and a requests session with a fake transport."""

import json
from collections import defaultdict

import pytest
import requests
from requests.adapters import BaseAdapter

from monnify_payments import MonnifyClient, MonnifyConfig, MonnifyCredentials

BASE_URL = "https://sandbox.monnify.com"
TOKEN_URL = f"{BASE_URL}/api/v1/auth/login"


def make_response(request, status=200, json_body=None, content=None, reason=None):
    response = requests.Response()
    response.status_code = status
    response.reason = reason
    response.url = request.url if request is not None else ""
    response.request = request
    response.encoding = "utf-8"
    if json_body is not None:
        content = json.dumps(json_body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    response._content = content if content is not None else b""
    return response


def envelope(body):
    return {
        "requestSuccessful": True,
        "responseMessage": "success",
        "responseCode": "0",
        "responseBody": body,
    }


class RecordingAdapter(BaseAdapter):
    """Transport adapter that records requests and replays canned responses."""

    def __init__(self):
        super().__init__()
        self.sent = []
        self.timeouts = []
        self._routes = defaultdict(list)

    def add(self, method, url, *, status=200, json_body=None, content=None, reason=None, exc=None):
        self._routes[(method, url)].append(
            {"status": status, "json_body": json_body, "content": content, "reason": reason, "exc": exc}
        )

    def add_token(self, token="token-1", expires_in=3600):
        self.add("POST", TOKEN_URL, json_body=envelope({"accessToken": token, "expiresIn": expires_in}))

    def calls_to(self, url):
        return [request for request in self.sent if request.url.split("?")[0] == url]

    def send(self, request, **kwargs):
        self.sent.append(request)
        self.timeouts.append(kwargs.get("timeout"))
        key = (request.method, request.url.split("?")[0])
        queue = self._routes.get(key)
        if not queue:
            raise AssertionError(f"Unexpected request {key}")
        canned = queue.pop(0) if len(queue) > 1 else queue[0]
        if canned["exc"] is not None:
            raise canned["exc"]
        return make_response(
            request,
            status=canned["status"],
            json_body=canned["json_body"],
            content=canned["content"],
            reason=canned["reason"],
        )

    def close(self):
        pass


@pytest.fixture
def config():
    return MonnifyConfig(
        credentials=MonnifyCredentials(
            api_key="MK_TEST_KEY",
            secret_key="SK_TEST_KEY",
            contract_code="4934121686",
            default_currency_code="NGN",
        ),
        base_url=BASE_URL,
        timeout_seconds=12.5,
    )


@pytest.fixture
def adapter():
    return RecordingAdapter()


@pytest.fixture
def session(adapter):
    session = requests.Session()
    session.mount("https://", adapter)
    return session


@pytest.fixture
def client(config, session):
    return MonnifyClient(config, session=session)
