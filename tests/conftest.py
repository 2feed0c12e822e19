"""Pytest configuration for onapp_client tests."""
import json
import sys
from pathlib import Path

# Add src/ to path for src-layout imports
_PROJECT_ROOT = Path(__file__).parent.parent
_SRC = _PROJECT_ROOT / 'src'
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

import httpx
import pytest

from onapp_client.client import OnAppClient


class FakeOnApp:
    """Scripted OnApp server for httpx.MockTransport.

    Responses are served in the order they were queued; every request
    is recorded for assertions.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._responses: list[httpx.Response | Exception] = []

    def reply(self, status_code: int = 200, json_body=None, **kwargs) -> None:
        if json_body is not None:
            kwargs['json'] = json_body
        self._responses.append(httpx.Response(status_code, **kwargs))

    def fail(self, exc: Exception) -> None:
        self._responses.append(exc)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            raise AssertionError(f'unexpected request: {request.method} {request.url}')
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def client(self, **kwargs) -> OnAppClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(self.handler))
        kwargs.setdefault('transaction_page_size', 100)
        return OnAppClient(
            base_url='https://cp.example.com',
            user='admin',
            api_key='test-api-key',
            http_client=http_client,
            **kwargs,
        )

    @staticmethod
    def body(request: httpx.Request):
        return json.loads(request.content) if request.content else None


@pytest.fixture
def fake_onapp() -> FakeOnApp:
    return FakeOnApp()
