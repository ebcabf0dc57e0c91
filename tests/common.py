from http import HTTPStatus
from typing import Any

import httpx


class MockResponse:
    def __init__(
        self,
        status_code: int,
        payload: Any = None,
        text: str = "",
        json_error: bool = False,
    ) -> None:
        self.status_code = status_code
        self._payload = {} if payload is None else payload
        self.text = text
        self._json_error = json_error

    def json(self) -> Any:
        if self._json_error:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


class MockAsyncClient:
    """Minimal async context-manager mock for httpx.AsyncClient.

    Every GET is appended to `calls` as a dict so tests can inspect what would
    have been sent.
    """

    def __init__(self, response: MockResponse, calls: list[dict[str, Any]]) -> None:
        self._response = response
        self._calls = calls

    async def __aenter__(self) -> "MockAsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def get(self, url: str, params: dict[str, str] | None = None, headers: dict[str, str] | None = None) -> MockResponse:
        self._calls.append({"url": url, "params": params, "headers": headers})
        return self._response


class FailingAsyncClient:
    """Async client whose GET fails with a connection error, like a refused connection.

    Attempts are appended to `calls` so tests can assert there was no retry.
    """

    def __init__(self, calls: list[dict[str, Any]], *args: Any, **kwargs: Any) -> None:
        self._calls = calls

    async def __aenter__(self) -> "FailingAsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def get(self, url: str, **kwargs: Any) -> MockResponse:
        self._calls.append({"url": url, **kwargs})
        request = httpx.Request("GET", url)
        raise httpx.ConnectError("[Errno 111] Connection refused", request=request)


def ok_response(payload: Any) -> MockResponse:
    return MockResponse(status_code=HTTPStatus.OK, payload=payload)
