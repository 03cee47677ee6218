"""
In-memory HTTP transport for tests.
"""

import json
from collections import defaultdict, deque
from typing import Any

import httpx


class MockTransport(httpx.BaseTransport):
    """
    Serves queued responses keyed by method and URL path.

    Each queued response is served ``times`` times, in order. Requests with
    no response left get a 500. Every request is recorded, body included.
    """

    def __init__(self) -> None:
        self._responses: dict[tuple[str, str], deque[dict[str, Any]]] = defaultdict(deque)
        self.requests: list[httpx.Request] = []

    def add_response(
        self,
        method: str,
        path: str,
        *,
        status_code: int = httpx.codes.OK,
        json_data: Any = None,
        content: bytes | None = None,
        times: int = 1,
    ) -> None:
        """Queue a response for ``method`` on ``path``."""
        if content is None and json_data is not None:
            content = json.dumps(json_data).encode()
        for _ in range(times):
            self._responses[(method, path)].append(
                {"status_code": status_code, "content": content or b""}
            )

    def add_error(self, method: str, path: str, error: httpx.HTTPError, *, times: int = 1) -> None:
        """Queue a transport error for ``method`` on ``path``."""
        for _ in range(times):
            self._responses[(method, path)].append({"error": error})

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)

        queue = self._responses[(request.method, request.url.path)]
        if not queue:
            return httpx.Response(
                httpx.codes.INTERNAL_SERVER_ERROR,
                content=b'{"Message": "No mock response"}',
            )

        resp_data = queue.popleft()
        if "error" in resp_data:
            raise resp_data["error"]
        return httpx.Response(
            status_code=resp_data["status_code"],
            content=resp_data["content"],
        )

    def requests_to(self, method: str, path: str) -> list[httpx.Request]:
        """Recorded requests for a method and path."""
        return [r for r in self.requests if r.method == method and r.url.path == path]
