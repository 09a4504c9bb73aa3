#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from collections import deque
from collections.abc import Mapping
from copy import copy
from pathlib import Path

from .exceptions import NetworkError
from .http import HTTPRequest, HTTPResponse
from .interfaces import FileSystem, HTTPClient


class MockHTTPClient(HTTPClient):
    """Implementation of :py:class:`.interfaces.HTTPClient` solely for testing purposes.

    Simulates HTTP request/response behavior. Responses are queued in FIFO order and
    requests are captured for inspection. Queueing an exception makes the matching
    request raise it.
    """

    def __init__(self) -> None:
        self._response_queue: deque[HTTPResponse | Exception] = deque()
        self._captured_requests: list[HTTPRequest] = []

    def add_response(
        self,
        status: int = 200,
        headers: list[tuple[str, str]] | None = None,
        body: bytes = b"",
    ) -> None:
        """Queue a response for the next request.

        :param status: HTTP status code.
        :param headers: HTTP response headers as list of (name, value) tuples.
        :param body: Response body as bytes.
        """
        self._response_queue.append(
            HTTPResponse(status=status, headers=headers or [], body=body)
        )

    def add_error(self, error: Exception | None = None) -> None:
        """Queue a transport failure for the next request."""
        self._response_queue.append(error or NetworkError("Connection refused"))

    def send(self, request: HTTPRequest) -> HTTPResponse:
        self._captured_requests.append(copy(request))

        if not self._response_queue:
            raise MockHTTPClientError(
                "No responses queued in MockHTTPClient. Use add_response() to queue responses."
            )
        response = self._response_queue.popleft()
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def call_count(self) -> int:
        """The number of requests made to this client."""
        return len(self._captured_requests)

    @property
    def captured_requests(self) -> list[HTTPRequest]:
        """The list of all requests captured by this client."""
        return self._captured_requests.copy()


class MockHTTPClientError(Exception):
    """Exception raised by MockHTTPClient for test setup issues."""


class MockFileSystem(FileSystem):
    """In-memory files and home directory for tests.

    :param files: File contents keyed by path.
    :param home: The home directory, or None to simulate an unknown one.
    """

    def __init__(
        self,
        files: Mapping[str | Path, str] | None = None,
        home: str | Path | None = "/home/user",
    ) -> None:
        self._files = {str(path): text for path, text in (files or {}).items()}
        self._home = Path(home) if home is not None else None

    def read_text(self, path: str | Path) -> str:
        try:
            return self._files[str(path)]
        except KeyError:
            raise FileNotFoundError(str(path)) from None

    def home_dir(self) -> Path:
        if self._home is None:
            raise RuntimeError("Could not determine home directory.")
        return self._home
