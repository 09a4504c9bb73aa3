#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from pathlib import Path
from typing import Protocol, runtime_checkable

from .credentials import Credentials
from .http import HTTPRequest, HTTPResponse


class EnvironmentSource(Protocol):
    """Read-only view of process environment variables."""

    def get(self, name: str) -> str | None:
        """Return the value of ``name``, or None if it is not set."""
        ...


class FileSystem(Protocol):
    """Read-only access to local files."""

    def read_text(self, path: str | Path) -> str:
        """Read a whole file as UTF-8 text.

        :raises OSError: If the file cannot be read.
        """
        ...

    def home_dir(self) -> Path:
        """The current user's home directory.

        :raises RuntimeError: If the home directory cannot be determined.
        """
        ...


class HTTPClient(Protocol):
    """Synchronous HTTP client."""

    def send(self, request: HTTPRequest) -> HTTPResponse:
        """Send an HTTP request and read the whole response.

        :param request: The request including destination URI and headers.
        :raises NetworkError: If the request could not be completed.
        """
        ...


@runtime_checkable
class CredentialsResolver(Protocol):
    """Resolves credentials from a single source or a chain of sources."""

    def get_credentials(self) -> Credentials:
        """Resolve credentials.

        :raises CredentialsError: If the source cannot provide credentials.
        """
        ...
