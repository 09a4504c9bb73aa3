#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from dataclasses import dataclass, field
from urllib.parse import urlencode, urlunparse


@dataclass(kw_only=True, frozen=True)
class URI:
    """Universal Resource Identifier, target location for a :py:class:`HTTPRequest`."""

    scheme: str = "https"
    """For example ``http`` or ``https``."""

    host: str
    """The hostname, for example ``amazonaws.com``."""

    port: int | None = None
    """An explicit port number."""

    path: str | None = None
    """Path component of the URI."""

    query: str | None = None
    """Query component of the URI as string."""

    @property
    def netloc(self) -> str:
        """Construct netloc string in format ``{host}:{port}``.

        ``port`` is only included if set.
        """
        if self.port is not None:
            return f"{self.host}:{self.port}"
        return self.host

    def with_path(self, path: str) -> "URI":
        return URI(scheme=self.scheme, host=self.host, port=self.port, path=path)

    def with_query_params(self, params: list[tuple[str, str]]) -> "URI":
        return URI(
            scheme=self.scheme,
            host=self.host,
            port=self.port,
            path=self.path,
            query=urlencode(params),
        )

    def build(self) -> str:
        """Construct URI string representation.

        Returns a string of the form ``{scheme}://{host}:{port}{path}?{query}``
        """
        components = (
            self.scheme,
            self.netloc,
            self.path or "",
            "",  # params
            self.query or "",
            "",  # fragment
        )
        return urlunparse(components)


@dataclass(kw_only=True)
class HTTPRequest:
    """A minimal HTTP request.

    :param destination: The URI where the request should be sent to.
    :param method: The HTTP method of the request, for example "GET".
    :param headers: Header name-value pairs.
    """

    destination: URI
    method: str = "GET"
    headers: list[tuple[str, str]] = field(default_factory=list)


@dataclass(kw_only=True)
class HTTPResponse:
    """A fully read HTTP response."""

    status: int
    headers: list[tuple[str, str]] = field(default_factory=list)
    body: bytes = b""
    reason: str | None = None

    def text(self) -> str:
        return self.body.decode("utf-8")
