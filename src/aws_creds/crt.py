#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
#  pyright: reportMissingTypeStubs=false,reportUnknownMemberType=false
import logging
from concurrent.futures import Future
from dataclasses import dataclass
from threading import Lock
from typing import Any

from awscrt import http as crt_http
from awscrt import io as crt_io
from awscrt.exceptions import AwsCrtError

from .exceptions import NetworkError
from .http import URI, HTTPRequest, HTTPResponse
from .interfaces import HTTPClient

logger = logging.getLogger(__name__)

HeadersList = list[tuple[str, str]]


@dataclass(kw_only=True)
class AWSCRTHTTPClientConfig:
    """AWS CRT HTTP client configuration.

    :param connect_timeout: Seconds to wait for a TCP (and TLS) connection.
    :param read_timeout: Seconds to wait for a complete response once the request
        has been sent. ``None`` waits indefinitely.
    """

    connect_timeout: float = 5.0
    read_timeout: float | None = 10.0


class AWSCRTEventLoop:
    def __init__(self) -> None:
        self.bootstrap = self._initialize_default_loop()

    def _initialize_default_loop(self) -> crt_io.ClientBootstrap:
        event_loop_group = crt_io.EventLoopGroup(1)
        host_resolver = crt_io.DefaultHostResolver(event_loop_group)
        return crt_io.ClientBootstrap(event_loop_group, host_resolver)


class _AwsCrtHttpResponse:
    """Collects the status, headers and body chunks delivered by CRT callbacks."""

    def __init__(self) -> None:
        self._status_code_future: Future[int] = Future()
        self._headers_future: Future[HeadersList] = Future()
        self._chunks: list[bytes] = []
        self._chunk_lock = Lock()

    def _on_response(self, status_code: int, headers: HeadersList, **kwargs: Any) -> None:
        self._status_code_future.set_result(status_code)
        self._headers_future.set_result(list(headers))

    def _on_body(self, chunk: bytes, **kwargs: Any) -> None:
        with self._chunk_lock:
            self._chunks.append(chunk)

    def build(self, timeout: float | None) -> HTTPResponse:
        with self._chunk_lock:
            body = b"".join(self._chunks)
        return HTTPResponse(
            status=self._status_code_future.result(timeout=timeout),
            headers=self._headers_future.result(timeout=timeout),
            body=body,
        )


class AWSCRTHTTPClient(HTTPClient):
    """Blocking HTTP client built on ``awscrt``.

    A new connection is opened for every request and closed once the response has
    been read, so one client can be shared between threads.
    """

    _HTTP_PORT = 80
    _HTTPS_PORT = 443

    def __init__(
        self,
        eventloop: AWSCRTEventLoop | None = None,
        client_config: AWSCRTHTTPClientConfig | None = None,
    ) -> None:
        self._config = client_config or AWSCRTHTTPClientConfig()
        if eventloop is None:
            eventloop = AWSCRTEventLoop()
        self._eventloop = eventloop
        self._client_bootstrap = self._eventloop.bootstrap
        self._tls_ctx = crt_io.ClientTlsContext(crt_io.TlsContextOptions())
        self._socket_options = crt_io.SocketOptions()
        self._socket_options.connect_timeout_ms = int(
            self._config.connect_timeout * 1000
        )

    def send(self, request: HTTPRequest) -> HTTPResponse:
        """Send HTTP request using awscrt client.

        :param request: The request including destination URI and headers.
        :raises NetworkError: If the connection or the exchange fails.
        """
        destination = request.destination
        logger.debug(
            "Sending %s request to %s%s",
            request.method,
            destination.netloc,
            destination.path or "/",
        )
        try:
            connection = self._create_connection(destination)
        except (AwsCrtError, TimeoutError) as e:
            raise NetworkError(f"Unable to connect to {destination.netloc}: {e}") from e

        try:
            crt_response = _AwsCrtHttpResponse()
            crt_stream = connection.request(
                self._marshal_request(request),
                crt_response._on_response,
                crt_response._on_body,
            )
            crt_stream.activate()
            crt_stream.completion_future.result(timeout=self._config.read_timeout)
            return crt_response.build(timeout=self._config.read_timeout)
        except (AwsCrtError, TimeoutError) as e:
            raise NetworkError(
                f"{request.method} request to {destination.netloc} failed: {e}"
            ) from e
        finally:
            connection.close()

    def _create_connection(self, url: URI) -> crt_http.HttpClientConnection:
        if url.scheme == "http":
            port = self._HTTP_PORT
            tls_connection_options = None
        elif url.scheme == "https":
            port = self._HTTPS_PORT
            tls_connection_options = self._tls_ctx.new_connection_options()
            tls_connection_options.set_server_name(url.host)
        else:
            raise NetworkError(
                f"AWSCRTHTTPClient does not support URL scheme {url.scheme}"
            )
        if url.port is not None:
            port = url.port

        connect_future = crt_http.HttpClientConnection.new(
            bootstrap=self._client_bootstrap,
            host_name=url.host,
            port=port,
            socket_options=self._socket_options,
            tls_connection_options=tls_connection_options,
        )
        return connect_future.result(timeout=self._config.connect_timeout + 1)

    def _render_path(self, url: URI) -> str:
        path = url.path if url.path else "/"
        query = f"?{url.query}" if url.query else ""
        return f"{path}{query}"

    def _marshal_request(self, request: HTTPRequest) -> crt_http.HttpRequest:
        """Create :py:class:`awscrt.http.HttpRequest` from :py:class:`HTTPRequest`."""
        headers_list: HeadersList = list(request.headers)
        names = {name.lower() for name, _ in headers_list}
        if "host" not in names:
            headers_list.append(("host", request.destination.netloc))
        if "accept" not in names:
            headers_list.append(("accept", "*/*"))

        return crt_http.HttpRequest(
            method=request.method,
            path=self._render_path(request.destination),
            headers=crt_http.HttpHeaders(headers_list),
        )
