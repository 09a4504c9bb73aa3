#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import logging
from dataclasses import dataclass, field
from datetime import datetime
from xml.etree import ElementTree

from .credentials import Credentials
from .crt import AWSCRTHTTPClient
from .exceptions import (
    FileReadError,
    MalformedResponseError,
    MissingVariableError,
    NetworkError,
)
from .http import URI, HTTPRequest
from .interfaces import CredentialsResolver, EnvironmentSource, FileSystem, HTTPClient
from .system import LocalFileSystem, OSEnvironment
from .utils import parse_timestamp

logger = logging.getLogger(__name__)

ROLE_ARN_VAR = "AWS_ROLE_ARN"
WEB_IDENTITY_TOKEN_FILE_VAR = "AWS_WEB_IDENTITY_TOKEN_FILE"  # noqa: S105
DEFAULT_SESSION_NAME = "aws-creds"


@dataclass(kw_only=True)
class StsConfig:
    """Configuration for the STS web identity exchange."""

    endpoint: URI = field(
        default_factory=lambda: URI(scheme="https", host="sts.amazonaws.com", path="/")
    )
    version: str = "2011-06-15"


@dataclass(kw_only=True)
class AssumedRoleUser:
    arn: str
    assumed_role_id: str


@dataclass(kw_only=True)
class StsResponseCredentials:
    session_token: str
    secret_access_key: str
    expiration: datetime
    access_key_id: str


@dataclass(kw_only=True)
class AssumeRoleWithWebIdentityResult:
    subject_from_web_identity_token: str
    audience: str
    assumed_role_user: AssumedRoleUser
    credentials: StsResponseCredentials
    provider: str | None = None


@dataclass(kw_only=True)
class ResponseMetadata:
    request_id: str | None = None


@dataclass(kw_only=True)
class AssumeRoleWithWebIdentityResponse:
    assume_role_with_web_identity_result: AssumeRoleWithWebIdentityResult
    response_metadata: ResponseMetadata


def _local_name(tag: str) -> str:
    # ElementTree reports namespaced tags as "{namespace}Name".
    return tag.rsplit("}", 1)[-1]


def _find(element: ElementTree.Element, name: str) -> ElementTree.Element | None:
    for child in element:
        if _local_name(child.tag) == name:
            return child
    return None


def _child(element: ElementTree.Element, name: str) -> ElementTree.Element:
    child = _find(element, name)
    if child is None:
        raise MalformedResponseError(
            f"Expected <{name}> in <{_local_name(element.tag)}> of STS response."
        )
    return child


def _text(element: ElementTree.Element, name: str) -> str:
    text = _child(element, name).text
    if text is None:
        raise MalformedResponseError(f"Element <{name}> of STS response is empty.")
    return text.strip()


def _optional_text(element: ElementTree.Element | None, name: str) -> str | None:
    if element is None:
        return None
    child = _find(element, name)
    if child is None or child.text is None:
        return None
    return child.text.strip()


def parse_assume_role_with_web_identity_response(
    body: bytes,
) -> AssumeRoleWithWebIdentityResponse:
    """Decode the XML body of an ``AssumeRoleWithWebIdentity`` response.

    :raises MalformedResponseError: If the body is not XML or a required element is
        missing.
    """
    try:
        root = ElementTree.fromstring(body)
    except ElementTree.ParseError as e:
        raise MalformedResponseError(f"Unable to parse STS response: {e}") from e

    if _local_name(root.tag) != "AssumeRoleWithWebIdentityResponse":
        raise MalformedResponseError(
            f"Unexpected STS response root element <{_local_name(root.tag)}>."
        )

    result = _child(root, "AssumeRoleWithWebIdentityResult")
    role_user = _child(result, "AssumedRoleUser")
    creds = _child(result, "Credentials")

    return AssumeRoleWithWebIdentityResponse(
        assume_role_with_web_identity_result=AssumeRoleWithWebIdentityResult(
            subject_from_web_identity_token=_text(
                result, "SubjectFromWebIdentityToken"
            ),
            audience=_text(result, "Audience"),
            assumed_role_user=AssumedRoleUser(
                arn=_text(role_user, "Arn"),
                assumed_role_id=_text(role_user, "AssumedRoleId"),
            ),
            credentials=StsResponseCredentials(
                session_token=_text(creds, "SessionToken"),
                secret_access_key=_text(creds, "SecretAccessKey"),
                expiration=parse_timestamp(_text(creds, "Expiration")),
                access_key_id=_text(creds, "AccessKeyId"),
            ),
            provider=_optional_text(result, "Provider"),
        ),
        response_metadata=ResponseMetadata(
            request_id=_optional_text(_find(root, "ResponseMetadata"), "RequestId"),
        ),
    )


def credentials_from_sts_response(
    response: AssumeRoleWithWebIdentityResponse,
) -> Credentials:
    sts_credentials = response.assume_role_with_web_identity_result.credentials
    return Credentials(
        access_key=sts_credentials.access_key_id,
        secret_key=sts_credentials.secret_access_key,
        security_token=None,
        session_token=sts_credentials.session_token,
        expiration=sts_credentials.expiration,
    )


def _read_web_identity_environment(
    environ: EnvironmentSource | None, filesystem: FileSystem | None
) -> tuple[str, str]:
    environ = environ if environ is not None else OSEnvironment()
    filesystem = filesystem if filesystem is not None else LocalFileSystem()

    role_arn = environ.get(ROLE_ARN_VAR)
    if role_arn is None:
        raise MissingVariableError(ROLE_ARN_VAR)
    token_file = environ.get(WEB_IDENTITY_TOKEN_FILE_VAR)
    if token_file is None:
        raise MissingVariableError(WEB_IDENTITY_TOKEN_FILE_VAR)

    try:
        token = filesystem.read_text(token_file).strip()
    except (OSError, UnicodeDecodeError) as e:
        raise FileReadError(
            token_file, f"Unable to read web identity token file {token_file}."
        ) from e
    return role_arn, token


class WebIdentityCredentialsResolver(CredentialsResolver):
    """Exchanges a web identity token for temporary credentials with STS."""

    def __init__(
        self,
        *,
        role_arn: str,
        web_identity_token: str,
        session_name: str = DEFAULT_SESSION_NAME,
        http_client: HTTPClient | None = None,
        config: StsConfig | None = None,
    ) -> None:
        self._role_arn = role_arn
        self._web_identity_token = web_identity_token
        self._session_name = session_name
        self._http_client = http_client
        self._config = config or StsConfig()

    @classmethod
    def from_environment(
        cls,
        *,
        session_name: str = DEFAULT_SESSION_NAME,
        environ: EnvironmentSource | None = None,
        filesystem: FileSystem | None = None,
        http_client: HTTPClient | None = None,
        config: StsConfig | None = None,
    ) -> "WebIdentityCredentialsResolver":
        """Build a resolver from ``AWS_ROLE_ARN`` and ``AWS_WEB_IDENTITY_TOKEN_FILE``.

        :raises MissingVariableError: If either variable is unset.
        :raises FileReadError: If the token file cannot be read.
        """
        role_arn, token = _read_web_identity_environment(environ, filesystem)
        return cls(
            role_arn=role_arn,
            web_identity_token=token,
            session_name=session_name,
            http_client=http_client,
            config=config,
        )

    def _build_request(self) -> HTTPRequest:
        destination = self._config.endpoint.with_query_params(
            [
                ("Action", "AssumeRoleWithWebIdentity"),
                ("RoleSessionName", self._session_name),
                ("RoleArn", self._role_arn),
                ("WebIdentityToken", self._web_identity_token),
                ("Version", self._config.version),
            ]
        )
        return HTTPRequest(method="GET", destination=destination)

    def _get_http_client(self) -> HTTPClient:
        if self._http_client is None:
            self._http_client = AWSCRTHTTPClient()
        return self._http_client

    def get_credentials(self) -> Credentials:
        http_client = self._get_http_client()
        logger.debug("Assuming role %s with web identity.", self._role_arn)
        response = http_client.send(self._build_request())
        if response.status != 200:
            raise NetworkError(
                f"STS returned {response.status} for AssumeRoleWithWebIdentity: "
                f"{response.body.decode('utf-8', errors='replace')}"
            )
        return credentials_from_sts_response(
            parse_assume_role_with_web_identity_response(response.body)
        )


class EnvironmentWebIdentityCredentialsResolver(CredentialsResolver):
    """Web identity federation configured through environment variables.

    The environment and token file are read on every call to
    :py:meth:`get_credentials`, not at construction.
    """

    def __init__(
        self,
        *,
        session_name: str = DEFAULT_SESSION_NAME,
        environ: EnvironmentSource | None = None,
        filesystem: FileSystem | None = None,
        http_client: HTTPClient | None = None,
        config: StsConfig | None = None,
    ) -> None:
        self._session_name = session_name
        self._environ = environ
        self._filesystem = filesystem
        self._http_client = http_client
        self._config = config

    def _get_http_client(self) -> HTTPClient:
        if self._http_client is None:
            self._http_client = AWSCRTHTTPClient()
        return self._http_client

    def get_credentials(self) -> Credentials:
        role_arn, token = _read_web_identity_environment(
            self._environ, self._filesystem
        )
        resolver = WebIdentityCredentialsResolver(
            role_arn=role_arn,
            web_identity_token=token,
            session_name=self._session_name,
            http_client=self._get_http_client(),
            config=self._config,
        )
        return resolver.get_credentials()
