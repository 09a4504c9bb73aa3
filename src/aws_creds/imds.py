#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import json
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from .credentials import Credentials
from .crt import AWSCRTHTTPClient
from .exceptions import MalformedResponseError, NetworkError, NotOnPlatformError
from .http import URI, HTTPRequest
from .interfaces import CredentialsResolver, EnvironmentSource, FileSystem, HTTPClient
from .system import LocalFileSystem, OSEnvironment
from .utils import parse_timestamp

logger = logging.getLogger(__name__)

CONTAINER_RELATIVE_URI_VAR = "AWS_CONTAINER_CREDENTIALS_RELATIVE_URI"

_EC2_METADATA_IP = "169.254.169.254"
_CONTAINER_METADATA_IP = "169.254.170.2"


@dataclass(kw_only=True)
class InstanceMetadataConfig:
    """Configuration for instance and container metadata retrieval."""

    ec2_host: str = _EC2_METADATA_IP
    container_host: str = _CONTAINER_METADATA_IP
    security_credentials_path: str = "/latest/meta-data/iam/security-credentials"

    hypervisor_uuid_path: str = "/sys/hypervisor/uuid"
    hypervisor_uuid_prefix: str = "ec2"
    board_vendor_path: str = "/sys/class/dmi/id/board_vendor"
    board_vendor_prefix: str = "Amazon EC2"


@dataclass(kw_only=True)
class InstanceMetadataResponse:
    """Credentials document served by the EC2 and ECS metadata endpoints."""

    access_key_id: str
    secret_access_key: str
    token: str
    expiration: datetime


_RESPONSE_KEYS = {
    "access_key_id": "AccessKeyId",
    "secret_access_key": "SecretAccessKey",
    "token": "Token",
    "expiration": "Expiration",
}


def parse_instance_metadata_response(body: bytes) -> InstanceMetadataResponse:
    """Decode a JSON credentials document.

    :raises MalformedResponseError: If the body is not a JSON object or a required
        key is missing or not a string.
    """
    try:
        document: Any = json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise MalformedResponseError(
            f"Unable to parse JSON from metadata service: {e}"
        ) from e
    if not isinstance(document, dict):
        raise MalformedResponseError("Metadata service did not return a JSON object.")

    values: dict[str, str] = {}
    for attr, key in _RESPONSE_KEYS.items():
        value = document.get(key)
        if not isinstance(value, str):
            raise MalformedResponseError(
                f"Metadata service response is missing required key {key}."
            )
        values[attr] = value

    return InstanceMetadataResponse(
        access_key_id=values["access_key_id"],
        secret_access_key=values["secret_access_key"],
        token=values["token"],
        expiration=parse_timestamp(values["expiration"]),
    )


def credentials_from_metadata_response(response: InstanceMetadataResponse) -> Credentials:
    return Credentials(
        access_key=response.access_key_id,
        secret_key=response.secret_access_key,
        security_token=response.token,
        session_token=None,
        expiration=response.expiration,
    )


class InstanceMetadataCredentialsResolver(CredentialsResolver):
    """Resolves AWS Credentials from the ECS container or EC2 instance metadata
    service.

    On EC2, the hypervisor and DMI files are checked before any request is made so
    that hosts outside AWS fail fast instead of waiting on link-local timeouts.
    """

    def __init__(
        self,
        *,
        http_client: HTTPClient | None = None,
        config: InstanceMetadataConfig | None = None,
        environ: EnvironmentSource | None = None,
        filesystem: FileSystem | None = None,
    ) -> None:
        self._http_client = http_client
        self._config = config or InstanceMetadataConfig()
        self._environ = environ if environ is not None else OSEnvironment()
        self._filesystem = filesystem if filesystem is not None else LocalFileSystem()

    def _file_starts_with(self, path: str, prefix: str) -> bool:
        try:
            return self._filesystem.read_text(path).startswith(prefix)
        except (OSError, UnicodeDecodeError):
            return False

    def is_ec2_instance(self) -> bool:
        """Whether the hypervisor UUID or DMI board vendor identify an EC2 host."""
        return self._file_starts_with(
            self._config.hypervisor_uuid_path, self._config.hypervisor_uuid_prefix
        ) or self._file_starts_with(
            self._config.board_vendor_path, self._config.board_vendor_prefix
        )

    def _get(self, http_client: HTTPClient, uri: URI) -> bytes:
        response = http_client.send(HTTPRequest(method="GET", destination=uri))
        if response.status != 200:
            raise NetworkError(
                f"Metadata service returned {response.status} for {uri.path}"
            )
        return response.body

    def _container_credentials(
        self, http_client: HTTPClient, relative_uri: str
    ) -> bytes:
        logger.debug("Fetching container credentials from %s.", relative_uri)
        uri = URI(scheme="http", host=self._config.container_host, path=relative_uri)
        return self._get(http_client, uri)

    def _instance_credentials(self, http_client: HTTPClient) -> bytes:
        base = URI(scheme="http", host=self._config.ec2_host)
        path = self._config.security_credentials_path

        try:
            role = self._get(http_client, base.with_path(path)).decode("utf-8").strip()
        except UnicodeDecodeError as e:
            raise MalformedResponseError("IAM role name is not valid UTF-8.") from e
        if not role:
            raise MalformedResponseError("Metadata service returned no IAM role.")

        logger.debug("Fetching instance credentials for role %s.", role)
        return self._get(http_client, base.with_path(f"{path}/{role}"))

    def _get_http_client(self) -> HTTPClient:
        if self._http_client is None:
            self._http_client = AWSCRTHTTPClient()
        return self._http_client

    def get_credentials(self) -> Credentials:
        relative_uri = self._environ.get(CONTAINER_RELATIVE_URI_VAR)
        if relative_uri is None and not self.is_ec2_instance():
            raise NotOnPlatformError("Not running on an EC2 instance.")

        http_client = self._get_http_client()
        if relative_uri is not None:
            body = self._container_credentials(http_client, relative_uri)
        else:
            body = self._instance_credentials(http_client)

        return credentials_from_metadata_response(
            parse_instance_metadata_response(body)
        )
