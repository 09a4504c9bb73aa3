#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import logging
from collections.abc import Sequence
from typing import Final

from .credentials import Credentials
from .environment import EnvironmentCredentialsResolver
from .exceptions import AllSourcesExhaustedError, CredentialsError
from .imds import InstanceMetadataCredentialsResolver
from .interfaces import CredentialsResolver, EnvironmentSource, FileSystem, HTTPClient
from .profile import ProfileCredentialsResolver
from .static import StaticCredentialsResolver
from .sts import DEFAULT_SESSION_NAME, EnvironmentWebIdentityCredentialsResolver

logger: Final = logging.getLogger(__name__)


class CredentialsResolverChain(CredentialsResolver):
    """Attempts to resolve credentials by checking a sequence of sub-resolvers.

    If a nested resolver raises a :py:class:`CredentialsError`, the next resolver in
    the chain will be attempted. Nothing is cached; every call walks the chain from
    the start.
    """

    def __init__(self, resolvers: Sequence[CredentialsResolver]) -> None:
        """Construct a CredentialsResolverChain.

        :param resolvers: The sequence of resolvers to resolve credentials from, in
            priority order.
        """
        self._resolvers = tuple(resolvers)

    @property
    def resolvers(self) -> tuple[CredentialsResolver, ...]:
        return self._resolvers

    def get_credentials(self) -> Credentials:
        logger.debug("Attempting to resolve credentials from resolver chain.")
        errors: list[tuple[str, CredentialsError]] = []
        for resolver in self._resolvers:
            name = type(resolver).__name__
            try:
                logger.debug("Attempting to resolve credentials from %s.", name)
                credentials = resolver.get_credentials()
            except CredentialsError as e:
                logger.debug("Failed to resolve credentials from %s: %s", name, e)
                errors.append((name, e))
                continue
            logger.debug("Resolved credentials from %s.", name)
            return credentials

        last_error = errors[-1][1] if errors else None
        raise AllSourcesExhaustedError(errors) from last_error


def create_default_chain(
    profile: str | None = None,
    *,
    environ: EnvironmentSource | None = None,
    filesystem: FileSystem | None = None,
    http_client: HTTPClient | None = None,
    session_name: str = DEFAULT_SESSION_NAME,
) -> CredentialsResolverChain:
    """Creates the default credentials chain.

    Sources, in order: web identity federation configured via ``AWS_ROLE_ARN`` and
    ``AWS_WEB_IDENTITY_TOKEN_FILE``, environment variables, the shared credentials
    file, then the container or EC2 instance metadata service.
    """
    return CredentialsResolverChain(
        resolvers=(
            EnvironmentWebIdentityCredentialsResolver(
                session_name=session_name,
                environ=environ,
                filesystem=filesystem,
                http_client=http_client,
            ),
            EnvironmentCredentialsResolver(environ=environ),
            ProfileCredentialsResolver(profile, filesystem=filesystem),
            InstanceMetadataCredentialsResolver(
                http_client=http_client,
                environ=environ,
                filesystem=filesystem,
            ),
        )
    )


def resolve_credentials(
    access_key: str | None = None,
    secret_key: str | None = None,
    security_token: str | None = None,
    session_token: str | None = None,
    profile: str | None = None,
    *,
    environ: EnvironmentSource | None = None,
    filesystem: FileSystem | None = None,
    http_client: HTTPClient | None = None,
    session_name: str = DEFAULT_SESSION_NAME,
) -> Credentials:
    """Resolve credentials from arguments, or from the default chain.

    When ``access_key`` is given the other arguments are used as-is and no other
    source is consulted. Otherwise the chain from :py:func:`create_default_chain`
    runs, using ``profile`` for the shared credentials file.

    :raises AllSourcesExhaustedError: If no source could provide credentials.
    """
    if access_key is not None:
        return StaticCredentialsResolver(
            access_key,
            secret_key=secret_key,
            security_token=security_token,
            session_token=session_token,
        ).get_credentials()

    chain = create_default_chain(
        profile,
        environ=environ,
        filesystem=filesystem,
        http_client=http_client,
        session_name=session_name,
    )
    return chain.get_credentials()


def anonymous() -> Credentials:
    """Credentials for public resources. Never consults any source."""
    return Credentials.anonymous()
