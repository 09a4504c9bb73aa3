#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from .credentials import Credentials
from .exceptions import MissingVariableError
from .interfaces import CredentialsResolver, EnvironmentSource
from .system import OSEnvironment

ACCESS_KEY_VAR = "AWS_ACCESS_KEY_ID"
SECRET_KEY_VAR = "AWS_SECRET_ACCESS_KEY"
SECURITY_TOKEN_VAR = "AWS_SECURITY_TOKEN"  # noqa: S105
SESSION_TOKEN_VAR = "AWS_SESSION_TOKEN"  # noqa: S105


class EnvironmentCredentialsResolver(CredentialsResolver):
    """Resolves AWS Credentials from system environment variables.

    Each variable name can be overridden. The access key and secret key variables
    are required; the two token variables are optional.
    """

    def __init__(
        self,
        *,
        access_key_var: str | None = None,
        secret_key_var: str | None = None,
        security_token_var: str | None = None,
        session_token_var: str | None = None,
        environ: EnvironmentSource | None = None,
    ) -> None:
        self._access_key_var = access_key_var or ACCESS_KEY_VAR
        self._secret_key_var = secret_key_var or SECRET_KEY_VAR
        self._security_token_var = security_token_var or SECURITY_TOKEN_VAR
        self._session_token_var = session_token_var or SESSION_TOKEN_VAR
        self._environ = environ if environ is not None else OSEnvironment()

    def _require(self, name: str) -> str:
        value = self._environ.get(name)
        if value is None:
            raise MissingVariableError(name)
        return value

    def get_credentials(self) -> Credentials:
        access_key = self._require(self._access_key_var)
        secret_key = self._require(self._secret_key_var)

        return Credentials(
            access_key=access_key,
            secret_key=secret_key,
            security_token=self._environ.get(self._security_token_var),
            session_token=self._environ.get(self._session_token_var),
        )
