#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from .credentials import Credentials
from .interfaces import CredentialsResolver


class StaticCredentialsResolver(CredentialsResolver):
    """Resolve credentials the caller already has."""

    def __init__(
        self,
        access_key: str,
        secret_key: str | None = None,
        security_token: str | None = None,
        session_token: str | None = None,
    ) -> None:
        self._credentials = Credentials(
            access_key=access_key,
            secret_key=secret_key,
            security_token=security_token,
            session_token=session_token,
        )

    def get_credentials(self) -> Credentials:
        return self._credentials
