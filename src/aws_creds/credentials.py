#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Self

from .utils import ensure_utc


@dataclass(kw_only=True, frozen=True)
class Credentials:
    """AWS access credentials.

    A record with no ``access_key`` is anonymous, and every other field must then be
    ``None``. Records are immutable; callers that need fresh credentials resolve
    again.
    """

    access_key: str | None = None
    """A unique identifier for an AWS user or role."""

    secret_key: str | None = field(default=None, repr=False)
    """A secret key used in conjunction with the access key to authenticate
    programmatic access to AWS services."""

    security_token: str | None = field(default=None, repr=False)
    """A temporary token issued by the instance or container metadata service."""

    session_token: str | None = field(default=None, repr=False)
    """A temporary token issued by STS or configured alongside static keys."""

    expiration: datetime | None = None
    """The expiration time of the credentials.

    If time zone is provided, it is updated to UTC. The value must always be in UTC.
    """

    def __post_init__(self) -> None:
        if self.access_key is None and any(
            value is not None
            for value in (
                self.secret_key,
                self.security_token,
                self.session_token,
                self.expiration,
            )
        ):
            raise ValueError(
                "Anonymous credentials must not carry a secret key, token or expiration."
            )
        if self.expiration is not None:
            # Frozen dataclass, so bypass __setattr__.
            object.__setattr__(self, "expiration", ensure_utc(self.expiration))

    @classmethod
    def anonymous(cls) -> Self:
        """Credentials for accessing public, unauthenticated resources."""
        return cls()

    @property
    def is_anonymous(self) -> bool:
        return self.access_key is None

    @property
    def is_expired(self) -> bool:
        """Whether the credentials are expired."""
        if self.expiration is None:
            return False
        return datetime.now(tz=UTC) >= self.expiration
