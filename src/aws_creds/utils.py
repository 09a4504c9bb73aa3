#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from datetime import UTC, datetime

from .exceptions import MalformedResponseError


def ensure_utc(value: datetime) -> datetime:
    """Ensures that the given datetime is a UTC timezone-aware datetime.

    If the datetime isn't timezone-aware, its timezone is set to UTC. If it is aware,
    it's replaced with the equivalent datetime under UTC.

    :param value: A datetime object that may or may not be timezone-aware.
    :returns: A UTC timezone-aware equivalent datetime.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    else:
        return value.astimezone(UTC)


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO 8601 timestamp as returned by STS and the metadata services.

    :param value: A timestamp such as ``2019-11-09T13:34:41Z``.
    :returns: A UTC timezone-aware datetime.
    :raises MalformedResponseError: If the value is not a valid timestamp.
    """
    try:
        return ensure_utc(datetime.fromisoformat(value.strip()))
    except ValueError as e:
        raise MalformedResponseError(f"Invalid timestamp: {value!r}") from e
