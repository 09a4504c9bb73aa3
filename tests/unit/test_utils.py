#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from datetime import UTC, datetime, timedelta, timezone

import pytest
from aws_creds.exceptions import MalformedResponseError
from aws_creds.utils import ensure_utc, parse_timestamp


@pytest.mark.parametrize(
    "given, expected",
    [
        (datetime(2017, 1, 1), datetime(2017, 1, 1, tzinfo=UTC)),
        (
            datetime(2017, 1, 1, 3, tzinfo=timezone(timedelta(hours=3))),
            datetime(2017, 1, 1, tzinfo=UTC),
        ),
    ],
)
def test_ensure_utc(given: datetime, expected: datetime) -> None:
    result = ensure_utc(given)
    assert result == expected
    assert result.tzinfo == UTC


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2017-05-17T15:09:54Z", datetime(2017, 5, 17, 15, 9, 54, tzinfo=UTC)),
        ("2017-05-17T15:09:54.123Z", datetime(2017, 5, 17, 15, 9, 54, 123000, tzinfo=UTC)),
        ("2017-05-17T17:09:54+02:00", datetime(2017, 5, 17, 15, 9, 54, tzinfo=UTC)),
        (" 2017-05-17T15:09:54Z\n", datetime(2017, 5, 17, 15, 9, 54, tzinfo=UTC)),
    ],
)
def test_parse_timestamp(value: str, expected: datetime) -> None:
    assert parse_timestamp(value) == expected


@pytest.mark.parametrize("value", ["", "yesterday", "2017-13-45T00:00:00Z"])
def test_parse_invalid_timestamp(value: str) -> None:
    with pytest.raises(MalformedResponseError):
        parse_timestamp(value)
