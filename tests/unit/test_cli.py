#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from datetime import UTC, datetime

import pytest
from aws_creds import Credentials
from aws_creds.__main__ import describe, main
from aws_creds.exceptions import AllSourcesExhaustedError


def test_describe_never_shows_secrets():
    text = describe(
        Credentials(
            access_key="akid",
            secret_key="very-secret",
            session_token="session-value",
            expiration=datetime(2030, 1, 1, tzinfo=UTC),
        )
    )
    assert text == "access_key=akid token=yes expiration=2030-01-01T00:00:00+00:00"
    assert "very-secret" not in text


def test_anonymous_flag(capsys: pytest.CaptureFixture[str]):
    assert main(["--anonymous"]) == 0
    assert capsys.readouterr().out.strip() == "anonymous"


def test_profile_is_passed_through(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
):
    seen: dict[str, str | None] = {}

    def fake_resolve(profile: str | None = None) -> Credentials:
        seen["profile"] = profile
        return Credentials(access_key="akid", secret_key="secret")

    monkeypatch.setattr("aws_creds.__main__.resolve_credentials", fake_resolve)

    assert main(["--profile", "dev"]) == 0
    assert seen["profile"] == "dev"
    assert capsys.readouterr().out.strip() == (
        "access_key=akid token=no expiration=never"
    )


def test_failure_exit_code(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
):
    def fail(profile: str | None = None) -> Credentials:
        raise AllSourcesExhaustedError([])

    monkeypatch.setattr("aws_creds.__main__.resolve_credentials", fail)

    assert main([]) == 1
    assert capsys.readouterr().err.startswith("error: ")
