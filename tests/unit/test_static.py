#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from aws_creds import StaticCredentialsResolver


def test_access_key_only():
    credentials = StaticCredentialsResolver("akid").get_credentials()
    assert credentials.access_key == "akid"
    assert credentials.secret_key is None
    assert credentials.security_token is None
    assert credentials.session_token is None
    assert credentials.expiration is None


def test_all_values():
    credentials = StaticCredentialsResolver(
        "akid",
        secret_key="secret",
        security_token="security",
        session_token="session",
    ).get_credentials()
    assert credentials.access_key == "akid"
    assert credentials.secret_key == "secret"
    assert credentials.security_token == "security"
    assert credentials.session_token == "session"
    assert credentials.expiration is None
