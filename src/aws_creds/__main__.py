#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
"""
Resolve AWS credentials the way client libraries do and describe the result.
"""

import argparse
import logging
import sys

from .chain import anonymous, resolve_credentials
from .credentials import Credentials
from .exceptions import CredentialsError


def describe(credentials: Credentials) -> str:
    if credentials.is_anonymous:
        return "anonymous"
    has_token = (
        credentials.session_token is not None
        or credentials.security_token is not None
    )
    expiration = (
        credentials.expiration.isoformat() if credentials.expiration else "never"
    )
    return (
        f"access_key={credentials.access_key} "
        f"token={'yes' if has_token else 'no'} "
        f"expiration={expiration}"
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="aws_creds", description="Resolve AWS credentials"
    )
    parser.add_argument(
        "-p",
        "--profile",
        help="Section of ~/.aws/credentials to use (default: default)",
    )
    parser.add_argument(
        "--anonymous",
        action="store_true",
        help="Skip resolution and use anonymous credentials",
    )
    parser.add_argument(
        "--debug", action="store_true", help="Log each source that is tried"
    )
    args = parser.parse_args(argv)

    if args.debug:
        logging.basicConfig(level=logging.DEBUG)

    if args.anonymous:
        credentials = anonymous()
    else:
        try:
            credentials = resolve_credentials(profile=args.profile)
        except CredentialsError as e:
            print(f"error: {e}", file=sys.stderr)
            return 1

    print(describe(credentials))
    return 0


if __name__ == "__main__":
    sys.exit(main())
