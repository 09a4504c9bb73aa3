#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from .chain import (
    CredentialsResolverChain,
    anonymous,
    create_default_chain,
    resolve_credentials,
)
from .credentials import Credentials
from .environment import EnvironmentCredentialsResolver
from .imds import InstanceMetadataConfig, InstanceMetadataCredentialsResolver
from .interfaces import CredentialsResolver
from .profile import ProfileCredentialsResolver
from .static import StaticCredentialsResolver
from .sts import (
    EnvironmentWebIdentityCredentialsResolver,
    StsConfig,
    WebIdentityCredentialsResolver,
)

__version__ = "0.1.0"

__all__ = (
    "Credentials",
    "CredentialsResolver",
    "CredentialsResolverChain",
    "EnvironmentCredentialsResolver",
    "EnvironmentWebIdentityCredentialsResolver",
    "InstanceMetadataConfig",
    "InstanceMetadataCredentialsResolver",
    "ProfileCredentialsResolver",
    "StaticCredentialsResolver",
    "StsConfig",
    "WebIdentityCredentialsResolver",
    "anonymous",
    "create_default_chain",
    "resolve_credentials",
)
