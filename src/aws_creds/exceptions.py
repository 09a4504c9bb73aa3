#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from collections.abc import Sequence


class CredentialsError(Exception):
    """Base exception type for all exceptions raised while resolving credentials."""


class MissingVariableError(CredentialsError):
    """A required environment variable is not set."""

    def __init__(self, variable: str, message: str | None = None) -> None:
        self.variable = variable
        super().__init__(
            message or f"Environment variable {variable} is required but not set."
        )


class FileReadError(CredentialsError):
    """A file needed by a credentials source could not be read."""

    def __init__(self, path: str, message: str | None = None) -> None:
        self.path = path
        super().__init__(message or f"Unable to read {path}.")


class CredentialsFileNotFoundError(FileReadError):
    """The shared credentials file does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(path, f"Credentials file {path} does not exist.")


class ConfigParseError(CredentialsError):
    """The shared credentials file is not valid INI."""

    def __init__(self, path: str, message: str | None = None) -> None:
        self.path = path
        super().__init__(message or f"Unable to parse {path}.")


class SectionMissingError(CredentialsError):
    """The requested profile section is absent from the credentials file."""

    def __init__(self, section: str, path: str | None = None) -> None:
        self.section = section
        location = f" in {path}" if path is not None else ""
        super().__init__(f"Profile [{section}] not found{location}.")


class FieldMissingError(CredentialsError):
    """A required key is absent from a profile section."""

    def __init__(self, field: str, section: str) -> None:
        self.field = field
        self.section = section
        super().__init__(f"Profile [{section}] is missing required key {field}.")


class NetworkError(CredentialsError):
    """Transport failure, or a non-success response, from a remote endpoint."""


class MalformedResponseError(CredentialsError):
    """A response body did not match the expected shape."""


class NotOnPlatformError(CredentialsError):
    """The process does not appear to be running on EC2."""


class HomeDirUnavailableError(CredentialsError):
    """The user's home directory could not be determined."""


class AllSourcesExhaustedError(CredentialsError):
    """Every source in a resolver chain failed.

    :param errors: ``(source name, error)`` pairs in the order the sources were
        tried.
    """

    def __init__(self, errors: Sequence[tuple[str, CredentialsError]]) -> None:
        self.errors = list(errors)
        if self.errors:
            tried = ", ".join(name for name, _ in self.errors)
            message = f"Failed to resolve credentials from any source (tried: {tried})."
        else:
            message = "No credentials sources were configured."
        super().__init__(message)
