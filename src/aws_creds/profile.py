#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import configparser
import logging
from pathlib import Path

from .credentials import Credentials
from .exceptions import (
    ConfigParseError,
    CredentialsFileNotFoundError,
    FieldMissingError,
    FileReadError,
    HomeDirUnavailableError,
    SectionMissingError,
)
from .interfaces import CredentialsResolver, FileSystem
from .system import LocalFileSystem

logger = logging.getLogger(__name__)

DEFAULT_PROFILE = "default"
CREDENTIALS_FILE = Path(".aws") / "credentials"

ACCESS_KEY_KEY = "aws_access_key_id"
SECRET_KEY_KEY = "aws_secret_access_key"
SECURITY_TOKEN_KEY = "aws_security_token"  # noqa: S105
SESSION_TOKEN_KEY = "aws_session_token"  # noqa: S105

# Section headers are single lines, so no profile can be named this. Keys under
# a literal [DEFAULT] section stay in that section instead of leaking into others.
_NO_DEFAULT_SECTION = "\n"


class ProfileCredentialsResolver(CredentialsResolver):
    """Resolves AWS Credentials from a section of ``~/.aws/credentials``."""

    def __init__(
        self,
        profile: str | None = None,
        *,
        filesystem: FileSystem | None = None,
    ) -> None:
        self._profile = profile or DEFAULT_PROFILE
        self._filesystem = filesystem if filesystem is not None else LocalFileSystem()

    @property
    def profile(self) -> str:
        return self._profile

    def credentials_path(self) -> Path:
        """Location of the shared credentials file.

        :raises HomeDirUnavailableError: If the home directory cannot be determined.
        """
        try:
            home = self._filesystem.home_dir()
        except (RuntimeError, KeyError) as e:
            raise HomeDirUnavailableError(
                "Unable to determine the home directory."
            ) from e
        return home / CREDENTIALS_FILE

    def _load(self, path: Path) -> configparser.ConfigParser:
        try:
            contents = self._filesystem.read_text(path)
        except FileNotFoundError as e:
            raise CredentialsFileNotFoundError(str(path)) from e
        except (OSError, UnicodeDecodeError) as e:
            raise FileReadError(str(path)) from e

        # Secrets may contain "%", which must not be interpolated.
        parser = configparser.ConfigParser(
            interpolation=None, default_section=_NO_DEFAULT_SECTION
        )
        try:
            parser.read_string(contents, source=str(path))
        except configparser.Error as e:
            raise ConfigParseError(str(path), f"Unable to parse {path}: {e}") from e
        return parser

    def get_credentials(self) -> Credentials:
        path = self.credentials_path()
        parser = self._load(path)
        if not parser.has_section(self._profile):
            raise SectionMissingError(self._profile, str(path))

        section = parser[self._profile]
        access_key = section.get(ACCESS_KEY_KEY)
        if access_key is None:
            raise FieldMissingError(ACCESS_KEY_KEY, self._profile)
        secret_key = section.get(SECRET_KEY_KEY)
        if secret_key is None:
            raise FieldMissingError(SECRET_KEY_KEY, self._profile)

        logger.debug("Loaded credentials for profile %s from %s.", self._profile, path)
        return Credentials(
            access_key=access_key,
            secret_key=secret_key,
            security_token=section.get(SECURITY_TOKEN_KEY),
            session_token=section.get(SESSION_TOKEN_KEY),
        )
