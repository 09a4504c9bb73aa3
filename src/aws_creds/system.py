#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import os
from collections.abc import Mapping
from pathlib import Path

from .interfaces import EnvironmentSource, FileSystem


class OSEnvironment(EnvironmentSource):
    """Environment variables of the current process, or of a fixed mapping."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = os.environ if environ is None else environ

    def get(self, name: str) -> str | None:
        return self._environ.get(name)


class LocalFileSystem(FileSystem):
    """The local filesystem and the current user's home directory."""

    def read_text(self, path: str | Path) -> str:
        return Path(path).read_text(encoding="utf-8")

    def home_dir(self) -> Path:
        return Path.home()
