"""
Configuration parameters for scipfetch.
"""

import os
import sys
from enum import Enum
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from scipfetch.scipfetch_exceptions import ConfigurationError


class TargetOS(str, Enum):
    """
    Operating system the fetched library is being built for.
    """

    WINDOWS = "windows"
    LINUX = "linux"
    MACOS = "macos"
    OTHER = "other"

    @classmethod
    def from_string(cls, value: str) -> "TargetOS":
        """
        Maps the common spellings of an OS name (sys.platform, rustc target_os, uname) to a TargetOS.
        Unknown names map to OTHER.
        """
        normalized = value.strip().lower()
        if normalized in ("windows", "win", "win32", "win64", "cygwin", "msys"):
            return cls.WINDOWS
        if normalized.startswith("linux"):
            return cls.LINUX
        if normalized in ("macos", "darwin", "osx", "mac"):
            return cls.MACOS
        return cls.OTHER

    @classmethod
    def host(cls) -> "TargetOS":
        """
        The OS of the machine running this process. Only used when no target is declared.
        """
        return cls.from_string(sys.platform)


TARGET_OS_ENV_VARS = ("SCIPFETCH_TARGET_OS", "CARGO_CFG_TARGET_OS")
CA_BUNDLE_ENV_VARS = ("SCIPFETCH_HTTP_CAINFO", "CARGO_HTTP_CAINFO")


def _first_set(environ: Mapping[str, str], names) -> Optional[str]:
    for name in names:
        value = environ.get(name, "")
        if value:
            return value
    return None


class ScipFetchConfig(BaseModel):
    """
    Configuration shared by the fetcher and the unpacker.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    target_os: TargetOS = Field(
        default_factory=TargetOS.host,
        alias="targetOs",
        description="Declared build target, selects the downloader executable name",
    )
    ca_bundle_path: Optional[str] = Field(
        None, alias="caBundlePath", description="CA certificate bundle passed to the downloader"
    )
    archive_name: str = Field(
        "libscip.zip", alias="archiveName", description="File name of the downloaded archive"
    )
    install_dir_name: str = Field(
        "scip_install",
        alias="installDirName",
        description="Sub-directory receiving the flattened nested archive",
    )

    @field_validator("target_os", mode="before")
    @classmethod
    def _parse_target_os(cls, value):
        if isinstance(value, str) and not isinstance(value, TargetOS):
            return TargetOS.from_string(value)
        return value

    @field_validator("ca_bundle_path", mode="before")
    @classmethod
    def _empty_ca_bundle_is_unset(cls, value):
        if value == "":
            return None
        return value

    @field_validator("archive_name", "install_dir_name")
    @classmethod
    def _plain_file_name(cls, value: str) -> str:
        if not value or value in (".", "..") or "/" in value or "\\" in value:
            raise ValueError(f"{value!r} is not a plain file name")
        return value

    @classmethod
    def from_dict(cls, d: dict) -> "ScipFetchConfig":
        """
        Create a ScipFetchConfig instance from a dictionary keyed by field names or their camelCase aliases.
        """
        return cls._build(d)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ScipFetchConfig":
        """
        Reads the declared target OS and CA bundle from the build environment.

        The target comes from SCIPFETCH_TARGET_OS or CARGO_CFG_TARGET_OS and falls back to the host OS.
        The CA bundle comes from SCIPFETCH_HTTP_CAINFO or CARGO_HTTP_CAINFO. Empty values count as unset.
        """
        if environ is None:
            environ = os.environ

        values = {}
        target_os = _first_set(environ, TARGET_OS_ENV_VARS)
        if target_os is not None:
            values["target_os"] = target_os
        ca_bundle_path = _first_set(environ, CA_BUNDLE_ENV_VARS)
        if ca_bundle_path is not None:
            values["ca_bundle_path"] = ca_bundle_path
        return cls._build(values)

    @classmethod
    def _build(cls, values: Mapping) -> "ScipFetchConfig":
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid scipfetch configuration: {e}") from e
