"""
Fetcher implementation.

Downloads a URL into a local file by delegating to the curl command line tool.
"""

import logging
import os
import subprocess
from abc import ABC, abstractmethod
from typing import List, Optional, Union

from scipfetch.scipfetch_config import ScipFetchConfig, TargetOS
from scipfetch.scipfetch_exceptions import (
    ConfigurationError,
    DownloadError,
    ToolNotFoundError,
)
from scipfetch.scipfetch_logger import ScipFetchLogger

PathLike = Union[str, "os.PathLike[str]"]


class Fetcher(ABC):
    """
    Retrieves the content of a URL into a local file, overwriting the file if it exists.
    """

    @abstractmethod
    def fetch(self, url: str, destination: PathLike) -> None:
        """
        Download url to destination. Raises on any failure.
        """


class ProcessRunner:
    """
    Spawns a child process and blocks until it exits.
    """

    def run(self, args: List[str]) -> int:
        """
        Run args with inherited stdio and return the exit code.

        Raises FileNotFoundError if args[0] is not an installed executable.
        """
        completed = subprocess.run(args, check=False)
        return completed.returncode


class CurlFetcher(Fetcher):
    """
    Fetcher that shells out to curl.

    The executable name follows the declared target OS rather than the host, so a
    build for Windows run on Linux still asks for curl.exe.
    """

    def __init__(
        self,
        config: ScipFetchConfig,
        logger: ScipFetchLogger,
        runner: Optional[ProcessRunner] = None,
    ):
        """
        Initialize the curl fetcher.

        Args:
            config: Declared target OS and optional CA bundle
            logger: Logger for status messages
            runner: Process runner, replaced by a fake in tests
        """
        self.config = config
        self.logger = logger
        self.runner = runner if runner is not None else ProcessRunner()

    @property
    def executable(self) -> str:
        # PowerShell aliases `curl` to Invoke-WebRequest
        if self.config.target_os == TargetOS.WINDOWS:
            return "curl.exe"
        return "curl"

    def build_args(self, url: str, destination: PathLike) -> List[str]:
        """
        Build the curl argument list, without the executable itself.

        Args:
            url: URL to download from
            destination: File the response body is written to

        Returns:
            ["-sSL", "-o", destination, url], followed by ["--cacert", path] when a CA bundle is configured
        """
        args = ["-sSL", "-o", _utf8_path(destination), url]
        if self.config.ca_bundle_path:
            args.extend(["--cacert", self.config.ca_bundle_path])
        return args

    def fetch(self, url: str, destination: PathLike) -> None:
        args = self.build_args(url, destination)
        command = [self.executable] + args
        self.logger.log(f"Running {' '.join(command)}", logging.DEBUG)

        try:
            returncode = self.runner.run(command)
        except FileNotFoundError as e:
            raise ToolNotFoundError(self.executable) from e

        if returncode != 0:
            raise DownloadError(self.executable, returncode)


def _utf8_path(path: PathLike) -> str:
    """
    Returns path as text, or raises ConfigurationError if it cannot be represented as UTF-8.
    """
    text = os.fspath(path)
    if isinstance(text, bytes):
        try:
            return text.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ConfigurationError(f"Path {text!r} is not valid UTF-8") from e
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise ConfigurationError(f"Path {text!r} is not valid UTF-8") from e
    return text
