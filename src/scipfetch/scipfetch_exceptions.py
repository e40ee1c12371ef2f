"""
This module contains the exceptions raised by the scipfetch package.
"""

import zipfile


class ScipFetchException(Exception):
    """
    Base class for all errors raised by scipfetch.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(ScipFetchException, ValueError):
    """
    Raised when a configuration value cannot be used, such as a path that is not valid UTF-8.
    """


class ToolNotFoundError(ScipFetchException, FileNotFoundError):
    """
    Raised when the external downloader executable is not installed.
    """

    def __init__(self, executable: str):
        super().__init__(f"`{executable}` command not found")
        self.executable = executable


class DownloadError(ScipFetchException):
    """
    Raised when the downloader ran but exited with a non-zero status.
    """

    def __init__(self, executable: str, returncode: int):
        super().__init__(
            f"{executable} download file exited with error status: {returncode}"
        )
        self.executable = executable
        self.returncode = returncode


class ArchiveFormatError(ScipFetchException, zipfile.BadZipFile):
    """
    Raised when a file handed to the unpacker is not a readable ZIP archive.
    """
