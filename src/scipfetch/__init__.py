"""
scipfetch downloads the SCIP library archive at build time and unpacks it.

Typical use from a build script:

    from scipfetch import download_and_extract_zip

    result = download_and_extract_zip(url, "/path/to/out")
    print(result.install_path)
"""

from .download import download_and_extract_zip
from .fetcher import CurlFetcher, Fetcher, ProcessRunner
from .scipfetch_config import ScipFetchConfig, TargetOS
from .scipfetch_exceptions import (
    ArchiveFormatError,
    ConfigurationError,
    DownloadError,
    ScipFetchException,
    ToolNotFoundError,
)
from .scipfetch_logger import ScipFetchLogger
from .scipfetch_types import InstallResult
from .unpacker import ArchiveUnpacker, extract_zip

__all__ = [
    "download_and_extract_zip",
    # Components
    "Fetcher",
    "CurlFetcher",
    "ProcessRunner",
    "ArchiveUnpacker",
    "extract_zip",
    # Configuration and results
    "ScipFetchConfig",
    "TargetOS",
    "ScipFetchLogger",
    "InstallResult",
    # Errors
    "ScipFetchException",
    "ConfigurationError",
    "ToolNotFoundError",
    "DownloadError",
    "ArchiveFormatError",
]
