"""
Downloads the SCIP archive and extracts it, including the archive nested inside it.
"""

import logging
import pathlib
from typing import Optional

from scipfetch.fetcher import CurlFetcher, Fetcher
from scipfetch.scipfetch_config import ScipFetchConfig
from scipfetch.scipfetch_logger import ScipFetchLogger
from scipfetch.scipfetch_types import InstallResult
from scipfetch.unpacker import ArchiveUnpacker


def download_and_extract_zip(
    url: str,
    extract_path,
    config: Optional[ScipFetchConfig] = None,
    logger: Optional[ScipFetchLogger] = None,
    fetcher: Optional[Fetcher] = None,
    unpacker: Optional[ArchiveUnpacker] = None,
) -> InstallResult:
    """
    Download the ZIP archive at url into extract_path and extract it there.

    The archive is saved as extract_path/<config.archive_name> and is kept after extraction.
    If the extraction leaves a single nested ZIP archive, that archive is flattened into
    extract_path/<config.install_dir_name> and then deleted.

    Args:
        url: URL of the ZIP archive
        extract_path: Directory receiving the archive and its contents, created if missing
        config: Defaults to ScipFetchConfig.from_env()
        logger: Defaults to a fresh ScipFetchLogger
        fetcher: Defaults to a CurlFetcher built from config
        unpacker: Defaults to an ArchiveUnpacker built from config

    Returns:
        InstallResult describing where the files were written

    Raises:
        ScipFetchException: the download or the archive failed
        OSError: a filesystem operation failed
    """
    if config is None:
        config = ScipFetchConfig.from_env()
    if logger is None:
        logger = ScipFetchLogger()
    if fetcher is None:
        fetcher = CurlFetcher(config, logger)
    if unpacker is None:
        unpacker = ArchiveUnpacker(config, logger)

    target_dir = pathlib.Path(extract_path)
    zip_path = target_dir / config.archive_name

    try:
        target_dir.mkdir(parents=True, exist_ok=True)

        logger.log(f"Downloading from {url}", logging.INFO)
        fetcher.fetch(url, zip_path)

        logger.log(f"Downloaded to {zip_path}", logging.INFO)
        logger.log(f"Extracting to {target_dir}", logging.INFO)
        install_path = unpacker.unpack(zip_path, target_dir)
    except Exception as e:
        logger.log(f"Failed to download and extract {url}: {e}", logging.ERROR)
        raise

    return InstallResult(
        url=url,
        archive_path=zip_path,
        extract_path=target_dir,
        install_path=install_path,
    )
