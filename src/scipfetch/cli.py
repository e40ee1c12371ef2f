"""
Command line entry point: scipfetch URL EXTRACT_DIR
"""

import argparse
import logging
import sys
from typing import List, Optional

from scipfetch.download import download_and_extract_zip
from scipfetch.scipfetch_config import ScipFetchConfig
from scipfetch.scipfetch_exceptions import ScipFetchException
from scipfetch.scipfetch_logger import ScipFetchLogger


def _parse_args(argv: List[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="scipfetch", description="Download a SCIP zip archive and extract it"
    )
    p.add_argument("url", help="URL of the zip archive")
    p.add_argument("extract_dir", help="Directory to download into and extract into")
    p.add_argument(
        "--target-os",
        help="OS being built for (defaults to SCIPFETCH_TARGET_OS, CARGO_CFG_TARGET_OS, then the host)",
    )
    p.add_argument(
        "--cacert",
        help="CA bundle passed to curl (defaults to SCIPFETCH_HTTP_CAINFO or CARGO_HTTP_CAINFO)",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Log the curl command")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=level, format="%(message)s")

    try:
        config = ScipFetchConfig.from_env()
        overrides = {}
        if args.target_os:
            overrides["target_os"] = args.target_os
        if args.cacert:
            overrides["ca_bundle_path"] = args.cacert
        if overrides:
            config = ScipFetchConfig.from_dict({**config.model_dump(), **overrides})

        result = download_and_extract_zip(
            args.url,
            args.extract_dir,
            config=config,
            logger=ScipFetchLogger(level=level),
        )
    except (ScipFetchException, OSError) as e:
        print(f"scipfetch: error: {e}", file=sys.stderr)
        return 1

    print(result.install_path or result.extract_path)
    return 0
