"""
Fetcher for the SCIP archive.

This package handles:
1. Choosing the downloader executable for the declared build target
2. Building the downloader command line
3. Running the downloader and classifying its exit status
"""

from .fetcher import CurlFetcher, Fetcher, ProcessRunner

__all__ = ["CurlFetcher", "Fetcher", "ProcessRunner"]
