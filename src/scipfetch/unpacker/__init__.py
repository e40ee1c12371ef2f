"""
Archive unpacker.

This package handles:
1. Extracting ZIP archives held in memory, optionally collapsing their top-level directory
2. Detecting a single nested ZIP archive left by the first extraction
3. Extracting the nested archive into the install directory and removing it
"""

from .archive_unpacker import ArchiveUnpacker, extract_zip

__all__ = ["ArchiveUnpacker", "extract_zip"]
