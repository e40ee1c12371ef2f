"""
Test doubles and archive builders shared by the scipfetch tests.
"""

import io
import pathlib
import struct
import zipfile
from typing import Dict, List, Optional

from scipfetch.fetcher import Fetcher, ProcessRunner


def make_zip(entries: Dict[str, bytes]) -> bytes:
    """Build an in-memory zip. Names ending in "/" become directory entries."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        for name, content in entries.items():
            if name.endswith("/"):
                archive.writestr(zipfile.ZipInfo(name), b"")
            else:
                archive.writestr(name, content)
    return buffer.getvalue()


def make_zip_with_method(name: str, content: bytes, method: int) -> bytes:
    """Build a single-entry stored zip, then rewrite its compression method in both headers."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_STORED) as archive:
        archive.writestr(name, content)
    data = bytearray(buffer.getvalue())

    local_header = data.find(b"PK\x03\x04")
    central_header = data.find(b"PK\x01\x02")
    struct.pack_into("<H", data, local_header + 8, method)
    struct.pack_into("<H", data, central_header + 10, method)
    return bytes(data)


class FakeRunner(ProcessRunner):
    """Records commands instead of spawning them."""

    def __init__(self, returncode: int = 0, error: Optional[OSError] = None):
        self.returncode = returncode
        self.error = error
        self.commands: List[List[str]] = []

    def run(self, args: List[str]) -> int:
        self.commands.append(list(args))
        if self.error is not None:
            raise self.error
        return self.returncode


class FakeFetcher(Fetcher):
    """Writes a prepared payload to the destination, as curl would."""

    def __init__(self, payload: bytes):
        self.payload = payload
        self.calls = []

    def fetch(self, url, destination) -> None:
        self.calls.append((url, pathlib.Path(destination)))
        pathlib.Path(destination).write_bytes(self.payload)
