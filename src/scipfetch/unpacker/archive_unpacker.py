"""
Archive unpacker implementation.

Extracts the downloaded ZIP archive and the optional ZIP archive nested inside it.
"""

import io
import logging
import os
import pathlib
import shutil
import stat
import zipfile
import zlib
from typing import List, Optional, Union

from scipfetch.scipfetch_config import ScipFetchConfig
from scipfetch.scipfetch_exceptions import ArchiveFormatError
from scipfetch.scipfetch_logger import ScipFetchLogger

PathLike = Union[str, "os.PathLike[str]"]


def _member_parts(name: str) -> List[str]:
    """
    Splits an archive member name into safe path components.

    Roots, drive letters, "." and ".." are dropped so the member stays inside the target directory.
    """
    parts = []
    for part in name.replace("\\", "/").split("/"):
        if part in ("", ".", ".."):
            continue
        if len(part) >= 2 and part[1] == ":" and not parts:
            # drive letter, e.g. "C:"
            part = part[2:]
            if not part:
                continue
        parts.append(part)
    return parts


def _has_toplevel(members: List[zipfile.ZipInfo]) -> bool:
    """
    True when the archive holds at least two entries that all live under one top-level component.
    """
    if len(members) < 2:
        return False

    toplevel = None
    for member in members:
        parts = _member_parts(member.filename)
        if not parts:
            return False
        if toplevel is None:
            toplevel = parts[0]
        elif parts[0] != toplevel:
            return False
    return True


def _apply_permissions(path: pathlib.Path, member: zipfile.ZipInfo) -> None:
    mode = (member.external_attr >> 16) & 0o7777
    if mode and os.name == "posix":
        os.chmod(path, stat.S_IMODE(mode))


def extract_zip(data: bytes, target_dir: PathLike, flatten: bool) -> None:
    """
    Extract an in-memory ZIP archive into target_dir, creating the directory if needed.

    Args:
        data: The complete archive bytes
        target_dir: Directory receiving the archive contents
        flatten: Collapse the archive's single top-level directory, if it has one

    Raises:
        ArchiveFormatError: data is not a readable ZIP archive. Nothing is written in that case.
    """
    try:
        archive = zipfile.ZipFile(io.BytesIO(data))
    except zipfile.BadZipFile as e:
        raise ArchiveFormatError(f"Not a valid zip archive: {e}") from e

    target = pathlib.Path(target_dir)
    with archive:
        members = archive.infolist()
        strip = 1 if flatten and _has_toplevel(members) else 0

        target.mkdir(parents=True, exist_ok=True)
        for member in members:
            parts = _member_parts(member.filename)[strip:]
            if not parts:
                continue

            out_path = target.joinpath(*parts)
            if member.is_dir():
                out_path.mkdir(parents=True, exist_ok=True)
                continue

            out_path.parent.mkdir(parents=True, exist_ok=True)
            try:
                with archive.open(member) as src, open(out_path, "wb") as dst:
                    shutil.copyfileobj(src, dst)
            except (
                zipfile.BadZipFile,
                zlib.error,
                NotImplementedError,
                RuntimeError,
                EOFError,
            ) as e:
                raise ArchiveFormatError(
                    f"Failed to extract {member.filename}: {e}"
                ) from e
            _apply_permissions(out_path, member)


class ArchiveUnpacker:
    """
    Extracts a downloaded archive and, when it contains nothing but another ZIP archive,
    extracts that one too.
    """

    def __init__(self, config: ScipFetchConfig, logger: ScipFetchLogger):
        self.config = config
        self.logger = logger

    def unpack(
        self, archive_path: PathLike, target_dir: PathLike
    ) -> Optional[pathlib.Path]:
        """
        Extract archive_path into target_dir, then handle a nested archive.

        Args:
            archive_path: ZIP file on disk, read fully into memory
            target_dir: Directory receiving the contents, created if missing

        Returns:
            The install directory holding the nested archive's contents, or None if there was no nested archive
        """
        archive_path = pathlib.Path(archive_path)
        extract_zip(archive_path.read_bytes(), target_dir, flatten=False)
        return self.extract_nested(target_dir, exclude=archive_path)

    def find_nested_archive(
        self, target_dir: PathLike, exclude: Optional[PathLike] = None
    ) -> Optional[pathlib.Path]:
        """
        Returns the only entry of target_dir if it is a ".zip" file, otherwise None.

        The extension check is case sensitive. exclude, usually the downloaded archive itself,
        does not count as an entry.
        """
        excluded = pathlib.Path(exclude).resolve() if exclude is not None else None
        entries = [
            entry
            for entry in pathlib.Path(target_dir).iterdir()
            if excluded is None or entry.resolve() != excluded
        ]

        if len(entries) != 1:
            return None
        if entries[0].suffix != ".zip":
            return None
        return entries[0]

    def extract_nested(
        self, target_dir: PathLike, exclude: Optional[PathLike] = None
    ) -> Optional[pathlib.Path]:
        """
        Flatten a single nested ZIP archive into the install directory and delete it.

        Returns:
            The install directory, or None if target_dir does not hold a single nested archive
        """
        nested = self.find_nested_archive(target_dir, exclude=exclude)
        if nested is None:
            return None

        self.logger.log("Found nested zip file, extracting again", logging.INFO)
        install_dir = pathlib.Path(target_dir) / self.config.install_dir_name
        extract_zip(nested.read_bytes(), install_dir, flatten=True)
        nested.unlink()
        return install_dir
