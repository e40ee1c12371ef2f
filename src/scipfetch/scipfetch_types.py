"""
Result types returned by scipfetch.
"""

import pathlib
from typing import Optional

from pydantic import BaseModel, Field


class InstallResult(BaseModel):
    """
    Where a download_and_extract_zip call left its files.
    """

    url: str = Field(..., description="URL the archive was downloaded from")
    archive_path: pathlib.Path = Field(..., description="Downloaded archive, kept on disk")
    extract_path: pathlib.Path = Field(..., description="Directory the archive was extracted into")
    install_path: Optional[pathlib.Path] = Field(
        None, description="Directory holding the flattened nested archive, if there was one"
    )

    @property
    def nested(self) -> bool:
        """True when a nested archive was found and flattened into install_path."""
        return self.install_path is not None
