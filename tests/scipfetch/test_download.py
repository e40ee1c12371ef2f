"""
End-to-end tests for download_and_extract_zip with the downloader replaced by fakes.
"""

import pathlib

import pytest

from scipfetch import download_and_extract_zip
from scipfetch.fetcher import CurlFetcher
from scipfetch.scipfetch_config import ScipFetchConfig
from scipfetch.scipfetch_exceptions import ArchiveFormatError, DownloadError
from tests.scipfetch.helpers import FakeFetcher, FakeRunner, make_zip

URL = "https://example.test/libscip.zip"


class TestDownloadAndExtractZip:
    """Tests for the download, extract and nested-flatten sequence."""

    def test_nested_archive_scenario(self, tmp_path, linux_config, logger):
        """Test that a download holding only inner.zip ends with scip_install/a.txt."""
        inner = make_zip({"a.txt": b"original contents"})
        fetcher = FakeFetcher(make_zip({"inner.zip": inner}))

        result = download_and_extract_zip(
            URL, tmp_path, config=linux_config, logger=logger, fetcher=fetcher
        )

        assert fetcher.calls == [(URL, tmp_path / "libscip.zip")]
        assert (tmp_path / "libscip.zip").exists()
        assert not (tmp_path / "inner.zip").exists()
        assert (tmp_path / "scip_install" / "a.txt").read_bytes() == b"original contents"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["libscip.zip", "scip_install"]

        assert result.nested
        assert result.install_path == tmp_path / "scip_install"
        assert result.archive_path == tmp_path / "libscip.zip"
        assert result.extract_path == tmp_path

    def test_plain_archive_is_extracted_in_place(self, tmp_path, linux_config, logger):
        """Test that an archive without a nested zip is extracted directly."""
        fetcher = FakeFetcher(make_zip({"lib/libscip.so": b"so", "include/scip.h": b"h"}))

        result = download_and_extract_zip(
            URL, tmp_path, config=linux_config, logger=logger, fetcher=fetcher
        )

        assert not result.nested
        assert result.install_path is None
        assert (tmp_path / "lib" / "libscip.so").read_bytes() == b"so"
        assert (tmp_path / "libscip.zip").exists()
        assert not (tmp_path / "scip_install").exists()

    def test_creates_extract_path(self, tmp_path, linux_config, logger):
        """Test that a missing extraction directory is created."""
        target = tmp_path / "out" / "scip"
        fetcher = FakeFetcher(make_zip({"a.txt": b"A"}))
        download_and_extract_zip(URL, target, config=linux_config, logger=logger, fetcher=fetcher)
        assert (target / "a.txt").exists()

    def test_custom_archive_and_install_names(self, tmp_path, logger):
        """Test that configured archive and install directory names are used."""
        config = ScipFetchConfig.from_dict(
            {"targetOs": "linux", "archiveName": "dl.zip", "installDirName": "install"}
        )
        fetcher = FakeFetcher(make_zip({"inner.zip": make_zip({"a.txt": b"A"})}))
        result = download_and_extract_zip(URL, tmp_path, config=config, logger=logger, fetcher=fetcher)
        assert (tmp_path / "dl.zip").exists()
        assert result.install_path == tmp_path / "install"
        assert (tmp_path / "install" / "a.txt").exists()

    def test_download_failure_stops_before_extraction(self, tmp_path, linux_config, logger):
        """Test that a failed curl run leaves the directory untouched."""
        fetcher = CurlFetcher(linux_config, logger, FakeRunner(returncode=6))
        with pytest.raises(DownloadError):
            download_and_extract_zip(URL, tmp_path, config=linux_config, logger=logger, fetcher=fetcher)
        assert list(tmp_path.iterdir()) == []

    def test_corrupt_download_raises_archive_error(self, tmp_path, linux_config, logger):
        """Test that a non-zip download raises ArchiveFormatError and keeps only the download."""
        fetcher = FakeFetcher(b"<html>not found</html>")
        with pytest.raises(ArchiveFormatError):
            download_and_extract_zip(URL, tmp_path, config=linux_config, logger=logger, fetcher=fetcher)
        assert [p.name for p in tmp_path.iterdir()] == ["libscip.zip"]

    def test_curl_command_targets_archive_path(self, tmp_path, linux_config, logger):
        """Test that curl is asked to write to extract_path/libscip.zip."""
        runner = FakeRunner()
        fetcher = CurlFetcher(linux_config, logger, runner)
        # curl is faked, so nothing is written and reading the archive fails
        with pytest.raises(FileNotFoundError):
            download_and_extract_zip(URL, tmp_path, config=linux_config, logger=logger, fetcher=fetcher)
        assert runner.commands == [
            ["curl", "-sSL", "-o", str(pathlib.Path(tmp_path) / "libscip.zip"), URL]
        ]

    def test_logs_status_lines(self, tmp_path, linux_config, logger, caplog):
        """Test that the source, download target, extraction target and nested step are logged."""
        fetcher = FakeFetcher(make_zip({"inner.zip": make_zip({"a.txt": b"A"})}))
        with caplog.at_level("INFO", logger="scipfetch"):
            download_and_extract_zip(URL, tmp_path, config=linux_config, logger=logger, fetcher=fetcher)
        text = caplog.text
        assert f"Downloading from {URL}" in text
        assert "Downloaded to" in text
        assert "Extracting to" in text
        assert "Found nested zip file, extracting again" in text
