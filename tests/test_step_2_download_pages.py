"""Tests for step_2_download_pages.py."""

from pathlib import Path

import pytest
import requests

from doginal_ownership import step_2_download_pages
from doginal_ownership.step_2_download_pages import download_pages, page_filename


def test_page_filename() -> None:
    """Test the page_filename() function."""
    assert page_filename("Doginal Bat #7") == "Doginal_Bat_#7.html"
    assert page_filename("Doginal  Megaphone\t#12") == "Doginal_Megaphone_#12.html"


def test_download_pages(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Pages are fetched in order, failures are skipped, and calls are paced."""
    requested_urls: list[str] = []
    sleeps: list[float] = []

    def fake_download(url: str) -> bytes:
        requested_urls.append(url)
        if url.endswith("bad"):
            msg = "404 Client Error"
            raise requests.exceptions.HTTPError(msg)
        return b"<html>" + url.encode() + b"</html>"

    monkeypatch.setattr(step_2_download_pages, "download_as_bytes", fake_download)
    monkeypatch.setattr(step_2_download_pages.time, "sleep", sleeps.append)

    manifest = [
        {"inscriptionId": "aaai0", "name": "Doginal Bat #1"},
        {"inscriptionId": "bad", "name": "Doginal Bat #2"},
        {"inscriptionId": "ccci0", "name": "Doginal Bat #3"},
    ]
    success_count = download_pages(manifest, tmp_path, delay_sec=1.0)

    assert success_count == 2  # noqa: PLR2004
    assert requested_urls == [
        "https://wonky-ord.dogeord.io/shibescription/aaai0",
        "https://wonky-ord.dogeord.io/shibescription/bad",
        "https://wonky-ord.dogeord.io/shibescription/ccci0",
    ]
    assert sleeps == [1.0, 1.0]  # No pause after the last page.
    assert sorted(path.name for path in tmp_path.iterdir()) == [
        "Doginal_Bat_#1.html",
        "Doginal_Bat_#3.html",
    ]
