"""Step 2: Download the explorer HTML page of each inscription in the manifest."""

import re
import time
from pathlib import Path

import requests
from loguru import logger
from tqdm import tqdm

from doginal_ownership.step_1_collection_file import (
    default_output_file_path as step_1_manifest_path,
)
from doginal_ownership.step_1_collection_file import load_manifest
from doginal_ownership.util import download_as_bytes

INSCRIPTION_PAGE_URL = "https://wonky-ord.dogeord.io/shibescription/{inscription_id}"
DOWNLOAD_DELAY_SEC = 1.0

step_2_output_folder_path = Path("./doginal_html")


def page_filename(inscription_name: str) -> str:
    """Return the HTML filename for an inscription name.

    Example: "Doginal Bat #7" -> "Doginal_Bat_#7.html".
    """
    return re.sub(r"\s+", "_", inscription_name) + ".html"


def download_pages(
    manifest: list[dict[str, str]],
    output_folder: Path,
    *,
    delay_sec: float = DOWNLOAD_DELAY_SEC,
) -> int:
    """Download each page in order, pausing between requests.

    A failed download is logged and skipped. Returns the number of pages written.
    """
    output_folder.mkdir(parents=True, exist_ok=True)

    success_count = 0
    for idx, inscription in enumerate(
        tqdm(manifest, unit="page", desc="Downloading inscription pages")
    ):
        url = INSCRIPTION_PAGE_URL.format(inscription_id=inscription["inscriptionId"])
        output_path = output_folder / page_filename(inscription["name"])

        try:
            html_content = download_as_bytes(url)
        except requests.exceptions.RequestException as e:
            logger.error(f"Error downloading {inscription['name']}: {e}")
        else:
            output_path.write_bytes(html_content)
            success_count += 1
            logger.debug(f"Wrote {len(html_content):,} bytes to {output_path.name}")

        if idx < len(manifest) - 1:
            time.sleep(delay_sec)

    return success_count


def main(
    manifest_path: Path = step_1_manifest_path,
    output_folder: Path = step_2_output_folder_path,
) -> None:
    """Download all inscription pages listed in the manifest."""
    logger.info(f"Starting {Path(__file__).name} main()")

    manifest = load_manifest(manifest_path)
    logger.info(f"Total Doginals to process: {len(manifest):,}")

    success_count = download_pages(manifest, output_folder)

    logger.info(f"Downloaded {success_count:,}/{len(manifest):,} pages.")
    logger.info(f"Finished {Path(__file__).name} main()")


if __name__ == "__main__":
    main()
