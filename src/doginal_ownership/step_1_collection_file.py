"""Step 1: Convert a list of doggy.market URLs into the collection manifest."""

from pathlib import Path

import orjson
from loguru import logger

from doginal_ownership.errors import CollectionSizeError, DuplicateInscriptionError
from doginal_ownership.util import dump_json_bytes

INSCRIPTION_URL_PREFIX = "https://doggy.market/inscription/"
EXPECTED_COLLECTION_SIZE = 420

default_input_file_path = Path("./bat/child_inscription_links.txt")
default_output_file_path = Path("./bat/inscriptions.json")


def load_inscription_urls(text: str) -> list[str]:
    """Return the non-empty inscription URL lines of `text`, in order."""
    lines = (line.strip() for line in text.split("\n"))
    return [line for line in lines if line and line.startswith(INSCRIPTION_URL_PREFIX)]


def build_collection_manifest(
    urls: list[str],
    *,
    expected_size: int = EXPECTED_COLLECTION_SIZE,
    name_prefix: str = "Doginal Bat #",
) -> list[dict[str, str]]:
    """Build the `{inscriptionId, name}` manifest from inscription URLs.

    Extra URLs past `expected_size` are dropped. Fewer URLs is an error.
    """
    if len(urls) > expected_size:
        logger.info(
            f"Found {len(urls):,} URLs. Only processing the first {expected_size:,}."
        )
        urls = urls[:expected_size]
    elif len(urls) < expected_size:
        msg = (
            f"Invalid number of inscriptions. Expected {expected_size}, "
            f"got {len(urls)}"
        )
        raise CollectionSizeError(msg)

    manifest = [
        {
            "inscriptionId": url.rstrip("/").split("/")[-1].strip(),
            "name": f"{name_prefix}{idx}",
        }
        for idx, url in enumerate(urls, start=1)
    ]

    unique_ids = {entry["inscriptionId"] for entry in manifest}
    if len(unique_ids) != len(manifest):
        msg = "Duplicate inscription IDs found"
        raise DuplicateInscriptionError(msg)

    return manifest


def load_manifest(manifest_path: Path) -> list[dict[str, str]]:
    """Load a manifest written by step 1 or step 1b."""
    return orjson.loads(manifest_path.read_bytes())


def main(
    input_file_path: Path = default_input_file_path,
    output_file_path: Path = default_output_file_path,
) -> None:
    """Write the collection manifest for the URL list file."""
    logger.info(f"Starting {Path(__file__).name} main()")

    urls = load_inscription_urls(input_file_path.read_text(encoding="utf-8"))
    manifest = build_collection_manifest(urls)

    output_file_path.parent.mkdir(parents=True, exist_ok=True)
    output_file_path.write_bytes(dump_json_bytes(manifest))

    logger.info(f"Successfully processed {len(manifest):,} inscriptions")
    logger.info(f"Output written to {output_file_path}")


if __name__ == "__main__":
    main()
