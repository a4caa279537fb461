"""Step 3: Ingest the downloaded inscription pages from Step 2.

Each page holds the current owner's address in a `<dt>Address</dt><dd>...</dd>`
pair. The page number in the filename gives the inscription ID and the scan order.
"""

import re
from pathlib import Path
from typing import Any

import dataframely as dy
import polars as pl
from bs4 import BeautifulSoup, Tag
from loguru import logger

from doginal_ownership.errors import (
    DirectoryAccessError,
    DocumentParseError,
    MalformedFilenameError,
)

DEFAULT_FILE_PREFIX = "Doginal_Bat_#"
DEFAULT_FILE_SUFFIX = ".html"
OWNER_LABEL = "address"
PROGRESS_LOG_INTERVAL = 100


class DySchemaDoginalOwners(dy.Schema):
    """Schema for the per-inscription owner table."""

    id = dy.String(primary_key=True, nullable=False, min_length=2)
    address = dy.String(nullable=True, min_length=1)


def parse_page_number(filename: str, *, prefix: str, suffix: str) -> str:
    """Return the numeric token between `prefix` and `suffix`, as written.

    The token is kept as a string so that "07" and "7" stay distinct IDs.
    """
    token = filename.removeprefix(prefix).removesuffix(suffix)
    if not re.fullmatch(r"\d+", token):
        msg = f"No page number in filename: {filename}"
        raise MalformedFilenameError(msg)
    return token


def discover_page_files(
    directory: Path,
    *,
    prefix: str = DEFAULT_FILE_PREFIX,
    suffix: str = DEFAULT_FILE_SUFFIX,
    strict_filenames: bool = False,
) -> tuple[list[tuple[str, Path]], list[dict[str, str]]]:
    """List the page files in `directory`, sorted by page number.

    Returns `(pages, errors)`, where `pages` is a list of `(id, path)` and `errors`
    holds one record per skipped malformed filename. In strict mode a malformed
    filename raises instead.
    """
    try:
        filenames = sorted(entry.name for entry in directory.iterdir())
    except OSError as e:
        msg = f"Cannot list directory {directory}: {e}"
        raise DirectoryAccessError(msg) from e

    numbered: list[tuple[int, str, str]] = []
    errors: list[dict[str, str]] = []
    for filename in filenames:
        if not (filename.startswith(prefix) and filename.endswith(suffix)):
            continue
        try:
            token = parse_page_number(filename, prefix=prefix, suffix=suffix)
        except MalformedFilenameError as e:
            if strict_filenames:
                raise
            logger.warning(f"Skipping {filename}: {e}")
            errors.append({"file": filename, "error": str(e)})
            continue
        numbered.append((int(token), filename, token))

    # Numeric order, so that #2 comes before #10.
    numbered.sort(key=lambda x: (x[0], x[1]))

    pages = [(f"#{token}", directory / filename) for _, filename, token in numbered]
    return pages, errors


def extract_owner_address(html_content: str) -> str | None:
    """Extract the owner's address from an inscription page.

    Returns None when the page has no address, or an empty one.

    Has unit test.
    """
    if not html_content.strip():
        msg = "HTML content cannot be empty"
        raise DocumentParseError(msg)

    soup = BeautifulSoup(html_content, "html.parser")
    label_element = soup.find(
        lambda tag: tag.name == "dt" and tag.get_text().strip().lower() == OWNER_LABEL
    )
    if label_element is None:
        return None

    value_element = label_element.find_next_sibling()
    if not isinstance(value_element, Tag) or value_element.name != "dd":
        return None

    return value_element.get_text().strip() or None


def _read_page(page_path: Path) -> str:
    try:
        return page_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        msg = f"Could not read {page_path.name}: {e}"
        raise DocumentParseError(msg) from e


def ingest_owner_pages(
    directory: Path,
    *,
    prefix: str = DEFAULT_FILE_PREFIX,
    suffix: str = DEFAULT_FILE_SUFFIX,
    strict_filenames: bool = False,
) -> tuple[pl.DataFrame, list[dict[str, str]]]:
    """Scan `directory` and return the owner table and the error log.

    One row per page, in page number order. A page that fails to parse still gets
    a row (with a null address) plus an entry in the error log.
    """
    pages, errors = discover_page_files(
        directory, prefix=prefix, suffix=suffix, strict_filenames=strict_filenames
    )
    logger.info(f"Found {len(pages):,} HTML files to process in {directory}")

    data: list[dict[str, Any]] = []
    for page_id, page_path in pages:
        address: str | None = None
        try:
            address = extract_owner_address(_read_page(page_path))
        except DocumentParseError as e:
            errors.append({"file": page_path.name, "error": str(e)})
            logger.error(f"Error processing {page_path.name}: {e}")

        data.append({"id": page_id, "address": address})
        logger.debug(f"Ingested {page_id}: {address}")

        if len(data) % PROGRESS_LOG_INTERVAL == 0:
            logger.info(f"Processed {len(data):,} files...")

    df = pl.DataFrame(data, schema={"id": pl.String, "address": pl.String})
    df = DySchemaDoginalOwners.validate(df, cast=True)

    return df, errors
