"""Scan a folder of inscription pages and write the ownership reports."""

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import polars as pl
from loguru import logger

from doginal_ownership import is_dry_run
from doginal_ownership.errors import DoginalOwnershipError
from doginal_ownership.step_2_download_pages import step_2_output_folder_path
from doginal_ownership.step_3_ingest_owner_pages import (
    DEFAULT_FILE_PREFIX,
    DEFAULT_FILE_SUFFIX,
    ingest_owner_pages,
)
from doginal_ownership.step_4_ownership_reports import (
    build_summary,
    calculate_ownership_stats,
    log_summary,
    render_reports,
    write_reports,
)


@dataclass(frozen=True)
class OwnershipResult:
    """Everything computed in one scan of the page folder."""

    df_owners: pl.DataFrame
    df_stats: pl.DataFrame
    summary: dict[str, Any]
    errors: list[dict[str, str]]


def process_doginal_directory(
    directory: Path,
    *,
    prefix: str = DEFAULT_FILE_PREFIX,
    suffix: str = DEFAULT_FILE_SUFFIX,
    strict_filenames: bool = False,
) -> OwnershipResult:
    """Scan `directory`, then write the three reports into it.

    Raises `DirectoryAccessError` if the folder can't be listed, and
    `OutputWriteError` if a report can't be written.
    """
    df_owners, errors = ingest_owner_pages(
        directory, prefix=prefix, suffix=suffix, strict_filenames=strict_filenames
    )

    df_stats = calculate_ownership_stats(df_owners)
    summary = build_summary(df_owners, df_stats)

    reports = render_reports(df_owners, df_stats, summary, errors)
    if is_dry_run():
        logger.info(f"Dry run mode: not writing {len(reports)} reports.")
    else:
        write_reports(reports, directory)

    log_summary(summary, error_count=len(errors))
    return OwnershipResult(
        df_owners=df_owners, df_stats=df_stats, summary=summary, errors=errors
    )


def main(argv: list[str] | None = None) -> None:
    """Run main entry point."""
    parser = argparse.ArgumentParser(
        description="Build ownership reports from downloaded inscription pages."
    )
    parser.add_argument(
        "directory",
        type=Path,
        nargs="?",
        default=step_2_output_folder_path,
        help="Folder of HTML pages. Reports are written here too.",
    )
    parser.add_argument("--prefix", default=DEFAULT_FILE_PREFIX)
    parser.add_argument("--suffix", default=DEFAULT_FILE_SUFFIX)
    parser.add_argument(
        "--strict-filenames",
        action="store_true",
        help="Abort on a page filename without a page number, instead of skipping.",
    )
    parser.add_argument("--log-file", type=Path, help="Also log to this file.")
    args = parser.parse_args(argv)

    if args.log_file:
        logger.add(args.log_file, rotation="10 MB")

    logger.info(f"Reading from directory: {args.directory.resolve()}")
    try:
        process_doginal_directory(
            args.directory,
            prefix=args.prefix,
            suffix=args.suffix,
            strict_filenames=args.strict_filenames,
        )
    except DoginalOwnershipError as e:
        logger.error(f"Fatal error: {e}")
        raise SystemExit(1) from e


if __name__ == "__main__":
    main()
