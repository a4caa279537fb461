"""Step 4: Aggregate the owner table into ownership statistics and reports."""

from pathlib import Path
from typing import Any

import polars as pl
from loguru import logger

from doginal_ownership.util import dump_json_bytes, write_bytes_atomic

TOP_OWNERS_COUNT = 10

OWNERS_REPORT_FILENAME = "bat_owners.json"
STATISTICS_REPORT_FILENAME = "bat_ownership_statistics.json"
COUNTS_REPORT_FILENAME = "bat_ownership_counts.json"


def calculate_ownership_stats(df_owners: pl.DataFrame) -> pl.DataFrame:
    """Group the owner table by address, most inscriptions first.

    Owners with the same count keep the order in which they were first seen, and
    `ownedIds` keeps the scan order of the input rows.

    Has unit test.
    """
    return (
        df_owners.filter(pl.col("address").is_not_null())
        .group_by("address", maintain_order=True)
        .agg(
            count=pl.len().cast(pl.Int64),
            ownedIds=pl.col("id"),
        )
        .sort("count", descending=True, maintain_order=True)
    )


def calculate_ownership_distribution(df_stats: pl.DataFrame) -> dict[str, int]:
    """Bucket owners by how many inscriptions they hold."""
    count = pl.col("count")
    return df_stats.select(
        singleOwners=(count == 1).sum(),
        **{
            "2-5": count.is_between(2, 5).sum(),
            "6-10": count.is_between(6, 10).sum(),
            "11-20": count.is_between(11, 20).sum(),
            "21+": (count > 20).sum(),  # noqa: PLR2004
        },
    ).row(0, named=True)


def build_summary(df_owners: pl.DataFrame, df_stats: pl.DataFrame) -> dict[str, Any]:
    """Build the summary block of the statistics report."""
    return {
        "totalDoginals": df_owners.height,
        "uniqueOwners": df_stats.height,
        "topOwners": df_stats.head(TOP_OWNERS_COUNT).to_dicts(),
        "ownershipDistribution": calculate_ownership_distribution(df_stats),
    }


def render_reports(
    df_owners: pl.DataFrame,
    df_stats: pl.DataFrame,
    summary: dict[str, Any],
    errors: list[dict[str, str]],
) -> dict[str, bytes]:
    """Render all three report files, keyed by filename.

    The counts file has one `address,count` line per owner, with no trailing
    newline.
    """
    counts_lines = [
        f"{address},{count}"
        for address, count in df_stats.select("address", "count").iter_rows()
    ]
    return {
        OWNERS_REPORT_FILENAME: dump_json_bytes(
            {
                "totalProcessed": df_owners.height,
                "errors": errors,
                "owners": df_owners.to_dicts(),
            }
        ),
        STATISTICS_REPORT_FILENAME: dump_json_bytes(
            {
                "summary": summary,
                "ownershipStats": df_stats.to_dicts(),
            }
        ),
        COUNTS_REPORT_FILENAME: "\n".join(counts_lines).encode(),
    }


def write_reports(reports: dict[str, bytes], output_folder: Path) -> None:
    """Write each report atomically, one after the other."""
    for filename, content in reports.items():
        write_bytes_atomic(output_folder / filename, content)
        logger.debug(f"Wrote {len(content):,} bytes to {filename}")


def log_summary(summary: dict[str, Any], *, error_count: int) -> None:
    """Log a human-readable digest of the summary."""
    logger.info(f"Successfully processed: {summary['totalDoginals']:,} files")
    logger.info(f"Errors encountered: {error_count:,} files")
    logger.info(f"Total Unique Owners: {summary['uniqueOwners']:,}")

    for idx, owner in enumerate(summary["topOwners"], start=1):
        logger.info(
            f"Top owner {idx}. Address: {owner['address'][:10]}... "
            f"Owned: {owner['count']} Doginals"
        )

    for bucket, owner_count in summary["ownershipDistribution"].items():
        logger.info(f"Distribution {bucket}: {owner_count} owners")
