"""Tests for step_4_ownership_reports.py."""

import orjson
import polars as pl

from doginal_ownership.step_4_ownership_reports import (
    COUNTS_REPORT_FILENAME,
    OWNERS_REPORT_FILENAME,
    STATISTICS_REPORT_FILENAME,
    build_summary,
    calculate_ownership_distribution,
    calculate_ownership_stats,
    render_reports,
)


def _owners_df(addresses: list[str | None]) -> pl.DataFrame:
    return pl.DataFrame(
        {
            "id": [f"#{idx}" for idx in range(1, len(addresses) + 1)],
            "address": addresses,
        },
        schema={"id": pl.String, "address": pl.String},
    )


def test_calculate_ownership_stats() -> None:
    """Test the calculate_ownership_stats() function."""
    df = _owners_df(["A", "B", "A"])

    df_stats = calculate_ownership_stats(df)

    assert df_stats.to_dicts() == [
        {"address": "A", "count": 2, "ownedIds": ["#1", "#3"]},
        {"address": "B", "count": 1, "ownedIds": ["#2"]},
    ]


def test_calculate_ownership_stats_ties_keep_first_seen_order() -> None:
    """Owners with equal counts stay in the order they were first seen."""
    df = _owners_df(["C", "A", "B", "A", None, "B", "C", "D"])

    df_stats = calculate_ownership_stats(df)

    assert df_stats["address"].to_list() == ["C", "A", "B", "D"]
    assert df_stats["count"].to_list() == [2, 2, 2, 1]
    # Null addresses are never counted.
    assert df_stats["count"].sum() == 7  # noqa: PLR2004


def test_calculate_ownership_stats_case_sensitive() -> None:
    """Addresses are grouped by exact string."""
    df = _owners_df(["Dabc", "DABC"])

    df_stats = calculate_ownership_stats(df)

    assert df_stats["address"].to_list() == ["Dabc", "DABC"]


def test_calculate_ownership_distribution() -> None:
    """Buckets partition the owners exactly."""
    addresses: list[str | None] = []
    owner_counts = [("a", 1), ("b", 2), ("c", 5), ("d", 6), ("e", 11), ("f", 21)]
    for address, count in owner_counts:
        addresses.extend([address] * count)
    df_stats = calculate_ownership_stats(_owners_df(addresses))

    distribution = calculate_ownership_distribution(df_stats)

    assert distribution == {
        "singleOwners": 1,
        "2-5": 2,
        "6-10": 1,
        "11-20": 1,
        "21+": 1,
    }
    assert sum(distribution.values()) == df_stats.height


def test_build_summary_top_owners() -> None:
    """Only the first ten owners are listed in the summary."""
    addresses: list[str | None] = [f"owner_{idx:02d}" for idx in range(15)]
    df = _owners_df(addresses)
    df_stats = calculate_ownership_stats(df)

    summary = build_summary(df, df_stats)

    assert summary["totalDoginals"] == 15  # noqa: PLR2004
    assert summary["uniqueOwners"] == 15  # noqa: PLR2004
    assert [owner["address"] for owner in summary["topOwners"]] == [
        f"owner_{idx:02d}" for idx in range(10)
    ]


def test_build_summary_empty() -> None:
    """An empty scan has an all-zero summary."""
    df = _owners_df([])
    df_stats = calculate_ownership_stats(df)

    summary = build_summary(df, df_stats)

    assert summary == {
        "totalDoginals": 0,
        "uniqueOwners": 0,
        "topOwners": [],
        "ownershipDistribution": {
            "singleOwners": 0,
            "2-5": 0,
            "6-10": 0,
            "11-20": 0,
            "21+": 0,
        },
    }


def test_render_reports() -> None:
    """Test the render_reports() function."""
    df = _owners_df(["A", "B", "A", None])
    df_stats = calculate_ownership_stats(df)
    summary = build_summary(df, df_stats)
    errors = [{"file": "Doginal_Bat_#4.html", "error": "HTML content cannot be empty"}]

    reports = render_reports(df, df_stats, summary, errors)

    assert reports[COUNTS_REPORT_FILENAME] == b"A,2\nB,1"

    owners_report = orjson.loads(reports[OWNERS_REPORT_FILENAME])
    assert owners_report["totalProcessed"] == 4  # noqa: PLR2004
    assert owners_report["errors"] == errors
    assert owners_report["owners"][3] == {"id": "#4", "address": None}

    statistics_report = orjson.loads(reports[STATISTICS_REPORT_FILENAME])
    assert statistics_report["summary"]["uniqueOwners"] == 2  # noqa: PLR2004
    assert statistics_report["ownershipStats"][0] == {
        "address": "A",
        "count": 2,
        "ownedIds": ["#1", "#3"],
    }
