"""Tools for building ownership reports over a batch of Doginal inscriptions."""

import os

from loguru import logger


def is_dry_run() -> bool:
    """Return True if reports should be computed and logged, but not written.

    Set with the environment variable DRY_RUN=true, to preview an ownership scan
    without overwriting the previous reports in the page folder.
    """
    dry_run: bool = os.getenv("DRY_RUN", "").lower() == "true"
    if dry_run:
        logger.info("⚠️ Running in DRY RUN mode. No report files will be written.")
    return dry_run
