"""Step 1b: Build a manifest from the inscription tool's mint log.

Alternative to step 1, for collections minted by us rather than listed on a
marketplace.
"""

import re
from pathlib import Path

from loguru import logger

from doginal_ownership.errors import CollectionSizeError
from doginal_ownership.util import dump_json_bytes

SUCCESS_MARKER = "Success - Inscription"
EXPECTED_MINT_COUNT = 1337

_txid_pattern = re.compile(r"TXID: ([a-f0-9]{64})")

default_mint_log_path = Path("./mint_log.txt")
default_output_file_path = Path("./megaphone_inscriptions.json")


def parse_mint_log(
    log_text: str,
    *,
    expected_count: int | None = EXPECTED_MINT_COUNT,
    name_prefix: str = "Doginal Megaphone #",
) -> list[dict[str, str]]:
    """Extract the successful inscriptions from a mint log.

    Every success line advances the numbering, even if its TXID can't be read, so
    names stay aligned with the mint order.

    Has unit test.
    """
    inscriptions: list[dict[str, str]] = []
    success_count = 0

    for line in log_text.split("\n"):
        if SUCCESS_MARKER not in line:
            continue

        success_count += 1
        match = _txid_pattern.search(line)
        if match is None:
            logger.warning(f"No TXID on success line #{success_count}: {line!r}")
            continue

        inscriptions.append(
            {
                "inscriptionId": f"{match.group(1)}i0",
                "name": f"{name_prefix}{success_count}",
            }
        )

    if expected_count is not None and success_count != expected_count:
        msg = f"Expected {expected_count} inscriptions, found {success_count}"
        raise CollectionSizeError(msg)

    return inscriptions


def main(
    mint_log_path: Path = default_mint_log_path,
    output_file_path: Path = default_output_file_path,
) -> None:
    """Write the manifest of successful mints."""
    inscriptions = parse_mint_log(mint_log_path.read_text(encoding="utf-8"))

    output_file_path.write_bytes(dump_json_bytes(inscriptions))
    logger.info(f"Successfully processed {len(inscriptions):,} inscriptions")


if __name__ == "__main__":
    main()
