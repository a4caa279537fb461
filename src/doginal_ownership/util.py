"""Utility functions for the Doginal ownership tools."""

import os
import stat
import tempfile
from pathlib import Path
from typing import Any

import fake_useragent
import orjson
import requests

from doginal_ownership.errors import OutputWriteError


def download_as_bytes(url: str) -> bytes:
    """Download the given URL and return the content as bytes."""
    response = requests.get(
        url,
        headers={"User-Agent": fake_useragent.UserAgent().random},
        timeout=120,
    )
    response.raise_for_status()
    return response.content


def dump_json_bytes(data: Any) -> bytes:  # noqa: ANN401
    """Serialize to indented JSON, with a stable layout across runs."""
    return orjson.dumps(data, option=orjson.OPT_INDENT_2)


def _new_file_mode() -> int:
    """Return the mode a plain `open()` would give a new file under the umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_bytes_atomic(output_path: Path, content: bytes) -> None:
    """Write `content` to `output_path` so readers never see a partial file.

    The bytes go to a temporary file in the same folder, which then replaces the
    target in one rename. The result keeps the mode of the file it replaces, or
    gets the usual umask-based mode if it is new.
    """
    tmp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="wb",
            dir=output_path.parent,
            prefix=f".{output_path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp_file:
            tmp_path = Path(tmp_file.name)
            tmp_file.write(content)
        if output_path.is_file():
            mode = stat.S_IMODE(output_path.stat().st_mode)
        else:
            mode = _new_file_mode()
        tmp_path.chmod(mode)
        os.replace(tmp_path, output_path)
    except OSError as e:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
        msg = f"Could not write {output_path}: {e}"
        raise OutputWriteError(msg) from e
