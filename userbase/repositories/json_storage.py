"""
JSON file adapter for the user store.

The root file holds a single JSON array. Reading creates the file with ``[]``
when it is missing; writing overwrites the whole document.
"""

from __future__ import annotations

from pathlib import Path
import json
import logging
import os
import tempfile

logger = logging.getLogger("userbase.storage")

EMPTY_DOCUMENT = "[]"


def ensure_exists(path: Path) -> bool:
    """Create the root file with an empty array if missing. Returns True when created."""
    if path.exists():
        return False
    path.write_text(EMPTY_DOCUMENT, encoding="utf-8")
    logger.info("created root file %s", path)
    return True


def load(path: Path) -> object:
    """Parse the root file. JSON errors propagate to the caller."""
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def dumps(data: list, indent: int = 4) -> str:
    return json.dumps(data, ensure_ascii=False, indent=indent)


def save(path: Path, data: list, *, indent: int = 4, atomic: bool = True) -> None:
    """Overwrite the root file with ``data``.

    With ``atomic`` the document goes to a temporary file in the same
    directory and is renamed over ``path``, so readers never see a partial
    write.
    """
    text = dumps(data, indent=indent)
    if atomic:
        _replace(path, text)
    else:
        path.write_text(text, encoding="utf-8")
    logger.debug("saved %d record(s) to %s", len(data), path)


def _replace(path: Path, text: str) -> None:
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        tmp.replace(path)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
