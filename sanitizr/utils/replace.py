# sanitizr/utils/replace.py
"""
Replace-in-place protocol.

The sanitized bytes are written to a sibling temp file (same directory, so
the final rename never crosses a filesystem) and then swapped in for the
original with os.replace. When the filesystem refuses a rename-over, we fall
back to delete + rename; a failure between those two steps is the one case
where the original is gone, and it is reported as OriginalLost.
"""
from __future__ import annotations
from pathlib import Path
from typing import Callable
import logging
import os
import shutil

from sanitizr.errors import OriginalLost, ReplaceFailure
from sanitizr.settings import TEMP_PREFIX

log = logging.getLogger(__name__)


def temp_path_for(original: Path) -> Path:
    # Keeps the original suffix last: ffmpeg picks its muxer from it
    return original.with_name(f"{TEMP_PREFIX}{original.name}")


def _discard(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        log.warning("Could not remove temporary file %s: %s", path, exc)


def _carry_permissions(original: Path, tmp: Path) -> None:
    try:
        shutil.copymode(original, tmp)
    except OSError as exc:
        log.warning("Could not copy permissions of %s: %s", original.name, exc)


def _promote(tmp: Path, original: Path) -> None:
    try:
        os.replace(tmp, original)
        return
    except OSError as exc:
        log.warning("Atomic replace of %s refused (%s); falling back to delete + rename", original, exc)

    try:
        original.unlink()
    except OSError as exc:
        _discard(tmp)
        raise ReplaceFailure(f"Could not delete original {original.name}: {exc}") from exc

    try:
        tmp.rename(original)
    except OSError as exc:
        log.error("Original %s deleted but sanitized copy is stranded at %s", original, tmp)
        raise OriginalLost(
            f"Original deleted but {tmp.name} could not be renamed into place: {exc}", tmp
        ) from exc


def replace_in_place(original: Path, produce: Callable[[Path], None]) -> None:
    """
    Run produce(tmp_path) and substitute its output for `original`.
    Raises on failure; the original is untouched unless OriginalLost is raised.
    """
    tmp = temp_path_for(original)
    if tmp.exists():
        raise ReplaceFailure(f"Temporary path {tmp.name} already exists; refusing to overwrite it")

    try:
        produce(tmp)
    except BaseException:
        _discard(tmp)
        raise

    if not tmp.is_file():
        raise ReplaceFailure(f"No sanitized output was written for {original.name}")

    _carry_permissions(original, tmp)
    _promote(tmp, original)
