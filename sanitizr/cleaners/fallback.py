# sanitizr/cleaners/fallback.py
"""
Stub cleaner for formats with no real stripping: a verified byte copy.
The engine always reports it with is_stubbed_noop=True.
"""
from pathlib import Path
import hashlib
import shutil

from sanitizr.errors import SanitizeError

_CHUNK = 1024 * 1024


def _sha256(path: Path) -> str:
    digest = hashlib.sha256()
    with open(path, "rb") as f:
        for block in iter(lambda: f.read(_CHUNK), b""):
            digest.update(block)
    return digest.hexdigest()


def clean_copy(src: Path, dst: Path) -> None:
    shutil.copyfile(src, dst)
    if _sha256(src) != _sha256(dst):
        raise SanitizeError(f"Copy of {src.name} does not match the original")
