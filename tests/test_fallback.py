# tests/test_fallback.py
from pathlib import Path
import pytest

from sanitizr.cleaners import fallback
from sanitizr.cleaners.fallback import clean_copy
from sanitizr.errors import SanitizeError


def test_copy_is_byte_identical(tmp_path: Path):
    src = tmp_path / "a.rar"
    dst = tmp_path / "a_copy.rar"
    src.write_bytes(bytes(range(256)) * 4096)

    clean_copy(src, dst)

    assert dst.read_bytes() == src.read_bytes()


def test_copy_mismatch_raises(tmp_path: Path, monkeypatch):
    src = tmp_path / "a.rar"
    src.write_bytes(b"original")

    def bad_copy(a, b):
        Path(b).write_bytes(b"truncat")

    monkeypatch.setattr(fallback.shutil, "copyfile", bad_copy)

    with pytest.raises(SanitizeError):
        clean_copy(src, tmp_path / "out.rar")
