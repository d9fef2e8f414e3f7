# sanitizr/cleaners/archives.py
"""
Archive cleaners. Entry bytes are never modified; only per-entry attributes
that identify when, where or by whom the archive was made are reset.

- zip: every timestamp set to the zip epoch, extra fields (extended
  timestamps, unix uid/gid) dropped.
- tar: mtime 0, uid/gid 0, empty owner/group names, mode 0644 (dirs 0755).
- gzip: recompressed with header mtime 0 and no stored file name.
- bzip2/xz: decompress + recompress. These formats carry no metadata, so
  the engine reports them as stubbed.
"""
from __future__ import annotations
from pathlib import Path
import bz2
import gzip
import logging
import lzma
import shutil
import tarfile
import zipfile
import zlib

from sanitizr.errors import DecodeFailure
from sanitizr.settings import ZIP_EPOCH

log = logging.getLogger(__name__)

FILE_MODE = 0o644
DIR_MODE = 0o755


def ensure_unencrypted(zin: zipfile.ZipFile, name: str) -> None:
    encrypted = [i.filename for i in zin.infolist() if i.flag_bits & 0x1]
    if encrypted:
        raise DecodeFailure(f"{name} has encrypted entries: {', '.join(encrypted)}")


def _clean_zipinfo(info: zipfile.ZipInfo) -> zipfile.ZipInfo:
    clean = zipfile.ZipInfo(info.filename, date_time=ZIP_EPOCH)
    clean.compress_type = info.compress_type
    clean.create_system = info.create_system
    clean.external_attr = info.external_attr
    clean.internal_attr = info.internal_attr
    clean.comment = info.comment
    return clean


def clean_zip(src: Path, dst: Path) -> None:
    try:
        with zipfile.ZipFile(src, "r") as zin:
            ensure_unencrypted(zin, src.name)
            with zipfile.ZipFile(dst, "w") as zout:
                zout.comment = zin.comment
                for info in zin.infolist():
                    clean = _clean_zipinfo(info)
                    if info.is_dir():
                        zout.writestr(clean, b"")
                    else:
                        force_zip64 = info.file_size >= zipfile.ZIP64_LIMIT
                        with zin.open(info) as fin, zout.open(clean, "w", force_zip64=force_zip64) as fout:
                            shutil.copyfileobj(fin, fout)
                    log.debug("Added entry: %s", info.filename)
    except (zipfile.BadZipFile, NotImplementedError, zlib.error) as e:
        raise DecodeFailure(f"Could not read zip {src.name}: {e}") from e


def _clean_tarinfo(member: tarfile.TarInfo) -> tarfile.TarInfo:
    clean = tarfile.TarInfo(member.name)
    clean.type = tarfile.REGTYPE if member.isfile() else member.type
    clean.linkname = member.linkname
    clean.size = member.size if member.isfile() else 0
    clean.mode = DIR_MODE if member.isdir() else FILE_MODE
    clean.mtime = 0
    clean.uid = clean.gid = 0
    clean.uname = clean.gname = ""
    clean.devmajor = member.devmajor
    clean.devminor = member.devminor
    return clean


def clean_tar(src: Path, dst: Path) -> None:
    try:
        with tarfile.open(src, "r:") as tin, tarfile.open(dst, "w") as tout:
            for member in tin:
                fileobj = tin.extractfile(member) if member.isfile() else None
                tout.addfile(_clean_tarinfo(member), fileobj)
                log.debug("Added TAR entry: %s", member.name)
    except tarfile.TarError as e:
        raise DecodeFailure(f"Could not read tar {src.name}: {e}") from e


def clean_gzip(src: Path, dst: Path) -> None:
    try:
        with gzip.open(src, "rb") as fin, open(dst, "wb") as raw:
            # filename="" keeps the temp name out of the header
            with gzip.GzipFile(filename="", mode="wb", fileobj=raw, mtime=0) as fout:
                shutil.copyfileobj(fin, fout)
    except (OSError, EOFError, zlib.error) as e:
        raise DecodeFailure(f"Could not decompress {src.name}: {e}") from e


def clean_bzip2(src: Path, dst: Path) -> None:
    try:
        with bz2.open(src, "rb") as fin, bz2.open(dst, "wb") as fout:
            shutil.copyfileobj(fin, fout)
    except (OSError, EOFError) as e:
        raise DecodeFailure(f"Could not decompress {src.name}: {e}") from e


def clean_xz(src: Path, dst: Path) -> None:
    try:
        with lzma.open(src, "rb") as fin, lzma.open(dst, "wb", format=lzma.FORMAT_XZ) as fout:
            shutil.copyfileobj(fin, fout)
    except (lzma.LZMAError, EOFError) as e:
        raise DecodeFailure(f"Could not decompress {src.name}: {e}") from e
