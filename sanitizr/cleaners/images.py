# sanitizr/cleaners/images.py
"""
Image metadata cleaning, two phases:
1) ExifTool blanks the known identifying tags (capture times, camera make and
   model, software, author, copyright, user comment, GPS position) directly in
   the copy's existing metadata block. Best effort: skipped if ExifTool is
   missing or fails.
2) Pillow decodes the pixels and re-encodes them into dst with no metadata
   attached. PNG stays PNG; everything else becomes a baseline JPEG. This
   phase is authoritative: whatever phase 1 missed is gone after it.
"""
from __future__ import annotations
from io import BytesIO
from pathlib import Path
import logging
import shutil

from PIL import Image, UnidentifiedImageError

from sanitizr import settings
from sanitizr.errors import DecodeFailure
from sanitizr.utils.tools import SubprocessRunner, ToolRunner

log = logging.getLogger(__name__)

IDENTIFYING_TAGS = (
    "DateTime", "DateTimeOriginal", "CreateDate",
    "SubSecTime", "SubSecTimeOriginal", "SubSecTimeDigitized",
    "Make", "Model", "Software", "Artist", "Copyright", "UserComment",
    "GPSLatitude", "GPSLongitude", "GPSLatitudeRef", "GPSLongitudeRef",
)

_JPEG_MODES = {"RGB", "L", "CMYK"}


def _is_png(path: Path) -> bool:
    return path.suffix.lower() == ".png"


def scrub_tags(path: Path, runner: ToolRunner) -> bool:
    """Phase 1: blank IDENTIFYING_TAGS in place. Returns False instead of raising."""
    cmd = [settings.EXIFTOOL_BIN]
    cmd += [f"-{tag}=" for tag in IDENTIFYING_TAGS]
    cmd += ["-overwrite_original_in_place", str(path)]
    result = runner.execute(cmd)
    if not result.succeeded:
        log.warning("Tag scrub skipped for %s: %s", path.name, result.log.strip())
    return result.succeeded


def reencode(src: Path, dst: Path, png: bool) -> None:
    """Phase 2: decode src and write bare pixels to dst."""
    try:
        im = Image.open(BytesIO(src.read_bytes()))
        im.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise DecodeFailure(f"Could not decode image {src.name}: {e}") from e

    # Empty exif/comment so nothing carried over in im.info is written back
    with im:
        if png:
            im.save(dst, format="PNG", exif=b"")
            return
        if im.mode not in _JPEG_MODES:
            im = im.convert("RGB")
        im.save(dst, format="JPEG", quality=settings.JPEG_QUALITY, exif=b"", comment=b"")


def clean_image(src: Path, dst: Path, runner: ToolRunner | None = None) -> None:
    runner = runner or SubprocessRunner()
    shutil.copyfile(src, dst)
    scrub_tags(dst, runner)
    reencode(dst, dst, png=_is_png(src))
