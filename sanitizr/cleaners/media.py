# sanitizr/cleaners/media.py
"""
Audio/video metadata cleaner.
FFmpeg remux with stream copy:
  -map 0           (keep all streams)
  -map_metadata -1 (drop the global metadata map)
  -c copy          (no re-encode)
  -movflags +faststart (MP4/MOV family only)
  -f ipod          (.alac, which has no muxer of its own)
Content is untouched; only the container's metadata is emptied.
"""
from __future__ import annotations
from pathlib import Path
import logging

from sanitizr import settings
from sanitizr.errors import ExternalToolFailure
from sanitizr.utils.tools import SubprocessRunner, ToolRunner

log = logging.getLogger(__name__)

_MOV_FAMILY = {".mp4", ".m4v", ".mov", ".m4a", ".3gp", ".alac"}

# Suffixes ffmpeg cannot map to a muxer on its own
_MUXERS = {".alac": "ipod"}


def remux_command(src: Path, dst: Path) -> list[str]:
    cmd = [
        settings.FFMPEG_BIN, "-hide_banner", "-loglevel", "error",
        "-y", "-i", str(src),
        "-map", "0",
        "-map_metadata", "-1",
        "-c", "copy",
    ]
    if dst.suffix.lower() in _MOV_FAMILY:
        cmd += ["-movflags", "+faststart"]
    muxer = _MUXERS.get(dst.suffix.lower())
    if muxer:
        cmd += ["-f", muxer]
    cmd.append(str(dst))
    return cmd


def clean_media(src: Path, dst: Path, runner: ToolRunner | None = None) -> None:
    runner = runner or SubprocessRunner()
    result = runner.execute(remux_command(src, dst))
    if result.log:
        log.debug("ffmpeg output for %s:\n%s", src.name, result.log)
    if not result.succeeded:
        raise ExternalToolFailure(f"ffmpeg could not remux {src.name}", log=result.log)
