# scripts/cli_clean.py
r"""
CLI metadata sanitizer. Files are rewritten IN PLACE.
Usage examples (from project root, with your venv activated):

  python scripts/cli_clean.py path/to/file.pdf
  python scripts/cli_clean.py C:\\Users\\you\\Desktop\\pic.jpg
  python scripts/cli_clean.py path/to/folder  (processes all recognised files inside, recursively)
  python scripts/cli_clean.py notes.bin --category archive
"""
from __future__ import annotations
import argparse
import logging
import shutil
import sys
from pathlib import Path

# Ensures "sanitizr" is importable even when running by path without installing
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sanitizr import settings
from sanitizr.engine import AUTO, sanitize
from sanitizr.models import Category, SanitizationResult
from sanitizr.utils.filetypes import classify
from sanitizr.utils.tools import SubprocessRunner

CATEGORY_CHOICES = [AUTO] + [c.value for c in Category if c is not Category.UNKNOWN]


def check_tools() -> None:
    """Warn about missing external tools; only the formats that need them are affected."""
    if shutil.which(settings.FFMPEG_BIN) is None:
        print("⚠️ ffmpeg not found: audio and video files will fail.")
    if shutil.which(settings.EXIFTOOL_BIN) is None:
        print("⚠️ exiftool not found: images are still re-encoded, tag scrub is skipped.")


def iter_files(target: Path, category: str):
    if target.is_file():
        yield target
        return
    for p in sorted(target.rglob("*")):
        if not p.is_file() or p.name.startswith(settings.TEMP_PREFIX):
            continue
        if category != AUTO or classify(p.name) is not Category.UNKNOWN:
            yield p


def report(result: SanitizationResult) -> None:
    name = result.path.name
    if not result.succeeded:
        print(f"❌ Failed to sanitize {name} [{result.failure.value}]: {result.detail}")
    elif result.is_stubbed_noop:
        print(f"• Preserved (no stripping available for this format): {name}")
    else:
        print(f"✅ Sanitized ({result.strategy_applied.value}): {name}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Remove identifying metadata from files, in place.")
    parser.add_argument("path", help="File or folder to sanitize")
    parser.add_argument("--category", default=AUTO, choices=CATEGORY_CHOICES,
                        help="Treat every file as this category instead of detecting it")
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    root = Path(args.path).expanduser().resolve()
    if not root.exists():
        print(f"❌ Not found: {root}")
        return 1

    check_tools()

    runner = SubprocessRunner()
    done = failed = stubbed = 0
    for f in iter_files(root, args.category):
        result = sanitize(f, args.category, runner=runner)
        report(result)
        if not result.succeeded:
            failed += 1
        elif result.is_stubbed_noop:
            stubbed += 1
        else:
            done += 1

    if done + failed + stubbed == 0:
        print("ℹ️ Nothing sanitized. Did you pass a supported file?")
        return 0

    print(f"Sanitized: {done}, preserved: {stubbed}, failed: {failed}")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
