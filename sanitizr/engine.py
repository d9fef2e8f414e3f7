# sanitizr/engine.py
"""
Sanitization dispatcher: resolves a file to a strategy, runs it through the
replace-in-place protocol, and turns every outcome into a SanitizationResult.
Nothing raised by a strategy ever reaches the caller.
"""
from __future__ import annotations
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import Callable, Iterable, Iterator
import logging

from sanitizr.cleaners.archives import clean_bzip2, clean_gzip, clean_tar, clean_xz, clean_zip
from sanitizr.cleaners.ebooks import clean_epub, is_epub
from sanitizr.cleaners.fallback import clean_copy
from sanitizr.cleaners.images import clean_image
from sanitizr.cleaners.media import clean_media
from sanitizr.cleaners.office import clean_office
from sanitizr.cleaners.pdfs import clean_pdf
from sanitizr.errors import ClassificationUnknown, ExternalToolFailure, SanitizeError
from sanitizr.models import ArchiveSubKind, Category, FailureKind, SanitizationResult
from sanitizr.utils.filetypes import archive_subkind, classify
from sanitizr.utils.replace import replace_in_place
from sanitizr.utils.tools import SubprocessRunner, ToolRunner

log = logging.getLogger(__name__)

AUTO = "auto"


@dataclass(frozen=True)
class Strategy:
    clean: Callable[..., None]
    stubbed: bool = False
    uses_tool: bool = False


FALLBACK = Strategy(clean_copy, stubbed=True)

_BY_CATEGORY = {
    Category.IMAGE: Strategy(clean_image, uses_tool=True),
    Category.VIDEO: Strategy(clean_media, uses_tool=True),
    Category.AUDIO: Strategy(clean_media, uses_tool=True),
    Category.PDF: Strategy(clean_pdf),
    Category.DOCUMENT: Strategy(clean_office),
}

_BY_ARCHIVE_KIND = {
    ArchiveSubKind.ZIP: Strategy(clean_zip),
    ArchiveSubKind.TAR: Strategy(clean_tar),
    ArchiveSubKind.GZIP: Strategy(clean_gzip),
    ArchiveSubKind.BZIP2: Strategy(clean_bzip2, stubbed=True),
    ArchiveSubKind.XZ: Strategy(clean_xz, stubbed=True),
    ArchiveSubKind.OTHER: FALLBACK,
}

_EPUB = Strategy(clean_epub)


def check_source(path: Path) -> str | None:
    """Why `path` cannot be sanitized in place, or None if it can."""
    try:
        # Replacing a link would leave its target untouched
        if path.is_symlink():
            return f"Symbolic link, not sanitized: {path}"
        if not path.is_file():
            return f"Not a regular file: {path}"
    except OSError as e:
        return f"Cannot inspect {path}: {e}"
    return None


def resolve_category(path: Path, category: str | Category = AUTO) -> Category:
    value = category.lower()
    if value == AUTO:
        resolved = classify(path.name)
    else:
        try:
            resolved = Category(value)
        except ValueError:
            raise ClassificationUnknown(f"Unsupported category: {category}") from None
    if resolved is Category.UNKNOWN:
        raise ClassificationUnknown(f"Could not detect file type for: {path.name}")
    return resolved


def select_strategy(path: Path, category: Category) -> Strategy:
    if category is Category.ARCHIVE:
        return _BY_ARCHIVE_KIND[archive_subkind(path.name)]
    if category is Category.EBOOK:
        return _EPUB if is_epub(path) else FALLBACK
    return _BY_CATEGORY.get(category, FALLBACK)


def _failed(path: Path, category: Category, err: SanitizeError, stubbed: bool = False) -> SanitizationResult:
    detail = str(err)
    if isinstance(err, ExternalToolFailure) and err.log:
        detail = f"{detail}\n{err.log}"
    return SanitizationResult(path, False, category, stubbed, failure=err.kind, detail=detail)


def sanitize(
    path: str | Path,
    category: str | Category = AUTO,
    *,
    runner: ToolRunner | None = None,
) -> SanitizationResult:
    """Strip metadata from `path` in place. Always returns a result, never raises."""
    path = Path(path)
    problem = check_source(path)
    if problem:
        log.error("%s", problem)
        return SanitizationResult(
            path, False, Category.UNKNOWN,
            failure=FailureKind.INVALID_SOURCE, detail=problem,
        )

    try:
        resolved = resolve_category(path, category)
    except ClassificationUnknown as e:
        log.error("%s", e)
        return _failed(path, Category.UNKNOWN, e)

    strategy = select_strategy(path, resolved)
    if strategy.uses_tool:
        produce = partial(strategy.clean, path, runner=runner or SubprocessRunner())
    else:
        produce = partial(strategy.clean, path)

    log.info("Sanitizing %s as %s via %s", path, resolved.value, strategy.clean.__name__)
    try:
        replace_in_place(path, produce)
    except SanitizeError as e:
        log.error("Failed to sanitize %s: %s", path.name, e)
        return _failed(path, resolved, e, strategy.stubbed)
    except Exception as e:
        log.exception("Unexpected error while sanitizing %s", path)
        return SanitizationResult(
            path, False, resolved, strategy.stubbed,
            failure=FailureKind.INTERNAL, detail=f"{type(e).__name__}: {e}",
        )

    if strategy.stubbed:
        log.info("Stub-sanitized (preserved unchanged): %s", path)
    else:
        log.info("Sanitized: %s", path)
    return SanitizationResult(path, True, resolved, strategy.stubbed)


def sanitize_many(
    paths: Iterable[str | Path],
    category: str | Category = AUTO,
    *,
    runner: ToolRunner | None = None,
) -> Iterator[SanitizationResult]:
    """Sequential batch; one result per path."""
    runner = runner or SubprocessRunner()
    for path in paths:
        yield sanitize(path, category, runner=runner)
