# sanitizr/models.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class Category(str, Enum):
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    PDF = "pdf"
    DOCUMENT = "document"
    EBOOK = "ebook"
    ARCHIVE = "archive"
    UNKNOWN = "unknown"


class ArchiveSubKind(str, Enum):
    ZIP = "zip"
    TAR = "tar"
    GZIP = "gzip"
    BZIP2 = "bzip2"
    XZ = "xz"
    OTHER = "other"


class FailureKind(str, Enum):
    CLASSIFICATION_UNKNOWN = "classification_unknown"
    INVALID_SOURCE = "invalid_source"
    DECODE_FAILURE = "decode_failure"
    EXTERNAL_TOOL_FAILURE = "external_tool_failure"
    REPLACE_FAILURE = "replace_failure"
    # original deleted, sanitized copy could not be renamed into place
    ORIGINAL_LOST = "original_lost"
    INTERNAL = "internal"


@dataclass(frozen=True)
class SanitizationResult:
    """Verdict for one file. `is_stubbed_noop` means the bytes were preserved, not stripped."""
    path: Path
    succeeded: bool
    strategy_applied: Category
    is_stubbed_noop: bool = False
    failure: FailureKind | None = None
    detail: str = ""
