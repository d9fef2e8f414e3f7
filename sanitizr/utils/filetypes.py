# sanitizr/utils/filetypes.py
"""
Extension-based classification. Content is never sniffed: a file is whatever
its last suffix says it is.
"""
from __future__ import annotations
from pathlib import PurePath
from sanitizr.models import ArchiveSubKind, Category

SUPPORTED_FILE_TYPES = {
    Category.IMAGE: ("jpg", "jpeg", "png", "gif", "webp", "tif", "tiff", "bmp", "heic"),
    Category.VIDEO: ("mp4", "m4v", "mov", "avi", "mkv", "webm", "3gp", "flv", "mpeg"),
    Category.AUDIO: ("mp3", "wav", "flac", "aac", "ogg", "oga", "m4a", "wma", "alac"),
    Category.PDF: ("pdf",),
    Category.DOCUMENT: (
        "doc", "docx", "xls", "xlsx", "ppt", "pptx",
        "odt", "ods", "odp", "rtf", "txt", "csv",
    ),
    Category.EBOOK: ("epub", "mobi", "azw3", "fb2"),
    Category.ARCHIVE: ("zip", "rar", "7z", "tar", "gz", "bz2", "xz"),
}

_BY_EXTENSION = {
    ext: category
    for category, extensions in SUPPORTED_FILE_TYPES.items()
    for ext in extensions
}

_ARCHIVE_KINDS = {
    "zip": ArchiveSubKind.ZIP,
    "tar": ArchiveSubKind.TAR,
    "gz": ArchiveSubKind.GZIP,
    "bz2": ArchiveSubKind.BZIP2,
    "xz": ArchiveSubKind.XZ,
}


def extension_of(file_name: str) -> str:
    """Lowercase final suffix without the dot ("" when there is none)."""
    return PurePath(file_name).suffix.lower().lstrip(".")


def classify(file_name: str) -> Category:
    return _BY_EXTENSION.get(extension_of(file_name), Category.UNKNOWN)


def archive_subkind(file_name: str) -> ArchiveSubKind:
    return _ARCHIVE_KINDS.get(extension_of(file_name), ArchiveSubKind.OTHER)
