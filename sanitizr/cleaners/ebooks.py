# sanitizr/cleaners/ebooks.py
"""
EPUB cleaning: every entry is copied as-is (same order and zip info, so the
stored `mimetype` entry stays first) except the OPF package document, whose
<metadata> element is emptied.
"""
from __future__ import annotations
from pathlib import Path
import logging
import zipfile
import zlib
import xml.etree.ElementTree as ET

from sanitizr.cleaners.archives import ensure_unencrypted
from sanitizr.errors import DecodeFailure
from sanitizr.utils.xmlparts import declared_prefixes, local_name, parse_part, serialize_part

log = logging.getLogger(__name__)

EPUB_EXTENSIONS = {".epub"}
_PACKAGE_SUFFIX = ".opf"


def is_epub(path: Path) -> bool:
    return path.suffix.lower() in EPUB_EXTENSIONS


def strip_package_metadata(data: bytes) -> bytes:
    root = parse_part(data)
    metadata = next((el for el in root.iter() if local_name(el.tag) == "metadata"), None)
    if metadata is None:
        log.warning("No <metadata> element in package document")
        return serialize_part(root, declared_prefixes(data))
    for child in list(metadata):
        metadata.remove(child)
    metadata.text = None
    return serialize_part(root, declared_prefixes(data))


def clean_epub(src: Path, dst: Path) -> None:
    try:
        with zipfile.ZipFile(src, "r") as zin:
            ensure_unencrypted(zin, src.name)
            items = zin.infolist()
            if not any(i.filename.lower().endswith(_PACKAGE_SUFFIX) for i in items):
                raise DecodeFailure(f"No OPF package document in {src.name}")
            with zipfile.ZipFile(dst, "w") as zout:
                for item in items:
                    data = zin.read(item.filename)
                    if item.filename.lower().endswith(_PACKAGE_SUFFIX):
                        log.info("Sanitizing metadata in %s", item.filename)
                        data = strip_package_metadata(data)
                    zout.writestr(item, data)
    except (zipfile.BadZipFile, ET.ParseError, NotImplementedError, zlib.error) as e:
        raise DecodeFailure(f"Could not open e-book {src.name}: {e}") from e
