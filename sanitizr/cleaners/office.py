# sanitizr/cleaners/office.py
"""
OOXML (DOCX/XLSX/PPTX) cleaning:
- Re-pack the package part by part.
- In the core-properties part, blank the identity fields (title, creator,
  description, subject, keywords, last modified by).
NOTE: docProps/custom.xml, docProps/app.xml, comments and revision parts are
      left as they are; only core properties are cleared.
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

_CONTENT_TYPES = "[Content_Types].xml"
_ROOT_RELS = "_rels/.rels"
_DEFAULT_CORE_PART = "docProps/core.xml"
_CORE_REL_TYPE = "/metadata/core-properties"

# Local names of the core-properties elements that get blanked
CORE_IDENTITY_FIELDS = {"title", "creator", "description", "subject", "keywords", "lastModifiedBy"}


def _core_part_name(zin: zipfile.ZipFile) -> str | None:
    names = set(zin.namelist())
    if _ROOT_RELS in names:
        rels = parse_part(zin.read(_ROOT_RELS))
        for rel in rels:
            if rel.get("Type", "").endswith(_CORE_REL_TYPE):
                target = rel.get("Target", "").lstrip("/")
                if target in names:
                    return target
    return _DEFAULT_CORE_PART if _DEFAULT_CORE_PART in names else None


def blank_core_properties(data: bytes) -> bytes:
    root = parse_part(data)
    for el in root:
        if local_name(el.tag) in CORE_IDENTITY_FIELDS:
            el.text = ""
    return serialize_part(root, declared_prefixes(data))


def clean_office(src: Path, dst: Path) -> None:
    try:
        with zipfile.ZipFile(src, "r") as zin:
            ensure_unencrypted(zin, src.name)
            if _CONTENT_TYPES not in zin.namelist():
                raise DecodeFailure(f"{src.name} is not an Office Open XML package")
            core = _core_part_name(zin)
            if core is None:
                log.info("No core properties part in %s", src.name)
            with zipfile.ZipFile(dst, "w", compression=zipfile.ZIP_DEFLATED) as zout:
                for item in zin.infolist():
                    data = zin.read(item.filename)
                    if item.filename == core:
                        data = blank_core_properties(data)
                    zout.writestr(item, data)
    except (zipfile.BadZipFile, ET.ParseError, NotImplementedError, zlib.error) as e:
        raise DecodeFailure(f"Could not open office package {src.name}: {e}") from e
