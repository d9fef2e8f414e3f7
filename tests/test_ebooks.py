# tests/test_ebooks.py
from pathlib import Path
import zipfile
import xml.etree.ElementTree as ET
import pytest

from sanitizr.cleaners.ebooks import clean_epub, strip_package_metadata
from sanitizr.errors import DecodeFailure
from conftest import mark_encrypted

OPF_NS = "http://www.idpf.org/2007/opf"

CONTAINER = b"""<?xml version="1.0"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
<rootfiles><rootfile full-path="OEBPS/content.opf" media-type="application/oebps-package+xml"/></rootfiles>
</container>"""

OPF = b"""<?xml version="1.0" encoding="UTF-8"?>
<package xmlns="http://www.idpf.org/2007/opf" version="3.0" unique-identifier="uid">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/">
    <dc:identifier id="uid">urn:uuid:0b7e2c1a</dc:identifier>
    <dc:title>Memoirs</dc:title>
    <dc:creator>Jane Author</dc:creator>
    <meta property="dcterms:modified">2024-01-01T00:00:00Z</meta>
  </metadata>
  <manifest><item id="c1" href="c1.xhtml" media-type="application/xhtml+xml"/></manifest>
  <spine><itemref idref="c1"/></spine>
</package>"""

CHAPTER = b"<html xmlns='http://www.w3.org/1999/xhtml'><body><p>Chapter one</p></body></html>"


def _make_epub(path: Path, opf: bytes | None = OPF) -> None:
    with zipfile.ZipFile(path, "w") as z:
        z.writestr(zipfile.ZipInfo("mimetype"), b"application/epub+zip", compress_type=zipfile.ZIP_STORED)
        z.writestr("META-INF/container.xml", CONTAINER, compress_type=zipfile.ZIP_DEFLATED)
        if opf is not None:
            z.writestr("OEBPS/content.opf", opf, compress_type=zipfile.ZIP_DEFLATED)
        z.writestr("OEBPS/c1.xhtml", CHAPTER, compress_type=zipfile.ZIP_DEFLATED)


def test_epub_metadata_emptied(tmp_path: Path):
    src = tmp_path / "book.epub"
    dst = tmp_path / "book_clean.epub"
    _make_epub(src)

    clean_epub(src, dst)

    with zipfile.ZipFile(dst) as z:
        opf = z.read("OEBPS/content.opf")
    root = ET.fromstring(opf)
    metadata = root.find(f"{{{OPF_NS}}}metadata")
    assert metadata is not None and len(metadata) == 0
    assert root.find(f"{{{OPF_NS}}}manifest/{{{OPF_NS}}}item").get("href") == "c1.xhtml"
    assert b"Jane Author" not in opf
    assert b"ns0:" not in opf


def test_other_entries_copied_unchanged(tmp_path: Path):
    src = tmp_path / "book.epub"
    dst = tmp_path / "book_clean.epub"
    _make_epub(src)

    clean_epub(src, dst)

    with zipfile.ZipFile(src) as before, zipfile.ZipFile(dst) as after:
        assert after.namelist() == before.namelist()
        assert after.infolist()[0].filename == "mimetype"
        assert after.infolist()[0].compress_type == zipfile.ZIP_STORED
        for name in ("mimetype", "META-INF/container.xml", "OEBPS/c1.xhtml"):
            assert after.read(name) == before.read(name)


def test_package_without_metadata_element_is_kept():
    opf = b'<package xmlns="http://www.idpf.org/2007/opf"><manifest/></package>'
    out = ET.fromstring(strip_package_metadata(opf))
    assert out.find(f"{{{OPF_NS}}}manifest") is not None


def test_missing_package_document_fails(tmp_path: Path):
    src = tmp_path / "book.epub"
    _make_epub(src, opf=None)

    with pytest.raises(DecodeFailure):
        clean_epub(src, tmp_path / "out.epub")


def test_broken_package_document_fails(tmp_path: Path):
    src = tmp_path / "book.epub"
    _make_epub(src, opf=b"<package><metadata>")

    with pytest.raises(DecodeFailure):
        clean_epub(src, tmp_path / "out.epub")


def test_encrypted_entry_fails(tmp_path: Path):
    src = tmp_path / "locked.epub"
    _make_epub(src)
    mark_encrypted(src)

    with pytest.raises(DecodeFailure, match="encrypted"):
        clean_epub(src, tmp_path / "out.epub")
