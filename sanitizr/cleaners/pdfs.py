# sanitizr/cleaners/pdfs.py
"""
PDF cleaning using pypdf:
- Replace the document information dictionary (/Info) with an empty one
- Remove the catalog's XMP stream (/Metadata), which mirrors /Info
Pages, fonts and embedded objects are cloned as-is.
"""
from pathlib import Path

from pypdf import PdfReader, PdfWriter
from pypdf.errors import PyPdfError
from pypdf.generic import NameObject

from sanitizr.errors import DecodeFailure


def _strip_root_metadata(writer: PdfWriter) -> None:
    root = writer._root_object  # low-level access is fine for this task
    meta_key = NameObject("/Metadata")
    if meta_key in root:
        del root[meta_key]
    # Clears the cloned /Info (and the default /Producer) without adding keys
    writer.metadata = {}


def clean_pdf(src: Path, dst: Path) -> None:
    try:
        reader = PdfReader(str(src))
        writer = PdfWriter(clone_from=reader)
    except PyPdfError as e:
        raise DecodeFailure(f"Could not parse PDF {src.name}: {e}") from e

    _strip_root_metadata(writer)

    with open(dst, "wb") as f:
        writer.write(f)
