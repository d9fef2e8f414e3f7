# tests/test_xmlparts.py
import xml.etree.ElementTree as ET

from sanitizr.utils import xmlparts
from sanitizr.utils.xmlparts import declared_prefixes, parse_part, serialize_part

DC = "http://purl.org/dc/elements/1.1/"

PART_A = b"""<?xml version="1.0"?>
<package xmlns="http://www.idpf.org/2007/opf" xmlns:meta="http://purl.org/dc/elements/1.1/">
<meta:title>A</meta:title><item meta:role="x"/>
</package>"""

PART_B = b"""<?xml version="1.0"?>
<root xmlns:dc="http://purl.org/dc/elements/1.1/"><dc:title>B</dc:title><plain/></root>"""


def _round_trip(data: bytes) -> bytes:
    return serialize_part(parse_part(data), declared_prefixes(data))


def test_prefixes_come_from_the_part(monkeypatch):
    def refuse(prefix, uri):
        raise AssertionError("global namespace registry touched")

    monkeypatch.setattr(xmlparts.ET, "register_namespace", refuse)

    a = _round_trip(PART_A)
    b = _round_trip(PART_B)

    # Same URI, two different prefixes, each kept as its part declared it
    assert b"<meta:title>A</meta:title>" in a
    assert b"<dc:title>B</dc:title>" in b
    assert b"ns0:" not in a and b"ns0:" not in b


def test_round_trip_keeps_names_and_values():
    out = ET.fromstring(_round_trip(PART_A))

    assert out.tag == "{http://www.idpf.org/2007/opf}package"
    assert out.find(f"{{{DC}}}title").text == "A"
    item = out.find("{http://www.idpf.org/2007/opf}item")
    assert item.get(f"{{{DC}}}role") == "x"


def test_elements_without_namespace_stay_without():
    data = b'<a xmlns="urn:x"><b/></a>'
    root = parse_part(data)
    root.append(ET.Element("loose"))

    out = ET.fromstring(serialize_part(root, declared_prefixes(data)))

    assert out.tag == "{urn:x}a"
    assert out.find("{urn:x}b") is not None
    assert out.find("loose") is not None
