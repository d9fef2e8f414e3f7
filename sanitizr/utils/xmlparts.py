# sanitizr/utils/xmlparts.py
"""
Parse and re-serialize XML parts of zip containers (OOXML core properties,
EPUB package documents) keeping the prefixes the part declared.

ElementTree only knows prefixes through its process-wide registry, so
serialize_part writes `prefix:local` names itself from a per-part map and
never touches that registry.
"""
from __future__ import annotations
from io import BytesIO
from itertools import count
import copy
import xml.etree.ElementTree as ET

XML_NS = "http://www.w3.org/XML/1998/namespace"


def parse_part(data: bytes) -> ET.Element:
    return ET.fromstring(data)


def declared_prefixes(data: bytes) -> dict[str, str]:
    """Namespace URI -> prefix, first declaration in the part wins."""
    prefixes: dict[str, str] = {}
    for _, (prefix, uri) in ET.iterparse(BytesIO(data), events=("start-ns",)):
        if uri not in prefixes and prefix not in prefixes.values():
            prefixes[uri] = prefix
    return prefixes


def _qualifier(prefixes: dict[str, str], allow_default: bool):
    # Every source prefix is redeclared; attribute values may be QNames
    declared = {p: uri for uri, p in prefixes.items() if p or allow_default}
    generated: dict[str, str] = {}
    taken = set(prefixes.values())

    def qualify(name: str, attribute: bool = False) -> str:
        if name[:1] != "{":
            return name
        uri, local = name[1:].split("}", 1)
        if uri == XML_NS:
            return f"xml:{local}"
        prefix = prefixes.get(uri)
        # Unprefixed attributes are in no namespace
        if prefix is None or (prefix == "" and (attribute or not allow_default)):
            if uri not in generated:
                generated[uri] = next(p for p in (f"ns{i}" for i in count()) if p not in taken)
                taken.add(generated[uri])
            prefix = generated[uri]
        declared[prefix] = uri
        return f"{prefix}:{local}" if prefix else local

    return qualify, declared


def serialize_part(root: ET.Element, prefixes: dict[str, str]) -> bytes:
    root = copy.deepcopy(root)
    elements = [el for el in root.iter() if isinstance(el.tag, str)]
    # A default namespace would capture elements that have none
    allow_default = all(el.tag[:1] == "{" for el in elements)
    qualify, declared = _qualifier(prefixes, allow_default)

    for el in elements:
        el.tag = qualify(el.tag)
        for key in [k for k in el.attrib if k[:1] == "{"]:
            el.attrib[qualify(key, attribute=True)] = el.attrib.pop(key)
    for prefix, uri in sorted(declared.items()):
        root.set(f"xmlns:{prefix}" if prefix else "xmlns", uri)
    return ET.tostring(root, encoding="utf-8", xml_declaration=True)


def local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]
