"""
Discovery tag: a small XMP packet on the document catalog (/Metadata).

The tag lets readers detect structured resume data without touching the
embedded file. Fields live in the vf namespace as attributes of an
rdf:Description; the parser also accepts the element form
(<vf:specVersion>0.1.0</vf:specVersion>). Malformed packets read as absent.
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from vitae.utils.constants import VITAEFLOW_NAMESPACE, XMP_VITAEFLOW_PREFIX
from vitae.utils.timestamp import now_iso

XMP_META_NS = "adobe:ns:meta/"
RDF_NS = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"
XMP_NS = "http://ns.adobe.com/xap/1.0/"

NAMESPACES = {
    "x": XMP_META_NS,
    "rdf": RDF_NS,
    "xmp": XMP_NS,
    XMP_VITAEFLOW_PREFIX: VITAEFLOW_NAMESPACE,
}

for _prefix, _uri in NAMESPACES.items():
    ET.register_namespace(_prefix, _uri)

# Tag field -> XMP property name, in packet order
FIELDS = {
    "has_structured_data": "hasStructuredData",
    "spec_version": "specVersion",
    "candidate_name": "candidateName",
    "candidate_email": "candidateEmail",
    "checksum": "checksum",
    "last_modified": "lastModified",
    "resume_id": "resumeId",
}


@dataclass
class DiscoveryTag:
    has_structured_data: bool
    spec_version: str
    candidate_name: Optional[str] = None
    candidate_email: Optional[str] = None
    checksum: Optional[str] = None
    last_modified: Optional[str] = None
    resume_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {key: value for key, value in self.__dict__.items() if value is not None}


def _qualified(name: str) -> str:
    return f"{{{VITAEFLOW_NAMESPACE}}}{name}"


def build_xmp(tag: DiscoveryTag) -> bytes:
    """Serialize a discovery tag as a UTF-8 XMP packet."""
    timestamp = now_iso()
    root = ET.Element(f"{{{XMP_META_NS}}}xmpmeta", {f"{{{XMP_META_NS}}}xmptk": "vitae"})
    rdf = ET.SubElement(root, f"{{{RDF_NS}}}RDF")
    description = ET.SubElement(rdf, f"{{{RDF_NS}}}Description", {f"{{{RDF_NS}}}about": ""})

    for field_name, prop in FIELDS.items():
        value = getattr(tag, field_name)
        if value is None or value == "":
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        description.set(_qualified(prop), str(value))

    description.set(f"{{{XMP_NS}}}MetadataDate", timestamp)
    description.set(f"{{{XMP_NS}}}ModifyDate", timestamp)

    body = ET.tostring(root, encoding="unicode")
    packet = (
        '<?xpacket begin="\ufeff" id="W5M0MpCehiHzreSzNTczkc9d"?>\n'
        f"{body}\n"
        '<?xpacket end="w"?>'
    )
    return packet.encode("utf-8")


def _read_property(description: ET.Element, prop: str) -> Optional[str]:
    value = description.get(_qualified(prop))
    if value is None:
        child = description.find(_qualified(prop))
        if child is not None and child.text is not None:
            value = child.text
    return value.strip() if value is not None else None


def parse_xmp(packet: Union[bytes, str]) -> Optional[DiscoveryTag]:
    """
    Parse a discovery tag from an XMP packet.

    Returns:
        DiscoveryTag, or None if the packet is malformed or carries no
        hasStructuredData/specVersion in the vf namespace
    """
    if isinstance(packet, str):
        packet = packet.encode("utf-8")
    try:
        root = ET.fromstring(packet.strip())
    except ET.ParseError:
        return None

    for description in root.iter(f"{{{RDF_NS}}}Description"):
        values = {field_name: _read_property(description, prop) for field_name, prop in FIELDS.items()}
        if not values["has_structured_data"] or not values["spec_version"]:
            continue
        values["has_structured_data"] = values["has_structured_data"].lower() == "true"
        return DiscoveryTag(**values)
    return None
