"""
Technical descriptor stored on the attachment's file specification.

The descriptor is a PDF dictionary under /VF_Metadata with exactly these keys:
Type (/resume), Spec (/org.vitaeflow.v1), Version, Checksum (hex SHA-256),
Created (ISO-8601), Compressed (bool), OriginalSize, CompressedSize.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from pypdf.generic import (
    BooleanObject,
    DictionaryObject,
    NameObject,
    NumberObject,
    create_string_object,
)

from vitae.utils.constants import VITAEFLOW_SPEC, VITAEFLOW_TYPE


@dataclass
class ArtifactDescriptor:
    version: str
    checksum: str
    created: str
    compressed: bool
    original_size: int
    compressed_size: int

    def to_pdf_dict(self) -> DictionaryObject:
        return DictionaryObject(
            {
                NameObject("/Type"): NameObject(f"/{VITAEFLOW_TYPE}"),
                NameObject("/Spec"): NameObject(f"/{VITAEFLOW_SPEC}"),
                NameObject("/Version"): create_string_object(self.version),
                NameObject("/Checksum"): create_string_object(self.checksum),
                NameObject("/Created"): create_string_object(self.created),
                NameObject("/Compressed"): BooleanObject(self.compressed),
                NameObject("/OriginalSize"): NumberObject(self.original_size),
                NameObject("/CompressedSize"): NumberObject(self.compressed_size),
            }
        )

    @classmethod
    def from_pdf_dict(cls, data: Any) -> Optional["ArtifactDescriptor"]:
        """
        Read a descriptor dictionary.

        Returns:
            ArtifactDescriptor, or None if data is not a resume descriptor
            (wrong Type, or Version/Checksum missing)
        """
        if not isinstance(data, dict):
            return None
        values = {key: _plain(value.get_object() if hasattr(value, "get_object") else value)
                  for key, value in data.items()}

        if values.get("/Type", VITAEFLOW_TYPE) != VITAEFLOW_TYPE:
            return None
        if not values.get("/Version") or not values.get("/Checksum"):
            return None

        return cls(
            version=str(values["/Version"]),
            checksum=str(values["/Checksum"]),
            created=str(values.get("/Created", "")),
            compressed=_as_bool(values.get("/Compressed", False)),
            original_size=_as_int(values.get("/OriginalSize")),
            compressed_size=_as_int(values.get("/CompressedSize")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "checksum": self.checksum,
            "created": self.created,
            "compressed": self.compressed,
            "original_size": self.original_size,
            "compressed_size": self.compressed_size,
        }


def _plain(value: Any) -> Any:
    """PDF object -> Python value (names lose their leading slash)."""
    if isinstance(value, BooleanObject):
        return value.value
    if isinstance(value, NameObject):
        return str(value)[1:]
    if isinstance(value, bytes):
        return value.decode("latin-1")
    return value


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)


def _as_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0
