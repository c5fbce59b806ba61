"""
PDF container access through pypdf.

PdfContainer wraps a PdfWriter cloned from the loaded document and exposes the
few object-model operations the protocol needs: the embedded-files name tree,
the attachment's file specification (with its descriptor), the catalog-level
XMP metadata stream, and saving back to bytes.
"""

import io
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

from pypdf import PdfReader, PdfWriter
from pypdf.generic import (
    ArrayObject,
    DecodedStreamObject,
    DictionaryObject,
    NameObject,
    NumberObject,
    create_string_object,
)

from vitae.contexts.embedding.descriptor import ArtifactDescriptor
from vitae.contexts.embedding.logger import _log_debug, _log_error
from vitae.utils.constants import (
    AF_RELATIONSHIP,
    DESCRIPTOR_KEY,
    FILE_DESCRIPTION,
    RESUME_FILENAME,
)
from vitae.utils.exceptions import ErrorCode, VitaeError
from vitae.utils.settings import get_settings

PdfSource = Union[bytes, bytearray, memoryview, str, Path]

PDF_HEADER = b"%PDF-"
# Guard against malformed, self-referencing name trees
MAX_NAME_TREE_DEPTH = 32


@dataclass
class Artifact:
    """The embedded resume file as found in a container."""

    payload: bytes
    descriptor: Optional[ArtifactDescriptor]


def read_pdf_bytes(source: PdfSource) -> bytes:
    """
    Bytes of a PDF given as bytes or a filesystem path.

    Raises:
        TypeError: If source is neither
        OSError: If the path cannot be read
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)
    if isinstance(source, (str, Path)):
        return Path(source).read_bytes()
    raise TypeError(f"Expected PDF bytes or a path, got {type(source).__name__}")


def _name_text(value) -> str:
    value = value.get_object() if hasattr(value, "get_object") else value
    if isinstance(value, bytes):
        return value.decode("latin-1")
    return str(value)


class PdfContainer:
    """A loaded PDF document, ready for artifact and metadata edits."""

    def __init__(self, writer: PdfWriter):
        self.writer = writer

    @classmethod
    def load(cls, source: PdfSource, max_file_size: Optional[int] = None) -> "PdfContainer":
        """
        Load a PDF document.

        Args:
            source: PDF bytes or path
            max_file_size: Size limit in bytes (defaults to embedding.max_file_size)

        Returns:
            PdfContainer

        Raises:
            VitaeError: FILE_TOO_LARGE, INVALID_PDF (no PDF header),
                        ENCRYPTED_PDF, or CORRUPTED_PDF (unreadable structure)
        """
        data = read_pdf_bytes(source)
        limit = get_settings().embedding.max_file_size if max_file_size is None else max_file_size

        if len(data) > limit:
            _log_error(f"PDF is {len(data)} bytes, limit is {limit}")
            raise VitaeError(
                ErrorCode.FILE_TOO_LARGE,
                f"PDF size {len(data)} bytes exceeds the maximum of {limit} bytes",
                context={"size": len(data), "max_size": limit},
            )

        if PDF_HEADER not in data[:1024]:
            raise VitaeError(ErrorCode.INVALID_PDF, context={"size": len(data)})

        try:
            reader = PdfReader(io.BytesIO(data), strict=False)
            encrypted = reader.is_encrypted
        except Exception as e:
            raise VitaeError(ErrorCode.CORRUPTED_PDF, context={"error": str(e)}) from e

        if encrypted:
            raise VitaeError(ErrorCode.ENCRYPTED_PDF)

        try:
            len(reader.pages)
            writer = PdfWriter(clone_from=reader)
        except Exception as e:
            raise VitaeError(ErrorCode.CORRUPTED_PDF, context={"error": str(e)}) from e

        return cls(writer)

    @property
    def catalog(self) -> DictionaryObject:
        return self.writer._root_object

    def save(self) -> bytes:
        buffer = io.BytesIO()
        self.writer.write(buffer)
        return buffer.getvalue()

    def compacted(self) -> "PdfContainer":
        """Round-trip through bytes so objects no longer reachable from the catalog are dropped."""
        reader = PdfReader(io.BytesIO(self.save()), strict=False)
        return PdfContainer(PdfWriter(clone_from=reader))

    # --- Embedded files name tree ---

    def _embedded_files_node(self, create: bool = False) -> Optional[DictionaryObject]:
        catalog = self.catalog
        names = catalog.get("/Names")
        if names is None:
            if not create:
                return None
            names = DictionaryObject()
            catalog[NameObject("/Names")] = names
        names = names.get_object()

        embedded = names.get("/EmbeddedFiles")
        if embedded is None:
            if not create:
                return None
            embedded = self.writer._add_object(
                DictionaryObject({NameObject("/Names"): ArrayObject()})
            )
            names[NameObject("/EmbeddedFiles")] = embedded
        return embedded.get_object()

    def _iter_entries(self, node, depth: int = 0) -> Iterator[Tuple[str, object]]:
        node = node.get_object()
        names = node.get("/Names")
        if names is not None:
            names = names.get_object()
            for i in range(0, len(names) - 1, 2):
                yield _name_text(names[i]), names[i + 1]
        if depth < MAX_NAME_TREE_DEPTH:
            for kid in node.get("/Kids") or []:
                yield from self._iter_entries(kid, depth + 1)

    def embedded_file_names(self) -> List[str]:
        node = self._embedded_files_node()
        return [name for name, _ in self._iter_entries(node)] if node is not None else []

    def _write_entries(self, node: DictionaryObject, entries: List[Tuple[str, object]]) -> None:
        """Replace the tree under node with one flat, sorted /Names array."""
        flat = ArrayObject()
        for name, filespec in sorted(entries, key=lambda entry: entry[0]):
            flat.append(create_string_object(name))
            flat.append(filespec)
        for key in ("/Kids", "/Limits"):
            if key in node:
                del node[key]
        node[NameObject("/Names")] = flat

    def _remove_associated_file(self) -> None:
        associated = self.catalog.get("/AF")
        if associated is None:
            return
        associated = associated.get_object()
        kept = ArrayObject(
            ref for ref in associated if _name_text(ref.get_object().get("/F", "")) != RESUME_FILENAME
        )
        if kept:
            self.catalog[NameObject("/AF")] = kept
        else:
            del self.catalog[NameObject("/AF")]

    # --- Artifact ---

    def find_artifact(self) -> Optional[Artifact]:
        """The embedded resume file, or None if the document has none."""
        node = self._embedded_files_node()
        if node is None:
            return None

        for name, filespec in self._iter_entries(node):
            if name != RESUME_FILENAME:
                continue
            filespec = filespec.get_object()
            embedded = filespec.get("/EF")
            if embedded is None:
                continue
            embedded = embedded.get_object()
            stream = embedded.get("/F") or embedded.get("/UF")
            if stream is None:
                continue

            payload = stream.get_object().get_data()
            if isinstance(payload, str):
                payload = payload.encode("latin-1")
            descriptor = filespec.get(DESCRIPTOR_KEY)
            return Artifact(
                payload=payload,
                descriptor=ArtifactDescriptor.from_pdf_dict(
                    descriptor.get_object() if descriptor is not None else None
                ),
            )
        return None

    def remove_artifact(self) -> bool:
        """Remove every entry under the reserved name. Returns True if one was removed."""
        node = self._embedded_files_node()
        if node is None:
            return False

        entries = list(self._iter_entries(node))
        kept = [entry for entry in entries if entry[0] != RESUME_FILENAME]
        if len(kept) == len(entries):
            return False

        self._write_entries(node, kept)
        self._remove_associated_file()
        _log_debug(f"Removed existing {RESUME_FILENAME}")
        return True

    def add_artifact(self, payload: bytes, descriptor: ArtifactDescriptor) -> None:
        """Add the embedded file, its file specification and descriptor (replacing any existing one)."""
        self.remove_artifact()

        stream = DecodedStreamObject()
        stream.set_data(payload)
        stream[NameObject("/Type")] = NameObject("/EmbeddedFile")
        stream[NameObject("/Params")] = DictionaryObject(
            {NameObject("/Size"): NumberObject(descriptor.original_size)}
        )
        stream_ref = self.writer._add_object(stream)

        filename = create_string_object(RESUME_FILENAME)
        filespec = DictionaryObject(
            {
                NameObject("/Type"): NameObject("/Filespec"),
                NameObject("/F"): filename,
                NameObject("/UF"): filename,
                NameObject("/Desc"): create_string_object(FILE_DESCRIPTION),
                NameObject("/AFRelationship"): NameObject(f"/{AF_RELATIONSHIP}"),
                NameObject("/EF"): DictionaryObject(
                    {NameObject("/F"): stream_ref, NameObject("/UF"): stream_ref}
                ),
                NameObject(DESCRIPTOR_KEY): descriptor.to_pdf_dict(),
            }
        )
        filespec_ref = self.writer._add_object(filespec)

        node = self._embedded_files_node(create=True)
        entries = list(self._iter_entries(node)) + [(RESUME_FILENAME, filespec_ref)]
        self._write_entries(node, entries)

        associated = self.catalog.get("/AF")
        associated = associated.get_object() if associated is not None else ArrayObject()
        associated.append(filespec_ref)
        self.catalog[NameObject("/AF")] = associated

    # --- XMP metadata ---

    def read_xmp(self) -> Optional[bytes]:
        metadata = self.catalog.get("/Metadata")
        if metadata is None:
            return None
        metadata = metadata.get_object()
        if not hasattr(metadata, "get_data"):
            return None
        data = metadata.get_data()
        return data.encode("utf-8") if isinstance(data, str) else data

    def write_xmp(self, packet: bytes) -> None:
        stream = DecodedStreamObject()
        stream.set_data(packet)
        stream[NameObject("/Type")] = NameObject("/Metadata")
        stream[NameObject("/Subtype")] = NameObject("/XML")
        self.catalog[NameObject("/Metadata")] = self.writer._add_object(stream)
