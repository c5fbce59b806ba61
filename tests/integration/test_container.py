"""Integration tests for the PDF container's name tree and metadata handling."""

import io

import pytest
from pypdf import PdfWriter
from pypdf.generic import (
    ArrayObject,
    DecodedStreamObject,
    DictionaryObject,
    NameObject,
    create_string_object,
)

from vitae.contexts.embedding.container import PdfContainer
from vitae.contexts.embedding.descriptor import ArtifactDescriptor
from vitae.utils.exceptions import ErrorCode, VitaeError


def descriptor(payload: bytes) -> ArtifactDescriptor:
    return ArtifactDescriptor(
        version="0.1.0",
        checksum="00" * 32,
        created="2025-01-01T00:00:00.000+00:00",
        compressed=False,
        original_size=len(payload),
        compressed_size=len(payload),
    )


def filespec(writer: PdfWriter, name: str, data: bytes):
    stream = DecodedStreamObject()
    stream.set_data(data)
    stream[NameObject("/Type")] = NameObject("/EmbeddedFile")
    spec = DictionaryObject(
        {
            NameObject("/Type"): NameObject("/Filespec"),
            NameObject("/F"): create_string_object(name),
            NameObject("/EF"): DictionaryObject({NameObject("/F"): writer._add_object(stream)}),
        }
    )
    return writer._add_object(spec)


def pdf_with_kids_tree() -> bytes:
    """Embedded files split across two leaf nodes, as larger producers write them."""
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    left = writer._add_object(
        DictionaryObject(
            {NameObject("/Names"): ArrayObject([create_string_object("a.txt"), filespec(writer, "a.txt", b"A")])}
        )
    )
    right = writer._add_object(
        DictionaryObject(
            {
                NameObject("/Names"): ArrayObject(
                    [create_string_object("resume.json"), filespec(writer, "resume.json", b'{"x":1}')]
                )
            }
        )
    )
    root = writer._add_object(DictionaryObject({NameObject("/Kids"): ArrayObject([left, right])}))
    writer._root_object[NameObject("/Names")] = DictionaryObject({NameObject("/EmbeddedFiles"): root})
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.mark.integration
def test_reads_nested_name_tree():
    container = PdfContainer.load(pdf_with_kids_tree())

    assert container.embedded_file_names() == ["a.txt", "resume.json"]
    artifact = container.find_artifact()
    assert artifact.payload == b'{"x":1}'
    assert artifact.descriptor is None


@pytest.mark.integration
def test_replacing_in_nested_tree_flattens_it():
    container = PdfContainer.load(pdf_with_kids_tree())

    container.add_artifact(b'{"x":2}', descriptor(b'{"x":2}'))
    reloaded = PdfContainer.load(container.compacted().save())

    assert reloaded.embedded_file_names() == ["a.txt", "resume.json"]
    assert reloaded.find_artifact().payload == b'{"x":2}'
    assert reloaded.find_artifact().descriptor.version == "0.1.0"


@pytest.mark.integration
def test_artifact_is_an_associated_file(blank_pdf):
    container = PdfContainer.load(blank_pdf)
    container.add_artifact(b"{}", descriptor(b"{}"))
    container.add_artifact(b"{}", descriptor(b"{}"))

    associated = container.catalog["/AF"].get_object()
    assert len(associated) == 1
    spec = associated[0].get_object()
    assert spec["/AFRelationship"] == "/Data"
    assert spec["/F"] == "resume.json"


@pytest.mark.integration
def test_remove_artifact(blank_pdf, pdf_factory):
    container = PdfContainer.load(pdf_factory(attachments={"notes.txt": b"n"}))
    assert not container.remove_artifact()

    container.add_artifact(b"{}", descriptor(b"{}"))
    assert container.remove_artifact()

    assert container.find_artifact() is None
    assert container.embedded_file_names() == ["notes.txt"]
    associated = container.catalog.get("/AF")
    assert associated is None or "resume.json" not in [
        str(ref.get_object().get("/F")) for ref in associated.get_object()
    ]
    assert not PdfContainer.load(blank_pdf).remove_artifact()


@pytest.mark.integration
def test_xmp_read_write(blank_pdf):
    container = PdfContainer.load(blank_pdf)
    assert container.read_xmp() is None

    container.write_xmp(b"<x:xmpmeta xmlns:x='adobe:ns:meta/'/>")
    reloaded = PdfContainer.load(container.save())

    assert reloaded.read_xmp() == b"<x:xmpmeta xmlns:x='adobe:ns:meta/'/>"


@pytest.mark.integration
def test_truncated_pdf_is_corrupted():
    with pytest.raises(VitaeError) as excinfo:
        PdfContainer.load(b"%PDF-1.7\n" + b"\x00" * 64)
    assert excinfo.value.code in (ErrorCode.CORRUPTED_PDF, ErrorCode.INVALID_PDF)
