"""
Embedding Context

Responsibilities:
- Embeds a validated resume record into a PDF as resume.json
- Keeps the three metadata layers consistent: discovery tag (XMP),
  technical descriptor (/VF_Metadata) and payload
- Extracts, verifies, validates and optionally migrates embedded records

Owns: PDF object-model access (pypdf), the embed and extract flows
Never: Edits page content or any other part of the document
"""

from vitae.contexts.embedding.container import Artifact, PdfContainer
from vitae.contexts.embedding.descriptor import ArtifactDescriptor
from vitae.contexts.embedding.detection import HasResumeResult, has_resume, has_resume_detailed
from vitae.contexts.embedding.embed import embed_resume, serialize_resume
from vitae.contexts.embedding.extract import ArtifactMetadata, ExtractResult, extract_resume
from vitae.contexts.embedding.xmp import DiscoveryTag, build_xmp, parse_xmp

__all__ = [
    "Artifact",
    "ArtifactDescriptor",
    "ArtifactMetadata",
    "DiscoveryTag",
    "ExtractResult",
    "HasResumeResult",
    "PdfContainer",
    "build_xmp",
    "embed_resume",
    "extract_resume",
    "has_resume",
    "has_resume_detailed",
    "parse_xmp",
    "serialize_resume",
]
