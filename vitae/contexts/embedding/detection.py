"""
Quick presence checks for embedded resume data.

These never parse or validate the payload; they only look for the discovery
tag and the reserved embedded file.
"""

from dataclasses import dataclass
from typing import Optional

from vitae.contexts.embedding.container import PdfContainer, PdfSource
from vitae.contexts.embedding.logger import _log_debug
from vitae.contexts.embedding.xmp import DiscoveryTag, parse_xmp
from vitae.utils.exceptions import VitaeError


@dataclass
class HasResumeResult:
    has_resume: bool
    source: Optional[str] = None  # "xmp" | "embedded"
    version: Optional[str] = None
    confidence: str = "high"  # "high" | "medium" | "low"


def read_discovery_tag(container: PdfContainer) -> Optional[DiscoveryTag]:
    """The discovery tag, or None if absent, unreadable or malformed."""
    try:
        packet = container.read_xmp()
    except Exception as e:
        _log_debug(f"Unreadable XMP metadata stream: {e}")
        return None
    return parse_xmp(packet) if packet else None


def has_resume(pdf: PdfSource) -> bool:
    """True if the PDF carries a discovery tag or the reserved embedded file. Never raises."""
    return has_resume_detailed(pdf).has_resume


def has_resume_detailed(pdf: PdfSource) -> HasResumeResult:
    """
    Detect resume data and report where it was found.

    Returns:
        HasResumeResult:
            tag and file    -> source "xmp", confidence high
            tag only        -> source "xmp", confidence medium
            file only       -> source "embedded", confidence medium
            neither         -> has_resume False, confidence high
            unreadable PDF  -> has_resume False, confidence low
    """
    try:
        container = PdfContainer.load(pdf)
    except (VitaeError, OSError, TypeError) as e:
        _log_debug(f"Cannot inspect PDF: {e}")
        return HasResumeResult(has_resume=False, confidence="low")

    tag = read_discovery_tag(container)
    has_tag = tag is not None and tag.has_structured_data

    try:
        artifact = container.find_artifact()
    except Exception as e:
        _log_debug(f"Cannot read embedded files: {e}")
        artifact = None

    if has_tag:
        return HasResumeResult(
            has_resume=True,
            source="xmp",
            version=tag.spec_version,
            confidence="high" if artifact is not None else "medium",
        )
    if artifact is not None:
        return HasResumeResult(
            has_resume=True,
            source="embedded",
            version=artifact.descriptor.version if artifact.descriptor else None,
            confidence="medium",
        )
    return HasResumeResult(has_resume=False, confidence="high")
