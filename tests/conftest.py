"""Shared fixtures: generated PDFs and sample resume records."""

import copy
import io

import pytest
from pypdf import PdfWriter

from vitae.contexts.validation.validator import clear_custom_rules

LEGACY_RESUME = {
    "schema_version": "1.0.0",
    "personal_information": {
        "full_name": "Jane Doe",
        "first_name": "Jane",
        "last_name": "Doe",
        "email": "jane.doe@example.com",
        "birth_date": "1990-04-12",
    },
    "work_experience": [
        {
            "company": "Acme Corp",
            "position": "Software Engineer",
            "start_date": "2015-06",
            "end_date": "2019-08",
            "description": "Built billing services",
        },
        {
            "company": "Globex",
            "position": "Senior Engineer",
            "start_date": "2019-09",
        },
    ],
    "education": [
        {
            "institution": "State University",
            "degree": "BSc",
            "field_of_study": "Computer Science",
            "start_date": "2011",
            "end_date": "2015",
        }
    ],
    "skills": [{"name": "Python", "level": "Expert"}, {"name": "SQL"}],
}

NAMESPACED_RESUME = {
    "specVersion": "0.1.0",
    "meta": {"language": "en", "country": "US"},
    "resume": {
        "basics": {"firstName": "Jane", "lastName": "Doe", "email": "jane.doe@example.com"},
        "experience": [
            {
                "position": "Software Engineer",
                "company": "Acme Corp",
                "startDate": "2015-06",
                "endDate": "2019-08",
            }
        ],
        "education": [
            {
                "institution": "State University",
                "studyType": "BSc",
                "area": "Computer Science",
                "startDate": "2011",
                "endDate": "2015",
            }
        ],
    },
}


def make_pdf(pages: int = 1, attachments: dict = None) -> bytes:
    """A minimal PDF with blank pages and optional extra attachments."""
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=612, height=792)
    for name, data in (attachments or {}).items():
        writer.add_attachment(name, data)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture
def blank_pdf() -> bytes:
    return make_pdf()


@pytest.fixture
def legacy_resume() -> dict:
    return copy.deepcopy(LEGACY_RESUME)


@pytest.fixture
def namespaced_resume() -> dict:
    return copy.deepcopy(NAMESPACED_RESUME)


@pytest.fixture
def clean_custom_rules():
    """Empty the process-wide custom rule registry around a test."""
    clear_custom_rules()
    yield
    clear_custom_rules()


@pytest.fixture
def pdf_factory():
    return make_pdf
