"""
Fixed protocol constants.

These values identify the embedded artifact to every reader and writer, so
unlike the values in settings.yaml they are never configurable.
"""

# Reserved logical name of the embedded file
RESUME_FILENAME = "resume.json"

# Discovery tag namespace (XMP)
VITAEFLOW_NAMESPACE = "https://vitaeflow.org/ns/1.0/"
XMP_VITAEFLOW_PREFIX = "vf"

# Technical descriptor identity
VITAEFLOW_SPEC = "org.vitaeflow.v1"
VITAEFLOW_TYPE = "resume"
DESCRIPTOR_KEY = "/VF_Metadata"

AF_RELATIONSHIP = "Data"
FILE_DESCRIPTION = "VitaeFlow Resume Data - Structured CV information"

CHECKSUM_ALGORITHM = "SHA-256"

# Remote schemas are only fetched from these prefixes
ALLOWED_SCHEMA_URL_PREFIXES = (
    "https://vitaeflow.org/schemas/",
    "https://vitaeflow.github.io/vitaeflow-schemas/",
    "https://cdn.jsdelivr.net/npm/@vitaeflow/vitae-schema@",
)
