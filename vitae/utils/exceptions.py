"""Typed failures raised by vitae."""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Stable machine-readable failure kinds."""

    # Container-level
    INVALID_PDF = "INVALID_PDF"
    ENCRYPTED_PDF = "ENCRYPTED_PDF"
    CORRUPTED_PDF = "CORRUPTED_PDF"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"

    # Payload-level
    NO_RESUME_FOUND = "NO_RESUME_FOUND"
    INVALID_RESUME_DATA = "INVALID_RESUME_DATA"
    CHECKSUM_MISMATCH = "CHECKSUM_MISMATCH"

    # Validation-level
    VALIDATION_FAILED = "VALIDATION_FAILED"
    UNSUPPORTED_VERSION = "UNSUPPORTED_VERSION"

    # Migration-level
    NO_MIGRATION_PATH = "NO_MIGRATION_PATH"
    MIGRATION_FAILED = "MIGRATION_FAILED"


ERROR_MESSAGES = {
    ErrorCode.INVALID_PDF: "The provided file is not a valid PDF document",
    ErrorCode.ENCRYPTED_PDF: "Cannot process encrypted PDF documents",
    ErrorCode.CORRUPTED_PDF: "The PDF document appears to be corrupted",
    ErrorCode.FILE_TOO_LARGE: "The PDF file exceeds the maximum allowed size",
    ErrorCode.NO_RESUME_FOUND: "No resume data found in the PDF document",
    ErrorCode.INVALID_RESUME_DATA: "The embedded resume data is invalid or corrupted",
    ErrorCode.CHECKSUM_MISMATCH: "Resume data integrity check failed",
    ErrorCode.VALIDATION_FAILED: "Resume data failed validation",
    ErrorCode.UNSUPPORTED_VERSION: "Unsupported resume schema version",
    ErrorCode.NO_MIGRATION_PATH: "No migration path exists between the requested versions",
    ErrorCode.MIGRATION_FAILED: "Failed to migrate resume data to the requested version",
}


class VitaeError(Exception):
    """
    Exception raised for container, payload, validation and migration failures.

    Attributes:
        code: ErrorCode identifying the failure kind
        message: Human-readable description
        context: Optional structured details (sizes, versions, ...)
        validation: ValidationResult when the failure came from validation
    """

    def __init__(
        self,
        code: ErrorCode,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        validation: Any = None,
    ):
        self.code = ErrorCode(code)
        self.message = message or ERROR_MESSAGES[self.code]
        self.context = context or {}
        self.validation = validation

        super().__init__(f"[{self.code.value}] {self.message}")

    @classmethod
    def validation_failed(cls, message: str, result: Any) -> "VitaeError":
        """Build a VALIDATION_FAILED error carrying the full ValidationResult."""
        return cls(ErrorCode.VALIDATION_FAILED, message, validation=result)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "code": self.code.value,
            "message": self.message,
            "context": dict(self.context),
        }
        if self.validation is not None:
            data["validation"] = self.validation.to_dict()
        return data


def create_error(
    code: ErrorCode, message: Optional[str] = None, context: Optional[Dict[str, Any]] = None
) -> VitaeError:
    """Create a VitaeError, falling back to the default message for the code."""
    return VitaeError(code, message, context)
