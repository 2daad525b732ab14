"""
Custom exception classes for the column mapper.

Every error carries a stable code and a human-readable message so callers
can decide whether to prompt the user to re-upload.
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "NO_COLUMNS")
        message: Human-readable message
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to the error payload handed to the presentation layer."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class ValidationError(AppError):
    """Input failed validation."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            details=details
        )


# ===================
# FILE IMPORT ERRORS
# ===================

class FileImportError(ValidationError):
    """Uploaded file could not be turned into a preview."""


class UnsupportedFormatError(FileImportError):
    """File is neither CSV nor Excel."""

    def __init__(self, file_name: Optional[str] = None, content_type: Optional[str] = None):
        super().__init__(
            code="UNSUPPORTED_FORMAT",
            message="Unsupported file format. Please upload a CSV or Excel file (.csv, .xlsx, .xls)",
            details={"file_name": file_name, "content_type": content_type}
        )


class FileReadError(FileImportError):
    """File bytes could not be read."""

    def __init__(
        self,
        message: str = "Failed to read file",
        details: Optional[dict] = None
    ):
        super().__init__(
            code="FILE_READ_ERROR",
            message=message,
            details=details
        )


class CsvParseError(FileImportError):
    """CSV file parsing failed."""

    def __init__(
        self,
        message: str = "Failed to parse CSV file",
        details: Optional[dict] = None
    ):
        super().__init__(
            code="CSV_PARSE_ERROR",
            message=message,
            details=details
        )


class ExcelParseError(FileImportError):
    """Excel file parsing failed."""

    def __init__(
        self,
        message: str = "Failed to parse Excel file",
        details: Optional[dict] = None
    ):
        super().__init__(
            code="EXCEL_PARSE_ERROR",
            message=message,
            details=details
        )


class NoColumnsError(FileImportError):
    """Header row has no usable column names."""

    def __init__(self, file_name: Optional[str] = None):
        super().__init__(
            code="NO_COLUMNS",
            message="No columns found in file",
            details={"file_name": file_name}
        )


class NoSheetsError(FileImportError):
    """Workbook contains no sheets."""

    def __init__(self, file_name: Optional[str] = None):
        super().__init__(
            code="NO_SHEETS",
            message="No sheets found in Excel file",
            details={"file_name": file_name}
        )


class EmptyFileError(FileImportError):
    """File has no data rows."""

    def __init__(self, file_name: Optional[str] = None):
        super().__init__(
            code="EMPTY_FILE",
            message="File is empty",
            details={"file_name": file_name}
        )


# ===================
# MAPPING ERRORS
# ===================

class MappingError(ValidationError):
    """A mapping override was rejected."""


class NoFileLoadedError(MappingError):
    """Mapping edited before any file was loaded."""

    def __init__(self):
        super().__init__(
            code="NO_FILE_LOADED",
            message="Load a file before editing the column mapping"
        )


class UnknownFieldError(MappingError):
    """Mapping key is not a system field."""

    def __init__(self, field_key: str):
        super().__init__(
            code="UNKNOWN_FIELD",
            message=f"Unknown field: {field_key}",
            details={"field_key": field_key}
        )


class UnknownColumnError(MappingError):
    """Mapped column does not exist in the loaded file."""

    def __init__(self, field_key: str, column: str):
        super().__init__(
            code="UNKNOWN_COLUMN",
            message=f"Column '{column}' is not in the uploaded file",
            details={"field_key": field_key, "column": column}
        )


class DuplicateColumnError(MappingError):
    """Same column assigned to more than one field in a single update."""

    def __init__(self, column: str, field_keys: list[str]):
        super().__init__(
            code="DUPLICATE_COLUMN",
            message=f"Column '{column}' can only be mapped to one field",
            details={"column": column, "field_keys": field_keys}
        )
