"""
File parsers module.
"""

from parsers.file_ingestor import (
    FileFormat,
    UploadedFile,
    detect_file_format,
    validate_file_type,
    ingest_file,
    parse_csv,
    parse_excel,
)

__all__ = [
    "FileFormat",
    "UploadedFile",
    "detect_file_format",
    "validate_file_type",
    "ingest_file",
    "parse_csv",
    "parse_excel",
]
