"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    ValidationError,

    # File import
    FileImportError,
    UnsupportedFormatError,
    FileReadError,
    CsvParseError,
    ExcelParseError,
    NoColumnsError,
    NoSheetsError,
    EmptyFileError,

    # Mapping
    MappingError,
    NoFileLoadedError,
    UnknownFieldError,
    UnknownColumnError,
    DuplicateColumnError,
)

__all__ = [
    # Base
    "AppError",
    "ValidationError",

    # File import
    "FileImportError",
    "UnsupportedFormatError",
    "FileReadError",
    "CsvParseError",
    "ExcelParseError",
    "NoColumnsError",
    "NoSheetsError",
    "EmptyFileError",

    # Mapping
    "MappingError",
    "NoFileLoadedError",
    "UnknownFieldError",
    "UnknownColumnError",
    "DuplicateColumnError",
]
