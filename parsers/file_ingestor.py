"""
File ingestor for contact list uploads.

Reads a CSV or Excel file and normalizes it into a FilePreview: ordered
column names, a few sample rows and the total data row count. No matching
logic lives here.

Both formats go through the same header/row normalization so that
equivalent files produce identical column lists.
"""

import asyncio
import re
from dataclasses import dataclass
from enum import Enum
from io import BytesIO, StringIO
from pathlib import Path
from typing import BinaryIO, Optional, Union
import structlog

import pandas as pd

from config.settings import get_settings
from exceptions import (
    UnsupportedFormatError,
    FileReadError,
    CsvParseError,
    ExcelParseError,
    NoColumnsError,
    NoSheetsError,
    EmptyFileError,
)
from models.column_mapping import FilePreview
from utils.text_utils import clean_cell

logger = structlog.get_logger(__name__)


VALID_CONTENT_TYPES = (
    "text/csv",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
)
VALID_EXTENSIONS = (".csv", ".xlsx", ".xls")

CSV_SEPARATORS = (",", ";", "\t")

# A double-quoted CSV field, with "" as an escaped quote
_QUOTED_FIELD = re.compile(r'"(?:[^"]|"")*"')


class FileFormat(str, Enum):
    CSV = "csv"
    XLSX = "xlsx"
    XLS = "xls"


# ===================
# FILE HANDLE
# ===================

@dataclass(frozen=True)
class UploadedFile:
    """
    An uploaded file waiting to be ingested.

    source may be raw bytes, a filesystem path or an open binary stream.
    Any object exposing filename, content_type and an awaitable read()
    (e.g. Starlette's UploadFile) can be passed to ingest_file instead.
    """
    filename: str
    source: Union[bytes, str, Path, BinaryIO]
    content_type: Optional[str] = None

    @classmethod
    def from_path(cls, path: Union[str, Path], content_type: Optional[str] = None) -> "UploadedFile":
        path = Path(path)
        return cls(filename=path.name, source=path, content_type=content_type)

    async def read(self) -> bytes:
        """Read the whole file. Disk and stream reads run off the event loop."""
        if isinstance(self.source, (bytes, bytearray)):
            return bytes(self.source)
        return await asyncio.to_thread(self._read_blocking)

    def _read_blocking(self) -> bytes:
        if isinstance(self.source, (str, Path)):
            return Path(self.source).read_bytes()
        return self.source.read()


# ===================
# TYPE CHECKS
# ===================

def _extension(file_name: str) -> str:
    dot = file_name.rfind(".")
    return file_name[dot:].lower() if dot != -1 else ""


def detect_file_format(file_name: str) -> FileFormat:
    """
    Pick the parser for a file by its extension.

    Raises:
        UnsupportedFormatError: Extension is not .csv, .xlsx or .xls
    """
    ext = _extension(file_name or "")
    if ext == ".csv":
        return FileFormat.CSV
    if ext == ".xlsx":
        return FileFormat.XLSX
    if ext == ".xls":
        return FileFormat.XLS
    raise UnsupportedFormatError(file_name=file_name)


def validate_file_type(file) -> bool:
    """True if the MIME type or the extension says CSV/XLS/XLSX."""
    content_type = getattr(file, "content_type", None)
    file_name = getattr(file, "filename", None) or ""
    return content_type in VALID_CONTENT_TYPES or _extension(file_name) in VALID_EXTENSIONS


# ===================
# INGESTION
# ===================

async def ingest_file(file, preview_row_limit: Optional[int] = None) -> FilePreview:
    """
    Read an uploaded file and build its preview.

    Args:
        file: UploadedFile or any object with filename, content_type and async read()
        preview_row_limit: Sample rows to keep (defaults to settings)

    Returns:
        FilePreview for the first sheet / the whole CSV

    Raises:
        UnsupportedFormatError, FileReadError, CsvParseError, ExcelParseError,
        NoColumnsError, NoSheetsError, EmptyFileError
    """
    limit = get_settings().preview_row_limit if preview_row_limit is None else preview_row_limit
    file_name = getattr(file, "filename", None) or ""
    file_format = detect_file_format(file_name)

    logger.info("ingesting_file", file_name=file_name, file_format=file_format.value)

    try:
        data = await file.read()
    except Exception as e:
        logger.error("file_read_failed", file_name=file_name, error=str(e))
        raise FileReadError(details={"file_name": file_name, "original_error": str(e)})

    if isinstance(data, str):
        data = data.encode("utf-8")

    if file_format == FileFormat.CSV:
        preview = parse_csv(data, file_name, limit)
    else:
        preview = parse_excel(data, file_name, file_format, limit)

    logger.info(
        "file_ingested",
        file_name=file_name,
        columns=len(preview.columns),
        total_rows=preview.total_rows
    )
    return preview


def parse_csv(data: bytes, file_name: str, preview_row_limit: int) -> FilePreview:
    """
    Parse delimited text. The first non-blank line is the header.

    Separators found in the header line are tried most frequent first;
    the first one pandas parses cleanly wins.
    """
    text = _decode_text(data)

    df = None
    last_error: Optional[Exception] = None
    for separator in _candidate_separators(text):
        try:
            df = pd.read_csv(
                StringIO(text),
                sep=separator,
                header=None,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
            )
            break
        except pd.errors.EmptyDataError:
            raise EmptyFileError(file_name=file_name)
        except Exception as e:
            last_error = e
            logger.debug("csv_separator_failed", separator=repr(separator), error=str(e))

    if df is None:
        logger.error("csv_parse_failed", file_name=file_name, error=str(last_error))
        raise CsvParseError(details={"file_name": file_name, "original_error": str(last_error)})

    logger.debug("csv_loaded", separator=repr(separator), raw_rows=len(df))

    return _build_preview(
        rows=_frame_to_rows(df),
        file_name=file_name,
        file_size_bytes=len(data),
        file_format=FileFormat.CSV,
        preview_row_limit=preview_row_limit,
    )


def parse_excel(
    data: bytes,
    file_name: str,
    file_format: FileFormat,
    preview_row_limit: int,
) -> FilePreview:
    """Parse the first sheet of a workbook. Row 1 is the header."""
    excel = _open_workbook(data, file_name, file_format)

    if not excel.sheet_names:
        raise NoSheetsError(file_name=file_name)

    first_sheet = excel.sheet_names[0]
    try:
        df = excel.parse(first_sheet, header=None, dtype=object)
    except Exception as e:
        logger.error("excel_sheet_read_failed", file_name=file_name, sheet=first_sheet, error=str(e))
        raise ExcelParseError(
            message=f"Failed to read sheet '{first_sheet}'",
            details={"file_name": file_name, "sheet": first_sheet, "original_error": str(e)}
        )

    logger.debug("excel_loaded", sheet=first_sheet, sheets=len(excel.sheet_names), raw_rows=len(df))

    return _build_preview(
        rows=_frame_to_rows(df),
        file_name=file_name,
        file_size_bytes=len(data),
        file_format=file_format,
        preview_row_limit=preview_row_limit,
    )


# ===================
# HELPERS
# ===================

def _decode_text(data: bytes) -> str:
    """Decode CSV bytes, falling back to latin-1 for legacy exports."""
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        logger.debug("csv_decode_fallback", encoding="latin-1")
        return data.decode("latin-1")


def _candidate_separators(text: str) -> list[str]:
    """
    Separators occurring in the header line, most frequent first.

    Quoted fields are ignored when counting, so 'Email;"City, Zip"'
    yields [";"]. Falls back to [","] when no separator occurs.
    """
    header_line = next((line for line in text.splitlines() if line.strip()), "")
    unquoted = _QUOTED_FIELD.sub("", header_line)
    counts = {sep: unquoted.count(sep) for sep in CSV_SEPARATORS}
    found = sorted((sep for sep in CSV_SEPARATORS if counts[sep] > 0), key=lambda sep: -counts[sep])
    return found or [","]


def _open_workbook(data: bytes, file_name: str, file_format: FileFormat) -> pd.ExcelFile:
    """Open with the engine matching the extension, then try the other one."""
    engines = ["openpyxl", "xlrd"] if file_format == FileFormat.XLSX else ["xlrd", "openpyxl"]

    last_error: Optional[Exception] = None
    for engine in engines:
        try:
            return pd.ExcelFile(BytesIO(data), engine=engine)
        except Exception as e:
            last_error = e
            logger.debug("excel_engine_failed", engine=engine, error=str(e))

    logger.error("excel_read_failed", file_name=file_name, error=str(last_error))
    raise ExcelParseError(
        message="Failed to read Excel file",
        details={"file_name": file_name, "original_error": str(last_error)}
    )


def _frame_to_rows(df: pd.DataFrame) -> list[list[str]]:
    """DataFrame without header → list of string rows, blank rows included."""
    return [[clean_cell(v) for v in raw] for raw in df.itertuples(index=False, name=None)]


def _is_blank(row: list[str]) -> bool:
    return not any(cell.strip() for cell in row)


def _unique_columns(names: list[str]) -> list[str]:
    """Suffix repeated header names: ["Email", "Email"] → ["Email", "Email_1"]."""
    seen: set[str] = set()
    counts: dict[str, int] = {}
    result = []
    for name in names:
        candidate = name
        while candidate in seen:
            counts[name] = counts.get(name, 0) + 1
            candidate = f"{name}_{counts[name]}"
        seen.add(candidate)
        result.append(candidate)
    return result


def _build_preview(
    rows: list[list[str]],
    file_name: str,
    file_size_bytes: int,
    file_format: FileFormat,
    preview_row_limit: int,
) -> FilePreview:
    """
    Shared header/row normalization for every file format.

    Blank rows (every cell empty or whitespace) are dropped wherever they
    appear; the first remaining row is the header. A file that has rows
    but only blank ones has no columns.
    """
    if not rows:
        raise EmptyFileError(file_name=file_name)

    non_blank = [row for row in rows if not _is_blank(row)]
    if not non_blank:
        raise NoColumnsError(file_name=file_name)

    header = non_blank[0]
    data_rows = non_blank[1:]

    # Keep each surviving header's position so cells stay aligned
    positions = [i for i, cell in enumerate(header) if cell.strip()]
    columns = _unique_columns([header[i].strip() for i in positions])

    if not data_rows:
        raise EmptyFileError(file_name=file_name)

    if len(columns) != len(header):
        logger.debug("blank_headers_dropped", dropped=len(header) - len(columns))

    sample_rows = tuple(
        {col: (row[i] if i < len(row) else "") for col, i in zip(columns, positions)}
        for row in data_rows[:preview_row_limit]
    )

    return FilePreview(
        file_name=file_name,
        file_size_bytes=file_size_bytes,
        file_format=file_format.value,
        columns=tuple(columns),
        sample_rows=sample_rows,
        total_rows=len(data_rows),
    )
