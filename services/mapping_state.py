"""
Column mapping session state.

One MappingState per import workflow. It owns the current file preview
and the (possibly user-edited) mapping, and keeps validity in sync. The
presentation layer only talks to this object.

Not thread-safe. Concurrent load_file calls are resolved by call order:
each call takes a sequence number and a completion whose number is no
longer the latest is dropped.
"""

from typing import Callable, Mapping, Optional, Sequence
import structlog

from config.fields import SYSTEM_FIELDS
from config.settings import get_settings
from exceptions import (
    AppError,
    FileImportError,
    UnsupportedFormatError,
    NoFileLoadedError,
    UnknownFieldError,
    UnknownColumnError,
    DuplicateColumnError,
)
from models.column_mapping import (
    ColumnMapping,
    FilePreview,
    MappingStateSnapshot,
    SystemFieldDefinition,
)
from parsers.file_ingestor import ingest_file, validate_file_type
from services.column_assigner import auto_detect_columns
from services.mapping_validator import validate_mapping

logger = structlog.get_logger(__name__)

Observer = Callable[[MappingStateSnapshot], None]


class MappingState:
    """
    Mapping lifecycle for a single uploaded file.

    Transitions:
        load_file: new preview + auto-detected mapping, or clean baseline on failure
        set_mapping: user override merged into the mapping
        reset: clean baseline
    """

    def __init__(
        self,
        fields: Sequence[SystemFieldDefinition] = SYSTEM_FIELDS,
        min_confidence: Optional[float] = None,
        preview_row_limit: Optional[int] = None,
    ):
        settings = get_settings()
        self.fields = tuple(fields)
        self.min_confidence = settings.min_confidence if min_confidence is None else min_confidence
        self.preview_row_limit = settings.preview_row_limit if preview_row_limit is None else preview_row_limit

        self._field_keys = {f.key for f in self.fields}
        self._observers: list[Observer] = []
        self._load_sequence = 0
        self._set_baseline()

    # ===================
    # READ ACCESS
    # ===================

    @property
    def file_preview(self) -> Optional[FilePreview]:
        return self._file_preview

    @property
    def column_mapping(self) -> ColumnMapping:
        """Copy of the current mapping."""
        return dict(self._column_mapping)

    @property
    def is_valid(self) -> bool:
        return self._is_valid

    @property
    def missing_required_fields(self) -> list[str]:
        return list(self._missing_required_fields)

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def error(self) -> Optional[AppError]:
        """Error from the last failed load, if any."""
        return self._error

    @property
    def has_mapping(self) -> bool:
        """True if at least one field is mapped."""
        return any(self._column_mapping.values())

    def snapshot(self) -> MappingStateSnapshot:
        return MappingStateSnapshot(
            file_preview=self._file_preview,
            column_mapping=dict(self._column_mapping),
            is_valid=self._is_valid,
            missing_required_fields=list(self._missing_required_fields),
            is_loading=self._is_loading,
            error=self._error.to_dict() if self._error else None,
        )

    def available_columns(self, field_key: str) -> list[str]:
        """File columns the given field may pick: those not held by another field."""
        if field_key not in self._field_keys:
            raise UnknownFieldError(field_key)
        if self._file_preview is None:
            return []
        taken = {
            column
            for key, column in self._column_mapping.items()
            if key != field_key and column
        }
        return [c for c in self._file_preview.columns if c not in taken]

    def unmapped_columns(self) -> list[str]:
        """File columns no field is mapped to."""
        if self._file_preview is None:
            return []
        taken = {column for column in self._column_mapping.values() if column}
        return [c for c in self._file_preview.columns if c not in taken]

    # ===================
    # OBSERVERS
    # ===================

    def subscribe(self, callback: Observer) -> Callable[[], None]:
        """
        Register a callback fired with a snapshot after every applied change.

        Returns:
            Function that removes the callback
        """
        self._observers.append(callback)

        def unsubscribe() -> None:
            if callback in self._observers:
                self._observers.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for callback in list(self._observers):
            callback(snapshot)

    # ===================
    # TRANSITIONS
    # ===================

    async def load_file(self, file) -> MappingStateSnapshot:
        """
        Ingest a file and auto-detect its mapping.

        Args:
            file: UploadedFile or any object with filename, content_type and async read()

        Returns:
            Snapshot after the load (unchanged state if this call went stale)

        Raises:
            FileImportError: The file could not be ingested; state is back at baseline
        """
        self._load_sequence += 1
        load_id = self._load_sequence
        file_name = getattr(file, "filename", None)

        logger.info("loading_file", file_name=file_name, load_id=load_id)

        if not validate_file_type(file):
            error = UnsupportedFormatError(
                file_name=file_name,
                content_type=getattr(file, "content_type", None)
            )
            logger.warning("file_type_rejected", file_name=file_name, load_id=load_id)
            self._fail(error)
            raise error

        self._is_loading = True
        self._error = None
        self._notify()

        try:
            preview = await ingest_file(file, self.preview_row_limit)
        except FileImportError as e:
            if self._is_stale(load_id):
                logger.info("stale_load_discarded", load_id=load_id, error_code=e.code)
                return self.snapshot()
            logger.warning("file_load_failed", file_name=file_name, load_id=load_id, error_code=e.code)
            self._fail(e)
            raise

        if self._is_stale(load_id):
            logger.info("stale_load_discarded", load_id=load_id, file_name=file_name)
            return self.snapshot()

        self._file_preview = preview
        self._column_mapping = auto_detect_columns(preview.columns, self.fields, self.min_confidence)
        self._is_loading = False
        self._error = None
        self._revalidate()

        logger.info(
            "file_loaded",
            file_name=file_name,
            load_id=load_id,
            is_valid=self._is_valid,
            missing_required_fields=self._missing_required_fields
        )

        self._notify()
        return self.snapshot()

    def set_mapping(self, updates: Mapping[str, Optional[str]]) -> MappingStateSnapshot:
        """
        Apply user overrides to the mapping.

        Values may be a file column, None or "" (both meaning unmapped).
        Picking a column another field holds moves it: the other field
        becomes unmapped.

        Raises:
            NoFileLoadedError: No file has been loaded
            UnknownFieldError: Key is not one of the fields
            UnknownColumnError: Column is not in the loaded file
            DuplicateColumnError: Update maps one column to several fields
        """
        if self._file_preview is None:
            raise NoFileLoadedError()

        normalized: ColumnMapping = {}
        for key, column in updates.items():
            if key not in self._field_keys:
                raise UnknownFieldError(key)
            column = column or None
            if column is not None and column not in self._file_preview.columns:
                raise UnknownColumnError(key, column)
            normalized[key] = column

        claimed: dict[str, list[str]] = {}
        for key, column in normalized.items():
            if column is not None:
                claimed.setdefault(column, []).append(key)
        for column, keys in claimed.items():
            if len(keys) > 1:
                raise DuplicateColumnError(column, keys)

        mapping = dict(self._column_mapping)
        for column, (key,) in claimed.items():
            for other_key, current in mapping.items():
                if other_key != key and other_key not in normalized and current == column:
                    mapping[other_key] = None
                    logger.info("column_reassigned", column=column, from_field=other_key, to_field=key)
        mapping.update(normalized)

        self._column_mapping = mapping
        self._revalidate()

        logger.debug("mapping_updated", updates=normalized, is_valid=self._is_valid)

        self._notify()
        return self.snapshot()

    def reset(self) -> MappingStateSnapshot:
        """Return to the clean baseline and drop any load still in flight."""
        self._load_sequence += 1
        self._set_baseline()
        logger.info("mapping_reset")
        self._notify()
        return self.snapshot()

    # ===================
    # INTERNALS
    # ===================

    def _is_stale(self, load_id: int) -> bool:
        return load_id != self._load_sequence

    def _set_baseline(self) -> None:
        self._file_preview: Optional[FilePreview] = None
        self._column_mapping: ColumnMapping = {}
        self._is_valid = False
        self._missing_required_fields: list[str] = []
        self._is_loading = False
        self._error: Optional[AppError] = None

    def _fail(self, error: AppError) -> None:
        self._set_baseline()
        self._error = error
        self._notify()

    def _revalidate(self) -> None:
        validation = validate_mapping(self._column_mapping, self.fields)
        self._is_valid = validation.is_valid
        self._missing_required_fields = validation.missing_required_fields
