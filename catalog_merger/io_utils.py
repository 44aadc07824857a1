from __future__ import annotations

import os
import zipfile
from io import BytesIO
from typing import Any, List, Optional

import pandas as pd
import structlog

from .errors import FileParseError, UnsupportedFileTypeError
from .records import Record

logger = structlog.get_logger(__name__)

CSV_EXTENSIONS = ('csv',)
SPREADSHEET_EXTENSIONS = ('xls', 'xlsx')
SUPPORTED_EXTENSIONS = CSV_EXTENSIONS + SPREADSHEET_EXTENSIONS


def file_extension(name: Optional[str]) -> str:
    if not name:
        return ''
    _, ext = os.path.splitext(str(name))
    return ext.lstrip('.').lower()


def file_name(file_obj: Any) -> str:
    """Display name of an uploaded file or file path."""
    if file_obj is None:
        return ''
    if isinstance(file_obj, (str, os.PathLike)):
        return os.path.basename(os.fspath(file_obj))
    for attr in ('orig_name', 'name'):
        value = getattr(file_obj, attr, None)
        if value:
            return os.path.basename(str(value))
    return ''


def file_size(file_obj: Any) -> int:
    path = file_obj if isinstance(file_obj, (str, os.PathLike)) else getattr(file_obj, 'name', None)
    try:
        return os.path.getsize(path) if path else 0
    except (OSError, TypeError):
        return 0


def _read_source(file_obj: Any):
    """Path or in-memory buffer for pandas."""
    if isinstance(file_obj, (str, os.PathLike)):
        return os.fspath(file_obj)

    if hasattr(file_obj, 'read'):
        if hasattr(file_obj, 'seek'):
            file_obj.seek(0)
        content = file_obj.read()
        if isinstance(content, str):
            content = content.encode('utf-8')
        return BytesIO(content)

    return file_obj.name


def frame_to_records(frame: pd.DataFrame) -> List[Record]:
    """Records keyed by header, one per non-empty row, all cells as strings."""
    frame = frame.rename(columns=lambda c: str(c).strip())
    frame = frame.fillna('').astype(str)
    stripped = frame.apply(lambda col: col.str.strip())
    frame = frame[stripped.ne('').any(axis=1)]
    return frame.to_dict(orient='records')


def read_records(file_obj: Any, name: Optional[str] = None) -> List[Record]:
    """Parse an uploaded CSV/XLS/XLSX file into records.

    ``file_obj`` may be a path, an upload object with ``.name`` or a binary
    file-like object; pass ``name`` when the object carries no usable name.
    """
    if file_obj is None:
        raise FileParseError('(none)', "No file uploaded.")

    name = name or file_name(file_obj)
    ext = file_extension(name)
    if ext not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFileTypeError(ext or '(none)', SUPPORTED_EXTENSIONS)

    source = _read_source(file_obj)
    try:
        if ext in CSV_EXTENSIONS:
            frame = pd.read_csv(source, dtype=str, keep_default_na=False, skip_blank_lines=True, encoding='utf-8-sig')
        else:
            frame = pd.read_excel(source, sheet_name=0, dtype=str, keep_default_na=False)
    except (ValueError, KeyError, OSError, ImportError, zipfile.BadZipFile, pd.errors.ParserError) as exc:
        raise FileParseError(name, str(exc)) from exc

    records = frame_to_records(frame)
    logger.info("file_parsed", file=name, rows=len(records), columns=len(frame.columns))
    return records
